"""Error taxonomy for the version bumper.

Every error is terminal for the current invocation. The CLI prints the
message and exits with :attr:`VersionBumpError.exit_code`.
"""

from __future__ import annotations

from typing import Sequence

EXIT_FAILURE = 1
EXIT_USAGE = 2


class VersionBumpError(RuntimeError):
    """Raised when the version cannot be bumped automatically."""

    exit_code: int = EXIT_FAILURE


class UsageError(VersionBumpError):
    """Invalid command-line usage, detected before touching the repository."""

    exit_code = EXIT_USAGE


class ConflictingVersionSelectorsError(UsageError):
    def __init__(self, selectors: Sequence[str]) -> None:
        self.selectors = tuple(selectors)
        joined = ", ".join(self.selectors)
        super().__init__(f"Cannot specify multiple version types ({joined})")


class MissingVersionSelectorError(UsageError):
    def __init__(self) -> None:
        super().__init__("Must specify version type (--major, --minor, or --patch)")


class UnknownFlagError(UsageError):
    def __init__(self, flags: Sequence[str]) -> None:
        self.flags = tuple(flags)
        super().__init__(f"Unknown option {' '.join(self.flags)}")


class NotARepositoryError(VersionBumpError):
    def __init__(self, path: str | None = None) -> None:
        self.path = path
        where = f": {path}" if path else ""
        super().__init__(f"Not in a git repository{where}")


class NoVersionTagsFoundError(VersionBumpError):
    """No tag matches the ``[v]X.Y.Z`` pattern.

    ``tags`` holds every tag that was inspected, matching or not, so the
    operator can see what the repository actually contains.
    """

    def __init__(self, tags: Sequence[str]) -> None:
        self.tags = tuple(tags)
        listing = "\n".join(f"  {tag}" for tag in self.tags) or "  (none)"
        super().__init__(
            "No semantic version tags found (expected format: v1.2.3 or 1.2.3)\n"
            f"Available tags:\n{listing}"
        )


class InvalidVersionFormatError(VersionBumpError):
    def __init__(self, tag: str) -> None:
        self.tag = tag
        super().__init__(f"Invalid semantic version format: {tag}")


class TagAlreadyExistsError(VersionBumpError):
    def __init__(self, tag: str) -> None:
        self.tag = tag
        super().__init__(f"Tag '{tag}' already exists")


class GitCommandError(VersionBumpError):
    """A git invocation exited with a non-zero status."""

    def __init__(self, command: Sequence[str], returncode: int, stderr: str = "") -> None:
        self.command = tuple(command)
        self.returncode = returncode
        self.stderr = stderr.strip()
        detail = f": {self.stderr}" if self.stderr else ""
        super().__init__(
            f"'{' '.join(self.command)}' failed with exit code {returncode}{detail}"
        )


class TagCreationFailedError(VersionBumpError):
    def __init__(self, tag: str, reason: str) -> None:
        self.tag = tag
        super().__init__(f"Failed to create tag '{tag}': {reason}")


class PushFailedError(VersionBumpError):
    """The tag exists locally but could not be transmitted to the remote."""

    def __init__(self, tag: str, remote: str, reason: str) -> None:
        self.tag = tag
        self.remote = remote
        super().__init__(
            f"Failed to push tag '{tag}' to {remote}: {reason}\n"
            f"The tag remains in the local repository; retry with: "
            f"git push {remote} {tag}"
        )


__all__ = [
    "EXIT_FAILURE",
    "EXIT_USAGE",
    "ConflictingVersionSelectorsError",
    "GitCommandError",
    "InvalidVersionFormatError",
    "MissingVersionSelectorError",
    "NoVersionTagsFoundError",
    "NotARepositoryError",
    "PushFailedError",
    "TagAlreadyExistsError",
    "TagCreationFailedError",
    "UnknownFlagError",
    "UsageError",
    "VersionBumpError",
]
