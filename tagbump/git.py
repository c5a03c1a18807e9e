"""Tag store backed by the ``git`` command line."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import List, Optional, Protocol, Sequence

from loguru import logger

from tagbump.errors import GitCommandError, NotARepositoryError


class TagStore(Protocol):
    """Primitive operations the version bumper needs from a repository."""

    def ensure_repository(self) -> None: ...

    def list_tags(self) -> List[str]: ...

    def resolve_ref(self, ref: str) -> Optional[str]: ...

    def create_annotated_tag(self, name: str, message: str, target: str) -> None: ...

    def push_tag(self, remote: str, name: str) -> None: ...


def build_command(executable: str, *args: str) -> list[str]:
    return [executable, *args]


class GitTagStore:
    """Run git subcommands against a working tree.

    Every call blocks until git exits. Non-zero exits surface as
    :class:`GitCommandError` with git's stderr attached.
    """

    def __init__(self, working_dir: Path | None = None, *, executable: str = "git") -> None:
        self.working_dir = working_dir
        self.executable = executable

    def _run(self, *args: str) -> subprocess.CompletedProcess[str]:
        command = build_command(self.executable, *args)
        logger.debug(f"Running {' '.join(command)}")
        return subprocess.run(  # noqa: S603
            command,
            cwd=str(self.working_dir) if self.working_dir else None,
            check=False,
            capture_output=True,
            text=True,
        )

    def _checked(self, *args: str) -> str:
        result = self._run(*args)
        if result.returncode != 0:
            raise GitCommandError(
                build_command(self.executable, *args), result.returncode, result.stderr
            )
        return result.stdout

    def ensure_repository(self) -> None:
        try:
            result = self._run("rev-parse", "--git-dir")
        except FileNotFoundError as exc:
            raise GitCommandError([self.executable], 127, str(exc)) from exc
        if result.returncode != 0:
            location = str(self.working_dir) if self.working_dir else None
            raise NotARepositoryError(location)

    def list_tags(self) -> List[str]:
        output = self._checked("tag", "--list")
        return [line.strip() for line in output.splitlines() if line.strip()]

    def resolve_ref(self, ref: str) -> Optional[str]:
        result = self._run("rev-parse", "--verify", "--quiet", f"{ref}^{{commit}}")
        if result.returncode != 0:
            return None
        return result.stdout.strip() or None

    def create_annotated_tag(self, name: str, message: str, target: str) -> None:
        self._checked("tag", "-a", name, "-m", message, target)

    def push_tag(self, remote: str, name: str) -> None:
        self._checked("push", remote, f"refs/tags/{name}")


__all__ = ["GitTagStore", "TagStore", "build_command"]
