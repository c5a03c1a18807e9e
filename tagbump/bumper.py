"""Version bumper: pick the latest version tag, compute the next one, tag it."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from loguru import logger

from tagbump.errors import (
    GitCommandError,
    PushFailedError,
    TagAlreadyExistsError,
    TagCreationFailedError,
    VersionBumpError,
)
from tagbump.git import TagStore
from tagbump.semver import (
    SemanticVersion,
    VersionKind,
    compute_next,
    ensure_tag_absent,
    select_latest_tag,
)

DEFAULT_REMOTE: Final[str] = "origin"
DEFAULT_MESSAGE_TEMPLATE: Final[str] = "Bump {kind} version to {version}"
DEFAULT_TARGET_REF: Final[str] = "HEAD"


@dataclass(frozen=True)
class BumpPlan:
    """Everything needed to create the next tag, computed without side effects."""

    kind: VersionKind
    current: SemanticVersion
    next: SemanticVersion
    target_commit: str
    message: str
    remote: str
    push: bool

    @property
    def latest_tag(self) -> str:
        return self.current.tag

    @property
    def new_tag(self) -> str:
        return self.next.tag


@dataclass(frozen=True)
class BumpResult:
    plan: BumpPlan
    dry_run: bool
    created: bool = False
    pushed: bool = False


def publish_tag(
    store: TagStore,
    candidate: str,
    target_commit: str,
    message: str,
    *,
    push: bool,
    remote: str = DEFAULT_REMOTE,
) -> bool:
    """Create the annotated tag and optionally push it.

    Returns whether the tag was pushed. A push failure raises
    :class:`PushFailedError` after the local tag has been created.
    """

    try:
        store.create_annotated_tag(candidate, message, target_commit)
    except GitCommandError as exc:
        raise TagCreationFailedError(candidate, exc.stderr or str(exc)) from exc
    logger.info(f"   Created tag: {candidate}")

    if not push:
        return False

    logger.info(f"Pushing tag to {remote}...")
    try:
        store.push_tag(remote, candidate)
    except GitCommandError as exc:
        raise PushFailedError(candidate, remote, exc.stderr or str(exc)) from exc
    logger.info(f"   Pushed tag to {remote}")
    return True


class VersionBumper:
    """Drive one bump against a :class:`~tagbump.git.TagStore`."""

    def __init__(
        self,
        store: TagStore,
        *,
        remote: str = DEFAULT_REMOTE,
        message_template: str = DEFAULT_MESSAGE_TEMPLATE,
        target_ref: str = DEFAULT_TARGET_REF,
    ) -> None:
        self.store = store
        self.remote = remote
        self.message_template = message_template
        self.target_ref = target_ref

    def render_message(self, kind: VersionKind, current: SemanticVersion, new: SemanticVersion) -> str:
        return self.message_template.format(
            kind=kind.value, version=new.tag, previous=current.tag
        )

    def plan(self, kind: VersionKind | str, *, push: bool = False) -> BumpPlan:
        kind = VersionKind(kind)

        logger.info("Checking git repository...")
        self.store.ensure_repository()

        logger.info("Getting latest semantic version tag...")
        tags = self.store.list_tags()
        current = select_latest_tag(tags)
        logger.info(f"   Current latest tag: {current.tag}")
        logger.info(f"   Current version: {current.major}.{current.minor}.{current.patch}")

        logger.info(f"Creating new {kind.value} version...")
        new = compute_next(current, kind)
        logger.info(f"   New version: {new.tag}")

        logger.info("Checking if new tag already exists...")
        ensure_tag_absent(new.tag, tags)
        if self.store.resolve_ref(f"refs/tags/{new.tag}") is not None:
            raise TagAlreadyExistsError(new.tag)

        target_commit = self.store.resolve_ref(self.target_ref)
        if target_commit is None:
            raise VersionBumpError(f"Cannot resolve {self.target_ref} to a commit")
        logger.info(f"Current commit: {target_commit[:8]}")

        return BumpPlan(
            kind=kind,
            current=current,
            next=new,
            target_commit=target_commit,
            message=self.render_message(kind, current, new),
            remote=self.remote,
            push=push,
        )

    def execute(self, plan: BumpPlan) -> BumpResult:
        logger.info("Creating new tag...")
        pushed = publish_tag(
            self.store,
            plan.new_tag,
            plan.target_commit,
            plan.message,
            push=plan.push,
            remote=plan.remote,
        )
        return BumpResult(plan=plan, dry_run=False, created=True, pushed=pushed)

    def run(
        self,
        kind: VersionKind | str,
        *,
        push: bool = False,
        dry_run: bool = False,
    ) -> BumpResult:
        plan = self.plan(kind, push=push)
        if dry_run:
            return BumpResult(plan=plan, dry_run=True)
        return self.execute(plan)


def format_dry_run(plan: BumpPlan) -> str:
    lines = [
        "",
        "DRY RUN - Would perform the following actions:",
        f"  Bump {plan.kind.value} version: {plan.latest_tag} -> {plan.new_tag}",
        f"  Create tag: {plan.new_tag}",
        f"  On commit: {plan.target_commit}",
    ]
    if plan.push:
        lines.append(f"  Push tag to {plan.remote}")
    lines.extend(["", "To execute for real, run without --dry-run flag"])
    return "\n".join(lines)


def format_summary(result: BumpResult) -> str:
    plan = result.plan
    lines = [
        "",
        f"Successfully bumped {plan.kind.value} version!",
        f"   Previous: {plan.latest_tag}",
        f"   New:      {plan.new_tag}",
    ]
    if not plan.push:
        lines.extend(
            [
                "",
                "Tip: Use --push flag to automatically push the tag to "
                f"{plan.remote}",
                f"   Or manually push with: git push {plan.remote} {plan.new_tag}",
            ]
        )
    return "\n".join(lines)


def format_report(result: BumpResult) -> str:
    if result.dry_run:
        return format_dry_run(result.plan)
    return format_summary(result)


__all__ = [
    "BumpPlan",
    "BumpResult",
    "VersionBumper",
    "format_dry_run",
    "format_report",
    "format_summary",
    "publish_tag",
]
