"""Semantic version tags: parsing, ordering and increments."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Final, Iterable, Optional, Tuple

from loguru import logger

from tagbump.errors import (
    InvalidVersionFormatError,
    NoVersionTagsFoundError,
    TagAlreadyExistsError,
)

VERSION_PREFIX: Final[str] = "v"
VERSION_TAG_RE: Final[re.Pattern[str]] = re.compile(r"v?[0-9]+\.[0-9]+\.[0-9]+")
_COMPONENT_RE: Final[re.Pattern[str]] = re.compile(r"[0-9]+")


class VersionKind(str, Enum):
    """Which semantic version component to increment."""

    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"


@dataclass(frozen=True)
class SemanticVersion:
    """Immutable ``[v]major.minor.patch`` version.

    ``source`` keeps the exact tag text an instance was parsed from so that
    :attr:`tag` reproduces it verbatim. Derived versions have no source and
    serialize canonically.
    """

    major: int
    minor: int
    patch: int
    has_prefix: bool = False
    source: Optional[str] = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        for attribute_name in ("major", "minor", "patch"):
            value = getattr(self, attribute_name)
            if value < 0:
                raise ValueError(f"{attribute_name} must be non-negative, got {value}")

    @property
    def tuple(self) -> Tuple[int, int, int]:
        return (self.major, self.minor, self.patch)

    @property
    def sort_key(self) -> Tuple[int, int, int, bool]:
        """Numeric ordering; ``v1.2.3`` sorts after ``1.2.3`` like ``sort -V``."""

        return (self.major, self.minor, self.patch, self.has_prefix)

    @property
    def tag(self) -> str:
        if self.source is not None:
            return self.source
        prefix = VERSION_PREFIX if self.has_prefix else ""
        return f"{prefix}{self.major}.{self.minor}.{self.patch}"

    def __str__(self) -> str:
        return self.tag

    def bump(self, kind: VersionKind | str) -> "SemanticVersion":
        return compute_next(self, kind)


def is_version_tag(tag: str) -> bool:
    return VERSION_TAG_RE.fullmatch(tag) is not None


def parse_version(tag: str) -> SemanticVersion:
    """Parse ``tag`` into a :class:`SemanticVersion`.

    Raises :class:`InvalidVersionFormatError` unless the text (after an
    optional leading ``v``) is exactly three dot-separated integer literals.
    """

    has_prefix = tag.startswith(VERSION_PREFIX)
    body = tag[len(VERSION_PREFIX):] if has_prefix else tag
    parts = body.split(".")
    if len(parts) != 3 or not all(_COMPONENT_RE.fullmatch(part) for part in parts):
        raise InvalidVersionFormatError(tag)
    try:
        major, minor, patch = (int(part) for part in parts)
    except ValueError as exc:
        # int() refuses digit strings past sys.get_int_max_str_digits()
        raise InvalidVersionFormatError(tag) from exc
    return SemanticVersion(major, minor, patch, has_prefix=has_prefix, source=tag)


def select_latest_tag(tags: Iterable[str]) -> SemanticVersion:
    """Return the highest version among ``tags`` using numeric ordering."""

    all_tags = list(tags)
    candidates = [tag for tag in all_tags if is_version_tag(tag)]
    ignored = len(all_tags) - len(candidates)
    if ignored:
        logger.debug(f"Ignoring {ignored} tag(s) that are not plain X.Y.Z versions")
    if not candidates:
        raise NoVersionTagsFoundError(all_tags)
    return max((parse_version(tag) for tag in candidates), key=lambda item: item.sort_key)


def compute_next(current: SemanticVersion, kind: VersionKind | str) -> SemanticVersion:
    kind = VersionKind(kind)
    major, minor, patch = current.tuple
    if kind is VersionKind.MAJOR:
        major += 1
        minor = 0
        patch = 0
    elif kind is VersionKind.MINOR:
        minor += 1
        patch = 0
    else:
        patch += 1
    return SemanticVersion(major, minor, patch, has_prefix=current.has_prefix)


def ensure_tag_absent(candidate: str, tags: Iterable[str]) -> None:
    if candidate in set(tags):
        raise TagAlreadyExistsError(candidate)


__all__ = [
    "VERSION_PREFIX",
    "VERSION_TAG_RE",
    "SemanticVersion",
    "VersionKind",
    "compute_next",
    "ensure_tag_absent",
    "is_version_tag",
    "parse_version",
    "select_latest_tag",
]
