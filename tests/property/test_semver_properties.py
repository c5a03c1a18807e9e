from __future__ import annotations

from hypothesis import given, settings
from hypothesis import strategies as st

from tagbump.semver import SemanticVersion, VersionKind, compute_next, parse_version

COMPONENT = st.integers(min_value=0, max_value=10**6)
VERSION_TAGS = st.from_regex(r"v?[0-9]{1,6}\.[0-9]{1,6}\.[0-9]{1,6}", fullmatch=True)


@st.composite
def versions(draw) -> SemanticVersion:
    return SemanticVersion(
        draw(COMPONENT), draw(COMPONENT), draw(COMPONENT), has_prefix=draw(st.booleans())
    )


@given(VERSION_TAGS)
@settings(max_examples=150)
def test_parse_version_reproduces_tag(tag: str) -> None:
    version = parse_version(tag)
    assert version.tag == tag
    assert version.has_prefix == tag.startswith("v")


@given(versions())
def test_major_resets_minor_and_patch(current: SemanticVersion) -> None:
    bumped = compute_next(current, VersionKind.MAJOR)
    assert bumped.major == current.major + 1
    assert (bumped.minor, bumped.patch) == (0, 0)
    assert bumped.has_prefix == current.has_prefix


@given(versions())
def test_minor_keeps_major_and_resets_patch(current: SemanticVersion) -> None:
    bumped = compute_next(current, VersionKind.MINOR)
    assert bumped.major == current.major
    assert bumped.minor == current.minor + 1
    assert bumped.patch == 0


@given(versions())
def test_patch_changes_only_patch(current: SemanticVersion) -> None:
    bumped = compute_next(current, VersionKind.PATCH)
    assert (bumped.major, bumped.minor) == (current.major, current.minor)
    assert bumped.patch == current.patch + 1
    assert bumped.has_prefix == current.has_prefix


@given(st.lists(versions(), min_size=1, max_size=8))
def test_bumped_version_sorts_after_current(items: list[SemanticVersion]) -> None:
    for current in items:
        for kind in VersionKind:
            assert compute_next(current, kind).tuple > current.tuple
