"""Create the next semantic version tag in a git repository.

Attributes load lazily so that packaging can read :mod:`tagbump.version`
without importing the runtime dependencies.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any, Dict, Iterable

__all__ = [
    "SemanticVersion",
    "VersionKind",
    "compute_next",
    "ensure_tag_absent",
    "parse_version",
    "select_latest_tag",
    "VersionBumper",
    "BumpPlan",
    "BumpResult",
    "publish_tag",
    "GitTagStore",
    "TagStore",
    "VersionBumpError",
    "PROJECT_VERSION",
    "__version__",
]

_MODULE_ATTRS: Dict[str, Iterable[str]] = {
    "tagbump.semver": [
        "SemanticVersion",
        "VersionKind",
        "compute_next",
        "ensure_tag_absent",
        "parse_version",
        "select_latest_tag",
    ],
    "tagbump.bumper": [
        "VersionBumper",
        "BumpPlan",
        "BumpResult",
        "publish_tag",
    ],
    "tagbump.git": ["GitTagStore", "TagStore"],
    "tagbump.errors": ["VersionBumpError"],
    "tagbump.version": ["PROJECT_VERSION", "__version__"],
}

_ATTR_TO_MODULE: Dict[str, str] = {
    attribute: module for module, attributes in _MODULE_ATTRS.items() for attribute in attributes
}


def __getattr__(name: str) -> Any:
    module_name = _ATTR_TO_MODULE.get(name)
    if module_name is None:
        raise AttributeError(f"module 'tagbump' has no attribute {name!r}")
    module = import_module(module_name)
    for attribute in _MODULE_ATTRS[module_name]:
        globals()[attribute] = getattr(module, attribute)
    return globals()[name]
