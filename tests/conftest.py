from __future__ import annotations

import sys
from pathlib import Path
from typing import Iterator

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from tag_store_fakes import FakeTagStore  # noqa: E402
from tagbump.logger import get_logger  # noqa: E402


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    """Drop sinks bound to captured streams once a test finishes."""

    yield
    get_logger().shutdown()


@pytest.fixture
def fake_store() -> FakeTagStore:
    return FakeTagStore(tags=["v1.4.7", "v1.4.6", "notes"])
