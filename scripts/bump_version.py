#!/usr/bin/env python3
"""Bump the latest semantic version tag of the current repository."""

from __future__ import annotations

from tagbump.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
