"""Allow ``python -m tagbump``."""

from __future__ import annotations

from tagbump.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
