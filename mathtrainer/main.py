from __future__ import annotations

"""CLI entry point for mathtrainer."""

from .app.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
