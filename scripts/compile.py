"""CLI entrypoint for compiling a streaming job directory."""

from __future__ import annotations

from mrpack.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
