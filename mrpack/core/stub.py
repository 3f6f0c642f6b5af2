"""Bootstrap stub generation for job archives."""

from __future__ import annotations

from typing import List

from .config import DEBUG_ENV, INTERPRETER_DIRECTIVE, RUNTIME_ENTRY


def _module_name(entry: str) -> str:
    if entry.endswith(".py"):
        entry = entry[: -len(".py")]
    return entry.replace("/", ".")


def default_stub(entry: str = RUNTIME_ENTRY) -> str:
    """Return the plain self-executing stub that hands off to ``entry``."""
    return (
        f"{INTERPRETER_DIRECTIVE}\n"
        "# -*- coding: utf-8 -*-\n"
        "import runpy\n"
        f"runpy.run_module({_module_name(entry)!r}, run_name='__main__', alter_sys=True)\n"
    )


def bootstrap_header(timezone: str, debug: bool) -> str:
    """Directive line plus the timezone and debug-flag setup."""
    lines: List[str] = [
        INTERPRETER_DIRECTIVE,
        "import builtins",
        "import os",
        "import time",
        f"os.environ['TZ'] = {timezone!r}",
        "if hasattr(time, 'tzset'):",
        "    time.tzset()",
        f"os.environ[{DEBUG_ENV!r}] = {'1' if debug else '0'!r}",
        f"builtins.MRPACK_DEBUG = {bool(debug)!r}",
    ]
    return "\n".join(lines) + "\n"


def build_bootstrap(timezone: str, debug: bool, entry: str = RUNTIME_ENTRY) -> str:
    """Generated header followed by the default stub minus its directive line.

    The result depends only on its arguments.
    """
    tail = default_stub(entry).split("\n", 1)[1]
    return bootstrap_header(timezone, debug) + tail
