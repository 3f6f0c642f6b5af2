"""Build constants and environment-driven settings."""

from __future__ import annotations

import os
from pathlib import Path

ARCHIVE_SUFFIX = ".pyz"
SCRIPT_SUFFIX = ".sh"

# Library directory bundled ahead of the job directory in every archive.
LIB_DIR = Path(__file__).resolve().parents[1] / "runtime_lib"
RUNTIME_ENTRY = "mrpack_runtime/_run.py"

INTERPRETER_DIRECTIVE = "#!/usr/bin/env python3"
TASK_COMMAND = "python3"

ARGUMENTS_FILE = "ARGUMENTS"
ROLE_FILES = {
    "mapper": "Mapper",
    "reducer": "Reducer",
    "combiner": "Combiner",
}

FALLBACK_TIMEZONE = "UTC"
DEBUG_ENV = "MRPACK_DEBUG"
READONLY_ENV = "MRPACK_ARCHIVE_READONLY"

_TRUTHY = {"1", "true", "yes", "on"}


def archive_readonly() -> bool:
    """Return True when archive writing is disabled for this host."""
    return os.environ.get(READONLY_ENV, "").strip().lower() in _TRUTHY
