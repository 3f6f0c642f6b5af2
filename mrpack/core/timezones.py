"""Timezone detection and validation for generated bootstraps."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .config import FALLBACK_TIMEZONE
from .errors import InputError

_LOCALTIME = Path("/etc/localtime")
_TIMEZONE_FILE = Path("/etc/timezone")


def _zone_from_path(path: Path) -> Optional[str]:
    """IANA name for a zone file path, following symlinks into a zoneinfo tree."""
    target = os.path.realpath(path)
    marker = "zoneinfo" + os.sep
    if marker not in target or not os.path.isfile(target):
        return None
    return target.split(marker, 1)[1]


def host_timezone() -> str:
    """Return the IANA name of this machine's timezone, or UTC if unknown.

    ``TZ`` may hold a zone name or, POSIX style, a path such as
    ``:/etc/localtime``; a path is resolved to the zone it points at.
    """
    tz = os.environ.get("TZ", "").strip().lstrip(":")
    if tz and not os.path.isabs(tz):
        return tz
    if tz:
        name = _zone_from_path(Path(tz))
        if name:
            return name
    if _TIMEZONE_FILE.is_file():
        name = _TIMEZONE_FILE.read_text(encoding="utf-8").strip()
        if name:
            return name
    return _zone_from_path(_LOCALTIME) or FALLBACK_TIMEZONE


def validate_timezone(name: str) -> str:
    """Return ``name`` if it resolves to a real timezone.

    Raises:
        InputError: If ``zoneinfo`` cannot construct the zone.
    """
    if not name:
        raise InputError(f"Invalid timezone '{name}'.")
    try:
        ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, OSError) as exc:
        raise InputError(f"Invalid timezone '{name}'.") from exc
    return name
