"""Atomic file output for build artifacts."""

from __future__ import annotations

import contextlib
import os
import tempfile
from typing import BinaryIO, Iterator

ARTIFACT_MODE = 0o644


@contextlib.contextmanager
def atomic_target(path: str) -> Iterator[BinaryIO]:
    """Yield a temp file beside ``path`` and move it into place on success.

    The temp file is removed if the body raises, so ``path`` is either left
    untouched or replaced by complete content.
    """
    dir_name = os.path.dirname(os.path.abspath(path))
    fd, tmp_path = tempfile.mkstemp(dir=dir_name, prefix=".mrpack-", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as tmp:
            yield tmp
            tmp.flush()
            os.fsync(tmp.fileno())
        os.chmod(tmp_path, ARTIFACT_MODE)
        os.replace(tmp_path, path)
    except BaseException:
        with contextlib.suppress(FileNotFoundError):
            os.unlink(tmp_path)
        raise


def atomic_write_text(path: str, text: str) -> None:
    """Write text atomically by replacing a temp file."""
    with atomic_target(path) as tmp:
        tmp.write(text.encode("utf-8"))
