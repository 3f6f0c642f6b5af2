"""Executable zip archive writer with a generated bootstrap."""

from __future__ import annotations

import importlib.util
import os
import zipfile
from typing import Callable, Dict, List, Optional, Set, Tuple

from tqdm import tqdm

from .config import archive_readonly
from .errors import InputError
from .io import atomic_target

MAIN_MEMBER = "__main__.py"

PathFilter = Callable[[str], bool]


def can_write() -> bool:
    """Return True when this host may write compressed archives."""
    if archive_readonly():
        return False
    return importlib.util.find_spec("zlib") is not None


def include_path(rel_path: str) -> bool:
    """Return False when any segment of ``rel_path`` starts with a dot."""
    return not any(part.startswith(".") for part in rel_path.split("/") if part)


class ArchiveWriter:
    """Stages files in memory and writes the archive in a single commit.

    Nothing touches ``path`` until :meth:`commit`, which builds the archive in
    a temp file and swaps it in, so a failure never leaves a truncated file.
    """

    def __init__(self, path: str, compression: int = zipfile.ZIP_DEFLATED) -> None:
        self.path = path
        self.compression = compression
        self.bootstrap: Optional[str] = None
        self._staged: Dict[str, str] = {}
        self._seen: Set[Tuple[int, int]] = set()

    @classmethod
    def open(cls, path: str) -> "ArchiveWriter":
        return cls(path)

    @property
    def staged(self) -> List[str]:
        return list(self._staged)

    def add_tree(self, root: str, path_filter: PathFilter = include_path) -> List[str]:
        """Stage every file under ``root`` accepted by ``path_filter``.

        ``path_filter`` receives the ``/``-separated path relative to ``root``;
        rejected directories are not descended into. Files already staged from
        another root (same device and inode) are skipped, and a later root
        providing an existing member name replaces it.

        Returns:
            Member names staged from this root, in walk order.
        """
        added: List[str] = []
        for dirpath, dirnames, filenames in os.walk(root):
            rel_dir = os.path.relpath(dirpath, root)
            prefix = "" if rel_dir == os.curdir else rel_dir.replace(os.sep, "/") + "/"
            dirnames[:] = sorted(d for d in dirnames if path_filter(prefix + d))
            for filename in sorted(filenames):
                name = prefix + filename
                if not path_filter(name):
                    continue
                full_path = os.path.join(dirpath, filename)
                try:
                    st = os.stat(full_path)
                except OSError as exc:
                    raise InputError(f"Cannot read '{full_path}': {exc.strerror}.") from exc
                identity = (st.st_dev, st.st_ino)
                if identity in self._seen:
                    continue
                self._seen.add(identity)
                self._staged[name] = full_path
                added.append(name)
        return added

    def set_bootstrap(self, text: str) -> None:
        self.bootstrap = text

    def _prefix(self) -> bytes:
        if self.bootstrap and self.bootstrap.startswith("#!"):
            return self.bootstrap.splitlines()[0].encode("utf-8") + b"\n"
        return b""

    def commit(self) -> List[str]:
        """Write all staged members and the bootstrap to ``path``.

        Returns:
            Member names in archive order.
        """
        members = [name for name in self._staged if name != MAIN_MEMBER]
        with atomic_target(self.path) as fd:
            fd.write(self._prefix())
            with zipfile.ZipFile(fd, "w", compression=self.compression) as zf:
                progress = tqdm(
                    members,
                    desc=os.path.basename(self.path),
                    unit="file",
                    disable=None,
                    leave=False,
                )
                for name in progress:
                    source = self._staged[name]
                    try:
                        zf.write(source, name)
                    except OSError as exc:
                        raise InputError(f"Cannot read '{source}': {exc.strerror}.") from exc
                if self.bootstrap is not None:
                    zf.writestr(MAIN_MEMBER, self.bootstrap)
                    members.append(MAIN_MEMBER)
        return members
