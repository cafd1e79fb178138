"""Filesystem helpers for reading and rewriting report files."""

from __future__ import annotations

import os
from datetime import datetime, timezone
from pathlib import Path
from uuid import uuid4


def _atomic_temp_path(target_path: Path) -> Path:
    """Create a temp path in the same directory for atomic replacement."""

    return target_path.parent / f".{target_path.name}.{uuid4().hex}.tmp"


def read_text(path: Path, encoding: str = "utf-8") -> str:
    """Read a whole text file.

    Bytes invalid in ``encoding`` are kept as surrogate escapes so that
    :func:`write_text_atomically` writes them back unchanged.
    """

    with path.open("r", encoding=encoding, errors="surrogateescape", newline="") as handle:
        return handle.read()


def write_text_atomically(
    path: Path,
    content: str,
    encoding: str = "utf-8",
    preserve_mtime: bool = False,
) -> Path:
    """Replace ``path`` with ``content`` through a same-directory temp file.

    With ``preserve_mtime`` the access and modification times of the file being
    replaced are carried over to the new file.
    """

    previous_stat = path.stat() if preserve_mtime else None
    temp_path = _atomic_temp_path(path)
    try:
        # newline="" keeps the original line endings untouched
        with temp_path.open("w", encoding=encoding, errors="surrogateescape", newline="") as handle:
            handle.write(content)
        if previous_stat is not None:
            os.utime(temp_path, ns=(previous_stat.st_atime_ns, previous_stat.st_mtime_ns))
        os.replace(temp_path, path)
    finally:
        if temp_path.exists():
            temp_path.unlink()
    return path


def file_mtime_utc(path: Path) -> datetime:
    """Return the modification time of ``path`` as an aware UTC datetime.

    Raises ``OSError`` (``FileNotFoundError`` included) when the file cannot be
    inspected.
    """

    return datetime.fromtimestamp(path.stat().st_mtime, tz=timezone.utc)


def is_writable(path: Path) -> bool:
    """True when the current process may overwrite ``path``."""

    return path.is_file() and os.access(path, os.W_OK)
