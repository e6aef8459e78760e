"""Filesystem helpers that never leave half-written outputs behind."""

from __future__ import annotations

import os
import shutil
import tempfile
from pathlib import Path

# mkstemp creates 0600 files; emitted assets must stay readable by the web server.
OUTPUT_MODE = 0o644


def write_text_atomic(path: Path, text: str) -> None:
    """Write ``text`` to ``path`` through a temporary sibling and ``os.replace``."""
    _replace_with(path, lambda handle: handle.write(text.encode("utf-8")))


def copy_file_atomic(source: Path, destination: Path) -> None:
    """Copy ``source`` byte-for-byte to ``destination``."""

    def _copy(handle) -> None:  # type: ignore[no-untyped-def]
        with source.open("rb") as reader:
            shutil.copyfileobj(reader, handle)

    _replace_with(destination, _copy)
    shutil.copymode(source, destination)


def relative_posix(path: Path, base: Path) -> str:
    """Return ``path`` relative to ``base`` with forward-slash separators."""
    return Path(os.path.relpath(path, base)).as_posix()


def _replace_with(path: Path, writer) -> None:  # type: ignore[no-untyped-def]
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as handle:
            writer(handle)
        os.chmod(tmp_path, OUTPUT_MODE)
        os.replace(tmp_path, path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise


__all__ = ["copy_file_atomic", "relative_posix", "write_text_atomic"]
