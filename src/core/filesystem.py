"""Filesystem utility helpers."""

from __future__ import annotations
import os
import shutil


def ensure_dir(path: str) -> None:
    os.makedirs(path, exist_ok=True)


def write_bytes_atomic(path: str, data: bytes) -> None:
    """Write ``data`` to a sibling temp file, then swap it onto ``path``.

    On failure the previous content of ``path`` is left untouched.
    """
    dir_part = os.path.dirname(path)
    if dir_part:
        ensure_dir(dir_part)
    tmp = path + ".tmp"
    try:
        with open(tmp, "wb") as fh:
            fh.write(data)
        os.replace(tmp, path)
    except OSError:
        if os.path.exists(tmp):
            os.remove(tmp)
        raise


def write_text(path: str, content: str, encoding: str = "utf-8") -> None:
    # Encoding happens before the target is touched; no newline translation
    write_bytes_atomic(path, content.encode(encoding))


def read_text(path: str, encoding: str = "utf-8") -> str:
    with open(path, "r", encoding=encoding, newline="") as fh:
        return fh.read()


def copy_file(src: str, dst: str) -> None:
    """Byte-for-byte copy, overwriting ``dst`` if present."""
    shutil.copyfile(src, dst)


def remove_if_exists(path: str) -> bool:
    """Delete ``path`` when present. Returns True if a file was removed."""
    if not os.path.exists(path):
        return False
    os.remove(path)
    return True
