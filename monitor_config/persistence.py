"""Atomic text persistence helpers."""

from __future__ import annotations

import os
import tempfile


def read_text(path: str, default: str = "") -> str:
    """Read *path* as UTF-8, returning *default* when it does not exist."""
    try:
        with open(path, encoding="utf-8") as f:
            return f.read()
    except FileNotFoundError:
        return default


def write_text_atomic(path: str, text: str) -> None:
    """Atomically write text to path via a temp file."""
    dir_path = os.path.dirname(os.path.abspath(path))
    os.makedirs(dir_path, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=dir_path, suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
        os.replace(tmp_path, path)
    except Exception:
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        raise
