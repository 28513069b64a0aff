from __future__ import annotations

import logging
import os
import shutil
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)


def ensure_dir(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path


def atomic_write_bytes(path: Path, data: bytes) -> None:
    """Atomically write bytes to a path using a temporary file and replace.

    Ensures that either the old file remains or the new file fully replaces it.
    """
    ensure_dir(path.parent)
    fd, tmp_name = tempfile.mkstemp(prefix=path.name, suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    finally:
        if os.path.exists(tmp_name):
            try:
                os.remove(tmp_name)
            except OSError:
                logger.debug("Could not remove temp file %s", tmp_name, exc_info=True)


def atomic_copy(src: Path, dest: Path) -> None:
    """Copy ``src`` over ``dest`` so that ``dest`` is never left half-written."""
    fd, tmp_name = tempfile.mkstemp(prefix=dest.name, suffix=".tmp", dir=dest.parent)
    os.close(fd)
    try:
        shutil.copy2(str(src), tmp_name)
        os.replace(tmp_name, dest)
    finally:
        if os.path.exists(tmp_name):
            try:
                os.remove(tmp_name)
            except OSError:
                logger.debug("Could not remove temp file %s", tmp_name, exc_info=True)
