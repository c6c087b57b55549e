"""
Filesystem helpers shared across the generator and stylesheet modules.
"""

from __future__ import annotations

import logging
import os
import tempfile
from contextlib import contextmanager
from pathlib import Path

from filelock import FileLock

logger = logging.getLogger(__name__)


def ensure_directory(path: Path | str) -> Path:
    """
    Ensure a directory exists, returning the resolved Path.
    """
    resolved = Path(path).expanduser().resolve()
    resolved.mkdir(parents=True, exist_ok=True)
    return resolved


def _ensure_parent(target: Path) -> None:
    """Ensure the parent directory for target exists."""
    if target.parent and not target.parent.exists():
        target.parent.mkdir(parents=True, exist_ok=True)


@contextmanager
def file_lock(path: Path | str, timeout: float = -1):
    """
    Context manager for a filesystem lock file alongside the target.

    A negative timeout waits forever; otherwise filelock.Timeout is raised once it expires.
    """
    target = Path(path).expanduser().resolve()
    lock_path = target.with_suffix(f"{target.suffix}.lock")
    _ensure_parent(lock_path)
    logger.debug("Acquiring lock %s", lock_path)
    with FileLock(str(lock_path), timeout=timeout):
        yield


def _atomic_write_bytes(target: Path, content: bytes) -> None:
    """Write bytes atomically by staging a temp file and renaming."""
    _ensure_parent(target)
    fd, tmp_path = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=target.parent)
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_path, target)
    finally:
        try:
            os.unlink(tmp_path)
        except FileNotFoundError:
            pass
        except OSError:
            pass


def write_bytes_file(path: Path | str, content: bytes) -> Path:
    """
    Write bytes to a file, creating parent directories and replacing any existing file.
    """
    target = Path(path).expanduser().resolve()
    _atomic_write_bytes(target, content)
    return target
