"""
Selective directory synchronization for bundled asset trees.
"""

from .synchronizer import (
    DestinationWriteError,
    SourceReadError,
    SyncError,
    SyncReport,
    normalize_relative_path,
    sync,
)

__all__ = [
    "DestinationWriteError",
    "SourceReadError",
    "SyncError",
    "SyncReport",
    "normalize_relative_path",
    "sync",
]
