"""
Shared filesystem helpers.
"""

from .filesystem import ensure_directory, file_lock, write_bytes_file

__all__ = [
    "ensure_directory",
    "file_lock",
    "write_bytes_file",
]
