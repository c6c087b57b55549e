"""
Copy a bundled file tree into a project while honouring an exclusion set.

Only files are copied. Directories are created on demand to hold them, so an
empty source directory leaves no trace in the destination. Every copy replaces
the destination file wholesale.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Iterable, Iterator, List, Optional

from ..util import write_bytes_file

logger = logging.getLogger(__name__)


class SyncError(OSError):
    """Base class for failures raised while synchronizing a tree."""

    action = "process"

    def __init__(self, path: Path | str, cause: Optional[BaseException] = None) -> None:
        self.path = Path(path)
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Unable to {self.action} {self.path}{detail}")


class SourceReadError(SyncError):
    """Raised when a source directory or file cannot be read."""

    action = "read"


class DestinationWriteError(SyncError):
    """Raised when a destination file or directory cannot be written."""

    action = "write"


@dataclass
class SyncReport:
    """
    Records the outcome of a single synchronization pass.

    Attributes:
        source_root: Directory files were read from.
        destination_root: Directory files were written to.
        copied: Relative paths written (or that would be written on a dry run).
        skipped: Relative paths left alone because they are excluded.
        dry_run: True when nothing was written.
    """
    source_root: Path
    destination_root: Path
    copied: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    dry_run: bool = False

    def summary_rows(self) -> Iterable[tuple[str, str]]:
        yield ("Source", str(self.source_root))
        yield ("Destination", str(self.destination_root))
        yield ("Files copied", str(len(self.copied)))
        yield ("Files skipped", str(len(self.skipped)))
        if self.dry_run:
            yield ("Dry run", "yes")


def normalize_relative_path(value: str) -> str:
    """
    Normalize a user-supplied relative path to the POSIX form used for matching.

    Backslashes become forward slashes and a leading ``./`` is dropped, so
    ``.\\scss\\vars\\_app.scss`` and ``scss/vars/_app.scss`` compare equal.
    """
    cleaned = value.replace("\\", "/")
    return PurePosixPath(cleaned).as_posix() if cleaned else ""


def _raise_source_error(exc: OSError) -> None:
    raise SourceReadError(exc.filename or "", exc) from exc


def iter_source_files(
    source_root: Path,
    *,
    recursive: bool = True,
    prune: Optional[Path] = None,
) -> Iterator[tuple[Path, str]]:
    """
    Yield ``(absolute path, relative POSIX path)`` for every file under source_root.

    Hidden files are included. Entries are produced in sorted order so reports
    are stable between runs. The directory prune (typically a destination
    nested inside the source) is never descended into.
    """
    if not source_root.is_dir():
        raise SourceReadError(source_root, FileNotFoundError(f"Not a directory: {source_root}"))

    if not recursive:
        try:
            entries = sorted(os.scandir(source_root), key=lambda entry: entry.name)
        except OSError as exc:
            raise SourceReadError(source_root, exc) from exc
        for entry in entries:
            if entry.is_dir():
                continue
            yield Path(entry.path), entry.name
        return

    for dirpath, dirnames, filenames in os.walk(source_root, onerror=_raise_source_error):
        current = Path(dirpath)
        dirnames[:] = sorted(name for name in dirnames if (current / name).resolve() != prune)
        for filename in sorted(filenames):
            path = current / filename
            yield path, path.relative_to(source_root).as_posix()


def sync(
    source_root: Path | str,
    destination_root: Path | str,
    exclusions: Iterable[str] = (),
    *,
    recursive: bool = True,
    dry_run: bool = False,
) -> SyncReport:
    """
    Copy every non-excluded file under source_root to the same relative path under destination_root.

    Args:
        source_root: Bundled directory to copy from.
        destination_root: Directory inside the consuming project.
        exclusions: Relative paths that must never be copied. Matching is exact once
            backslashes become forward slashes and a leading ``./`` is dropped.
        recursive: If False, only files directly inside source_root are copied.
        dry_run: If True, compute the report without touching the filesystem.

    Returns:
        A SyncReport listing copied and skipped relative paths.

    Raises:
        SourceReadError: A source directory or file could not be read.
        DestinationWriteError: A destination file could not be written.
    """
    source = Path(source_root).expanduser().resolve()
    destination = Path(destination_root).expanduser().resolve()
    excluded = {normalize_relative_path(item) for item in exclusions}
    excluded.discard("")
    report = SyncReport(source_root=source, destination_root=destination, dry_run=dry_run)

    logger.info("Synchronizing %s -> %s", source, destination)
    for path, relative in iter_source_files(source, recursive=recursive, prune=destination):
        if relative in excluded:
            logger.debug("Skipping excluded %s", relative)
            report.skipped.append(relative)
            continue

        target = destination / relative
        if dry_run:
            logger.debug("Dry-run: would copy %s -> %s", relative, target)
            report.copied.append(relative)
            continue

        try:
            content = path.read_bytes()
        except OSError as exc:
            raise SourceReadError(path, exc) from exc
        try:
            write_bytes_file(target, content)
        except OSError as exc:
            raise DestinationWriteError(target, exc) from exc
        logger.debug("Copied %s -> %s", relative, target)
        report.copied.append(relative)

    logger.info(
        "Synchronized %d file(s) into %s (%d excluded)",
        len(report.copied),
        destination,
        len(report.skipped),
    )
    return report
