"""Recursive directory scanning."""

import logging
import os
import stat
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING

from dupscan.exceptions import AccessError
from dupscan.exceptions import DupscanError
from dupscan.exceptions import PathTooLongError
from dupscan.files.paths import join_entry
from dupscan.models import MAX_PATH
from dupscan.models import ScanIssue
from dupscan.models import ScanReport

if TYPE_CHECKING:
    from dupscan.registry import FileRegistry

logger = logging.getLogger(__name__)

FileVisitor = Callable[[str, int], object]

NS_PER_SECOND = 1_000_000_000


def scan_path(
    path: str | os.PathLike[str],
    registry: "FileRegistry | None" = None,
    *,
    max_path: int = MAX_PATH,
    visit: FileVisitor | None = None,
) -> ScanReport:
    """Walk path and hand every file found to a visitor.

    Directories are walked depth first, entries in the order the OS lists
    them. Anything that isn't a directory (regular files, symlinks, devices,
    sockets, fifos) counts as a file. Symlinks below path are never
    followed; path itself is resolved, so a link given by the user is walked.

    Unreadable entries, overlong paths and visitor failures are logged and
    recorded in the report, and the walk carries on with the next entry.

    Args:
        path: File or directory to scan
        registry: Registry to record files in (used when visit is None)
        max_path: Maximum length in bytes of a constructed path
        visit: Called as visit(path, modified) for every file, with modified
            in whole seconds (rounded down)

    Returns:
        ScanReport with the number of files visited and the skipped entries
    """
    if visit is None:
        if registry is None:
            raise ValueError("scan_path needs a registry or a visitor")
        visit = registry.register

    report = ScanReport()
    # (path, is_top_level) pairs; children are pushed reversed so they pop in
    # listing order
    pending: list[tuple[Path, bool]] = [(Path(path), True)]

    while pending:
        current, top_level = pending.pop()

        try:
            info = current.stat() if top_level else current.lstat()
        except OSError as e:
            _skip(report, AccessError(str(current), _reason(e)))
            continue

        if stat.S_ISDIR(info.st_mode):
            logger.debug("Scanning directory %s", current)
            children = _list_directory(current, max_path, report)
            pending.extend((child, False) for child in reversed(children))
            continue

        try:
            visit(str(current), info.st_mtime_ns // NS_PER_SECOND)
        except DupscanError as e:
            _skip(report, e, str(current))
            continue
        report.registered += 1

    return report


def _list_directory(directory: Path, max_path: int, report: ScanReport) -> list[Path]:
    """Paths of the entries of directory.

    Entries whose path would be too long are reported and left out. If the
    directory can't be read, whatever was listed before the failure is kept.
    """
    children = []
    try:
        for entry in directory.iterdir():
            try:
                children.append(join_entry(directory, entry.name, max_path))
            except PathTooLongError as e:
                _skip(report, e)
    except OSError as e:
        _skip(report, AccessError(str(directory), _reason(e)))
    return children


def _skip(report: ScanReport, error: DupscanError, path: str | None = None) -> None:
    if path is None:
        path = getattr(error, "path", "")
    logger.warning("%s -Ignoring-", error)
    report.issues.append(ScanIssue(path=path, error=error))


def _reason(error: OSError) -> str:
    return error.strerror or str(error)
