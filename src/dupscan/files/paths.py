"""Path helpers shared by the scanner and the registry."""

import os
from pathlib import Path

from dupscan.exceptions import PathTooLongError
from dupscan.models import MAX_PATH
from dupscan.models import PLACEHOLDER_NAME

_SEPARATORS = tuple(sep for sep in (os.sep, os.altsep) if sep)


def base_name(path: str | None) -> str:
    """Return the last component of a path.

    Only the text after the last separator is kept, so ``"a/b/"`` gives
    ``""``. A path with no separator is its own base name.

    Args:
        path: Path to split. None maps to a placeholder name.

    Returns:
        Base name of path
    """
    if path is None:
        return PLACEHOLDER_NAME

    start = max(path.rfind(sep) for sep in _SEPARATORS) + 1
    return path[start:]


def encoded_length(path: str | Path) -> int:
    """Length of path in bytes, as the filesystem sees it."""
    return len(os.fsencode(path))


def join_entry(directory: Path, name: str, max_path: int = MAX_PATH) -> Path:
    """Build the path of a directory entry, enforcing the length bound.

    Args:
        directory: Directory being listed
        name: Entry name inside directory
        max_path: Maximum path length in bytes, including a terminator

    Returns:
        Path of name inside directory

    Raises:
        PathTooLongError: If the joined path would not fit in max_path
    """
    path = directory / name
    # One byte for the separator, one for the terminator
    if encoded_length(directory) + encoded_length(name) + 2 > max_path:
        raise PathTooLongError(str(path), max_path)
    return path
