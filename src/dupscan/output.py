"""Output formatting for dupscan."""

import os
import time
from collections.abc import Iterable
from collections.abc import Sequence

import typer

from dupscan.files import base_name
from dupscan.models import BucketGroup
from dupscan.models import FileRecord
from dupscan.models import ScanReport

MENU = (
    "\n- Search duplicates by name: s\n"
    "- Print file table contents: a\n"
    "- Quit (cleanly)           : q\n"
)


def display_path(path: str | os.PathLike[str]) -> str:
    """Make a path printable whatever bytes its name contains.

    Names that aren't valid in the filesystem encoding come back from the OS
    with surrogate escapes; those bytes are shown as replacement characters.
    """
    return os.fsencode(path).decode(errors="replace")


def format_record(position: int, record: FileRecord) -> str:
    """Format one chain member as a tab-indented line.

    Args:
        position: 1-based position in the chain
        record: Record to format

    Returns:
        Line with the position, the ctime-style modified time and the path
    """
    modified = time.ctime(record.modified)
    return f"\t{position}:\t{modified:<32}{display_path(record.path):<32}"


def print_chain(records: Sequence[FileRecord]) -> None:
    """Print a chain with a header naming its first member."""
    if not records:
        return

    name = display_path(base_name(records[0].path))
    typer.secho(f"FILE (x{len(records)}): {name:<64}", bold=True)
    for position, record in enumerate(records, start=1):
        typer.echo(format_record(position, record))
    typer.echo()


def print_registry(groups: Iterable[BucketGroup]) -> None:
    """Print every bucket group, in the order given."""
    for group in groups:
        print_chain(group.records)


def print_search_result(name: str, records: Sequence[FileRecord]) -> None:
    """Print the result of searching the table for name."""
    typer.echo(f"\nSearching for {display_path(name)}")
    if records:
        print_chain(records)
    else:
        typer.secho("Sorry, no match found!", fg=typer.colors.YELLOW)


def print_scan_summary(count: int, reports: Sequence[ScanReport]) -> None:
    """Print the file count and how many entries were skipped."""
    skipped = sum(len(r.issues) for r in reports)
    typer.secho(
        f"✓ Finished scanning ({count} files found).",
        fg=typer.colors.GREEN,
        bold=True,
    )
    if skipped:
        typer.secho(
            f"  {skipped} entr{'ies' if skipped != 1 else 'y'} skipped "
            "(see warnings above)",
            fg=typer.colors.BRIGHT_BLACK,
        )
