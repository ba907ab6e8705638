"""Command-line interface for dupscan."""

import logging
import sys
from pathlib import Path
from typing import Annotated

import typer

from dupscan import __version__
from dupscan.exceptions import DupscanError
from dupscan.exceptions import NotInitializedError
from dupscan.files import scan_path
from dupscan.models import MAX_PATH
from dupscan.models import NAME_MAX
from dupscan.output import MENU
from dupscan.output import display_path
from dupscan.output import print_registry
from dupscan.output import print_scan_summary
from dupscan.output import print_search_result
from dupscan.registry import FileRegistry

PROGRAM_NAME = "dupscan"

app = typer.Typer(help="Find files that share a name across directory trees")


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"{PROGRAM_NAME} {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr; DEBUG shows every directory scanned."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(format="%(levelname)s: %(message)s", stream=sys.stderr)
    logging.getLogger("dupscan").setLevel(level)


def run_menu(registry: FileRegistry) -> None:
    """Prompt for commands until the user quits or input ends."""
    while True:
        typer.echo(MENU, nl=False)
        try:
            line = typer.prompt(
                PROGRAM_NAME, default="", show_default=False, prompt_suffix=": "
            )
        except typer.Abort:
            return

        option = line.strip()[:1]
        if option == "q":
            return
        if option == "a":
            print_registry(registry.enumerate_all())
        elif option == "s":
            try:
                answer = typer.prompt("\nName")
            except typer.Abort:
                return
            tokens = answer.split()
            if not tokens:
                continue
            name = tokens[0][:NAME_MAX]
            print_search_result(name, registry.lookup(name))


@app.command()
def main_command(
    paths: Annotated[
        list[Path], typer.Argument(help="Directories (or files) to scan")
    ],
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Log every directory scanned")
    ] = False,
    max_path: Annotated[
        int,
        typer.Option(min=2, help="Longest path, in bytes, the scanner will build"),
    ] = MAX_PATH,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version", callback=version_callback, is_eager=True, help="Show version"
        ),
    ] = None,
) -> None:
    """Scan PATHS, then search or list files grouped by name."""
    configure_logging(verbose)

    registry = FileRegistry(max_path=max_path)
    try:
        registry.initialize()
    except DupscanError as e:
        typer.secho(
            f"✗ Couldn't start up the file table: {e}",
            fg=typer.colors.RED,
            bold=True,
            err=True,
        )
        raise typer.Exit(1) from None

    try:
        reports = []
        for path in paths:
            typer.echo(
                f"{PROGRAM_NAME}: Scanning top-level directory {display_path(path)}"
            )
            reports.append(scan_path(path, registry, max_path=max_path))

        print_scan_summary(registry.count, reports)
        run_menu(registry)
    finally:
        try:
            registry.teardown()
        except NotInitializedError as e:
            typer.secho(f"✗ Problem freeing the file table: {e}", err=True)


def main() -> None:
    """Main entry point for the dupscan CLI."""
    app()


if __name__ == "__main__":
    main()
