#!/usr/bin/env python3
# Path: knxproj/cli/inspect_cli.py
"""
Export Archive Inspector CLI
============================

Opens a .knxproj / .knxprod archive, decodes every document and prints
a summary.

Exit codes:
    0  everything decoded
    1  archive could not be opened (extraction or classification failed)
    2  archive opened but at least one document failed to decode
"""

import sys
import argparse
import logging
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.logging import RichHandler

from knxproj import __version__
from knxproj.decoding.models import HardwareData, ManufacturerData, Project, ProjectInfo
from knxproj.engine.session import DecodeOutcome, open_export_archive
from knxproj.errors import KnxProjError


EXIT_OK = 0
EXIT_OPEN_FAILED = 1
EXIT_DECODE_FAILED = 2

console = Console()


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Setup logging with rich handler."""
    level = logging.DEBUG if verbose else logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, console=console)]
    )

    return logging.getLogger("knxproj_inspect")


def display_projects(outcomes: list[DecodeOutcome]) -> None:
    """Project meta and installation contents."""
    infos = [o.document for o in outcomes if isinstance(o.document, ProjectInfo)]
    projects = [(o.ref, o.document) for o in outcomes if isinstance(o.document, Project)]

    if infos:
        table = Table(title="Projects", show_header=True, header_style="bold cyan")
        table.add_column("Id", style="cyan")
        table.add_column("Name")
        table.add_column("Comment", style="dim")
        table.add_column("Address Style")
        for info in infos:
            table.add_row(info.id, info.name, info.comment, info.group_address_style.value)
        console.print(table)

    if projects:
        table = Table(title="Installations", show_header=True, header_style="bold cyan")
        table.add_column("File", style="cyan")
        table.add_column("Installation")
        table.add_column("Areas", justify="right")
        table.add_column("Lines", justify="right")
        table.add_column("Devices", justify="right")
        table.add_column("Group Addresses", justify="right")
        table.add_column("Spaces", justify="right")
        for ref, project in projects:
            for installation in project.installations:
                table.add_row(
                    ref.name,
                    installation.name or "-",
                    str(len(installation.topology)),
                    str(sum(len(area.lines) for area in installation.topology)),
                    str(sum(1 for _ in installation.iter_devices())),
                    str(sum(1 for _ in installation.iter_group_addresses())),
                    str(len(installation.locations)),
                )
        console.print(table)


def display_products(outcomes: list[DecodeOutcome]) -> None:
    """Manufacturer and hardware documents."""
    manufacturers = [(o.ref, o.document) for o in outcomes if isinstance(o.document, ManufacturerData)]
    hardware = [(o.ref, o.document) for o in outcomes if isinstance(o.document, HardwareData)]

    if manufacturers:
        table = Table(title="Application Programs", show_header=True, header_style="bold magenta")
        table.add_column("Manufacturer", style="magenta")
        table.add_column("Program")
        table.add_column("Name")
        table.add_column("Version", justify="right")
        table.add_column("ComObjects", justify="right")
        table.add_column("ComObjectRefs", justify="right")
        for _, data in manufacturers:
            for program in data.programs:
                table.add_row(
                    data.id,
                    program.id,
                    program.name,
                    str(program.version),
                    str(len(program.objects)),
                    str(len(program.object_refs)),
                )
        console.print(table)

    if hardware:
        table = Table(title="Hardware", show_header=True, header_style="bold magenta")
        table.add_column("Manufacturer", style="magenta")
        table.add_column("Hardware")
        table.add_column("Name")
        table.add_column("Products", justify="right")
        table.add_column("Programs", justify="right")
        for _, data in hardware:
            for item in data.hardwares:
                table.add_row(
                    data.manufacturer_id,
                    item.id,
                    item.name,
                    str(len(item.products)),
                    str(len(item.hardware2programs)),
                )
        console.print(table)


def display_errors(outcomes: list[DecodeOutcome]) -> None:
    failed = [o for o in outcomes if not o.ok]
    if not failed:
        return

    table = Table(title="Decode Errors", show_header=True, header_style="bold red")
    table.add_column("#", style="dim", width=4)
    table.add_column("File", style="cyan")
    table.add_column("Error", style="red")
    table.add_column("Message", style="white")
    for i, outcome in enumerate(failed, 1):
        message = str(outcome.error)
        table.add_row(
            str(i),
            outcome.ref.name,
            type(outcome.error).__name__,
            message[:80] + "..." if len(message) > 80 else message,
        )
    console.print(table)


def inspect_archive(archive_path: Path, password: Optional[str], verbose: bool) -> int:
    """Open, decode and display one archive."""
    setup_logging(verbose)

    if not archive_path.exists():
        console.print(f"[red]Error:[/red] File not found: {archive_path}")
        return EXIT_OPEN_FAILED

    try:
        archive = open_export_archive(archive_path, password=password)
    except KnxProjError as e:
        console.print(f"[red bold]Cannot open archive:[/red bold] {e}")
        return EXIT_OPEN_FAILED

    with archive:
        outcomes = archive.decode_all()
        decoded = sum(1 for o in outcomes if o.ok)
        failed = len(outcomes) - decoded

        status_color = "green" if failed == 0 else "red"
        console.print(Panel(
            f"File: {archive_path.name}\n"
            f"Extracted files: {len(archive.manifest)}\n"
            f"Projects: {len(archive.project_files)} | "
            f"Manufacturer files: {len(archive.manufacturer_files)} | "
            f"Hardware files: {len(archive.hardware_files)}\n"
            f"Decoded: {decoded} | Failed: {failed}",
            title="Export Archive",
            border_style=status_color,
        ))

        display_projects(outcomes)
        display_products(outcomes)
        display_errors(outcomes)

    return EXIT_OK if failed == 0 else EXIT_DECODE_FAILED


def main(argv: Optional[list[str]] = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog='knxproj-inspect',
        description="Inspect an ETS project or product export archive",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Summarize a project export
  knxproj-inspect house.knxproj

  # Project export with a password-protected project
  knxproj-inspect house.knxproj --password secret
        """
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'knxproj-inspect {__version__}'
    )
    parser.add_argument(
        'archive',
        type=Path,
        help='Path to .knxproj / .knxprod file'
    )
    parser.add_argument(
        '-p', '--password',
        help='Password for encrypted entries'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose logging'
    )

    args = parser.parse_args(argv)

    try:
        return inspect_archive(args.archive, args.password, args.verbose)

    except KeyboardInterrupt:
        console.print("\n[yellow]Inspection interrupted by user[/yellow]")
        return 130


if __name__ == "__main__":
    sys.exit(main())
