"""Commands that read the local songs directory."""

import logging
from pathlib import Path
from typing import List, Optional

import click
from rich.console import Console

from ...config import Config
from ...core.errors import OsuSyncError
from ...core.filesystem import SongFolderScanner
from ...core.remote import save_inventory
from ...models import SongFolder
from ..display import display_inventory

console = Console()
logger = logging.getLogger(__name__)


def _scan(config: Config, songs_dir: Optional[Path]) -> List[SongFolder]:
    """Scan songs_dir, or the configured songs directory."""
    directory = songs_dir or config.songs_directory
    scanner = SongFolderScanner(
        directory,
        max_workers=config.scan_workers,
        chart_extension=config.chart_extension,
    )

    console.print(f"[cyan]Scanning {directory}...[/cyan]")
    folders = scanner.scan()

    stats = scanner.get_statistics()
    if stats.folders_skipped:
        console.print(f"  [dim]{stats.folders_skipped} entries skipped[/dim]")
    return folders


@click.command("scan")
@click.argument(
    "songs_dir",
    required=False,
    type=click.Path(file_okay=False, path_type=Path),
)
@click.pass_obj
def scan_command(config: Config, songs_dir: Optional[Path]) -> None:
    """List the song folders of a songs directory.

    SONGS_DIR defaults to OSU_SYNC_SONGS_DIRECTORY.
    """
    try:
        folders = _scan(config, songs_dir)
    except OsuSyncError as e:
        logger.error("Scan failed: %s", e)
        console.print(f"[bold red]❌ Scan failed: {e}[/bold red]")
        raise click.Abort()

    display_inventory(folders, title="Local Songs")


@click.command("export")
@click.argument(
    "songs_dir",
    required=False,
    type=click.Path(file_okay=False, path_type=Path),
)
@click.option(
    "--output",
    "-o",
    required=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Inventory file to write",
)
@click.pass_obj
def export_command(
    config: Config, songs_dir: Optional[Path], output: Path
) -> None:
    """Write the inventory of a songs directory to a JSON file.

    The file can be handed to another machine and compared against with
    ``osu-sync diff``.
    """
    try:
        folders = _scan(config, songs_dir)
        count = save_inventory(output, folders)
    except OsuSyncError as e:
        logger.error("Export failed: %s", e)
        console.print(f"[bold red]❌ Export failed: {e}[/bold red]")
        raise click.Abort()

    console.print(f"[green]✓ Exported {count} songs to {output}[/green]")
