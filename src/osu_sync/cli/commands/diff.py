"""Diff command for comparing the local songs with a remote inventory."""

import logging
from pathlib import Path
from typing import Optional

import click
from rich.console import Console

from ...config import Config
from ...core.errors import OsuSyncError
from ...core.sync import SyncCoordinator
from ...core.transfer import DirectoryHost
from ...utils.logging_config import set_log_level
from ..display import display_classified, display_reconciliation_summary

console = Console()
logger = logging.getLogger(__name__)


@click.command("diff")
@click.argument("remote", type=click.Path(exists=True, path_type=Path))
@click.option(
    "--local",
    "local_dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Local songs directory (default: OSU_SYNC_SONGS_DIRECTORY)",
)
@click.option(
    "--all",
    "show_all",
    is_flag=True,
    help="Also list songs that are already in sync",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Show debug output of the comparison",
)
@click.pass_obj
def diff_command(
    config: Config,
    remote: Path,
    local_dir: Optional[Path],
    show_all: bool,
    verbose: bool,
) -> None:
    """Compare local songs against REMOTE.

    REMOTE is either another songs directory or an inventory file written by
    ``osu-sync export``.
    """
    if verbose:
        set_log_level("DEBUG")

    try:
        host = DirectoryHost.from_config(config, remote, songs_directory=local_dir)
        with SyncCoordinator(host) as coordinator:
            console.print("[cyan]Reading inventories...[/cyan]")
            result = coordinator.refresh_all()
    except OsuSyncError as e:
        logger.error("Diff failed: %s", e)
        console.print(f"[bold red]❌ Diff failed: {e}[/bold red]")
        raise click.Abort()

    display_classified(result.local, title="Local", changes_only=not show_all)
    display_classified(result.remote, title="Remote", changes_only=not show_all)
    display_reconciliation_summary(result)
