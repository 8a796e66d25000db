"""Sync command that downloads missing and changed songs from a remote."""

import logging
from pathlib import Path
from typing import Optional

import click
from rich.console import Console

from ...config import Config
from ...core.sync import SyncCoordinator
from ...core.transfer import DirectoryHost
from ..display import (
    RichProgressReporter,
    display_classified,
    display_transfer_summary,
)

console = Console()
logger = logging.getLogger(__name__)


def _run_sync(
    host: DirectoryHost, config: Config, assume_yes: bool, dry_run: bool
) -> bool:
    """Review the candidates, confirm and download them.

    Args:
        host: Directory host to sync with
        config: Application configuration
        assume_yes: Skip the confirmation prompt
        dry_run: Whether this is a dry run

    Returns:
        True if a download ran
    """
    reporter = RichProgressReporter(console)
    try:
        with SyncCoordinator(
            host,
            progress_callback=reporter,
            update_interval=config.progress_interval,
        ) as coordinator:
            console.print("[bold blue]🔄 Reading inventories...[/bold blue]")
            coordinator.refresh_all()

            coordinator.trigger_review()
            candidates = coordinator.orchestrator.candidates
            if not candidates:
                coordinator.collapse()
                console.print("[green]✓ Everything is in sync[/green]")
                return False

            display_classified(candidates, title="Songs to sync")

            if not assume_yes and not click.confirm(
                f"Download {len(candidates)} songs?", default=True
            ):
                coordinator.collapse()
                console.print("[dim]Sync cancelled[/dim]")
                return False

            coordinator.trigger_sync()
    finally:
        reporter.close()

    if host.downloader is not None:
        display_transfer_summary(host.downloader.last_result.get_summary())

    console.print("\n[bold green]✅ Sync complete![/bold green]")
    if dry_run:
        console.print("  [yellow]⚠️  DRY RUN - No changes were made[/yellow]")
    return True


@click.command("sync")
@click.argument(
    "remote_dir", type=click.Path(exists=True, file_okay=False, path_type=Path)
)
@click.option(
    "--local",
    "local_dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Local songs directory (default: OSU_SYNC_SONGS_DIRECTORY)",
)
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.option(
    "--dry-run",
    is_flag=True,
    help="Show what would be copied without making changes",
)
@click.pass_obj
def sync_command(
    config: Config,
    remote_dir: Path,
    local_dir: Optional[Path],
    yes: bool,
    dry_run: bool,
) -> None:
    """Download songs that are missing or differ locally from REMOTE_DIR.

    The candidates are listed first and downloaded after confirmation.
    """
    try:
        host = DirectoryHost.from_config(
            config, remote_dir, songs_directory=local_dir, dry_run=dry_run
        )
        _run_sync(host, config, assume_yes=yes, dry_run=dry_run)
    except click.Abort:
        raise
    except Exception as e:
        logger.exception("Sync failed")
        console.print(f"[bold red]❌ Sync failed: {e}[/bold red]")
        raise click.Abort()
