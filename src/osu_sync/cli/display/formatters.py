"""Display formatters and UI helpers for CLI."""

from typing import Any, Dict, Iterable, Optional, Sequence, Tuple

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TaskProgressColumn,
    TextColumn,
)
from rich.table import Table

from ...core.sync import ProgressPhase, ProgressUpdate
from ...models import ClassifiedFolder, MatchStatus, ReconciliationResult, SongFolder

console = Console()

STATUS_STYLES = {
    MatchStatus.NONE: "dim",
    MatchStatus.DIRECT: "green",
    MatchStatus.SIMILAR: "yellow",
    MatchStatus.MISSING: "red",
}


def format_status(status: MatchStatus) -> str:
    """Render a match status with its color."""
    style = STATUS_STYLES[status]
    return f"[{style}]● {status.value}[/{style}]"


def display_inventory(folders: Sequence[SongFolder], title: str) -> None:
    """Display an inventory as a table.

    Args:
        folders: Song folders to list
        title: Table title
    """
    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("ID", style="cyan", justify="right")
    table.add_column("Name")
    table.add_column("Checksum", style="dim")

    for folder in folders:
        table.add_row(str(folder.id), folder.name, folder.checksum[:12])

    console.print(table)
    console.print(f"[dim]{len(folders)} songs loaded[/dim]")


def display_classified(
    items: Iterable[ClassifiedFolder], title: str, changes_only: bool = False
) -> None:
    """Display one side of a reconciliation.

    Args:
        items: Classified folders of one side
        title: Table title
        changes_only: Hide folders that are already in sync
    """
    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("ID", style="cyan", justify="right")
    table.add_column("Name")
    table.add_column("Status")

    for item in items:
        if changes_only and item.status is MatchStatus.DIRECT:
            continue
        table.add_row(str(item.folder.id), item.folder.name, format_status(item.status))

    console.print(table)


def display_reconciliation_summary(result: ReconciliationResult) -> None:
    """Display status counts for both sides.

    Args:
        result: Reconciliation snapshot
    """
    summary = result.get_summary()

    table = Table(title="Comparison Summary", show_header=True)
    table.add_column("Status", style="cyan")
    table.add_column("Local", justify="right")
    table.add_column("Remote", justify="right")

    for status in MatchStatus:
        table.add_row(
            format_status(status),
            str(summary["local"][status.value]),
            str(summary["remote"][status.value]),
        )
    table.add_row(
        "Total", str(summary["local"]["total"]), str(summary["remote"]["total"])
    )

    console.print(table)
    console.print(
        f"[bold]{summary['candidates']['total']}[/bold] songs to sync from remote"
    )


def display_transfer_summary(summary: Dict[str, Any]) -> None:
    """Display the statistics of a finished download.

    Args:
        summary: Transfer summary dictionary
    """
    table = Table(show_header=False)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green", justify="right")

    table.add_row("Folders", str(summary["folders_copied"]))
    table.add_row("Files", str(summary["files_copied"]))
    table.add_row("Bytes", f"{summary['bytes_copied']:,}")
    if summary.get("dry_run"):
        table.add_row("Mode", "[yellow]dry run[/yellow]")

    console.print(table)


class RichProgressReporter:
    """Progress callback rendering download progress with a rich bar.

    The bar is created on the first update and removed once the phase
    completes, so prompts printed before the download are left alone.
    """

    def __init__(self, output: Optional[Console] = None) -> None:
        self.console = output or console
        self._bar: Optional[Tuple[Progress, TaskID]] = None

    def __call__(self, update: ProgressUpdate) -> None:
        """Handle progress update.

        Args:
            update: Progress update
        """
        if self._bar is None:
            progress = Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                BarColumn(),
                TaskProgressColumn(),
                console=self.console,
            )
            progress.start()
            task = progress.add_task("Syncing...", total=update.total)
            self._bar = (progress, task)

        progress, task = self._bar
        progress.update(
            task, completed=update.current, description=update.message or None
        )

        if update.phase is ProgressPhase.ERROR:
            self.console.print(f"[red]Download failed: {update.message}[/red]")
        if update.is_complete or update.phase is ProgressPhase.ERROR:
            self.close()

    def close(self) -> None:
        """Stop the progress bar if it is still shown."""
        if self._bar is not None:
            progress, _ = self._bar
            self._bar = None
            progress.stop()
