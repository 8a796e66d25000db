"""Command-line interface for the osu! song synchronizer.

This is the main entry point that delegates to command modules.
"""

from pathlib import Path
from typing import Any, Optional

import click

from ..config import Config
from ..utils.logging_config import configure_third_party_loggers, setup_logging
from .commands import diff_command, export_command, scan_command, sync_command


@click.group()
@click.option(
    "--log-level",
    default="INFO",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
    help="Set logging level",
)
@click.option("--log-file", type=click.Path(), help="Log to file")
@click.pass_context
def cli(ctx: Any, log_level: str, log_file: Optional[str]) -> None:
    """osu! Song Synchronizer.

    Compares the local osu! songs directory with a remote one and downloads
    the songs that are missing or differ locally.
    """
    try:
        config = Config()
    except ValueError as e:
        raise click.UsageError(str(e))

    # Set up logging
    setup_logging(
        log_level=log_level,
        log_file=Path(log_file) if log_file else config.log_file,
    )
    configure_third_party_loggers()

    ctx.obj = config


# Register commands
cli.add_command(scan_command)
cli.add_command(export_command)
cli.add_command(diff_command)
cli.add_command(sync_command)


if __name__ == "__main__":
    cli()
