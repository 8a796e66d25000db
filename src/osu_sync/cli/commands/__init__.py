"""CLI command modules."""

from .diff import diff_command
from .inventory import export_command, scan_command
from .sync import sync_command

__all__ = [
    "diff_command",
    "export_command",
    "scan_command",
    "sync_command",
]
