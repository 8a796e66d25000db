"""CLI display and formatting utilities."""

from .formatters import (
    RichProgressReporter,
    display_classified,
    display_inventory,
    display_reconciliation_summary,
    display_transfer_summary,
    format_status,
)

__all__ = [
    "RichProgressReporter",
    "display_classified",
    "display_inventory",
    "display_reconciliation_summary",
    "display_transfer_summary",
    "format_status",
]
