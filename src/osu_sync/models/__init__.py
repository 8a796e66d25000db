"""Models for the osu! song synchronizer."""

from .models import ClassifiedFolder, MatchStatus, ReconciliationResult, SongFolder

__all__ = [
    "SongFolder",
    "MatchStatus",
    "ClassifiedFolder",
    "ReconciliationResult",
]
