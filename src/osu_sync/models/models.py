"""Data models for the osu! song synchronizer."""

from collections import Counter
from enum import Enum
from pathlib import Path
from typing import Dict, NamedTuple, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class MatchStatus(str, Enum):
    """Classification of a song folder relative to the other side."""

    NONE = "None"  # No comparison possible, one inventory is empty
    DIRECT = "Direct"  # Same identity, same checksum
    SIMILAR = "Similar"  # Same identity, different checksum
    MISSING = "Missing"  # No identity match on the other side

    @property
    def needs_sync(self) -> bool:
        """Whether a remote folder with this status should be downloaded."""
        return self in (MatchStatus.SIMILAR, MatchStatus.MISSING)


class SongFolder(BaseModel):
    """Represents one beatmap set folder in an inventory.

    Identity for matching is ``(id, name)``; ``checksum`` decides whether the
    contents are the same. ``path`` only records where the scanning side found
    the folder and never takes part in matching.
    """

    id: int = Field(ge=0)
    name: str
    checksum: str
    path: Optional[Path] = None

    model_config = ConfigDict(frozen=True)

    @property
    def identity(self) -> Tuple[int, str]:
        """Key used to pair folders across inventories."""
        return self.id, self.name

    @property
    def folder_name(self) -> str:
        """Directory name osu! uses for this set."""
        return f"{self.id} {self.name}"

    def matches(self, other: "SongFolder") -> bool:
        """Check whether both folders refer to the same beatmap set."""
        return self.id == other.id and self.name == other.name

    @field_validator("path", mode="before")
    @classmethod
    def validate_path(cls, v: Union[str, Path, None]) -> Optional[Path]:
        """Validate folder path."""
        if v is not None:
            return Path(v)
        return v


class ClassifiedFolder(BaseModel):
    """A song folder tagged with its match status for one side."""

    folder: SongFolder
    status: MatchStatus

    model_config = ConfigDict(frozen=True)

    @property
    def name(self) -> str:
        """Display name of the underlying folder."""
        return self.folder.name


class ReconciliationResult(NamedTuple):
    """Classified views of both inventories.

    Unpacks as ``local, remote``.
    """

    local: Tuple[ClassifiedFolder, ...]
    remote: Tuple[ClassifiedFolder, ...]

    @property
    def sync_candidates(self) -> Tuple[ClassifiedFolder, ...]:
        """Remote folders that are missing or divergent locally."""
        return tuple(item for item in self.remote if item.status.needs_sync)

    def get_summary(self) -> Dict[str, Dict[str, int]]:
        """Count statuses per side."""
        summary: Dict[str, Dict[str, int]] = {}
        for side, items in (("local", self.local), ("remote", self.remote)):
            counts = Counter(item.status for item in items)
            summary[side] = {status.value: counts[status] for status in MatchStatus}
            summary[side]["total"] = len(items)
        summary["candidates"] = {"total": len(self.sync_candidates)}
        return summary
