"""Tests for data models."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from osu_sync.models import (
    ClassifiedFolder,
    MatchStatus,
    ReconciliationResult,
    SongFolder,
)


class TestMatchStatus:
    """Test MatchStatus enum."""

    def test_values(self):
        """Test status values used in summaries and inventory displays."""
        assert MatchStatus.NONE.value == "None"
        assert MatchStatus.DIRECT.value == "Direct"
        assert MatchStatus.SIMILAR.value == "Similar"
        assert MatchStatus.MISSING.value == "Missing"

    def test_needs_sync(self):
        """Only Similar and Missing folders are downloaded."""
        assert MatchStatus.SIMILAR.needs_sync is True
        assert MatchStatus.MISSING.needs_sync is True
        assert MatchStatus.DIRECT.needs_sync is False
        assert MatchStatus.NONE.needs_sync is False


class TestSongFolder:
    """Test SongFolder model."""

    def test_creation(self):
        """Test creating a song folder."""
        folder = SongFolder(id=1234, name="Artist - Title", checksum="ABC")

        assert folder.id == 1234
        assert folder.name == "Artist - Title"
        assert folder.checksum == "ABC"
        assert folder.path is None

    def test_folder_name(self):
        """Test the on-disk directory name."""
        folder = SongFolder(id=1234, name="Artist - Title", checksum="ABC")
        assert folder.folder_name == "1234 Artist - Title"

    def test_identity_ignores_checksum(self):
        """Test that identity is (id, name) only."""
        a = SongFolder(id=1, name="A - B", checksum="x")
        b = SongFolder(id=1, name="A - B", checksum="y")
        c = SongFolder(id=2, name="A - B", checksum="x")

        assert a.identity == (1, "A - B")
        assert a.matches(b)
        assert not a.matches(c)

    def test_path_converted(self):
        """Test that string paths become Path objects."""
        folder = SongFolder(id=1, name="A - B", checksum="x", path="/songs/1 A - B")
        assert folder.path == Path("/songs/1 A - B")

    def test_negative_id_rejected(self):
        """Test that ids must not be negative."""
        with pytest.raises(ValidationError):
            SongFolder(id=-1, name="A - B", checksum="x")

    def test_frozen(self):
        """Test that folders cannot be modified."""
        folder = SongFolder(id=1, name="A - B", checksum="x")
        with pytest.raises(ValidationError):
            folder.checksum = "y"


class TestReconciliationResult:
    """Test ReconciliationResult."""

    @pytest.fixture
    def result(self):
        """Result with one folder of each remote status."""
        direct = SongFolder(id=1, name="A - B", checksum="x")
        similar = SongFolder(id=2, name="C - D", checksum="y")
        missing = SongFolder(id=3, name="E - F", checksum="z")
        return ReconciliationResult(
            local=(
                ClassifiedFolder(folder=direct, status=MatchStatus.DIRECT),
                ClassifiedFolder(folder=similar, status=MatchStatus.SIMILAR),
            ),
            remote=(
                ClassifiedFolder(folder=direct, status=MatchStatus.DIRECT),
                ClassifiedFolder(folder=similar, status=MatchStatus.SIMILAR),
                ClassifiedFolder(folder=missing, status=MatchStatus.MISSING),
            ),
        )

    def test_unpacks_as_pair(self, result):
        """Test tuple unpacking into local and remote."""
        local, remote = result
        assert len(local) == 2
        assert len(remote) == 3

    def test_sync_candidates(self, result):
        """Test that candidates are remote Similar and Missing folders."""
        names = [item.name for item in result.sync_candidates]
        assert names == ["C - D", "E - F"]

    def test_get_summary(self, result):
        """Test status counts per side."""
        summary = result.get_summary()

        assert summary["local"]["Direct"] == 1
        assert summary["local"]["Similar"] == 1
        assert summary["local"]["Missing"] == 0
        assert summary["local"]["total"] == 2
        assert summary["remote"]["Missing"] == 1
        assert summary["remote"]["total"] == 3
        assert summary["candidates"]["total"] == 2
