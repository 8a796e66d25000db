"""Tests for inventory files."""

import json
from pathlib import Path

import pytest

from osu_sync.core.errors import InventoryFormatError
from osu_sync.core.remote import (
    dump_inventory,
    load_inventory,
    parse_inventory,
    save_inventory,
)
from osu_sync.models import SongFolder


@pytest.fixture
def folders():
    """Two scanned song folders."""
    return [
        SongFolder(
            id=1234,
            name="Artist - Title",
            checksum="9F86D081",
            path=Path("/home/user/osu!/Songs/1234 Artist - Title"),
        ),
        SongFolder(id=0, name="Ünïcödé - Sóng", checksum="AB"),
    ]


class TestDumpInventory:
    """Test inventory serialization."""

    def test_omits_local_paths(self, folders):
        """Test that paths are not written."""
        payload = json.loads(dump_inventory(folders))

        assert payload[0] == {
            "id": 1234,
            "name": "Artist - Title",
            "checksum": "9F86D081",
        }
        assert all("path" not in entry for entry in payload)

    def test_keeps_unicode(self, folders):
        """Test that names are written as is."""
        assert "Ünïcödé - Sóng" in dump_inventory(folders)


class TestParseInventory:
    """Test inventory parsing."""

    def test_parse(self):
        """Test parsing a valid inventory."""
        folders = parse_inventory('[{"id": 5, "name": "A - B", "checksum": "X"}]')

        assert folders == [SongFolder(id=5, name="A - B", checksum="X")]

    def test_empty(self):
        """Test parsing an empty inventory."""
        assert parse_inventory("[]") == []

    @pytest.mark.parametrize(
        "raw",
        [
            "not json",
            '{"id": 5}',
            '[{"id": 5, "name": "A - B"}]',
            '[{"id": -1, "name": "A - B", "checksum": "X"}]',
            '[{"id": "five", "name": "A - B", "checksum": "X"}]',
        ],
    )
    def test_invalid(self, raw):
        """Test that malformed content raises InventoryFormatError."""
        with pytest.raises(InventoryFormatError):
            parse_inventory(raw)


class TestInventoryFiles:
    """Test saving and loading inventory files."""

    def test_save_and_load(self, tmp_path, folders):
        """Test that a saved inventory loads back without paths."""
        path = tmp_path / "exports" / "songs.json"

        count = save_inventory(path, folders)
        loaded = load_inventory(path)

        assert count == 2
        assert [(f.id, f.name, f.checksum) for f in loaded] == [
            (f.id, f.name, f.checksum) for f in folders
        ]
        assert all(f.path is None for f in loaded)

    def test_save_accepts_generator(self, tmp_path, folders):
        """Test saving from any iterable."""
        path = tmp_path / "songs.json"
        assert save_inventory(path, (f for f in folders)) == 2

    def test_load_missing_file(self, tmp_path):
        """Test that a missing file raises OSError."""
        with pytest.raises(OSError):
            load_inventory(tmp_path / "missing.json")

    def test_load_invalid_file(self, tmp_path):
        """Test that a corrupt file raises InventoryFormatError."""
        path = tmp_path / "songs.json"
        path.write_text("[{]", encoding="utf-8")

        with pytest.raises(InventoryFormatError):
            load_inventory(path)
