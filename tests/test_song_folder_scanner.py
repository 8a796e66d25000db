"""Tests for the songs directory scanner."""

import hashlib
from pathlib import Path

import pytest

from osu_sync.core.errors import ScanError
from osu_sync.core.filesystem import (
    SongFolderScanner,
    compute_checksum,
    is_song_folder,
    parse_folder_name,
)


def create_song_folder(songs_dir: Path, folder_name: str, charts: dict) -> Path:
    """Create a song folder with the given chart files and an audio file."""
    folder = songs_dir / folder_name
    folder.mkdir(parents=True)
    for filename, content in charts.items():
        (folder / filename).write_bytes(content)
    (folder / "audio.mp3").write_bytes(b"\x00" * 256)
    return folder


def sha256_upper(data: bytes) -> str:
    """Expected checksum for the given chart bytes."""
    return hashlib.sha256(data).hexdigest().upper()


@pytest.fixture
def songs_dir(tmp_path):
    """Songs directory with two song folders and some clutter."""
    songs = tmp_path / "Songs"
    songs.mkdir()
    create_song_folder(songs, "200 Camellia - Exit This Earth", {"hard.osu": b"h"})
    create_song_folder(
        songs, "100 Artist - Title", {"easy.osu": b"easy", "normal.osu": b"normal"}
    )
    (songs / "Failed").mkdir()
    (songs / "notes.txt").write_text("not a song")
    return songs


class TestParseFolderName:
    """Test folder name parsing."""

    def test_with_id(self):
        """Test a regular song folder name."""
        assert parse_folder_name("1234 Artist - Title") == (1234, "Artist - Title")

    def test_missing_id_parses_as_zero(self):
        """Test a folder name without a beatmap set id."""
        assert parse_folder_name(" Artist - Title") == (0, "Artist - Title")

    def test_name_keeps_extra_dashes(self):
        """Test titles that contain more dashes."""
        assert parse_folder_name("7 A - B - C") == (7, "A - B - C")

    @pytest.mark.parametrize(
        "folder_name",
        ["Artist - Title", "1234 Title", "1234Artist - Title", "Failed", ""],
    )
    def test_invalid_names(self, folder_name):
        """Test names that are not song folders."""
        assert parse_folder_name(folder_name) is None

    def test_is_song_folder_needs_directory(self, tmp_path):
        """Test that a file with a song-like name is not a song folder."""
        file_path = tmp_path / "1 A - B"
        file_path.write_text("x")
        assert is_song_folder(file_path) is False


class TestComputeChecksum:
    """Test checksum computation."""

    def test_hashes_only_charts(self, tmp_path):
        """Test that only .osu files take part in the checksum."""
        folder = create_song_folder(tmp_path, "1 A - B", {"a.osu": b"chart"})

        checksum, count = compute_checksum(folder)

        assert checksum == sha256_upper(b"chart")
        assert count == 1

    def test_charts_hashed_in_name_order(self, tmp_path):
        """Test that charts are concatenated in file name order."""
        folder = create_song_folder(
            tmp_path, "1 A - B", {"b.osu": b"second", "a.osu": b"first"}
        )

        checksum, count = compute_checksum(folder, chunk_size=2)

        assert checksum == sha256_upper(b"firstsecond")
        assert count == 2

    def test_no_charts(self, tmp_path):
        """Test a folder without charts hashes nothing."""
        folder = create_song_folder(tmp_path, "1 A - B", {})

        checksum, count = compute_checksum(folder)

        assert checksum == sha256_upper(b"")
        assert count == 0

    def test_is_upper_case(self, tmp_path):
        """Test that the digest is upper-case hex."""
        folder = create_song_folder(tmp_path, "1 A - B", {"a.osu": b"x"})
        checksum, _ = compute_checksum(folder)
        assert checksum == checksum.upper()
        assert len(checksum) == 64


class TestSongFolderScanner:
    """Test SongFolderScanner."""

    def test_scan(self, songs_dir):
        """Test scanning a songs directory."""
        scanner = SongFolderScanner(songs_dir, max_workers=2)

        songs = scanner.scan()

        assert [(s.id, s.name) for s in songs] == [
            (100, "Artist - Title"),
            (200, "Camellia - Exit This Earth"),
        ]
        assert songs[0].checksum == sha256_upper(b"easynormal")
        assert songs[0].path == songs_dir / "100 Artist - Title"

    def test_statistics(self, songs_dir):
        """Test scan statistics."""
        scanner = SongFolderScanner(songs_dir)
        scanner.scan()

        stats = scanner.get_statistics()
        assert stats.folders_found == 2
        assert stats.folders_skipped == 2
        assert stats.charts_hashed == 3
        assert sorted(stats.to_dict()["skipped"]) == ["Failed", "notes.txt"]

    def test_rescan_resets_statistics(self, songs_dir):
        """Test that each scan starts with fresh statistics."""
        scanner = SongFolderScanner(songs_dir)
        scanner.scan()
        scanner.scan()

        assert scanner.get_statistics().folders_found == 2
        assert scanner.get_statistics().charts_hashed == 3

    def test_empty_directory(self, tmp_path):
        """Test scanning an empty songs directory."""
        assert SongFolderScanner(tmp_path).scan() == []

    def test_missing_directory(self, tmp_path):
        """Test that a missing songs directory raises ScanError."""
        scanner = SongFolderScanner(tmp_path / "nope")

        with pytest.raises(ScanError, match="does not exist"):
            scanner.scan()

    def test_read_folder_rejects_invalid_name(self, tmp_path):
        """Test reading a directory that is not a song folder."""
        folder = tmp_path / "Failed"
        folder.mkdir()

        with pytest.raises(ScanError):
            SongFolderScanner(tmp_path).read_folder(folder)

    def test_custom_chart_extension(self, tmp_path):
        """Test hashing a different set of files."""
        create_song_folder(tmp_path, "1 A - B", {"a.osu": b"chart"})

        songs = SongFolderScanner(tmp_path, chart_extension=".mp3").scan()

        assert songs[0].checksum == sha256_upper(b"\x00" * 256)
