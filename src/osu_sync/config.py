"""Configuration management for the osu! song synchronizer."""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load .env file from config directory or project root
config_env = Path(__file__).parent.parent.parent / "config" / ".env"
if config_env.exists():
    load_dotenv(config_env)
else:
    # Fallback to working directory .env
    load_dotenv()


class Config:
    """Application configuration."""

    def __init__(self) -> None:
        """Initialize configuration from environment variables."""
        # Local osu! installation
        self.songs_directory = Path(
            os.getenv(
                "OSU_SYNC_SONGS_DIRECTORY",
                str(Path.home() / "osu!" / "Songs"),
            )
        ).expanduser()

        # Scanner settings
        self.scan_workers = int(os.getenv("OSU_SYNC_SCAN_WORKERS", "4"))
        self.chart_extension = ".osu"

        # Transfer settings
        self.chunk_size = int(os.getenv("OSU_SYNC_CHUNK_SIZE", str(64 * 1024)))
        self.progress_interval = float(os.getenv("OSU_SYNC_PROGRESS_INTERVAL", "0.5"))

        # Logging
        log_file = os.getenv("OSU_SYNC_LOG_FILE")
        self.log_file: Optional[Path] = Path(log_file) if log_file else None

        self._validate()

    def _validate(self) -> None:
        """Reject settings that cannot work."""
        if self.scan_workers < 1:
            raise ValueError(
                f"OSU_SYNC_SCAN_WORKERS must be at least 1, got {self.scan_workers}"
            )
        if self.chunk_size < 1:
            raise ValueError(
                f"OSU_SYNC_CHUNK_SIZE must be at least 1, got {self.chunk_size}"
            )
        if self.progress_interval < 0:
            raise ValueError("OSU_SYNC_PROGRESS_INTERVAL cannot be negative")


def get_config() -> Config:
    """Get application configuration."""
    return Config()
