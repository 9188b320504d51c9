"""Configuration management for mdreader.

Loads configuration from environment variables and provides defaults.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load .env file if present
load_dotenv()

DEFAULT_READING_SPEED_WPM = 250

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class Config:
    """Application configuration."""

    # Database
    db_path: Path

    # Content
    content_dir: Path

    # Reading
    reading_speed_wpm: int  # words per minute

    # Logging
    log_level: str

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        db_path_str = os.environ.get(
            "MDREADER_DB_PATH",
            str(Path.home() / ".mdreader" / "mdreader.db"),
        )
        db_path = db_path_str if db_path_str == ":memory:" else Path(db_path_str).expanduser()

        return cls(
            db_path=Path(db_path),
            content_dir=Path(
                os.environ.get("MDREADER_CONTENT_DIR", "./public/content")
            ).expanduser(),
            reading_speed_wpm=int(
                os.environ.get("MDREADER_READING_SPEED", str(DEFAULT_READING_SPEED_WPM))
            ),
            log_level=os.environ.get("MDREADER_LOG_LEVEL", "WARNING").upper(),
        )

    @property
    def is_memory_db(self) -> bool:
        """Check if the database lives in memory only."""
        return str(self.db_path) == ":memory:"

    def validate(self) -> list[str]:
        """Validate configuration, return list of errors."""
        errors = []

        if self.reading_speed_wpm <= 0:
            errors.append(
                f"Reading speed must be positive, got {self.reading_speed_wpm}"
            )

        if self.log_level not in VALID_LOG_LEVELS:
            errors.append(f"Unknown log level: {self.log_level}")

        # Check database directory is writable
        if not self.is_memory_db and not self.db_path.parent.exists():
            try:
                self.db_path.parent.mkdir(parents=True, exist_ok=True)
            except PermissionError:
                errors.append(f"Cannot create database directory: {self.db_path.parent}")

        return errors


# Global config instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get or create the global config instance."""
    global _config
    if _config is None:
        _config = Config.from_env()
    return _config


def reset_config() -> None:
    """Reset the global config instance. Used for testing."""
    global _config
    _config = None
