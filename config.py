"""
Bracketeer Configuration

Centralized settings, paths, and constants for the application.
"""

import logging
from pathlib import Path
from dataclasses import dataclass
from typing import Optional

import appdirs


# Application info
APP_NAME = "Bracketeer"
APP_AUTHOR = "Bracketeer"
APP_VERSION = "1.0.0"


@dataclass(frozen=True)
class Paths:
    """Application paths."""
    # Data directory (stores database, exports)
    data_dir: Path = Path(appdirs.user_data_dir(APP_NAME, APP_AUTHOR))

    # Config directory (stores user preferences)
    config_dir: Path = Path(appdirs.user_config_dir(APP_NAME, APP_AUTHOR))

    # Log directory
    log_dir: Path = Path(appdirs.user_log_dir(APP_NAME, APP_AUTHOR))

    @property
    def database(self) -> Path:
        return self.data_dir / "bracketeer.db"

    @property
    def exports(self) -> Path:
        return self.data_dir / "exports"

    @property
    def log_file(self) -> Path:
        return self.log_dir / "bracketeer.log"

    def ensure_directories(self) -> None:
        """Create all required directories."""
        for dir_path in [self.data_dir, self.config_dir, self.log_dir, self.exports]:
            dir_path.mkdir(parents=True, exist_ok=True)


@dataclass(frozen=True)
class BracketSettings:
    """Bracket generation settings."""
    # Display name of the empty side of a bye matchup
    bye_label: str = "BYE"

    # Display name of a slot waiting on an undecided matchup
    placeholder_template: str = "Winner of {matchup_id}"

    # Fewest entrants a bracket can be generated for
    min_entrants: int = 2

    # Registration cap (None = unlimited)
    max_entrants: Optional[int] = None


@dataclass(frozen=True)
class LoggingSettings:
    """Logging settings."""
    level: int = logging.INFO
    format: str = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
    log_to_file: bool = True


# Singleton instances
PATHS = Paths()
BRACKET_SETTINGS = BracketSettings()
LOGGING_SETTINGS = LoggingSettings()


def configure_logging(settings: LoggingSettings = LOGGING_SETTINGS) -> None:
    """Install console (and optionally file) handlers on the root logger."""
    root = logging.getLogger()
    if root.handlers:
        return

    formatter = logging.Formatter(settings.format)

    console = logging.StreamHandler()
    console.setFormatter(formatter)
    root.addHandler(console)

    if settings.log_to_file:
        file_handler = logging.FileHandler(PATHS.log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    root.setLevel(settings.level)


def init_config() -> None:
    """Initialize configuration, create required directories, set up logging."""
    PATHS.ensure_directories()
    configure_logging()
