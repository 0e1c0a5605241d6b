"""Configuration management for Playlist Manager."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from ..utils.platform import get_config_dir
from .storage import DEFAULT_PLAYLIST_FILE


@dataclass
class PlaylistConfig:
    """Playlist file configuration."""

    path: Optional[Path] = None
    autoload: bool = True
    save_on_exit: bool = True

    def __post_init__(self):
        """Set default playlist path if not specified."""
        if self.path is None:
            self.path = Path(DEFAULT_PLAYLIST_FILE)
        elif isinstance(self.path, str):
            self.path = Path(self.path).expanduser()


@dataclass
class PlayerConfig:
    """Playback simulation configuration."""

    preview_seconds: int = 5

    def __post_init__(self):
        """Validate configuration."""
        if self.preview_seconds < 0:
            raise ValueError("preview_seconds must be >= 0")


@dataclass
class ShuffleConfig:
    """Shuffle configuration."""

    seed: Optional[int] = None


@dataclass
class LoggingConfig:
    """Logging configuration."""

    path: Optional[Path] = None
    level: str = "INFO"
    max_size_mb: int = 10
    backup_count: int = 5
    console: bool = False

    def __post_init__(self):
        """Validate configuration and set defaults."""
        if self.path is None:
            self.path = get_config_dir() / 'playlist-manager.log'
        elif isinstance(self.path, str):
            self.path = Path(self.path).expanduser()

        # Validate log level
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if self.level.upper() not in valid_levels:
            raise ValueError(f"level must be one of {valid_levels}")


@dataclass
class Settings:
    """Main settings container."""

    playlist: PlaylistConfig = field(default_factory=PlaylistConfig)
    player: PlayerConfig = field(default_factory=PlayerConfig)
    shuffle: ShuffleConfig = field(default_factory=ShuffleConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_file(cls, config_path: Path) -> 'Settings':
        """Load settings from YAML file.

        Args:
            config_path: Path to configuration file

        Returns:
            Settings instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}

        return cls(
            playlist=PlaylistConfig(**(data.get('playlist') or {})),
            player=PlayerConfig(**(data.get('player') or {})),
            shuffle=ShuffleConfig(**(data.get('shuffle') or {})),
            logging=LoggingConfig(**(data.get('logging') or {})),
        )

    @classmethod
    def from_file_or_default(cls, config_path: Optional[Path] = None) -> 'Settings':
        """Load settings from file or return defaults.

        Args:
            config_path: Path to configuration file (optional)

        Returns:
            Settings instance
        """
        if config_path is None:
            config_path = get_config_dir() / 'config.yaml'

        if config_path.exists():
            try:
                return cls.from_file(config_path)
            except Exception as e:
                logging.warning(f"Failed to load config from {config_path}: {e}")
                logging.warning("Using default configuration")
                return cls()
        else:
            logging.info(f"Config file not found at {config_path}, using defaults")
            return cls()

    def save(self, config_path: Optional[Path] = None) -> None:
        """Save settings to YAML file.

        Args:
            config_path: Path to save configuration (default: config.yaml in config dir)
        """
        if config_path is None:
            config_path = get_config_dir() / 'config.yaml'

        config_path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            'playlist': {
                'path': str(self.playlist.path) if self.playlist.path else None,
                'autoload': self.playlist.autoload,
                'save_on_exit': self.playlist.save_on_exit
            },
            'player': {
                'preview_seconds': self.player.preview_seconds
            },
            'shuffle': {
                'seed': self.shuffle.seed
            },
            'logging': {
                'path': str(self.logging.path) if self.logging.path else None,
                'level': self.logging.level,
                'max_size_mb': self.logging.max_size_mb,
                'backup_count': self.logging.backup_count,
                'console': self.logging.console
            }
        }

        with open(config_path, 'w', encoding='utf-8') as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False, indent=2)
