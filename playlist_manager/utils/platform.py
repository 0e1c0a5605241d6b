"""Platform-specific utilities for cross-platform compatibility."""

import os
import sys
from pathlib import Path


def is_windows() -> bool:
    """Check if running on Windows."""
    return sys.platform == 'win32' or os.name == 'nt'


def is_macos() -> bool:
    """Check if running on macOS."""
    return sys.platform == 'darwin'


def get_config_dir() -> Path:
    """Get the configuration directory based on the platform.

    Returns:
        Path: Configuration directory path
            - Windows: %APPDATA%/playlist-manager
            - macOS: ~/Library/Application Support/playlist-manager
            - Linux: ~/.config/playlist-manager
    """
    if is_windows():
        base = Path(os.environ.get('APPDATA', Path.home()))
    elif is_macos():
        base = Path.home() / 'Library' / 'Application Support'
    else:  # Linux and others
        base = Path(os.environ.get('XDG_CONFIG_HOME', Path.home() / '.config'))

    config_dir = base / 'playlist-manager'
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir
