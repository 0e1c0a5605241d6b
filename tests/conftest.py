"""Shared fixtures for Playlist Manager tests."""

import io
import logging
import random

import pytest
from rich.console import Console

from playlist_manager.config.settings import (
    LoggingConfig,
    PlayerConfig,
    PlaylistConfig,
    Settings,
    ShuffleConfig,
)
from playlist_manager.core.collection import TrackCollection


@pytest.fixture(autouse=True)
def isolated_config_dir(tmp_path, monkeypatch):
    """Keep config and log files out of the real home directory."""
    config_home = tmp_path / "config-home"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    monkeypatch.setenv("APPDATA", str(config_home))
    return config_home


@pytest.fixture
def logger():
    return logging.getLogger("playlist_manager.tests")


@pytest.fixture
def console():
    return Console(file=io.StringIO(), width=200, color_system=None)


@pytest.fixture
def playlist_file(tmp_path):
    return tmp_path / "playlist.csv"


@pytest.fixture
def settings(tmp_path, playlist_file):
    return Settings(
        playlist=PlaylistConfig(path=playlist_file),
        player=PlayerConfig(preview_seconds=5),
        shuffle=ShuffleConfig(seed=1234),
        logging=LoggingConfig(path=tmp_path / "test.log"),
    )


@pytest.fixture
def collection():
    tracks = TrackCollection(rng=random.Random(42))
    tracks.add("Song A", "Artist X", "Album 1", 125)
    tracks.add("song c", "artist y", "Album 2", 340)
    tracks.add("Song B", "Artist X", "Another Album", 61)
    return tracks


def output_of(console: Console) -> str:
    return console.file.getvalue()
