"""Tests for playlist file persistence."""

from playlist_manager.config.storage import PlaylistStore
from playlist_manager.core.collection import TrackCollection
from playlist_manager.models import Track


class TestSave:

    def test_writes_header_and_tracks(self, logger, collection, playlist_file):
        store = PlaylistStore(logger)

        assert store.save(collection, playlist_file) is True

        lines = playlist_file.read_text(encoding="utf-8").splitlines()
        assert lines[0] == "title,artist,album,duration_seconds"
        assert lines[1] == "Song A,Artist X,Album 1,125"
        assert len(lines) == 4

    def test_creates_parent_directories(self, logger, collection, tmp_path):
        path = tmp_path / "nested" / "dir" / "list.csv"

        assert PlaylistStore(logger).save(collection, path) is True
        assert path.exists()

    def test_failure_returns_false(self, logger, collection, tmp_path):
        assert PlaylistStore(logger).save(collection, tmp_path) is False


class TestLoad:

    def test_appends_to_existing_tracks(self, logger, playlist_file):
        playlist_file.write_text(
            "title,artist,album,duration_seconds\n"
            '"Say ""Hi"", Bye",Artist,Album,99\n',
            encoding="utf-8"
        )
        collection = TrackCollection()
        collection.add("Existing", "A", "B", 1)

        assert PlaylistStore(logger).load(collection, playlist_file) is True

        assert collection.tracks == [
            Track("Existing", "A", "B", 1),
            Track('Say "Hi", Bye', "Artist", "Album", 99),
        ]

    def test_missing_file_returns_false(self, logger, tmp_path):
        collection = TrackCollection()

        assert PlaylistStore(logger).load(collection, tmp_path / "missing.csv") is False
        assert len(collection) == 0

    def test_unreadable_path_returns_false(self, logger, tmp_path):
        assert PlaylistStore(logger).load(TrackCollection(), tmp_path) is False

    def test_empty_file_loads_nothing(self, logger, playlist_file):
        playlist_file.write_text("", encoding="utf-8")
        collection = TrackCollection()

        assert PlaylistStore(logger).load(collection, playlist_file) is True
        assert len(collection) == 0


def test_save_then_load_round_trip(logger, collection, playlist_file):
    store = PlaylistStore(logger)
    store.save(collection, playlist_file)

    restored = TrackCollection()
    store.load(restored, playlist_file)

    assert restored.tracks == collection.tracks


def test_undecodable_bytes_survive_load_and_save(logger, playlist_file):
    playlist_file.write_bytes(b"Caf\xe9,Artist,Album,10\n")
    store = PlaylistStore(logger)
    collection = TrackCollection()

    assert store.load(collection, playlist_file) is True
    collection.add("New", "A", "B", 1)
    assert store.save(collection, playlist_file) is True

    assert playlist_file.read_bytes().splitlines() == [
        b"title,artist,album,duration_seconds",
        b"Caf\xe9,Artist,Album,10",
        b"New,A,B,1",
    ]
