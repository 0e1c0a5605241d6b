"""Tests for the in-memory track collection."""

import random

import pytest

from playlist_manager.core.collection import TrackCollection, ascii_fold
from playlist_manager.models import InvalidIndexError, SortKey, Track, UnknownSortKeyError


def titles(collection):
    return [track.title for track in collection]


class TestAdd:

    def test_appends_in_order(self):
        collection = TrackCollection()
        collection.add("One", "A", "X", 1)
        collection.add("Two", "B", "Y", 2)

        assert len(collection) == 2
        assert titles(collection) == ["One", "Two"]

    def test_missing_fields_default_to_unknown(self):
        collection = TrackCollection()
        track = collection.add(title="Only title")

        assert track == Track("Only title", "Unknown", "Unknown", 0)

    def test_negative_duration_is_kept(self):
        collection = TrackCollection()
        assert collection.add("T", "A", "B", -30).duration == -30

    def test_identical_tracks_are_both_kept(self):
        collection = TrackCollection()
        collection.add("Same", "Same", "Same", 10)
        collection.add("Same", "Same", "Same", 10)

        assert len(collection) == 2
        assert collection[0] == collection[1]


class TestRemoveAt:

    def test_removes_and_shifts(self, collection):
        removed = collection.remove_at(1)

        assert removed.title == "song c"
        assert len(collection) == 2
        assert titles(collection) == ["Song A", "Song B"]

    def test_remove_last(self, collection):
        collection.remove_at(2)
        assert titles(collection) == ["Song A", "song c"]

    @pytest.mark.parametrize("index", [-1, 3, 100])
    def test_out_of_range_leaves_collection_unchanged(self, collection, index):
        before = collection.tracks

        with pytest.raises(InvalidIndexError):
            collection.remove_at(index)

        assert collection.tracks == before

    def test_invalid_index_is_an_index_error(self):
        with pytest.raises(IndexError):
            TrackCollection().remove_at(0)


class TestSearch:

    def test_case_insensitive_over_all_text_fields(self, collection):
        results = collection.search("ARTIST X")

        assert [r.position for r in results] == [0, 2]
        assert [r.track.title for r in results] == ["Song A", "Song B"]

    def test_matches_album(self, collection):
        results = collection.search("another")
        assert [r.position for r in results] == [2]

    def test_common_substring_matches_everything(self, collection):
        assert len(collection.search("song")) == 3

    def test_no_match_is_empty(self, collection):
        assert collection.search("nothing here") == []

    def test_empty_term_matches_everything(self, collection):
        assert len(collection.search("")) == 3

    def test_fold_is_ascii_only(self):
        assert ascii_fold("ABC xyz") == "abc xyz"
        assert ascii_fold("É") == "É"


class TestSortBy:

    def test_title_case_insensitive(self, collection):
        collection.sort_by("title")
        assert titles(collection) == ["Song A", "Song B", "song c"]

    def test_artist_then_title(self):
        collection = TrackCollection()
        collection.add("Zulu", "beta", "", 1)
        collection.add("alpha", "Beta", "", 2)
        collection.add("Mid", "Alpha", "", 3)

        collection.sort_by(SortKey.ARTIST)

        assert titles(collection) == ["Mid", "alpha", "Zulu"]

    @pytest.mark.parametrize("key", ["duration", "dur", "DUR"])
    def test_duration_ascending(self, collection, key):
        assert collection.sort_by(key) is SortKey.DURATION

        durations = [track.duration for track in collection]
        assert all(a <= b for a, b in zip(durations, durations[1:]))

    def test_unknown_key_leaves_collection_unchanged(self, collection):
        before = collection.tracks

        with pytest.raises(UnknownSortKeyError):
            collection.sort_by("album")

        assert collection.tracks == before


class TestShuffle:

    @pytest.mark.parametrize("size", [0, 1])
    def test_small_collections_unchanged(self, size):
        collection = TrackCollection(rng=random.Random(0))
        for i in range(size):
            collection.add(f"T{i}")
        before = collection.tracks

        collection.shuffle()

        assert collection.tracks == before

    def test_is_a_permutation(self):
        collection = TrackCollection(rng=random.Random(7))
        for i in range(20):
            collection.add(f"T{i}", duration=i)

        collection.shuffle()

        assert sorted(track.duration for track in collection) == list(range(20))

    def test_same_seed_same_order(self):
        first = TrackCollection(rng=random.Random(99))
        second = TrackCollection(rng=random.Random(99))
        for collection in (first, second):
            for i in range(10):
                collection.add(f"T{i}")

        first.shuffle()
        second.shuffle()

        assert titles(first) == titles(second)

    def test_generator_is_not_reseeded(self):
        collection = TrackCollection(rng=random.Random(3))
        for i in range(10):
            collection.add(f"T{i}")

        collection.shuffle()
        once = titles(collection)
        collection.shuffle()

        assert titles(collection) != once

    def test_every_permutation_reachable(self):
        collection = TrackCollection(rng=random.Random(5))
        for name in "abc":
            collection.add(name)

        seen = set()
        for _ in range(300):
            collection.shuffle()
            seen.add(tuple(titles(collection)))

        assert len(seen) == 6


class TestClear:

    def test_clear_empties(self, collection):
        collection.clear()

        assert len(collection) == 0
        assert collection.total_duration == 0


class TestTrack:

    @pytest.mark.parametrize("seconds,expected", [
        (0, "0:00"), (125, "2:05"), (3600, "60:00"), (-65, "-1:-5"), (-5, "0:-5"),
    ])
    def test_formatted_duration(self, seconds, expected):
        assert Track(duration=seconds).formatted_duration == expected

    def test_sort_key_parse_rejects_unknown(self):
        with pytest.raises(UnknownSortKeyError) as exc_info:
            SortKey.parse("length")

        assert exc_info.value.key == "length"
