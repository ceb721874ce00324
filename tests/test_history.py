"""Tests for recent-repository history."""

import json
from unittest.mock import patch

import pytest

from repotree.history import (
    MAX_HISTORY_ITEMS,
    HistoryEntry,
    InMemoryHistoryStore,
    JSONFileHistoryStore,
    RecentRepositories,
)


def test_recent_is_newest_first_and_deduplicated():
    recent = RecentRepositories(InMemoryHistoryStore())
    for i, url in enumerate(["u1", "u2", "u1", "u3"]):
        recent.record(url, timestamp=i)
    assert recent.recent() == ["u3", "u1", "u2"]


def test_recent_is_capped():
    recent = RecentRepositories(InMemoryHistoryStore())
    for i in range(8):
        recent.record(f"https://github.com/o/r{i}", timestamp=i)
    assert len(recent.recent()) == MAX_HISTORY_ITEMS == 5
    assert recent.recent()[0] == "https://github.com/o/r7"


def test_equal_timestamps_prefer_later_appends():
    recent = RecentRepositories(InMemoryHistoryStore())
    recent.record("first", timestamp=5)
    recent.record("second", timestamp=5)
    assert recent.recent() == ["second", "first"]


def test_default_timestamp_is_milliseconds():
    store = InMemoryHistoryStore()
    with patch("repotree.history.time.time", return_value=1700000000.5):
        RecentRepositories(store).record("u")
    assert store.load() == [HistoryEntry("u", 1700000000500)]


def test_invalid_max_items():
    with pytest.raises(ValueError, match="max_items must be at least 1"):
        RecentRepositories(InMemoryHistoryStore(), max_items=0)


def test_in_memory_store_load_returns_copy():
    store = InMemoryHistoryStore()
    store.append(HistoryEntry("u", 1))
    store.load().clear()
    assert store.load() == [HistoryEntry("u", 1)]


class TestJSONFileHistoryStore:
    def test_missing_file_is_empty(self, tmp_path):
        assert JSONFileHistoryStore(tmp_path / "history.json").load() == []

    def test_append_and_reload(self, tmp_path):
        path = tmp_path / "nested" / "history.json"
        store = JSONFileHistoryStore(path)
        store.append(HistoryEntry("https://github.com/o/a", 2))
        store.append(HistoryEntry("https://github.com/o/b", 1))

        assert json.loads(path.read_text(encoding="utf-8")) == [
            {"url": "https://github.com/o/b", "timestamp": 1},
            {"url": "https://github.com/o/a", "timestamp": 2},
        ]
        assert RecentRepositories(JSONFileHistoryStore(path)).recent() == [
            "https://github.com/o/a",
            "https://github.com/o/b",
        ]

    def test_file_is_trimmed(self, tmp_path):
        store = JSONFileHistoryStore(tmp_path / "history.json", max_entries=3)
        for i in range(5):
            store.append(HistoryEntry(f"u{i}", i))
        assert [e.url for e in store.load()] == ["u2", "u3", "u4"]

    @pytest.mark.parametrize(
        "content",
        [
            "not json",
            '{"url": "u"}',
            '[{"timestamp": 1}]',
            "[1]",
            '[{"url": "u", "timestamp": null}]',
            '[{"url": "u", "timestamp": [1]}]',
            '[{"url": "u", "timestamp": "1"}]',
            '[{"url": "u", "timestamp": true}]',
        ],
    )
    def test_corrupt_file(self, tmp_path, content):
        path = tmp_path / "history.json"
        path.write_text(content, encoding="utf-8")
        with pytest.raises(ValueError, match="Corrupt history file"):
            JSONFileHistoryStore(path).load()

    def test_float_timestamp_is_truncated(self, tmp_path):
        path = tmp_path / "history.json"
        path.write_text('[{"url": "u", "timestamp": 1700000000000.5}]', encoding="utf-8")
        assert JSONFileHistoryStore(path).load() == [HistoryEntry("u", 1700000000000)]

    def test_invalid_max_entries(self, tmp_path):
        with pytest.raises(ValueError, match="max_entries must be at least 1"):
            JSONFileHistoryStore(tmp_path / "h.json", max_entries=0)
