"""Tests for the key-value stores."""

from __future__ import annotations

import json
import logging

from fit_engine.serialization.json_codec import decode_list, decode_weight
from fit_engine.storage import JsonFileStore, MemoryStore


def _decode_weights(data):
    return decode_list(data, decode_weight)


class TestMemoryStore:
    def test_get_set_delete(self) -> None:
        store = MemoryStore()
        assert store.get("k") is None
        store.set("k", "v")
        assert store.get("k") == "v"
        store.delete("k")
        store.delete("k")
        assert store.snapshot() == {}

    def test_save_and_load(self) -> None:
        store = MemoryStore()
        store.save("goal", 2000)
        assert store.get("goal") == "2000"
        assert store.load("goal", float, None) == 2000.0

    def test_load_missing_returns_default(self) -> None:
        assert MemoryStore().load("k", _decode_weights, []) == []

    def test_load_malformed_returns_default_and_warns(self, caplog) -> None:
        store = MemoryStore({"w": '[{"id": "1"}]'})
        with caplog.at_level(logging.WARNING, logger="fit_engine.storage.store"):
            assert store.load("w", _decode_weights, []) == []
        assert "Ignoring malformed value for w" in caplog.text

    def test_load_invalid_json(self) -> None:
        store = MemoryStore({"w": "{"})
        assert store.load("w", _decode_weights, ["default"]) == ["default"]


class TestJsonFileStore:
    def test_persists_across_instances(self, tmp_path) -> None:
        path = tmp_path / "store.json"
        JsonFileStore(path).set("fitTracker_calorieGoal", "2200")
        assert JsonFileStore(path).get("fitTracker_calorieGoal") == "2200"

    def test_file_is_a_json_object_of_strings(self, tmp_path) -> None:
        path = tmp_path / "store.json"
        store = JsonFileStore(path)
        store.save("fitTracker_darkMode", True)
        assert json.loads(path.read_text(encoding="utf-8")) == {"fitTracker_darkMode": "true"}

    def test_creates_parent_directories(self, tmp_path) -> None:
        path = tmp_path / "nested" / "dir" / "store.json"
        JsonFileStore(path).set("k", "v")
        assert path.exists()

    def test_corrupt_file_starts_empty(self, tmp_path, caplog) -> None:
        path = tmp_path / "store.json"
        path.write_text("{truncated", encoding="utf-8")
        with caplog.at_level(logging.WARNING):
            store = JsonFileStore(path)
        assert store.get("anything") is None
        assert "starting empty" in caplog.text

    def test_non_object_file_starts_empty(self, tmp_path) -> None:
        path = tmp_path / "store.json"
        path.write_text("[1, 2]", encoding="utf-8")
        assert JsonFileStore(path).get("0") is None

    def test_clear(self, tmp_path) -> None:
        path = tmp_path / "store.json"
        store = JsonFileStore(path)
        store.set("a", "1")
        store.clear()
        assert json.loads(path.read_text(encoding="utf-8")) == {}

    def test_delete(self, tmp_path) -> None:
        path = tmp_path / "store.json"
        store = JsonFileStore(path)
        store.set("a", "1")
        store.set("b", "2")
        store.delete("a")
        assert JsonFileStore(path).get("a") is None
        assert JsonFileStore(path).get("b") == "2"

    def test_no_temp_files_left(self, tmp_path) -> None:
        store = JsonFileStore(tmp_path / "store.json")
        store.set("a", "1")
        store.set("a", "2")
        assert [p.name for p in tmp_path.iterdir()] == ["store.json"]
