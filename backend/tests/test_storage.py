"""Tests for the JSON file and in-memory restaurant stores."""

from __future__ import annotations

import json

import pytest
from backend.nearby.storage import InMemoryStore, JsonFileStore, StoreError
from conftest import make_restaurant


class TestJsonFileStore:
    def test_missing_file_is_created_empty(self, tmp_path):
        path = tmp_path / "nested" / "db.json"
        store = JsonFileStore(path)

        assert store.read_all() == []
        assert json.loads(path.read_text()) == {"restaurants": []}

    def test_append_then_read(self, store):
        first = make_restaurant("a1", 10, 10, category="Thai", is_veg=True)
        second = make_restaurant("b2", 11, 11)
        store.append(first)
        store.append(second)

        records = store.read_all()
        assert [r.id for r in records] == ["a1", "b2"]
        assert records[0].category == "Thai"
        assert records[0].is_veg is True

    def test_file_uses_wire_field_names(self, store):
        store.append(make_restaurant("a1", 10, 10, is_veg=True))
        row = json.loads(store.path.read_text())["restaurants"][0]
        assert row["isVeg"] is True
        assert "createdAt" in row
        assert "is_veg" not in row

    def test_get(self, store):
        store.append(make_restaurant("a1", 10, 10))
        assert store.get("a1").id == "a1"
        assert store.get("missing") is None

    def test_remove_reports_count_and_is_idempotent(self, store):
        store.append(make_restaurant("a1", 10, 10))
        store.append(make_restaurant("b2", 11, 11))

        assert store.remove_by_id("a1") == 1
        assert store.remove_by_id("a1") == 0
        assert [r.id for r in store.read_all()] == ["b2"]

    def test_sees_external_edits(self, store):
        store.read_all()
        store.path.write_text(
            json.dumps({"restaurants": [{"id": "ext", "name": "Edited", "latitude": 1, "longitude": 2}]})
        )
        assert [r.name for r in store.read_all()] == ["Edited"]

    def test_blank_file_reads_as_empty(self, store):
        store.path.write_text("   \n")
        assert store.read_all() == []

    @pytest.mark.parametrize("payload", ["{not json", "[]", '{"restaurants": {}}'])
    def test_corrupt_file_raises(self, store, payload):
        store.path.write_text(payload)
        with pytest.raises(StoreError):
            store.read_all()

    def test_invalid_rows_are_skipped(self, store):
        store.path.write_text(
            json.dumps({"restaurants": [{"id": "ok", "name": "Fine"}, {"name": "no id"}, "junk"]})
        )
        assert [r.id for r in store.read_all()] == ["ok"]

    def test_no_temp_files_left_behind(self, store):
        store.append(make_restaurant("a1", 10, 10))
        assert [p.name for p in store.path.parent.iterdir()] == ["db.json"]


class TestInMemoryStore:
    def test_contract(self):
        store = InMemoryStore([make_restaurant("a1", 10, 10)])
        store.append(make_restaurant("b2", 11, 11))

        assert [r.id for r in store.read_all()] == ["a1", "b2"]
        assert store.get("b2").latitude == 11
        assert store.remove_by_id("a1") == 1
        assert store.remove_by_id("a1") == 0
        assert [r.id for r in store.read_all()] == ["b2"]

    def test_read_all_returns_a_copy(self):
        store = InMemoryStore()
        store.read_all().append(make_restaurant("x", 1, 1))
        assert store.read_all() == []
