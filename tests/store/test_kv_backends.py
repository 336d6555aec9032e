from __future__ import annotations

import json

import pytest

from school_portal.core.exceptions import DataCorruptionError
from school_portal.store.kv import InMemoryKeyValueStore, JsonFileKeyValueStore
from school_portal.store.mysql_kv_store import MySQLKeyValueStore

from fakes import FakeConnFactory


def test_in_memory_returns_copies():
    kv = InMemoryKeyValueStore()
    kv.set("k", [1, 2])

    value = kv.get("k")
    value.append(3)

    assert kv.get("k") == [1, 2]
    assert kv.get("missing", []) == []


def test_json_file_store_persists_between_instances(tmp_path):
    path = tmp_path / "data" / "store.json"
    JsonFileKeyValueStore(path).set("users-list", [{"id": "u1"}])

    reopened = JsonFileKeyValueStore(path)

    assert reopened.get("users-list") == [{"id": "u1"}]
    assert json.loads(path.read_text())["users-list"][0]["id"] == "u1"


def test_json_file_store_delete(tmp_path):
    kv = JsonFileKeyValueStore(tmp_path / "s.json")
    kv.set("a", 1)
    kv.delete("a")
    assert kv.get("a", "default") == "default"


def test_json_file_store_reports_garbage_and_recovers_on_write(tmp_path):
    path = tmp_path / "s.json"
    path.write_text("{not json")

    kv = JsonFileKeyValueStore(path)

    with pytest.raises(DataCorruptionError):
        kv.get("users-list")
    kv.set("x", 1)
    assert kv.get("x") == 1
    assert kv.get("users-list") is None


def test_mysql_store_serialises_json():
    factory = FakeConnFactory()
    kv = MySQLKeyValueStore(factory)

    kv.set("exams-list", [{"id": "e1"}])

    assert json.loads(factory.table["exams-list"]) == [{"id": "e1"}]
    assert kv.get("exams-list") == [{"id": "e1"}]


def test_mysql_store_missing_value_uses_default():
    kv = MySQLKeyValueStore(FakeConnFactory())

    assert kv.get("missing", "d") == "d"


def test_mysql_store_invalid_json_is_corruption():
    factory = FakeConnFactory()
    kv = MySQLKeyValueStore(factory)
    factory.table["broken"] = "{nope"

    with pytest.raises(DataCorruptionError):
        kv.get("broken", [])


def test_mysql_store_delete():
    factory = FakeConnFactory()
    kv = MySQLKeyValueStore(factory)
    kv.set("a", 1)

    kv.delete("a")

    assert "a" not in factory.table
