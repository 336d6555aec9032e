from __future__ import annotations

import pytest

from school_portal.store.kv import InMemoryKeyValueStore
from school_portal.store.record_store import RecordStore


@pytest.fixture
def kv() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def store(kv) -> RecordStore:
    s = RecordStore(kv)
    s.load()
    return s
