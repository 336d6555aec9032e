from __future__ import annotations

import json
from typing import Any

from ..core.exceptions import DataCorruptionError
from ..database.bootstrap import KV_TABLE
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .kv import KeyValueStore


class MySQLKeyValueStore(KeyValueStore):
    """One row per key in ``kv_store``; values stored as JSON text."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, key: str, default: Any = None) -> Any:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT store_value FROM {KV_TABLE} WHERE store_key=%s", (key,))
            row = fetchone(cur)
        if not row:
            return default
        try:
            return json.loads(row["store_value"])
        except (TypeError, ValueError) as e:
            raise DataCorruptionError(f"{key!r} is not valid JSON") from e

    def set(self, key: str, value: Any) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO {KV_TABLE}(store_key, store_value)
                VALUES(%s, %s)
                ON DUPLICATE KEY UPDATE store_value=VALUES(store_value)
                """,
                (key, json.dumps(value)),
            )

    def delete(self, key: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"DELETE FROM {KV_TABLE} WHERE store_key=%s", (key,))
