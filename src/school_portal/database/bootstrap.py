from __future__ import annotations

import logging

from .connection import DatabaseConnection
from .mysql_base import db_cursor, fetchall

logger = logging.getLogger(__name__)

KV_TABLE = "kv_store"

KV_TABLE_DDL = f"""
CREATE TABLE IF NOT EXISTS {KV_TABLE} (
    store_key VARCHAR(64) NOT NULL PRIMARY KEY,
    store_value LONGTEXT NOT NULL,
    updated_at TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP ON UPDATE CURRENT_TIMESTAMP
)
"""


def ensure_kv_table(conn_factory: DatabaseConnection) -> None:
    """Create the key-value table if missing (idempotent)."""
    with db_cursor(conn_factory) as (_, cur):
        cur.execute(KV_TABLE_DDL)
    logger.info("Key-value table %s is ready", KV_TABLE)


def list_keys(conn_factory: DatabaseConnection) -> list[str]:
    with db_cursor(conn_factory) as (_, cur):
        cur.execute(f"SELECT store_key FROM {KV_TABLE} ORDER BY store_key")
        return [row["store_key"] for row in fetchall(cur)]
