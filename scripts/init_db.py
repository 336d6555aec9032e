from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for path in (REPO_ROOT, REPO_ROOT / "src"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from config import get_settings_module

from school_portal.database.bootstrap import ensure_kv_table, list_keys
from school_portal.database.connection import DBConfig, DatabaseConnection


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = DBConfig.from_dict(dict(settings.DB_CONFIG))

    conn = DatabaseConnection.get_instance(db_config)
    ensure_kv_table(conn)
    print(
        f"OK: kv_store ready -> {db_config.describe()} "
        f"(keys={len(list_keys(conn))})"
    )


if __name__ == "__main__":
    main()
