"""Reset the configured store to the demo data set (users, students, exams)."""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for path in (REPO_ROOT, REPO_ROOT / "src"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from config import get_settings_module

from school_portal.container import build_kv_store
from school_portal.store.migrations import run_migrations
from school_portal.store.record_store import RecordStore


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    store = RecordStore(build_kv_store(settings))
    store.reset()
    run_migrations(store)

    print(
        f"OK: Seeded {getattr(settings, 'STORE_BACKEND', 'memory')} store "
        f"(users={len(store.users)}, students={len(store.students)}, exams={len(store.exams)})"
    )


if __name__ == "__main__":
    main()
