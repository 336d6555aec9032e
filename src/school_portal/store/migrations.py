"""Versioned data migrations.

Each migration runs once; the highest applied version is kept under the
``schema-version`` key.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Callable, Sequence

from .record_store import RecordStore
from .seed import DEMO_STUDENT_EMAIL

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Migration:
    version: int
    description: str
    apply: Callable[[RecordStore], None]


def _enable_scan_for_demo_student(store: RecordStore) -> None:
    # Older stores were created before face scan on login existed for the demo account.
    user = store.find_user_by_email(DEMO_STUDENT_EMAIL)
    if user and not user.enable_scan_on_login:
        store.put_user(replace(user, enable_scan_on_login=True))


MIGRATIONS: tuple[Migration, ...] = (
    Migration(1, "Enable face scan on login for the demo student", _enable_scan_for_demo_student),
)


def run_migrations(store: RecordStore, migrations: Sequence[Migration] = MIGRATIONS) -> list[int]:
    """Apply pending migrations in version order, returning the applied versions."""
    current = store.schema_version
    applied: list[int] = []
    for migration in sorted(migrations, key=lambda m: m.version):
        if migration.version <= current:
            continue
        logger.info("Applying migration %s: %s", migration.version, migration.description)
        migration.apply(store)
        store.set_schema_version(migration.version)
        current = migration.version
        applied.append(migration.version)
    return applied
