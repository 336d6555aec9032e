from __future__ import annotations

import logging
from dataclasses import dataclass
from types import ModuleType
from typing import Optional

from .database.bootstrap import ensure_kv_table
from .database.connection import DBConfig, DatabaseConnection
from .exams.service import ExamService
from .leaves.service import LeaveService
from .session.service import SessionController
from .store.kv import InMemoryKeyValueStore, JsonFileKeyValueStore, KeyValueStore
from .store.migrations import run_migrations
from .store.mysql_kv_store import MySQLKeyValueStore
from .store.record_store import RecordStore
from .students.service import StudentService
from .users.service import AuthService, UserService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Container:
    kv: KeyValueStore
    store: RecordStore

    auth_service: AuthService
    user_service: UserService
    student_service: StudentService
    leave_service: LeaveService
    exam_service: ExamService
    session: SessionController


def build_kv_store(settings: ModuleType) -> KeyValueStore:
    backend = str(getattr(settings, "STORE_BACKEND", "memory")).lower()
    if backend == "memory":
        return InMemoryKeyValueStore()
    if backend == "json":
        return JsonFileKeyValueStore(getattr(settings, "STORE_PATH"))
    if backend == "mysql":
        conn = DatabaseConnection.get_instance(DBConfig.from_dict(getattr(settings, "DB_CONFIG")))
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            ensure_kv_table(conn)
        return MySQLKeyValueStore(conn)
    raise ValueError(f"Unknown STORE_BACKEND: {backend!r}")


def build_container(settings: ModuleType, *, kv: Optional[KeyValueStore] = None) -> Container:
    kv = kv or build_kv_store(settings)
    store = RecordStore(kv)

    report = store.load()
    if report.corrupted_keys:
        logger.warning("Store reset for corrupted keys: %s", ", ".join(report.corrupted_keys))
    run_migrations(store)

    threshold = float(getattr(settings, "ATTENDANCE_THRESHOLD", 75))
    auth_service = AuthService(store)
    user_service = UserService(store)
    student_service = StudentService(store, threshold=threshold)
    leave_service = LeaveService(store)
    exam_service = ExamService(store)
    session = SessionController(
        store,
        auth_service,
        user_service,
        student_service,
        idle_seconds=int(getattr(settings, "IDLE_TIMEOUT_SECONDS", 300)),
        prompt_seconds=int(getattr(settings, "IDLE_PROMPT_SECONDS", 60)),
    )
    session.restore()

    return Container(
        kv=kv,
        store=store,
        auth_service=auth_service,
        user_service=user_service,
        student_service=student_service,
        leave_service=leave_service,
        exam_service=exam_service,
        session=session,
    )
