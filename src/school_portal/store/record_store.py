"""In-memory collections mirrored to a key-value store.

Every collection is a tuple that is replaced wholesale on write and persisted
immediately, so readers never see a half-updated collection.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence

from ..core.constants import (
    CURRENT_USER_KEY,
    EXAM_SUBMISSIONS_KEY,
    EXAMS_KEY,
    LEAVE_APPLICATIONS_KEY,
    SCHEMA_VERSION_KEY,
    STUDENTS_KEY,
    USERS_KEY,
)
from ..core.enums import Role
from ..core.exceptions import DataCorruptionError, RecordNotFoundError
from ..exams.model import Exam, ExamSubmission
from ..leaves.model import LeaveApplication
from ..students.model import Student
from ..users.model import User
from . import codec
from .kv import KeyValueStore
from .seed import SeedData, build_seed_data

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Collection:
    key: str
    attr: str
    decode: Callable[[dict], Any]
    encode: Callable[[Any], dict]
    default: Callable[[SeedData], tuple]


_COLLECTIONS = (
    _Collection(USERS_KEY, "_users", codec.decode_user, codec.encode_user, lambda s: s.users),
    _Collection(STUDENTS_KEY, "_students", codec.decode_student, codec.encode_student, lambda s: s.students),
    _Collection(LEAVE_APPLICATIONS_KEY, "_leave_applications", codec.decode_leave, codec.encode_leave, lambda s: ()),
    _Collection(EXAMS_KEY, "_exams", codec.decode_exam, codec.encode_exam, lambda s: s.exams),
    _Collection(EXAM_SUBMISSIONS_KEY, "_exam_submissions", codec.decode_submission, codec.encode_submission, lambda s: ()),
)


@dataclass(frozen=True)
class LoadReport:
    corrupted_keys: tuple[str, ...]
    session_cleared: bool


class RecordStore:
    def __init__(self, kv: KeyValueStore, *, seed: Optional[SeedData] = None):
        self._kv = kv
        self._seed = seed or build_seed_data()
        self._users: tuple[User, ...] = ()
        self._students: tuple[Student, ...] = ()
        self._leave_applications: tuple[LeaveApplication, ...] = ()
        self._exams: tuple[Exam, ...] = ()
        self._exam_submissions: tuple[ExamSubmission, ...] = ()
        self._current_user: Optional[User] = None

    @property
    def seed(self) -> SeedData:
        return self._seed

    def load(self) -> LoadReport:
        """Read every collection, replacing missing or corrupted ones with defaults.

        Any corruption also ends the persisted session.
        """
        corrupted: list[str] = []
        for spec in _COLLECTIONS:
            try:
                raw = self._kv.get(spec.key)
                if raw is None:
                    self._install_default(spec)
                    continue
                setattr(self, spec.attr, codec.decode_collection(raw, spec.decode, key=spec.key))
            except DataCorruptionError as e:
                logger.warning("Corrupted %r data in store, resetting to defaults: %s", spec.key, e)
                self._install_default(spec)
                corrupted.append(spec.key)

        session_cleared = False
        try:
            self._current_user = codec.decode_optional_user(self._kv.get(CURRENT_USER_KEY))
        except DataCorruptionError as e:
            logger.warning("Corrupted current user in store, logging out: %s", e)
            self._current_user = None
            session_cleared = True

        if corrupted:
            session_cleared = True
        if session_cleared:
            self.set_current_user(None)

        return LoadReport(corrupted_keys=tuple(corrupted), session_cleared=session_cleared)

    def reset(self) -> None:
        """Replace every collection with the demo data and end the session."""
        for spec in _COLLECTIONS:
            self._install_default(spec)
        self.set_current_user(None)
        self.set_schema_version(0)

    def _install_default(self, spec: _Collection) -> None:
        items = tuple(spec.default(self._seed))
        setattr(self, spec.attr, items)
        self._kv.set(spec.key, codec.encode_collection(items, spec.encode))

    def _persist(self, key: str, items: Sequence[Any], encode: Callable[[Any], dict]) -> None:
        self._kv.set(key, codec.encode_collection(items, encode))

    # Snapshots

    @property
    def users(self) -> tuple[User, ...]:
        return self._users

    @property
    def students(self) -> tuple[Student, ...]:
        return self._students

    @property
    def leave_applications(self) -> tuple[LeaveApplication, ...]:
        return self._leave_applications

    @property
    def exams(self) -> tuple[Exam, ...]:
        return self._exams

    @property
    def exam_submissions(self) -> tuple[ExamSubmission, ...]:
        return self._exam_submissions

    @property
    def current_user(self) -> Optional[User]:
        return self._current_user

    # Wholesale writes

    def replace_users(self, users: Sequence[User]) -> None:
        self._users = tuple(users)
        self._persist(USERS_KEY, self._users, codec.encode_user)

    def replace_students(self, students: Sequence[Student]) -> None:
        self._students = tuple(students)
        self._persist(STUDENTS_KEY, self._students, codec.encode_student)

    def replace_leave_applications(self, applications: Sequence[LeaveApplication]) -> None:
        self._leave_applications = tuple(applications)
        self._persist(LEAVE_APPLICATIONS_KEY, self._leave_applications, codec.encode_leave)

    def replace_exams(self, exams: Sequence[Exam]) -> None:
        self._exams = tuple(exams)
        self._persist(EXAMS_KEY, self._exams, codec.encode_exam)

    def replace_exam_submissions(self, submissions: Sequence[ExamSubmission]) -> None:
        self._exam_submissions = tuple(submissions)
        self._persist(EXAM_SUBMISSIONS_KEY, self._exam_submissions, codec.encode_submission)

    def set_current_user(self, user: Optional[User]) -> None:
        self._current_user = user
        self._kv.set(CURRENT_USER_KEY, codec.encode_user(user) if user else None)

    # Single-record helpers

    def put_user(self, user: User) -> None:
        self.replace_users(_upsert(self._users, user))

    def put_student(self, student: Student) -> None:
        self.replace_students(_upsert(self._students, student))

    def put_leave_application(self, application: LeaveApplication) -> None:
        self.replace_leave_applications(_upsert(self._leave_applications, application))

    def put_exam(self, exam: Exam) -> None:
        self.replace_exams(_upsert(self._exams, exam))

    # Lookups

    def find_user_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self._users if u.email == email), None)

    def find_first_user_with_role(self, role: Role) -> Optional[User]:
        return next((u for u in self._users if u.role == role), None)

    def find_student(self, student_id: Optional[str]) -> Optional[Student]:
        return next((s for s in self._students if s.id == student_id), None)

    def get_student(self, student_id: str) -> Student:
        return _require(self.find_student(student_id), "Student", student_id)

    def get_leave_application(self, application_id: str) -> LeaveApplication:
        found = next((a for a in self._leave_applications if a.id == application_id), None)
        return _require(found, "Leave application", application_id)

    def get_exam(self, exam_id: str) -> Exam:
        return _require(next((e for e in self._exams if e.id == exam_id), None), "Exam", exam_id)

    # Schema version

    @property
    def schema_version(self) -> int:
        try:
            raw = self._kv.get(SCHEMA_VERSION_KEY, 0)
        except DataCorruptionError as e:
            logger.warning("Unreadable schema version in store, assuming 0: %s", e)
            return 0
        try:
            return int(raw or 0)
        except (TypeError, ValueError):
            logger.warning("Invalid schema version %r in store, assuming 0", raw)
            return 0

    def set_schema_version(self, version: int) -> None:
        self._kv.set(SCHEMA_VERSION_KEY, int(version))


def _upsert(items: tuple, item) -> tuple:
    if any(existing.id == item.id for existing in items):
        return tuple(item if existing.id == item.id else existing for existing in items)
    return items + (item,)


def _require(found, label: str, record_id: str):
    if found is None:
        raise RecordNotFoundError(f"{label} {record_id!r} does not exist")
    return found
