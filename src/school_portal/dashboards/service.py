from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from ..common.datetime_utils import now_utc
from ..core.enums import Role
from ..store import codec
from ..store.record_store import RecordStore
from ..students.access import attendance_percentage, is_locked_out
from ..users.model import User

TEACHER = "teacher"
STUDENT = "student"
PARENT = "parent"
ACCESS_BLOCKED = "access_blocked"
ERROR = "error"


@dataclass(frozen=True)
class DashboardView:
    """What a role gets to see. ``data`` is JSON ready."""

    kind: str
    data: dict[str, Any] = field(default_factory=dict)
    message: Optional[str] = None

    def to_dict(self) -> dict:
        return {"kind": self.kind, "message": self.message, "data": self.data}


def build_dashboard(store: RecordStore, user: Optional[User], *, now: datetime | None = None) -> Optional[DashboardView]:
    if user is None:
        return None
    now = now or now_utc()

    if user.role == Role.STUDENT:
        student = store.find_student(user.id)
        if student and is_locked_out(student, now):
            return DashboardView(
                ACCESS_BLOCKED,
                {"block_reason": student.block_reason.value if student.block_reason else None},
                "Your access is blocked. Please contact your teacher.",
            )

    if user.role == Role.TEACHER:
        return DashboardView(
            TEACHER,
            {
                "user": _user(user),
                "students": [codec.encode_student(s) for s in store.students],
                "leave_applications": [codec.encode_leave(a) for a in store.leave_applications],
                "exams": [codec.encode_exam(e) for e in store.exams if e.created_by == user.id],
                "exam_submissions": [codec.encode_submission(s) for s in store.exam_submissions],
            },
        )

    if user.role == Role.STUDENT:
        student = store.find_student(user.id)
        if not student:
            return DashboardView(ERROR, message="Could not load student data.")
        return DashboardView(
            STUDENT,
            {
                "user": _user(user),
                "student": codec.encode_student(student),
                "attendance_percentage": round(attendance_percentage(student.attendance), 1),
                "leave_applications": [
                    codec.encode_leave(a) for a in store.leave_applications if a.student_id == user.id
                ],
                "exams": [_exam_for_student(e) for e in store.exams],
                "exam_submissions": [
                    codec.encode_submission(s) for s in store.exam_submissions if s.student_id == user.id
                ],
            },
        )

    if user.role == Role.PARENT:
        child = store.find_student(user.child_id)
        if not child:
            return DashboardView(ERROR, message="Could not find linked child data.")
        return DashboardView(
            PARENT,
            {
                "user": _user(user),
                "child": codec.encode_student(child),
                "attendance_percentage": round(attendance_percentage(child.attendance), 1),
            },
        )

    return DashboardView(ERROR, message="Unknown user role.")


def _user(user: User) -> dict:
    data = codec.encode_user(user)
    data.pop("password_hash", None)
    return data


def _exam_for_student(exam) -> dict:
    # Students must not receive the answer key.
    data = codec.encode_exam(exam)
    for q in data["questions"]:
        q.pop("correct_answer", None)
    return data
