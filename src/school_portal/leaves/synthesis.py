"""Leave decisions and the attendance records an approval produces."""

from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Optional

from ..common.datetime_utils import iter_days
from ..core.constants import LEAVE_SUBJECT, LEAVE_TIMESTAMP
from ..core.enums import AttendanceStatus, LeaveStatus
from ..core.exceptions import ValidationError
from ..students.model import AttendanceRecord, Student
from .model import LeaveApplication

DECISION_STATUSES = frozenset({LeaveStatus.APPROVED, LeaveStatus.REJECTED})


def decide_leave(application: LeaveApplication, status: LeaveStatus, comment: Optional[str] = None) -> LeaveApplication:
    if status not in DECISION_STATUSES:
        raise ValidationError("A leave application can only be approved or rejected")
    return replace(application, status=status, teacher_comment=comment)


def synthesize_leave_attendance(student: Student, *, start: date, end: date, teacher_name: str) -> Student:
    """Mark every day of an approved leave as Present.

    Days that already carry a leave record are skipped, so running this again
    for the same range adds nothing. Returns the same object when no record
    was added.
    """
    seen = {r.key for r in student.attendance}
    added: list[AttendanceRecord] = []

    for day in iter_days(start, end):
        record = AttendanceRecord(
            date=day.strftime("%Y-%m-%d"),
            subject=LEAVE_SUBJECT,
            teacher_name=teacher_name,
            timestamp=LEAVE_TIMESTAMP,
            status=AttendanceStatus.PRESENT,
        )
        if record.key in seen:
            continue
        seen.add(record.key)
        added.append(record)

    if not added:
        return student
    return replace(student, attendance=student.attendance + tuple(added))
