"""Attendance-driven access blocking.

These functions only ever block a student or escalate the block reason.
Lifting a block is a manual action (see ``StudentService``).
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Optional, Sequence

from ..core.constants import ATTENDANCE_THRESHOLD_PERCENT
from ..core.enums import AttendanceStatus, BlockReason
from .model import AttendanceRecord, Student


def attendance_percentage(records: Sequence[AttendanceRecord]) -> float:
    """Share of Present marks, 100 when nothing has been recorded yet."""
    total = len(records)
    if total == 0:
        return 100.0
    present = sum(1 for r in records if r.status == AttendanceStatus.PRESENT)
    return present * 100.0 / total


def is_low_attendance(records: Sequence[AttendanceRecord], *, threshold: float = ATTENDANCE_THRESHOLD_PERCENT) -> bool:
    return attendance_percentage(records) < threshold


def evaluate_access_block(student: Student, *, threshold: float = ATTENDANCE_THRESHOLD_PERCENT) -> Student:
    """Return the student with the block state implied by their attendance.

    The same object is returned when nothing changes, so callers can use an
    identity check to skip the write.
    """
    if not is_low_attendance(student.attendance, threshold=threshold):
        return student

    if not student.is_access_blocked:
        return replace(student, is_access_blocked=True, block_reason=BlockReason.LOW_ATTENDANCE)
    if student.block_reason == BlockReason.BEHAVIOUR_ISSUE:
        return replace(student, block_reason=BlockReason.BOTH)
    return student


def has_active_pass(student: Student, now: datetime) -> bool:
    expires: Optional[datetime] = student.temporary_access_expires
    return expires is not None and expires > now


def is_locked_out(student: Student, now: datetime) -> bool:
    return student.is_access_blocked and not has_active_pass(student, now)
