from __future__ import annotations

from school_portal.core.enums import AttendanceStatus
from school_portal.students.model import AttendanceRecord, Student


def make_records(*statuses: AttendanceStatus) -> tuple[AttendanceRecord, ...]:
    return tuple(
        AttendanceRecord(
            date=f"2024-02-{i + 1:02d}",
            subject="Mathematics",
            teacher_name="T",
            timestamp="09:00 AM",
            status=status,
        )
        for i, status in enumerate(statuses)
    )


def make_student(*statuses: AttendanceStatus, **kwargs) -> Student:
    defaults = dict(id="stu-1", name="Sam", roll_number="S123", department="CS")
    defaults.update(kwargs)
    return Student(attendance=make_records(*statuses), **defaults)
