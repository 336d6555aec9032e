from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import LeaveStatus


@dataclass(frozen=True)
class LeaveApplication:
    id: str
    student_id: str
    student_name: str
    student_roll_number: str
    start_date: date
    end_date: date
    reason: str
    status: LeaveStatus
    application_date: datetime
    document_url: Optional[str] = None
    teacher_comment: Optional[str] = None


@dataclass(frozen=True)
class NewLeaveApplication:
    """What a student submits; id, status and application date are assigned."""

    student_id: str
    student_name: str
    student_roll_number: str
    start_date: date
    end_date: date
    reason: str
    document_url: Optional[str] = None
