from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import AssignmentStatus, AttendanceStatus, BehaviourStatus, BlockReason


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance mark for a subject on a day."""

    date: str
    subject: str
    teacher_name: str
    timestamp: str
    status: AttendanceStatus

    @property
    def key(self) -> tuple[str, str]:
        return (self.date, self.subject)


@dataclass(frozen=True)
class Assignment:
    id: str
    title: str
    due_date: str
    status: AssignmentStatus
    max_score: int
    submitted_date: Optional[str] = None
    score: Optional[int] = None


@dataclass(frozen=True)
class SubjectProgress:
    subject_name: str
    overall_grade: str
    teacher_feedback: str
    assignments: tuple[Assignment, ...] = ()


@dataclass(frozen=True)
class DailyPlanItem:
    day: str
    focus_topic: str
    learning_activity: str
    practice_task: str
    estimated_time: str


@dataclass(frozen=True)
class LearningPath:
    overall_summary: str
    daily_plan: tuple[DailyPlanItem, ...] = ()


@dataclass(frozen=True)
class Student:
    """Domain entity: Student, 1:1 with a student-role User (shared id)."""

    id: str
    name: str
    roll_number: str
    department: str
    attendance: tuple[AttendanceRecord, ...] = ()
    is_access_blocked: bool = False
    block_reason: Optional[BlockReason] = None
    behaviour_status: BehaviourStatus = BehaviourStatus.GOOD
    progress: tuple[SubjectProgress, ...] = ()
    learning_path: Optional[LearningPath] = None
    temporary_access_expires: Optional[datetime] = None
