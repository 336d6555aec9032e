from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Mapping

from ..core.enums import SubmissionStatus


@dataclass(frozen=True)
class Question:
    id: str
    text: str
    options: tuple[str, ...]
    correct_answer: str


@dataclass(frozen=True)
class Exam:
    id: str
    title: str
    subject: str
    duration_minutes: int
    created_by: str
    questions: tuple[Question, ...] = ()


@dataclass(frozen=True)
class ExamSubmission:
    """Graded submission. ``student_name`` is a snapshot taken at submit time."""

    id: str
    exam_id: str
    student_id: str
    student_name: str
    answers: Mapping[str, str]
    submitted_at: datetime
    score: int
    status: SubmissionStatus = SubmissionStatus.COMPLETED


@dataclass(frozen=True)
class NewSubmission:
    exam_id: str
    student_id: str
    answers: Mapping[str, str] = field(default_factory=dict)
    status: SubmissionStatus = SubmissionStatus.COMPLETED
