"""Typed decode/encode between stored JSON and domain dataclasses.

Decoders trust nothing about the stored shape: anything unexpected surfaces as
``DataCorruptionError`` so the record store can fall back to defaults.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any, Callable, Optional, Sequence, TypeVar

from ..core.enums import (
    AssignmentStatus,
    AttendanceStatus,
    BehaviourStatus,
    BlockReason,
    LeaveStatus,
    Role,
    SubmissionStatus,
)
from ..core.exceptions import DataCorruptionError
from ..exams.model import Exam, ExamSubmission, Question
from ..leaves.model import LeaveApplication
from ..students.model import (
    Assignment,
    AttendanceRecord,
    DailyPlanItem,
    LearningPath,
    Student,
    SubjectProgress,
)
from ..users.model import User

T = TypeVar("T")

_DECODE_ERRORS = (KeyError, TypeError, ValueError, AttributeError)


def _datetime(value: Any) -> datetime:
    # Timestamps without an offset are stored UTC.
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _opt_datetime(value: Any) -> Optional[datetime]:
    return _datetime(value) if value else None


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def _list(value: Any) -> list:
    if not isinstance(value, list):
        raise TypeError(f"expected a list, got {type(value).__name__}")
    return value


# Users


def encode_user(user: User) -> dict:
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "role": user.role.value,
        "password_hash": user.password_hash,
        "registered_photo_url": user.registered_photo_url,
        "mobile": user.mobile,
        "child_id": user.child_id,
        "enable_scan_on_login": user.enable_scan_on_login,
    }


def decode_user(raw: dict) -> User:
    return User(
        id=str(raw["id"]),
        name=str(raw["name"]),
        email=str(raw["email"]),
        role=Role(raw["role"]),
        password_hash=str(raw["password_hash"]),
        registered_photo_url=str(raw.get("registered_photo_url") or ""),
        mobile=raw.get("mobile"),
        child_id=raw.get("child_id"),
        enable_scan_on_login=bool(raw.get("enable_scan_on_login", False)),
    )


# Students


def encode_attendance(record: AttendanceRecord) -> dict:
    return {
        "date": record.date,
        "subject": record.subject,
        "teacher_name": record.teacher_name,
        "timestamp": record.timestamp,
        "status": record.status.value,
    }


def decode_attendance(raw: dict) -> AttendanceRecord:
    return AttendanceRecord(
        date=str(raw["date"]),
        subject=str(raw["subject"]),
        teacher_name=str(raw["teacher_name"]),
        timestamp=str(raw["timestamp"]),
        status=AttendanceStatus(raw["status"]),
    )


def encode_assignment(a: Assignment) -> dict:
    return {
        "id": a.id,
        "title": a.title,
        "due_date": a.due_date,
        "submitted_date": a.submitted_date,
        "status": a.status.value,
        "score": a.score,
        "max_score": a.max_score,
    }


def decode_assignment(raw: dict) -> Assignment:
    return Assignment(
        id=str(raw["id"]),
        title=str(raw["title"]),
        due_date=str(raw["due_date"]),
        submitted_date=raw.get("submitted_date"),
        status=AssignmentStatus(raw["status"]),
        score=raw.get("score"),
        max_score=int(raw["max_score"]),
    )


def encode_progress(p: SubjectProgress) -> dict:
    return {
        "subject_name": p.subject_name,
        "overall_grade": p.overall_grade,
        "teacher_feedback": p.teacher_feedback,
        "assignments": [encode_assignment(a) for a in p.assignments],
    }


def decode_progress(raw: dict) -> SubjectProgress:
    return SubjectProgress(
        subject_name=str(raw["subject_name"]),
        overall_grade=str(raw["overall_grade"]),
        teacher_feedback=str(raw.get("teacher_feedback") or ""),
        assignments=tuple(decode_assignment(a) for a in _list(raw.get("assignments", []))),
    )


def encode_learning_path(path: LearningPath) -> dict:
    return {
        "overall_summary": path.overall_summary,
        "daily_plan": [
            {
                "day": item.day,
                "focus_topic": item.focus_topic,
                "learning_activity": item.learning_activity,
                "practice_task": item.practice_task,
                "estimated_time": item.estimated_time,
            }
            for item in path.daily_plan
        ],
    }


def decode_learning_path(raw: dict) -> LearningPath:
    return LearningPath(
        overall_summary=str(raw["overall_summary"]),
        daily_plan=tuple(
            DailyPlanItem(
                day=str(item["day"]),
                focus_topic=str(item["focus_topic"]),
                learning_activity=str(item["learning_activity"]),
                practice_task=str(item["practice_task"]),
                estimated_time=str(item["estimated_time"]),
            )
            for item in _list(raw.get("daily_plan", []))
        ),
    )


def encode_student(student: Student) -> dict:
    return {
        "id": student.id,
        "name": student.name,
        "roll_number": student.roll_number,
        "department": student.department,
        "attendance": [encode_attendance(r) for r in student.attendance],
        "is_access_blocked": student.is_access_blocked,
        "block_reason": student.block_reason.value if student.block_reason else None,
        "behaviour_status": student.behaviour_status.value,
        "progress": [encode_progress(p) for p in student.progress],
        "learning_path": encode_learning_path(student.learning_path) if student.learning_path else None,
        "temporary_access_expires": _iso(student.temporary_access_expires),
    }


def decode_student(raw: dict) -> Student:
    block_reason = raw.get("block_reason")
    learning_path = raw.get("learning_path")
    return Student(
        id=str(raw["id"]),
        name=str(raw["name"]),
        roll_number=str(raw["roll_number"]),
        department=str(raw["department"]),
        attendance=tuple(decode_attendance(r) for r in _list(raw["attendance"])),
        is_access_blocked=bool(raw.get("is_access_blocked", False)),
        block_reason=BlockReason(block_reason) if block_reason else None,
        behaviour_status=BehaviourStatus(raw.get("behaviour_status") or BehaviourStatus.GOOD.value),
        progress=tuple(decode_progress(p) for p in _list(raw.get("progress", []))),
        learning_path=decode_learning_path(learning_path) if learning_path else None,
        temporary_access_expires=_opt_datetime(raw.get("temporary_access_expires")),
    )


# Leave applications


def encode_leave(app: LeaveApplication) -> dict:
    return {
        "id": app.id,
        "student_id": app.student_id,
        "student_name": app.student_name,
        "student_roll_number": app.student_roll_number,
        "start_date": app.start_date.isoformat(),
        "end_date": app.end_date.isoformat(),
        "reason": app.reason,
        "document_url": app.document_url,
        "status": app.status.value,
        "teacher_comment": app.teacher_comment,
        "application_date": app.application_date.isoformat(),
    }


def decode_leave(raw: dict) -> LeaveApplication:
    return LeaveApplication(
        id=str(raw["id"]),
        student_id=str(raw["student_id"]),
        student_name=str(raw.get("student_name") or ""),
        student_roll_number=str(raw.get("student_roll_number") or ""),
        start_date=date.fromisoformat(raw["start_date"]),
        end_date=date.fromisoformat(raw["end_date"]),
        reason=str(raw["reason"]),
        document_url=raw.get("document_url"),
        status=LeaveStatus(raw["status"]),
        teacher_comment=raw.get("teacher_comment"),
        application_date=_datetime(raw["application_date"]),
    )


# Exams


def encode_exam(exam: Exam) -> dict:
    return {
        "id": exam.id,
        "title": exam.title,
        "subject": exam.subject,
        "duration_minutes": exam.duration_minutes,
        "created_by": exam.created_by,
        "questions": [
            {"id": q.id, "text": q.text, "options": list(q.options), "correct_answer": q.correct_answer}
            for q in exam.questions
        ],
    }


def decode_question(raw: dict) -> Question:
    return Question(
        id=str(raw["id"]),
        text=str(raw["text"]),
        options=tuple(str(o) for o in _list(raw.get("options", []))),
        correct_answer=str(raw["correct_answer"]),
    )


def decode_exam(raw: dict) -> Exam:
    return Exam(
        id=str(raw["id"]),
        title=str(raw["title"]),
        subject=str(raw["subject"]),
        duration_minutes=int(raw["duration_minutes"]),
        created_by=str(raw["created_by"]),
        questions=tuple(decode_question(q) for q in _list(raw["questions"])),
    )


def encode_submission(sub: ExamSubmission) -> dict:
    return {
        "id": sub.id,
        "exam_id": sub.exam_id,
        "student_id": sub.student_id,
        "student_name": sub.student_name,
        "answers": dict(sub.answers),
        "submitted_at": sub.submitted_at.isoformat(),
        "score": sub.score,
        "status": sub.status.value,
    }


def decode_submission(raw: dict) -> ExamSubmission:
    answers = raw["answers"]
    if not isinstance(answers, dict):
        raise TypeError("answers must be an object")
    return ExamSubmission(
        id=str(raw["id"]),
        exam_id=str(raw["exam_id"]),
        student_id=str(raw["student_id"]),
        student_name=str(raw.get("student_name") or ""),
        answers={str(k): str(v) for k, v in answers.items()},
        submitted_at=_datetime(raw["submitted_at"]),
        score=int(raw["score"]),
        status=SubmissionStatus(raw.get("status") or SubmissionStatus.COMPLETED.value),
    )


# Collections


def decode_collection(raw: Any, decode_item: Callable[[dict], T], *, key: str) -> tuple[T, ...]:
    if not isinstance(raw, list):
        raise DataCorruptionError(f"{key!r} is not a list")
    try:
        return tuple(decode_item(item) for item in raw)
    except _DECODE_ERRORS as e:
        raise DataCorruptionError(f"{key!r} holds an invalid record: {e}") from e


def encode_collection(items: Sequence[T], encode_item: Callable[[T], dict]) -> list[dict]:
    return [encode_item(item) for item in items]


def decode_optional_user(raw: Any) -> Optional[User]:
    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise DataCorruptionError("current user is not an object")
    try:
        return decode_user(raw)
    except _DECODE_ERRORS as e:
        raise DataCorruptionError(f"current user is invalid: {e}") from e
