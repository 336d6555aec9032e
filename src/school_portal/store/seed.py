"""Demo data used when the store is empty or a collection is corrupted."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from werkzeug.security import generate_password_hash

from ..core.enums import AssignmentStatus, AttendanceStatus, BehaviourStatus, Role
from ..exams.model import Exam, Question
from ..students.model import Assignment, AttendanceRecord, Student, SubjectProgress
from ..users.model import User

DEMO_PASSWORD = "password123"
DEMO_TEACHER_EMAIL = "teacher@school.com"
DEMO_STUDENT_EMAIL = "student@school.com"
DEMO_PARENT_EMAIL = "parent@school.com"
DEFAULT_DEPARTMENT = "Computer Science"


@lru_cache(maxsize=None)
def _demo_hash(password: str) -> str:
    return generate_password_hash(password)


@dataclass(frozen=True)
class SeedData:
    users: tuple[User, ...]
    students: tuple[Student, ...]
    exams: tuple[Exam, ...]

    @property
    def student_template(self) -> Student:
        return self.students[0]


def _record(day: str, subject: str, status: AttendanceStatus, teacher: str = "Dr. Alan Grant") -> AttendanceRecord:
    return AttendanceRecord(date=day, subject=subject, teacher_name=teacher, timestamp="09:05 AM", status=status)


def build_seed_data() -> SeedData:
    password_hash = _demo_hash(DEMO_PASSWORD)
    users = (
        User(
            id="user-teacher-1",
            name="Dr. Alan Grant",
            email=DEMO_TEACHER_EMAIL,
            role=Role.TEACHER,
            password_hash=password_hash,
            mobile="5550000001",
        ),
        User(
            id="user-student-1",
            name="Ellie Sattler",
            email=DEMO_STUDENT_EMAIL,
            role=Role.STUDENT,
            password_hash=password_hash,
            mobile="5550000002",
            enable_scan_on_login=True,
        ),
        User(
            id="user-student-2",
            name="Ian Malcolm",
            email="ian@school.com",
            role=Role.STUDENT,
            password_hash=password_hash,
        ),
        User(
            id="user-parent-1",
            name="John Hammond",
            email=DEMO_PARENT_EMAIL,
            role=Role.PARENT,
            password_hash=password_hash,
            child_id="user-student-1",
        ),
    )

    students = (
        Student(
            id="user-student-1",
            name="Ellie Sattler",
            roll_number="S101",
            department=DEFAULT_DEPARTMENT,
            attendance=(
                _record("2024-01-08", "Mathematics", AttendanceStatus.PRESENT),
                _record("2024-01-08", "Physics", AttendanceStatus.PRESENT),
                _record("2024-01-09", "Mathematics", AttendanceStatus.PRESENT),
                _record("2024-01-09", "Physics", AttendanceStatus.LATE),
            ),
            progress=(
                SubjectProgress(
                    subject_name="Mathematics",
                    overall_grade="A-",
                    teacher_feedback="Consistent work, keep practising proofs.",
                    assignments=(
                        Assignment(
                            id="asg-1",
                            title="Linear Algebra Set 1",
                            due_date="2024-01-12",
                            submitted_date="2024-01-11",
                            status=AssignmentStatus.GRADED,
                            score=18,
                            max_score=20,
                        ),
                    ),
                ),
            ),
        ),
        Student(
            id="user-student-2",
            name="Ian Malcolm",
            roll_number="S102",
            department=DEFAULT_DEPARTMENT,
            attendance=(
                _record("2024-01-08", "Mathematics", AttendanceStatus.ABSENT),
                _record("2024-01-08", "Physics", AttendanceStatus.PRESENT),
                _record("2024-01-09", "Mathematics", AttendanceStatus.ABSENT),
                _record("2024-01-09", "Physics", AttendanceStatus.LATE),
            ),
            behaviour_status=BehaviourStatus.GOOD,
        ),
    )

    exams = (
        Exam(
            id="exam-1",
            title="Mathematics Quiz 1",
            subject="Mathematics",
            duration_minutes=15,
            created_by="user-teacher-1",
            questions=(
                Question(id="q1", text="2 + 2 = ?", options=("3", "4", "5"), correct_answer="4"),
                Question(id="q2", text="3 x 3 = ?", options=("6", "9", "12"), correct_answer="9"),
                Question(id="q3", text="10 / 2 = ?", options=("5", "2", "20"), correct_answer="5"),
                Question(id="q4", text="7 - 4 = ?", options=("3", "4", "11"), correct_answer="3"),
            ),
        ),
    )

    return SeedData(users=users, students=students, exams=exams)
