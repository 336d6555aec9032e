from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for dashboards and permission checks."""

    STUDENT = "student"
    TEACHER = "teacher"
    PARENT = "parent"


class AttendanceStatus(str, Enum):
    PRESENT = "Present"
    ABSENT = "Absent"
    LATE = "Late"


class BlockReason(str, Enum):
    """Why a student is blocked. ``None`` on the student means not blocked."""

    LOW_ATTENDANCE = "Low Attendance"
    BEHAVIOUR_ISSUE = "Behaviour Issue"
    BOTH = "Attendance & Behaviour"


class BehaviourStatus(str, Enum):
    GOOD = "Good"
    NEEDS_IMPROVEMENT = "Needs Improvement"


class LeaveStatus(str, Enum):
    """Leave workflow state. Never returns to PENDING once decided."""

    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class SubmissionStatus(str, Enum):
    COMPLETED = "Completed"
    BLOCKED = "Blocked"


class AssignmentStatus(str, Enum):
    GRADED = "Graded"
    SUBMITTED = "Submitted"
    PENDING = "Pending"
    LATE = "Late"
