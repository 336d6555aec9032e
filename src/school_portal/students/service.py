from __future__ import annotations

import logging
import math
from dataclasses import replace
from datetime import datetime, timedelta
from typing import Optional

from ..common.datetime_utils import now_utc
from ..common.validators import require_positive
from ..core.constants import ATTENDANCE_THRESHOLD_PERCENT, DEFAULT_TEMPORARY_ACCESS_HOURS
from ..core.enums import BehaviourStatus, BlockReason
from ..core.exceptions import RecordNotFoundError, ValidationError
from ..store.record_store import RecordStore
from .access import attendance_percentage, evaluate_access_block
from .model import LearningPath, Student

logger = logging.getLogger(__name__)


class StudentService:
    """Access evaluation on login plus the teacher's manual overrides."""

    def __init__(self, store: RecordStore, *, threshold: float = ATTENDANCE_THRESHOLD_PERCENT):
        self._store = store
        self._threshold = threshold

    def evaluate_on_login(self, student_id: str) -> Optional[Student]:
        """Apply the attendance block rule once for a student who just logged in.

        Only writes when the block state actually changed.
        """
        student = self._store.find_student(student_id)
        if not student:
            logger.warning("No student record for user %s, skipping access evaluation", student_id)
            return None

        evaluated = evaluate_access_block(student, threshold=self._threshold)
        if evaluated is not student:
            logger.info("Student %s blocked: %s", student_id, evaluated.block_reason.value)
            self._store.put_student(evaluated)
        return evaluated

    def attendance_percentage(self, student_id: str) -> float:
        return attendance_percentage(self._store.get_student(student_id).attendance)

    def grant_temporary_access(
        self,
        student_id: str,
        *,
        hours: float = DEFAULT_TEMPORARY_ACCESS_HOURS,
        now: datetime | None = None,
    ) -> bool:
        if not math.isfinite(hours):
            raise ValidationError("Temporary access must last a finite number of hours")
        require_positive(hours, "Temporary access must last a positive number of hours")
        now = now or now_utc()
        try:
            expires = now + timedelta(hours=hours)
        except OverflowError:
            raise ValidationError("Temporary access lasts too long")
        return self._update(student_id, temporary_access_expires=expires)

    def clear_access_block(self, student_id: str) -> bool:
        return self._update(
            student_id,
            is_access_blocked=False,
            block_reason=None,
            temporary_access_expires=None,
        )

    def set_behaviour_status(self, student_id: str, status: BehaviourStatus) -> bool:
        student = self._store.find_student(student_id)
        if not student:
            logger.warning("Unknown student %s, behaviour update ignored", student_id)
            return False

        changes: dict = {"behaviour_status": BehaviourStatus(status)}
        if changes["behaviour_status"] == BehaviourStatus.NEEDS_IMPROVEMENT:
            if not student.is_access_blocked:
                changes.update(is_access_blocked=True, block_reason=BlockReason.BEHAVIOUR_ISSUE)
            elif student.block_reason == BlockReason.LOW_ATTENDANCE:
                changes["block_reason"] = BlockReason.BOTH
        self._store.put_student(replace(student, **changes))
        return True

    def save_learning_path(self, student_id: str, learning_path: Optional[LearningPath]) -> bool:
        return self._update(student_id, learning_path=learning_path)

    def _update(self, student_id: str, **changes) -> bool:
        try:
            student = self._store.get_student(student_id)
        except RecordNotFoundError as e:
            logger.warning("%s, update ignored", e)
            return False
        self._store.put_student(replace(student, **changes))
        return True
