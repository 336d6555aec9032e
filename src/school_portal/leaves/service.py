from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_utc
from ..common.ids import new_id
from ..common.validators import require_non_empty
from ..core.constants import SYSTEM_TEACHER_NAME
from ..core.enums import LeaveStatus, Role
from ..core.exceptions import RecordNotFoundError, ValidationError
from ..store.record_store import RecordStore
from .model import LeaveApplication, NewLeaveApplication
from .synthesis import DECISION_STATUSES, decide_leave, synthesize_leave_attendance

logger = logging.getLogger(__name__)


class LeaveService:
    def __init__(self, store: RecordStore):
        self._store = store

    def apply_for_leave(self, data: NewLeaveApplication, *, now: datetime | None = None) -> LeaveApplication:
        if data.end_date < data.start_date:
            raise ValidationError("End date must be on or after the start date")
        reason = require_non_empty(data.reason, "Reason")

        application = LeaveApplication(
            id=new_id("leave"),
            student_id=data.student_id,
            student_name=data.student_name,
            student_roll_number=data.student_roll_number,
            start_date=data.start_date,
            end_date=data.end_date,
            reason=reason,
            document_url=data.document_url,
            status=LeaveStatus.PENDING,
            application_date=now or now_utc(),
        )
        self._store.put_leave_application(application)
        return application

    def update_leave_status(
        self,
        application_id: str,
        status: LeaveStatus,
        comment: Optional[str] = None,
    ) -> bool:
        """Record a teacher's decision; approval also marks the leave days Present.

        Unknown application ids are ignored (returns False).
        """
        status = LeaveStatus(status)
        if status not in DECISION_STATUSES:
            raise ValidationError("A leave application can only be approved or rejected")

        try:
            application = self._store.get_leave_application(application_id)
        except RecordNotFoundError as e:
            logger.warning("%s, decision ignored", e)
            return False

        decided = decide_leave(application, status, (comment or "").strip() or None)

        # Build the attendance update first so a failure writes nothing.
        student = None
        updated = None
        if decided.status == LeaveStatus.APPROVED:
            student = self._store.find_student(decided.student_id)
            if student:
                teacher = self._store.find_first_user_with_role(Role.TEACHER)
                updated = synthesize_leave_attendance(
                    student,
                    start=decided.start_date,
                    end=decided.end_date,
                    teacher_name=teacher.name if teacher else SYSTEM_TEACHER_NAME,
                )
            else:
                logger.warning("Leave %s references unknown student %s", application_id, decided.student_id)

        self._store.put_leave_application(decided)
        logger.info("Leave %s marked %s", application_id, decided.status.value)
        if updated is not None and updated is not student:
            self._store.put_student(updated)
        return True

    def list_for_student(self, student_id: str) -> Sequence[LeaveApplication]:
        return [a for a in self._store.leave_applications if a.student_id == student_id]

    def list_pending(self) -> Sequence[LeaveApplication]:
        return [a for a in self._store.leave_applications if a.status == LeaveStatus.PENDING]
