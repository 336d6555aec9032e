from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_utc
from ..common.ids import new_id
from ..common.validators import require_non_empty, require_positive
from ..core.exceptions import RecordNotFoundError, ValidationError
from ..store.record_store import RecordStore
from ..users.model import User
from .model import Exam, ExamSubmission, NewSubmission
from .scoring import remove_exam_cascade, score_answers

logger = logging.getLogger(__name__)


class ExamService:
    def __init__(self, store: RecordStore):
        self._store = store

    def save_exam(self, exam: Exam) -> Exam:
        """Insert or replace an exam by id."""
        require_non_empty(exam.title, "Title")
        require_positive(int(exam.duration_minutes), "Duration must be a positive number of minutes")
        question_ids = [q.id for q in exam.questions]
        if len(set(question_ids)) != len(question_ids):
            raise ValidationError("Question ids must be unique within an exam")
        self._store.put_exam(exam)
        return exam

    def delete_exam(self, exam_id: str) -> bool:
        """Remove an exam together with every submission made for it."""
        if not any(e.id == exam_id for e in self._store.exams):
            logger.warning("Exam %s does not exist, delete ignored", exam_id)
            return False

        self._store.replace_exams([e for e in self._store.exams if e.id != exam_id])
        before = len(self._store.exam_submissions)
        self._store.replace_exam_submissions(remove_exam_cascade(self._store.exam_submissions, exam_id))
        logger.info("Deleted exam %s and %s submission(s)", exam_id, before - len(self._store.exam_submissions))
        return True

    def submit_exam(
        self,
        submission: NewSubmission,
        *,
        submitted_by: Optional[User],
        now: datetime | None = None,
    ) -> Optional[ExamSubmission]:
        """Grade and store a submission.

        Returns None, without storing anything, when the exam is missing, its
        questions are unusable or nobody is logged in.
        """
        try:
            exam = self._store.get_exam(submission.exam_id)
        except RecordNotFoundError:
            exam = None

        if not exam or submitted_by is None or not isinstance(exam.questions, (list, tuple)):
            logger.error("Exam submission failed: invalid exam data for %s", submission.exam_id)
            return None

        answers = dict(submission.answers or {})
        graded = ExamSubmission(
            id=new_id("sub"),
            exam_id=exam.id,
            student_id=submission.student_id,
            student_name=submitted_by.name,
            answers=answers,
            submitted_at=now or now_utc(),
            score=score_answers(exam.questions, answers),
            status=submission.status,
        )
        self._store.replace_exam_submissions(self._store.exam_submissions + (graded,))
        return graded

    def delete_submission(self, submission_id: str) -> bool:
        remaining = [s for s in self._store.exam_submissions if s.id != submission_id]
        if len(remaining) == len(self._store.exam_submissions):
            logger.warning("Submission %s does not exist, delete ignored", submission_id)
            return False
        self._store.replace_exam_submissions(remaining)
        return True

    def list_exams_by_teacher(self, teacher_id: str) -> Sequence[Exam]:
        return [e for e in self._store.exams if e.created_by == teacher_id]

    def list_submissions_for_student(self, student_id: str) -> Sequence[ExamSubmission]:
        return [s for s in self._store.exam_submissions if s.student_id == student_id]

    def list_submissions_for_exam(self, exam_id: str) -> Sequence[ExamSubmission]:
        return [s for s in self._store.exam_submissions if s.exam_id == exam_id]
