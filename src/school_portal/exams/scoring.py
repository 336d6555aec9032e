from __future__ import annotations

import math
from typing import Mapping, Sequence

from .model import ExamSubmission, Question


def score_answers(questions: Sequence[Question], answers: Mapping[str, str]) -> int:
    """Percentage of exactly matching answers, rounded half up.

    An exam without questions scores 0.
    """
    if not questions:
        return 0
    correct = sum(1 for q in questions if answers.get(q.id) == q.correct_answer)
    return int(math.floor(correct * 100.0 / len(questions) + 0.5))


def remove_exam_cascade(
    submissions: Sequence[ExamSubmission], exam_id: str
) -> tuple[ExamSubmission, ...]:
    return tuple(s for s in submissions if s.exam_id != exam_id)
