from __future__ import annotations

from datetime import datetime

from school_portal.exams.model import ExamSubmission, Question
from school_portal.exams.scoring import remove_exam_cascade, score_answers


def _questions(n):
    return tuple(Question(id=f"q{i}", text=f"Q{i}", options=("a", "b"), correct_answer="a") for i in range(n))


def test_three_of_four_scores_75():
    answers = {"q0": "a", "q1": "a", "q2": "a", "q3": "b"}
    assert score_answers(_questions(4), answers) == 75


def test_exam_without_questions_scores_zero():
    assert score_answers((), {"q0": "a"}) == 0


def test_missing_answers_count_as_wrong():
    assert score_answers(_questions(3), {"q0": "a"}) == 33


def test_rounds_half_up():
    answers = {"q0": "a"}
    assert score_answers(_questions(8), answers) == 13  # 12.5
    assert score_answers(_questions(3), {"q0": "a", "q1": "a"}) == 67


def test_match_is_exact():
    assert score_answers(_questions(1), {"q0": "A"}) == 0
    assert score_answers(_questions(1), {"q0": "a "}) == 0


def test_cascade_only_removes_submissions_of_that_exam():
    def sub(i, exam_id):
        return ExamSubmission(
            id=f"s{i}",
            exam_id=exam_id,
            student_id="stu",
            student_name="Sam",
            answers={},
            submitted_at=datetime(2024, 1, 1),
            score=0,
        )

    subs = (sub(1, "e1"), sub(2, "e2"), sub(3, "e1"))

    assert [s.id for s in remove_exam_cascade(subs, "e1")] == ["s2"]
