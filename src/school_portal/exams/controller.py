from __future__ import annotations

import logging

from flask import Flask, jsonify

from ..common.web import json_body, json_error, role_required
from ..container import Container
from ..core.enums import Role, SubmissionStatus
from ..core.exceptions import ValidationError
from ..store import codec
from .model import NewSubmission

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/exams/<exam_id>", methods=["PUT"], endpoint="save_exam")
    @role_required(container, Role.TEACHER)
    def save_exam(exam_id: str):
        body = json_body()
        try:
            try:
                exam = codec.decode_exam({**body, "id": exam_id, "created_by": container.session.current_user.id})
            except (KeyError, TypeError, ValueError) as e:
                raise ValidationError(f"Invalid exam: {e}")
            container.exam_service.save_exam(exam)
            return jsonify({"exam": codec.encode_exam(exam)})
        except ValidationError as e:
            return json_error(str(e), 400)
        except Exception:
            logger.exception("Saving exam %s failed", exam_id)
            return json_error("System error while saving the exam.", 500)

    @app.route("/api/exams/<exam_id>", methods=["DELETE"], endpoint="delete_exam")
    @role_required(container, Role.TEACHER)
    def delete_exam(exam_id: str):
        return jsonify({"deleted": container.exam_service.delete_exam(exam_id)})

    @app.route("/api/exams/<exam_id>/submissions", methods=["POST"], endpoint="submit_exam")
    @role_required(container, Role.STUDENT)
    def submit_exam(exam_id: str):
        body = json_body()
        user = container.session.current_user
        answers = body.get("answers")
        if not isinstance(answers, dict):
            return json_error("Answers must map question ids to options.", 400)
        try:
            status = SubmissionStatus(body.get("status") or SubmissionStatus.COMPLETED.value)
        except ValueError:
            return json_error("Unknown submission status.", 400)

        submission = container.exam_service.submit_exam(
            NewSubmission(
                exam_id=exam_id,
                student_id=user.id,
                answers={str(k): str(v) for k, v in answers.items()},
                status=status,
            ),
            submitted_by=user,
        )
        if submission is None:
            return json_error("Exam submission failed: invalid exam data.", 404)
        return jsonify({"submission": codec.encode_submission(submission)}), 201

    @app.route("/api/submissions/<submission_id>", methods=["DELETE"], endpoint="delete_submission")
    @role_required(container, Role.TEACHER)
    def delete_submission(submission_id: str):
        return jsonify({"deleted": container.exam_service.delete_submission(submission_id)})

    @app.route("/api/exams/<exam_id>/submissions", methods=["GET"], endpoint="list_exam_submissions")
    @role_required(container, Role.TEACHER)
    def list_exam_submissions(exam_id: str):
        items = container.exam_service.list_submissions_for_exam(exam_id)
        return jsonify({"exam_submissions": [codec.encode_submission(s) for s in items]})
