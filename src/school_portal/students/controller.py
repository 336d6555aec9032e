from __future__ import annotations

import logging

from flask import Flask, jsonify

from ..common.web import json_body, json_error, role_required
from ..container import Container
from ..core.enums import BehaviourStatus, Role
from ..core.exceptions import ValidationError
from ..store import codec

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    students = container.student_service

    @app.route("/api/students/<student_id>/temporary-access", methods=["POST"], endpoint="grant_temporary_access")
    @role_required(container, Role.TEACHER)
    def grant_temporary_access(student_id: str):
        body = json_body()
        try:
            hours = float(body.get("hours", 24))
            return jsonify({"updated": students.grant_temporary_access(student_id, hours=hours)})
        except (TypeError, ValueError):
            return json_error("Hours must be a number.", 400)
        except ValidationError as e:
            return json_error(str(e), 400)

    @app.route("/api/students/<student_id>/unblock", methods=["POST"], endpoint="unblock_student")
    @role_required(container, Role.TEACHER)
    def unblock_student(student_id: str):
        return jsonify({"updated": students.clear_access_block(student_id)})

    @app.route("/api/students/<student_id>/behaviour", methods=["PUT"], endpoint="set_behaviour")
    @role_required(container, Role.TEACHER)
    def set_behaviour(student_id: str):
        body = json_body()
        try:
            status = BehaviourStatus(body.get("status"))
        except ValueError:
            return json_error("Unknown behaviour status.", 400)
        return jsonify({"updated": students.set_behaviour_status(student_id, status)})

    @app.route("/api/students/<student_id>/learning-path", methods=["PUT"], endpoint="save_learning_path")
    @role_required(container, Role.STUDENT, Role.TEACHER)
    def save_learning_path(student_id: str):
        user = container.session.current_user
        if user.role == Role.STUDENT and user.id != student_id:
            return json_error("You do not have permission for this action.", 403)

        body = json_body()
        raw = body.get("learning_path")
        try:
            learning_path = codec.decode_learning_path(raw) if raw else None
        except (KeyError, TypeError, ValueError) as e:
            return json_error(f"Invalid learning path: {e}", 400)
        return jsonify({"updated": students.save_learning_path(student_id, learning_path)})
