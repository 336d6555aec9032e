from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.web import json_body, json_error, login_required, role_required
from ..container import Container
from ..core.enums import LeaveStatus, Role
from ..core.exceptions import ValidationError
from ..store import codec
from .model import NewLeaveApplication

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/leaves", methods=["GET"], endpoint="list_leaves")
    @login_required(container)
    def list_leaves():
        user = container.session.current_user
        if user.role == Role.TEACHER:
            if request.args.get("status") == LeaveStatus.PENDING.value:
                items = container.leave_service.list_pending()
            else:
                items = container.store.leave_applications
        elif user.role == Role.PARENT:
            items = container.leave_service.list_for_student(user.child_id or "")
        else:
            items = container.leave_service.list_for_student(user.id)
        return jsonify({"leave_applications": [codec.encode_leave(a) for a in items]})

    @app.route("/api/leaves", methods=["POST"], endpoint="apply_for_leave")
    @role_required(container, Role.STUDENT)
    def apply_for_leave():
        body = json_body()
        user = container.session.current_user
        try:
            student = container.store.find_student(user.id)
            application = container.leave_service.apply_for_leave(
                NewLeaveApplication(
                    student_id=user.id,
                    student_name=user.name,
                    student_roll_number=student.roll_number if student else "",
                    start_date=parse_iso_date(body.get("start_date") or ""),
                    end_date=parse_iso_date(body.get("end_date") or ""),
                    reason=body.get("reason", ""),
                    document_url=body.get("document_url"),
                )
            )
            return jsonify({"leave_application": codec.encode_leave(application)}), 201
        except ValidationError as e:
            return json_error(str(e), 400)
        except Exception:
            logger.exception("Leave application failed")
            return json_error("System error while applying for leave.", 500)

    @app.route("/api/leaves/<application_id>/decision", methods=["POST"], endpoint="decide_leave")
    @role_required(container, Role.TEACHER)
    def decide_leave(application_id: str):
        body = json_body()
        try:
            status = LeaveStatus(body.get("status"))
        except ValueError:
            return json_error("Status must be Approved or Rejected.", 400)
        try:
            updated = container.leave_service.update_leave_status(application_id, status, body.get("comment"))
            return jsonify({"updated": updated})
        except ValidationError as e:
            return json_error(str(e), 400)
        except Exception:
            logger.exception("Leave decision failed")
            return json_error("System error while deciding the leave.", 500)
