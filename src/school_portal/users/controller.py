from __future__ import annotations

import logging
from dataclasses import replace

from flask import Flask, jsonify, request

from ..common.web import json_body, json_error, login_required
from ..container import Container
from ..core.exceptions import AuthError, ValidationError
from ..store import codec
from .service import SignupDetails

logger = logging.getLogger(__name__)


def _public(user) -> dict:
    data = codec.encode_user(user)
    data.pop("password_hash", None)
    return data


def register(app: Flask, container: Container) -> None:
    session = container.session

    @app.before_request
    def track_idle():
        session.idle_timer.tick()
        # Polling the session state is not user activity.
        if session.current_user is not None and request.endpoint != "session_state":
            session.idle_timer.reset()

    def _login(action):
        try:
            user = action()
            return jsonify({"user": _public(user)})
        except AuthError as e:
            return json_error(str(e), 401)
        except Exception:
            logger.exception("Login failed unexpectedly")
            return json_error("System error while logging in.", 500)

    @app.route("/api/login", methods=["POST"], endpoint="login")
    def login():
        body = json_body()
        return _login(lambda: session.login(body.get("email", ""), body.get("password", "")))

    @app.route("/api/login/provider", methods=["POST"], endpoint="login_provider")
    def login_provider():
        body = json_body()
        return _login(lambda: session.login_with_provider(body.get("identifier", ""), body.get("kind", "email")))

    @app.route("/api/login/role", methods=["POST"], endpoint="login_role")
    def login_role():
        body = json_body()
        return _login(lambda: session.login_as_role(body.get("role", "")))

    @app.route("/api/signup", methods=["POST"], endpoint="signup")
    def signup():
        body = json_body()
        try:
            user = session.signup(
                SignupDetails(
                    name=body.get("name", ""),
                    email=body.get("email", ""),
                    password=body.get("password", ""),
                    role=body.get("role", ""),
                    registered_photo_url=body.get("registered_photo_url", ""),
                    child_email=body.get("child_email"),
                    mobile=body.get("mobile"),
                )
            )
            return jsonify({"user": _public(user)}), 201
        except AuthError as e:
            return json_error(str(e), 401)
        except ValidationError as e:
            return json_error(str(e), 400)
        except Exception:
            logger.exception("Signup failed unexpectedly")
            return json_error("System error while signing up.", 500)

    @app.route("/api/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.logout()
        return jsonify({"ok": True})

    @app.route("/api/session", methods=["GET"], endpoint="session_state")
    def session_state():
        user = session.current_user
        return jsonify(
            {
                "user": _public(user) if user else None,
                "idle_prompt_visible": session.idle_prompt_visible,
                "idle_remaining_seconds": session.idle_timer.remaining() if user else None,
            }
        )

    @app.route("/api/session/keepalive", methods=["POST"], endpoint="session_keepalive")
    @login_required(container)
    def session_keepalive():
        session.stay_logged_in()
        return jsonify({"ok": True})

    @app.route("/api/users/me", methods=["PUT"], endpoint="update_me")
    @login_required(container)
    def update_me():
        body = json_body()
        current = session.current_user
        try:
            updated = session.update_user(
                replace(
                    current,
                    name=(body.get("name") or current.name).strip(),
                    email=(body.get("email") or current.email).strip(),
                    registered_photo_url=body.get("registered_photo_url", current.registered_photo_url),
                    mobile=body.get("mobile", current.mobile),
                    enable_scan_on_login=bool(body.get("enable_scan_on_login", current.enable_scan_on_login)),
                )
            )
            return jsonify({"user": _public(updated)})
        except ValidationError as e:
            return json_error(str(e), 400)
        except Exception:
            logger.exception("Profile update failed")
            return json_error("System error while updating the profile.", 500)
