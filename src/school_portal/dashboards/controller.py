from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import login_required
from ..container import Container
from .service import build_dashboard


def register(app: Flask, container: Container) -> None:
    @app.route("/api/dashboard", methods=["GET"], endpoint="dashboard")
    @login_required(container)
    def dashboard():
        view = build_dashboard(container.store, container.session.current_user)
        return jsonify(view.to_dict())
