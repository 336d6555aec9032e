from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .container import build_container
from .dashboards.controller import register as register_dashboards
from .exams.controller import register as register_exams
from .leaves.controller import register as register_leaves
from .store.kv import KeyValueStore
from .students.controller import register as register_students
from .users.controller import register as register_users


def create_app(settings_module: Optional[str] = None, *, kv: Optional[KeyValueStore] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logging.getLogger(__name__).debug(
        "settings=%s store=%s", settings_module, getattr(settings, "STORE_BACKEND", "memory")
    )

    container = build_container(settings, kv=kv)
    app.extensions["school_portal"] = container

    register_users(app, container)
    register_dashboards(app, container)
    register_leaves(app, container)
    register_exams(app, container)
    register_students(app, container)

    return app
