from __future__ import annotations

import importlib
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .attendance.controller import register as register_attendance
from .auth.controller import register as register_auth
from .common.http import register_error_handlers
from .config import get_settings_module
from .container import Container, build_container
from .core.logging import configure_logging, get_logger
from .database.bootstrap import apply_schema, apply_seed, list_tables
from .employees.controller import register as register_employees
from .reports.controller import register as register_reports
from .shifts.controller import register as register_shifts

logger = get_logger(__name__)


def create_app(container: Optional[Container] = None, *, settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["QR_TOKEN"] = getattr(settings, "QR_TOKEN", "OFFICE_CHECKIN_SYSTEM")

    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "Starting with settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config)
            logger.info("Schema ready (tables=%s)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed(db_config)
            logger.info("Demo seed ready")
        container = build_container(db_config=db_config, settings=settings)

    app.extensions["shift_attendance"] = container

    register_error_handlers(app)
    register_auth(app, container)
    register_employees(app, container)
    register_shifts(app, container)
    register_attendance(app, container)
    register_reports(app, container)

    return app
