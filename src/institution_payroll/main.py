from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .common.http import domain_error_response, fail
from .container import Container, build_container
from .core.exceptions import DomainError
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables

from .attendance.controller import register as register_attendance
from .calendar_days.controller import register as register_calendar_days
from .calendar_view.controller import register as register_calendar_view
from .holidays.controller import register as register_holidays
from .overtime.controller import register as register_overtime
from .payroll.controller import register as register_payroll

_SETTING_KEYS = ("PAYROLL_WORKERS", "OVERTIME_MULTIPLIER", "DEFAULT_STAFF_HOURLY_RATE", "SALARY_COMPONENTS")

DATABASE_DIR = Path(__file__).resolve().parents[2] / "database"


def _configure_logging(level_name: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level_name).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(container: Optional[Container] = None) -> Flask:
    """Build the API app.

    Passing a prebuilt container skips database bootstrap entirely, which is
    how the tests run the routes against in-memory repositories.
    """
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    _configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        app.logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
            app.logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
            app.logger.info("demo seed ready")

        service_settings = {k: getattr(settings, k) for k in _SETTING_KEYS if hasattr(settings, k)}
        container = build_container(db_config=db_config, settings=service_settings)

    register_calendar_days(app, container)
    register_holidays(app, container)
    register_attendance(app, container)
    register_calendar_view(app, container)
    register_payroll(app, container)
    register_overtime(app, container)

    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        return domain_error_response(e)

    @app.errorhandler(404)
    def handle_not_found(_e):
        return fail("Not found", 404)

    @app.errorhandler(500)
    def handle_server_error(_e):
        app.logger.exception("unhandled error")
        return fail("Internal server error", 500)

    return app
