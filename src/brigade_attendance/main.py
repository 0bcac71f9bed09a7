from __future__ import annotations

import importlib
import logging
from types import ModuleType
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from .attendance.controller import register as register_attendance
from .balance.controller import register as register_balance
from .config import get_settings_module
from .container import Container, build_container, policy_from_settings
from .core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DomainError,
    NotFoundError,
    ValidationError,
)
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_users, list_tables
from .locations.controller import register as register_locations
from .outings.controller import register as register_outings
from .reports.controller import register as register_reports
from .requests.controller import register as register_requests
from .roster.controller import register as register_roster
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

ERROR_STATUS = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (ConflictError, 409),
)


def status_for(error: DomainError) -> int:
    for exc_type, status in ERROR_STATUS:
        if isinstance(error, exc_type):
            return status
    return 400


def _configure_logging(app: Flask, level_name: str) -> None:
    level = getattr(logging, str(level_name).upper(), logging.INFO)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logging.getLogger("brigade_attendance").setLevel(level)
    app.logger.setLevel(level)


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(error: DomainError):
        status = status_for(error)
        if status >= 403:
            logger.info("%s: %s", type(error).__name__, error)
        return jsonify({"error": str(error)}), status

    @app.errorhandler(HTTPException)
    def handle_http_error(error: HTTPException):
        return jsonify({"error": error.description}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected(error: Exception):
        logger.exception("Unhandled error")
        return jsonify({"error": "Error interno del servidor."}), 500


def _prepare_database(app: Flask, settings: ModuleType, db_config: dict) -> None:
    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config)
        app.logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))
    if bool(getattr(settings, "AUTO_SEED_DB", False)):
        apply_seed_sql(db_config)
        ensure_demo_users(db_config)
        app.logger.info("Demo seed ready")


def create_app(container: Optional[Container] = None, settings_module: Optional[str] = None) -> Flask:
    """Application factory.

    Tests pass a ``container`` built over in-memory repositories; without one
    the MySQL container is built from the selected settings module.
    """

    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.json.ensure_ascii = False
    _configure_logging(app, getattr(settings, "LOG_LEVEL", "INFO"))

    if container is None:
        db_config = dict(getattr(settings, "DB_CONFIG"))
        app.logger.debug(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )
        _prepare_database(app, settings, db_config)
        container = build_container(db_config=db_config, policy=policy_from_settings(settings))

    app.extensions["brigade_container"] = container
    _register_error_handlers(app)

    register_users(app, container)
    register_balance(app, container)
    register_attendance(app, container)
    register_requests(app, container)
    register_outings(app, container)
    register_locations(app, container)
    register_roster(app, container)
    register_reports(app, container)

    return app
