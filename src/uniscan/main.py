from __future__ import annotations

import importlib
import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from .attendance.controller import register as register_attendance
from .config import get_settings_module
from .container import Container, build_container
from .core.exceptions import DomainError
from .database.bootstrap import apply_schema, list_tables, seed_demo_data
from .users.controller import register as register_users

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(threadName)s : %(message)s"


def setup_logging(*, level: str = "INFO", log_dir: Optional[str] = None) -> None:
    """Send package logs (app.logger included) to a rotating file and the console.

    The package logger is process-wide, so only the first call installs handlers.
    """
    package_logger = logging.getLogger("uniscan")
    package_logger.setLevel(level.upper())
    if package_logger.handlers:
        return

    formatter = logging.Formatter(LOG_FORMAT)

    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        file_handler = RotatingFileHandler(
            os.path.join(log_dir, "uniscan.log"),
            maxBytes=1024 * 1024 * 10,  # 10MB
            backupCount=5,
        )
        file_handler.setFormatter(formatter)
        package_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    package_logger.addHandler(console_handler)
    package_logger.propagate = False


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        return jsonify({"error": e.code, "message": str(e)}), e.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return jsonify({"error": (e.name or "error").lower().replace(" ", "_"), "message": e.description}), e.code

    @app.errorhandler(Exception)
    def handle_exception(e: Exception):
        app.logger.error("Unhandled exception: %s", e, exc_info=True)
        return jsonify({
            "error": "internal_error",
            "message": str(e) if app.debug else "Internal server error",
        }), 500


def create_app(container: Optional[Container] = None, *, settings_module: Optional[str] = None) -> Flask:
    """Build the Flask app.

    With no ``container`` the MySQL-backed one is built from the active
    settings module; tests pass their own.
    """
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    setup_logging(
        level=str(getattr(settings, "LOG_LEVEL", "INFO")),
        log_dir=None if app.config["TESTING"] else getattr(settings, "LOG_DIR", None),
    )

    if container is None:
        db_config = dict(getattr(settings, "DB_CONFIG"))
        app.logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config)
            app.logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))

        container = build_container(db_config=db_config, settings=settings)

        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            seed_demo_data(container)
            app.logger.info("Demo seed ready")

    app.extensions["uniscan"] = container

    @app.route("/", endpoint="index")
    def index():
        return "UniScan backend is running!"

    @app.route("/health", endpoint="health")
    def health():
        return jsonify({"ok": True})

    register_users(app, container)
    register_attendance(app, container)
    register_error_handlers(app)

    return app
