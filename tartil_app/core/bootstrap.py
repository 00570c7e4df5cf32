"""Bootstrap helpers for configuring the Flask application."""

from __future__ import annotations

from flask import Flask

from .extensions import db
from .logging_config import setup_logging
from .module_registry import register_default_modules


def configure_logging(app: Flask) -> None:
    """Configure the package logger from app config."""

    setup_logging(
        app,
        log_level=app.config.get("LOG_LEVEL", "INFO"),
        log_dir=app.config.get("LOG_DIR"),
        json_format=bool(app.config.get("LOG_JSON", False)),
        log_to_file=bool(app.config.get("LOG_TO_FILE", True)),
    )
    app.logger.info("Flask app logger configured successfully.")


def register_extensions(app: Flask) -> None:
    """Initialize shared extensions with the Flask app instance."""

    db.init_app(app)


def register_modules(app: Flask) -> None:
    """Run the setup hook of every default module."""

    register_default_modules(app)


def initialize_database(app: Flask) -> None:
    """Create database tables for every registered model."""

    db.create_all()
    app.logger.info("Database tables ensured at %s", app.config.get("SQLALCHEMY_DATABASE_URI"))
