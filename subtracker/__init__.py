"""Flask application factory.

Creates and configures the Flask app, registers extensions, error
handlers, and API namespaces.
"""

import logging
import os

from flask import Flask
from flask_restx import Api

from subtracker.config.settings import CONFIG_MAP
from subtracker.extensions import db, migrate

API_PREFIX = "/api/v1"


def create_app(config_name: str | None = None) -> Flask:
    """Build and configure the Flask application.

    Args:
        config_name: One of 'development', 'testing', 'production'.
                     Defaults to the FLASK_ENV environment variable.
    """
    app = Flask(__name__)

    # --- Configuration ---
    config_name = config_name or os.getenv("FLASK_ENV", "development")
    app.config.from_object(CONFIG_MAP[config_name])

    # --- Logging ---
    logging.basicConfig(
        level=app.config["LOG_LEVEL"],
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    # --- Extensions ---
    db.init_app(app)
    migrate.init_app(app, db)

    from subtracker.domain import models  # noqa: F401 register tables

    with app.app_context():
        db.create_all()

    # --- API ---
    api = Api(
        app,
        title="Subscription Tracker",
        version="1.0",
        description="REST API for user subscription records and cost totals",
    )

    from subtracker.api.subscriptions import ns as subscriptions_ns

    api.add_namespace(subscriptions_ns, path=API_PREFIX)

    # --- Global error handler ---
    _register_error_handlers(app)

    logging.getLogger(__name__).info("Application created with '%s' config", config_name)
    return app


def _register_error_handlers(app: Flask) -> None:
    """Map application exceptions to JSON responses."""
    from subtracker.domain.exceptions import AppError  # noqa: avoid circular import
    from subtracker.schemas.response import app_error_response, error_response

    @app.errorhandler(AppError)
    def handle_app_error(error: AppError):
        return app_error_response(error)

    @app.errorhandler(404)
    def handle_not_found(_error):
        return error_response("Resource not found", "NOT_FOUND", 404)

    @app.errorhandler(500)
    def handle_internal(_error):
        logging.getLogger(__name__).exception("Unhandled server error")
        return error_response("Internal server error", "INTERNAL_ERROR", 500)
