import logging
import os

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from extensions import cors, store
from config import DevConfig, ProdConfig
from logging_setup import setup_logger
from clinic_api.errors import ApiError
from clinic_api.models.seed_data import build_seed_data
from clinic_api.services.repository import Repository


logger = logging.getLogger("clinic_api.app")


def _register_error_handlers(app: Flask) -> None:
    """Every failure leaves the API as {"error": message}."""

    @app.errorhandler(ApiError)
    def handle_api_error(e: ApiError):
        if e.status_code == 400:
            logger.warning(f"[{request.method} {request.path}] validation_failed error={e.message}")
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return jsonify({"error": e.description or e.name}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        logger.exception(f"[{request.method} {request.path}] unexpected_error: {e}")
        return jsonify({"error": "Internal server error"}), 500


def create_app(config_object=None, repository: Repository | None = None) -> Flask:
    """Initialize Flask app with the record store + configuration."""
    app = Flask(__name__)

    if config_object is not None:
        app.config.from_object(config_object)
    elif os.getenv("FLASK_ENV") == "production":
        app.config.from_object(ProdConfig)
    else:
        app.config.from_object(DevConfig)

    # Keep record fields in the order handlers build them
    app.json.sort_keys = False

    setup_logger(
        log_dir=app.config["LOG_DIR"],
        level=app.config["LOG_LEVEL"],
        to_file=not app.config.get("TESTING", False),
    )

    cors.init_app(app, resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}})
    repo = store.init_app(app, repository)

    # Seed the mock collections once per app (and per test app).
    repo.seed(build_seed_data(app.config["CLINIC_TIMEZONE"]))

    # Register HTTP blueprints
    from clinic_api.routes.catalog import catalog_bp
    from clinic_api.routes.customers import customers_bp
    from clinic_api.routes.patients import patients_bp
    from clinic_api.routes.prescriptions import prescriptions_bp

    app.register_blueprint(patients_bp)
    app.register_blueprint(customers_bp)
    app.register_blueprint(prescriptions_bp)
    app.register_blueprint(catalog_bp)

    _register_error_handlers(app)

    @app.after_request
    def log_request(response):
        logger.info(f"{request.method} {request.full_path.rstrip('?')} {response.status_code}")
        return response

    return app
