import atexit
import logging
import os
from typing import Mapping, Optional

from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from .config import AppConfig
from .db import db
from .errors import OrderServiceError
from .limiter import limiter
from .services.notification_service import Notifier

logger = logging.getLogger("printshop")


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(OrderServiceError)
    def handle_order_error(exc: OrderServiceError):
        if exc.status_code >= 500:
            logger.error("Request failed: %s", exc, exc_info=exc.__cause__ or exc)
        return jsonify(exc.to_dict()), exc.status_code

    @app.errorhandler(404)
    def handle_not_found(exc):
        return jsonify({"success": False, "error": "Not found"}), 404

    @app.errorhandler(413)
    def handle_too_large(exc):
        return jsonify({"success": False, "error": "file too large"}), 413

    @app.errorhandler(429)
    def handle_rate_limited(exc):
        return jsonify({"success": False, "error": "Too many requests, slow down"}), 429

    @app.errorhandler(HTTPException)
    def handle_http_error(exc: HTTPException):
        return jsonify({"success": False, "error": exc.description}), exc.code


def _close_resources(app: Flask) -> None:
    """Cierra el pool de avisos y las conexiones al terminar el proceso"""
    app.extensions["notifier"].close()
    with app.app_context():
        db.engine.dispose()


def create_app(overrides: Optional[Mapping] = None) -> Flask:
    app = Flask(__name__)

    cfg = AppConfig()
    cfg.apply(app)
    if overrides:
        app.config.update(overrides)

    logging.basicConfig(
        level=app.config["LOG_LEVEL"],
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    CORS(app,
         origins=app.config["CORS_ORIGINS"],
         methods=["GET", "POST", "OPTIONS"],
         allow_headers=["Content-Type"],
         supports_credentials=True,
         max_age=3600)

    @app.after_request
    def add_security_headers(response):
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "no-referrer"
        response.headers["Content-Security-Policy"] = "default-src 'self'"
        return response

    os.makedirs(app.config["UPLOAD_DIR"], exist_ok=True)

    db.init_app(app)
    limiter.init_app(app)
    app.extensions["notifier"] = Notifier.from_config(app.config)
    atexit.register(_close_resources, app)
    _register_error_handlers(app)

    with app.app_context():
        from .models.order import Order  # noqa: F401
        db.create_all()

        from .api.auth import auth_bp
        from .api.files import files_bp
        from .api.orders import orders_bp
        from .api.pages import pages_bp
        app.register_blueprint(auth_bp)
        app.register_blueprint(orders_bp)
        app.register_blueprint(files_bp)
        app.register_blueprint(pages_bp)

    # CLI
    from .cli import register_cli
    register_cli(app)

    return app
