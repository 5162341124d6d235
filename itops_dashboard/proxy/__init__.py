"""
Caching proxy in front of the spreadsheet CSV exports.

Run with:  flask --app itops_dashboard.proxy run --host 0.0.0.0 --port 3000
"""

import logging
import os
import time

import httpx
from dotenv import load_dotenv
from flask import Flask, jsonify, request

from .cache import SheetCache
from .config import DevelopmentConfig, config_by_name


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(404)
    def handle_not_found(error):
        app.logger.info("Not found: %s", request.path)
        return jsonify({"error": "not_found", "message": getattr(error, "description", str(error))}), 404

    @app.errorhandler(500)
    def handle_internal_error(error):
        app.logger.error("Internal server error", exc_info=error)
        return jsonify({"error": "internal_server_error", "message": "An unexpected error occurred."}), 500


def create_app(
    config_name: str | None = None,
    transport: httpx.BaseTransport | None = None,
) -> Flask:
    load_dotenv()

    app = Flask(__name__)

    config_key = (config_name or os.getenv("FLASK_CONFIG", "development")).lower()
    config_object = config_by_name.get(config_key, DevelopmentConfig)
    app.config.from_object(config_object)

    logging.basicConfig(
        level=app.config.get("LOG_LEVEL", logging.INFO),
        format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
        datefmt="%H:%M:%S",
    )

    app.extensions["sheet_proxy"] = {
        "cache": SheetCache(ttl=app.config["CACHE_TTL"]),
        "transport": transport,
        "started_at": time.monotonic(),
    }

    from .routes import api_bp

    app.register_blueprint(api_bp)

    @app.after_request
    def allow_cross_origin(response):
        response.headers["Access-Control-Allow-Origin"] = "*"
        return response

    register_error_handlers(app)

    return app
