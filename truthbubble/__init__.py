from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any, Mapping, Optional

from flask import Flask, jsonify
from flask_cors import CORS
from dotenv import load_dotenv
from werkzeug.exceptions import HTTPException

load_dotenv()

from .config import Settings
from .errors import TruthBubbleError
from .api import api_bp
from .api.serializer import error_response

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(TruthBubbleError)
    def _handle_known(err: TruthBubbleError):
        if err.status >= HTTPStatus.INTERNAL_SERVER_ERROR:
            logger.error("%s: %s", type(err).__name__, err.detail or err.message)
        return error_response(err)

    @app.errorhandler(HTTPException)
    def _handle_http(err: HTTPException):
        return jsonify({"error": err.description or err.name}), err.code

    @app.errorhandler(Exception)
    def _handle_unexpected(err: Exception):
        logger.exception("unhandled error")
        return jsonify({"error": "Server error"}), HTTPStatus.INTERNAL_SERVER_ERROR


def create_app(overrides: Optional[Mapping[str, Any]] = None) -> Flask:
    """
    Minimal Flask application factory.

    *overrides* is applied on top of the environment-driven `Settings`
    (handy for tests and one-off scripts).
    """

    app = Flask(__name__)
    app.config.from_object(Settings())  # type: ignore[arg-type]
    if overrides:
        app.config.update(overrides)
    app.json.sort_keys = False  # keep field order in responses

    _configure_logging(app.config["LOG_LEVEL"])

    # the Android app and browser demos call us cross-origin
    CORS(
        app,
        resources={r"/api/*": {"origins": "*"}},
        send_wildcard=True,
        methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    # blueprints
    app.register_blueprint(api_bp, url_prefix="/api")
    _register_error_handlers(app)

    return app
