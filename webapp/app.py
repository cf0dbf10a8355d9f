from __future__ import annotations

from typing import Optional

import pydantic
from flask import Flask, jsonify

from basmalottery.config import LotterySettings, load_settings
from basmalottery.engine import LotteryEngine
from basmalottery.errors import (
    ConfigurationError,
    InsufficientFundsError,
    LotteryError,
    RandomizerUnavailableError,
    TicketIndexError,
    ValidationError,
)

from .game import EXTENSION_KEY, GameSession
from .routes.config import bp as config_bp
from .routes.health import bp as health_bp
from .routes.tickets import bp as tickets_bp

ERROR_STATUS = {
    ValidationError: 400,
    TicketIndexError: 404,
    InsufficientFundsError: 402,
    RandomizerUnavailableError: 503,
    ConfigurationError: 500,
}


def _status_for(exc: LotteryError) -> int:
    for error_type, status in ERROR_STATUS.items():
        if isinstance(exc, error_type):
            return status
    return 500


def create_app(
    settings: Optional[LotterySettings] = None, engine: Optional[LotteryEngine] = None
) -> Flask:
    app = Flask(__name__)
    if engine is None:
        engine = LotteryEngine(settings or load_settings())
    app.extensions[EXTENSION_KEY] = GameSession(engine, app.logger)

    app.register_blueprint(health_bp)
    app.register_blueprint(config_bp)
    app.register_blueprint(tickets_bp)

    @app.errorhandler(pydantic.ValidationError)
    def handle_bad_request(exc: pydantic.ValidationError):
        fields = [".".join(str(part) for part in err["loc"]) or "body" for err in exc.errors()]
        return jsonify({"error": "invalid request body", "fields": fields}), 400

    @app.errorhandler(LotteryError)
    def handle_lottery_error(exc: LotteryError):
        status = _status_for(exc)
        body = {"error": str(exc), "type": type(exc).__name__}
        if isinstance(exc, ValidationError):
            body["fields"] = exc.fields
            body["errors"] = [{"field": field, "message": message} for field, message in exc.errors]
        if status >= 500:
            app.logger.error("Lottery operation failed: %s", exc)
        else:
            app.logger.info("Lottery operation rejected: %s", exc)
        return jsonify(body), status

    return app
