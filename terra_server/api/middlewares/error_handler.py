# terra_server/api/middlewares/error_handler.py
from flask import Flask, jsonify
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException

from terra_server.config.settings import settings
from terra_server.core.exceptions import AppError, ErrorCode
from terra_server.core.logging import get_logger

logger = get_logger(__name__)


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(AppError)
    def handle_app_error(err: AppError):
        if err.status_code >= 500:
            logger.error("app_error", error=err.code.value, message=str(err))
        return jsonify(err.to_dict()), err.status_code

    @app.errorhandler(ValidationError)
    def handle_validation_error(err: ValidationError):
        return (
            jsonify(
                {
                    "error": ErrorCode.VALIDATION.value,
                    "message": "Invalid request data",
                    "details": err.errors(include_url=False, include_context=False, include_input=False),
                }
            ),
            400,
        )

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        code = (err.name or "error").lower().replace(" ", "_")
        return jsonify({"error": code, "message": err.description}), err.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception):
        logger.exception("unhandled_exception", error=type(err).__name__)

        if settings.debug:
            return jsonify({"error": ErrorCode.INTERNAL.value, "message": str(err)}), 500

        return jsonify({"error": ErrorCode.INTERNAL.value, "message": "Internal server error"}), 500
