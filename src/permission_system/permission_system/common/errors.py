"""Error handlers for the application."""
from __future__ import annotations

import logging

from flask import Flask, request
from werkzeug.exceptions import HTTPException

from ..core.exceptions import DomainError
from .responses import web_response

logger = logging.getLogger(__name__)


def register_error_handlers(app: Flask) -> None:
    """Render every error in the ``{message, errors}`` envelope."""

    @app.errorhandler(DomainError)
    def handle_domain_error(error: DomainError):
        return web_response(
            error.message,
            errors=error.errors or {"message": error.message},
            status=error.status_code,
        )

    @app.errorhandler(HTTPException)
    def handle_http_exception(error: HTTPException):
        message = error.name
        return web_response(message, errors={"message": error.description or message}, status=error.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(error: Exception):
        # Full detail goes to the log only; the client gets a generic message.
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return web_response(
            "Internal server error",
            errors={"message": "An unexpected error occurred"},
            status=500,
        )
