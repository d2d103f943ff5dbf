"""Centralized JSON error handling for the API.

Every failure leaves the application as a single :class:`~authflow.api.envelope.Err`
envelope (``{"status", "message"}``), whatever raised it: API errors, service
errors, schema errors, JWT errors, database errors or unexpected exceptions.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from flask import Flask, Response, request
from marshmallow import ValidationError as MarshmallowValidationError
from sqlalchemy.exc import IntegrityError, OperationalError
from werkzeug.exceptions import HTTPException

from authflow.api.envelope import Err
from authflow.services._shared.errors import ServiceError

log = logging.getLogger(__name__)

# Service error kind -> HTTP status
KIND_STATUS: dict[str, int] = {
    "validation": HTTPStatus.BAD_REQUEST,
    "conflict": HTTPStatus.CONFLICT,
    "not_found": HTTPStatus.NOT_FOUND,
    "auth": HTTPStatus.UNAUTHORIZED,
    "internal": HTTPStatus.INTERNAL_SERVER_ERROR,
}


class APIError(Exception):
    """
    Represent a JSON-serializable API error.

    Parameters
    ----------
    message : str
        Human-readable description presented to clients.
    status_code : int, optional
        HTTP status code to return. Defaults to ``400``.
    kind : str, optional
        Machine-readable identifier. Defaults to ``"validation"``.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 400,
        kind: str = "validation",
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = int(status_code)
        self.kind = kind

    def to_err(self) -> Err:
        """Convert into the error envelope."""
        return Err(status=self.status_code, message=self.message, kind=self.kind)


def translate_service_error(exc: ServiceError) -> APIError:
    """
    Map a service-level error onto its API counterpart.

    Unknown kinds fall back to ``400 Bad Request``.

    :param exc: Error raised by a service.
    :returns: API error carrying the same client-safe message.
    """
    status = KIND_STATUS.get(exc.kind, HTTPStatus.BAD_REQUEST)
    return APIError(exc.message, status_code=status, kind=exc.kind)


def _respond(err: Err, *, exc_info: bool = False) -> tuple[Response, int]:
    """Log the failure at a level matching its class and render it."""
    level = log.error if err.status >= 500 else log.warning
    level(
        "request.failed: kind=%s status=%s msg=%s path=%s",
        err.kind,
        err.status,
        err.message,
        request.path if request else None,
        extra={"kind": err.kind, "status": err.status},
        exc_info=exc_info,
    )
    return err.to_response(), err.status


def init_app(app: Flask) -> None:
    """
    Attach JSON error handlers to the Flask app.

    Notes
    -----
    - 4xx are logged as warnings without tracebacks.
    - 5xx are logged as errors; unexpected ones carry ``exc_info``.
    """

    @app.errorhandler(ServiceError)
    def handle_service_error(err: ServiceError):
        api_err = translate_service_error(err)
        # InternalError already logged its cause where it was raised
        return _respond(api_err.to_err())

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        status = int(err.code or HTTPStatus.INTERNAL_SERVER_ERROR)
        message = (err.description or HTTPStatus(status).phrase).strip()
        if status == HTTPStatus.NOT_FOUND and request:
            message = f"Route '{request.path}' not found"
        return _respond(Err(status=status, message=message, kind="http"))

    @app.errorhandler(MarshmallowValidationError)
    def handle_validation_error(err: Any):
        messages = getattr(err, "messages", None)
        fields = ", ".join(sorted(messages)) if isinstance(messages, dict) else ""
        message = f"Invalid fields: {fields}" if fields else "Validation failed"
        return _respond(Err(status=HTTPStatus.BAD_REQUEST, message=message, kind="validation"))

    @app.errorhandler(IntegrityError)
    def handle_integrity_error(err: Any):
        # Do not leak raw DB error to clients
        return _respond(
            Err(status=HTTPStatus.CONFLICT, message="Resource conflict", kind="conflict"),
            exc_info=True,
        )

    @app.errorhandler(OperationalError)
    def handle_operational_error(err: Any):
        return _respond(
            Err(
                status=HTTPStatus.SERVICE_UNAVAILABLE,
                message="Service temporarily unavailable",
                kind="unavailable",
            ),
            exc_info=True,
        )

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception):
        # Unexpected server-side error; never leak internal details
        return _respond(
            Err(
                status=HTTPStatus.INTERNAL_SERVER_ERROR,
                message="Unexpected error",
                kind="internal",
            ),
            exc_info=True,
        )


def register_jwt_handlers(jwt_manager: Any) -> None:
    """
    Render ``flask-jwt-extended`` authentication failures as error envelopes.

    :param jwt_manager: The application's :class:`flask_jwt_extended.JWTManager`.
    """

    def _unauthorized(message: str) -> tuple[Response, int]:
        return _respond(Err(status=HTTPStatus.UNAUTHORIZED, message=message, kind="auth"))

    @jwt_manager.unauthorized_loader
    def _missing_token(reason: str):
        return _unauthorized("Authentication required")

    @jwt_manager.invalid_token_loader
    def _invalid_token(reason: str):
        return _unauthorized("Invalid access token")

    @jwt_manager.expired_token_loader
    def _expired_token(jwt_header: dict[str, Any], jwt_payload: dict[str, Any]):
        return _unauthorized("Access token has expired")

    @jwt_manager.revoked_token_loader
    def _revoked_token(jwt_header: dict[str, Any], jwt_payload: dict[str, Any]):
        return _unauthorized("Access token has been revoked")

    @jwt_manager.needs_fresh_token_loader
    def _stale_token(jwt_header: dict[str, Any], jwt_payload: dict[str, Any]):
        return _unauthorized("Fresh access token required")

    @jwt_manager.user_lookup_error_loader
    def _unknown_user(jwt_header: dict[str, Any], jwt_payload: dict[str, Any]):
        return _unauthorized("Unknown user")
