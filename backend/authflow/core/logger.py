"""JSON logging for the session service.

Every line is one JSON object on stdout. Inside a request it carries the
request id (taken from ``X-Request-ID`` / ``X-Correlation-ID`` or generated)
and, once an access token has been verified, the id of the authenticated
user, so a login or logout can be traced across services without logging
any credential.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from flask import Flask, g, has_request_context, request

REQUEST_ID_HEADER = "X-Request-ID"
CORRELATION_HEADERS = (REQUEST_ID_HEADER, "X-Correlation-ID")

#: ``extra={...}`` attributes copied into the payload. Credentials never are.
EXTRA_KEYS = ("endpoint", "elapsed_ms", "user_id", "kind", "status")


class JSONFormatter(logging.Formatter):
    """Render a record as a single JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "time": datetime.now(timezone.utc).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", None),
        }
        payload.update(
            (key, getattr(record, key)) for key in EXTRA_KEYS if hasattr(record, key)
        )
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class RequestContextFilter(logging.Filter):
    """Stamp ``request_id`` and the authenticated ``user_id`` onto records.

    An explicit ``extra={"user_id": ...}`` wins over the request actor.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if not has_request_context():
            record.request_id = None
            return True
        record.request_id = ensure_request_id()
        actor = g.get("actor_id")
        if actor is not None and not hasattr(record, "user_id"):
            record.user_id = actor
        return True


def ensure_request_id() -> str:
    """Return the request id of the current request, seeding it on first use.

    Outside a request a fresh id is returned on every call.
    """
    if not has_request_context():
        return str(uuid4())
    if "request_id" not in g:
        incoming = next(
            (request.headers[h] for h in CORRELATION_HEADERS if request.headers.get(h)),
            None,
        )
        g.request_id = incoming or str(uuid4())
    return g.request_id


def bind_actor(user_id: str) -> None:
    """Attach the verified user id to the current request's log lines."""
    g.actor_id = user_id


def configure_logging(level: str | int = "INFO") -> None:
    """Route the root logger to stdout as JSON at ``level``."""
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter())
    handler.addFilter(RequestContextFilter())
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level.upper() if isinstance(level, str) else level)


def init_app(app: Flask) -> None:
    """Seed a request id per request and echo it on every response."""

    app.logger.addFilter(RequestContextFilter())

    @app.before_request
    def _seed_request_context() -> None:
        # The test client reuses one app context, so reset per request
        g.pop("request_id", None)
        g.pop("actor_id", None)
        ensure_request_id()

    @app.after_request
    def _echo_request_id(response):
        response.headers.setdefault(REQUEST_ID_HEADER, ensure_request_id())
        return response


__all__ = [
    "REQUEST_ID_HEADER",
    "JSONFormatter",
    "RequestContextFilter",
    "bind_actor",
    "configure_logging",
    "ensure_request_id",
    "init_app",
]
