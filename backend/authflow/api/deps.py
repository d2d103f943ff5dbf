"""Shared API helpers for request parsing and cross-cutting concerns."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from typing import Any, TypeVar, cast

from flask import current_app, request
from flask_jwt_extended import get_jwt_identity, verify_jwt_in_request
from werkzeug.datastructures import FileStorage

from authflow.core.logger import bind_actor, ensure_request_id
from authflow.services._shared.base import ServiceContext
from authflow.services._shared.ports.media_uploader import MediaFile, MediaUploader
from authflow.services._shared.ports.token_provider import TokenProvider
from authflow.services.auth.dto import AuthTokenConfig
from authflow.services.tokens.service import TokenIssuer

F = TypeVar("F", bound=Callable[..., Any])


def require_auth(func: F) -> F:
    """Ensure the request carries a valid JWT access token (header or cookie).

    The token subject is bound to the request so later log lines carry it.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        verify_jwt_in_request(optional=False)
        bind_actor(current_user_id())
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def current_user_id() -> str:
    """Return the identity of the verified access token."""

    return str(get_jwt_identity())


def service_context(actor_id: str | None = None) -> ServiceContext:
    """Build the request-scoped context handed to services."""

    return ServiceContext(actor_id=actor_id, request_id=ensure_request_id())


def get_token_issuer(ctx: ServiceContext | None = None) -> TokenIssuer:
    """Build a token issuer from the collaborators wired at startup."""

    provider = cast(TokenProvider, current_app.extensions["token_provider"])
    token_cfg = cast(AuthTokenConfig, current_app.extensions["token_config"])
    return TokenIssuer(token_provider=provider, token_cfg=token_cfg, ctx=ctx)


def get_media_uploader() -> MediaUploader:
    """Return the media uploader selected by ``MEDIA_BACKEND``."""

    return cast(MediaUploader, current_app.extensions["media_uploader"])


def media_from_request(field: str) -> MediaFile | None:
    """Wrap an uploaded file as :class:`MediaFile`; missing or empty files yield ``None``."""

    storage: FileStorage | None = request.files.get(field)
    if storage is None or not storage.filename:
        return None
    stream = storage.stream
    stream.seek(0, 2)
    size = stream.tell()
    stream.seek(0)
    if size == 0:
        return None
    return MediaFile(
        filename=storage.filename,
        content_type=storage.mimetype or "application/octet-stream",
        stream=stream,
        size=size,
    )


def request_payload() -> dict[str, Any]:
    """Return the JSON body, falling back to form fields."""

    body = request.get_json(silent=True)
    if isinstance(body, dict):
        return body
    return request.form.to_dict()


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
