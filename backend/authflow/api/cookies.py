"""HTTP cookie helpers for session token transport."""

from __future__ import annotations

from typing import Any

from flask import Response, current_app

COOKIE_PATH = "/"


def _cookie_options() -> dict[str, Any]:
    return {
        "httponly": True,
        "secure": bool(current_app.config.get("AUTH_COOKIE_SECURE", True)),
        "samesite": current_app.config.get("AUTH_COOKIE_SAMESITE", "Lax"),
        "path": COOKIE_PATH,
    }


def _cookie_names() -> tuple[str, str]:
    config = current_app.config
    return (
        config.get("JWT_ACCESS_COOKIE_NAME", "accessToken"),
        config.get("JWT_REFRESH_COOKIE_NAME", "refreshToken"),
    )


def set_session_cookies(response: Response, access_token: str, refresh_token: str) -> None:
    """Attach both tokens as ``HttpOnly`` cookies living as long as the tokens."""
    access_name, refresh_name = _cookie_names()
    token_cfg = current_app.extensions["token_config"]
    options = _cookie_options()
    response.set_cookie(
        access_name,
        access_token,
        max_age=int(token_cfg.access_expires.total_seconds()),
        **options,
    )
    response.set_cookie(
        refresh_name,
        refresh_token,
        max_age=int(token_cfg.refresh_expires.total_seconds()),
        **options,
    )


def clear_session_cookies(response: Response) -> None:
    """Expire both session cookies with the attributes used to set them."""
    options = _cookie_options()
    for name in _cookie_names():
        response.delete_cookie(name, **options)
