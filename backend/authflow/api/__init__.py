"""HTTP surface of the session service.

Routes live in versioned sub-packages; each exposes ``API_VERSION`` and a
``REGISTRY`` of ``(blueprint, relative_prefix)`` pairs mounted below
``API_BASE_PREFIX``.
"""

from __future__ import annotations

from flask import Flask


def join_prefix(*segments: str) -> str:
    """Join URL segments into one absolute prefix, ignoring blank ones.

    >>> join_prefix("/api/", "v1", "")
    '/api/v1'
    """
    parts = [segment.strip("/") for segment in segments if segment and segment.strip("/")]
    return "/" + "/".join(parts)


def init_app(app: Flask) -> None:
    """Mount the v1 blueprints, e.g. ``/api/v1/users``."""

    from authflow.api.v1 import API_VERSION, REGISTRY

    version_root = join_prefix(app.config.get("API_BASE_PREFIX", "/api"), API_VERSION)
    for blueprint, relative in REGISTRY:
        app.register_blueprint(blueprint, url_prefix=join_prefix(version_root, relative))


__all__ = ["init_app", "join_prefix"]
