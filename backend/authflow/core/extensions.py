"""Global Flask extension instances and initialization helpers."""

from __future__ import annotations

from datetime import timedelta

from flask import Flask
from flask_jwt_extended import JWTManager
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import MetaData

# Global naming convention for all constraints
convention = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=convention)

# Global singletons (import-safe)
db: SQLAlchemy = SQLAlchemy(session_options={"autoflush": False}, metadata=metadata)
migrate = Migrate(render_as_batch=True)
jwt = JWTManager()


def init_app(app: Flask) -> None:
    """Initialize SQLAlchemy, migrations, JWT verification and session collaborators.

    Parameters
    ----------
    app: flask.Flask
        Application used to bind extension instances. This call imports the
        :mod:`authflow.models` package to ensure SQLAlchemy metadata is ready
        for migrations.

    Notes
    -----
    The signing secret is read from the config exactly once, here, and handed
    to the token provider. Services never look it up themselves.
    """
    db.init_app(app)

    # Ensure models are imported so Alembic sees metadata
    from authflow import models as _models  # noqa: F401

    migrate.init_app(app, db)
    jwt.init_app(app)

    from authflow.core.errors import register_jwt_handlers

    register_jwt_handlers(jwt)

    from authflow.infra.jwt.jwt_token_provider import JWTTokenProvider
    from authflow.services.auth.dto import AuthTokenConfig

    app.extensions["token_provider"] = JWTTokenProvider(
        secret=app.config["JWT_SECRET_KEY"],
        algorithm=app.config.get("JWT_ALGORITHM", "HS256"),
    )
    app.extensions["token_config"] = AuthTokenConfig(
        access_expires=timedelta(minutes=int(app.config["ACCESS_TOKEN_EXPIRES_MINUTES"])),
        refresh_expires=timedelta(days=int(app.config["REFRESH_TOKEN_EXPIRES_DAYS"])),
    )
    app.extensions["media_uploader"] = build_media_uploader(app)


def build_media_uploader(app: Flask):
    """Return the media uploader selected by ``MEDIA_BACKEND``.

    :raises RuntimeError: For an unknown backend name.
    """
    backend = str(app.config.get("MEDIA_BACKEND", "minio")).strip().lower()
    if backend == "memory":
        from authflow.services._shared.ports.media_uploader import InMemoryMediaUploader

        return InMemoryMediaUploader(base_url=app.config.get("MEDIA_PUBLIC_BASE_URL", ""))
    if backend == "minio":
        from authflow.infra.storage.minio_media_uploader import MinioMediaUploader

        return MinioMediaUploader.from_config(app.config)
    raise RuntimeError(f"Unknown MEDIA_BACKEND {backend!r}")
