"""Health check endpoint."""

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, current_app
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from authflow.api.deps import timing
from authflow.api.envelope import Ok
from authflow.core.extensions import db

bp = Blueprint("health", __name__)


@bp.get("/healthcheck")
@timing
def healthcheck():
    """Return application and database health information."""

    db_status = "ok"
    try:
        db.session.execute(text("SELECT 1"))
    except SQLAlchemyError:
        current_app.logger.exception("healthcheck.db_error")
        db.session.rollback()
        db_status = "fail"
    version = current_app.config.get("APP_VERSION", "dev")
    return Ok(
        status=HTTPStatus.OK,
        data={"db": db_status, "version": version},
        message="Service is up and running",
    ).to_response()
