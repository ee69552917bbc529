"""Liveness endpoint including a database round trip."""

from __future__ import annotations

from flask import Blueprint, current_app
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from bookshop.api.deps import json_response, timing
from bookshop.core.extensions import db

bp = Blueprint("health", __name__)


@bp.get("/health")
@timing
def healthcheck():
    """Report ``{"status", "db", "version"}``; ``db`` is ``"fail"`` when unreachable."""

    try:
        db.session.execute(text("SELECT 1"))
        database = "ok"
    except SQLAlchemyError:
        current_app.logger.exception("Health check could not reach the database")
        database = "fail"
    return json_response(
        {"status": "ok", "db": database, "version": current_app.config.get("APP_VERSION", "dev")}
    )
