"""JSON log lines on stdout, each tagged with the request id being served."""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any
from uuid import uuid4

from flask import Flask, g, has_request_context, request

REQUEST_ID_HEADER = "X-Request-ID"

# Inbound headers trusted as a correlation id, in priority order
_INBOUND_ID_HEADERS = (REQUEST_ID_HEADER, "X-Correlation-ID")

# ``extra=`` keys copied into the JSON payload when present on a record
_CONTEXT_FIELDS = ("operation", "user_id", "book_id", "amount", "endpoint", "elapsed_ms")


class JSONFormatter(logging.Formatter):
    """Serialize a record as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "time": datetime.fromtimestamp(record.created, UTC).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", None),
        }
        entry.update(
            {field: getattr(record, field) for field in _CONTEXT_FIELDS if hasattr(record, field)}
        )
        if record.exc_info:
            entry["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


class RequestIdFilter(logging.Filter):
    """Stamp ``record.request_id``; ``None`` outside a request."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "request_id"):
            record.request_id = ensure_request_id() if has_request_context() else None
        return True


def ensure_request_id() -> str:
    """
    Return the correlation id of the current request.

    The first call in a request adopts an inbound correlation header or mints
    a UUID4 and caches it on :data:`flask.g`. Outside a request every call
    returns a fresh UUID4.

    :returns: Correlation id.
    :rtype: str
    """
    if not has_request_context():
        return str(uuid4())
    cached = g.get("request_id")
    if cached:
        return cached
    inbound = next(
        (request.headers[name] for name in _INBOUND_ID_HEADERS if request.headers.get(name)),
        None,
    )
    g.request_id = inbound or str(uuid4())
    return g.request_id


def configure_logging(level: str | int = "INFO") -> None:
    """Route every logger through a single stdout handler emitting JSON.

    :param level: Level name (case-insensitive) or numeric level.
    :type level: str | int
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter())
    handler.addFilter(RequestIdFilter())

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(level.upper() if isinstance(level, str) else level)


def init_app(app: Flask) -> None:
    """Echo the correlation id on every response."""

    app.logger.addFilter(RequestIdFilter())

    @app.before_request
    def _bind_request_id() -> None:
        ensure_request_id()

    @app.after_request
    def _echo_request_id(response):
        response.headers.setdefault(REQUEST_ID_HEADER, ensure_request_id())
        return response


__all__ = [
    "REQUEST_ID_HEADER",
    "JSONFormatter",
    "RequestIdFilter",
    "configure_logging",
    "ensure_request_id",
    "init_app",
]
