"""RFC 7807 (``application/problem+json``) responses for every API failure.

Service errors are translated by their :class:`ErrorKind`; anything the
service layer did not classify becomes an opaque 500. Bodies never carry
stack traces, SQL or internal identifiers, but always carry the request id.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from flask import Flask, Response, jsonify, request
from marshmallow import ValidationError as MarshmallowValidationError
from sqlalchemy.exc import IntegrityError, OperationalError
from werkzeug.exceptions import HTTPException

from bookshop.core.logger import ensure_request_id
from bookshop.services._shared.errors import ErrorKind, ServiceError

log = logging.getLogger(__name__)

SERVICE_ERROR_STATUS: dict[ErrorKind, tuple[int, str]] = {
    ErrorKind.NOT_FOUND: (HTTPStatus.NOT_FOUND, "not_found"),
    ErrorKind.INVALID_CREDENTIALS: (HTTPStatus.UNAUTHORIZED, "invalid_credentials"),
    ErrorKind.PRECONDITION_FAILED: (HTTPStatus.PRECONDITION_FAILED, "precondition_failed"),
    ErrorKind.CONFLICT: (HTTPStatus.CONFLICT, "conflict"),
    ErrorKind.OPERATION_FAILED: (HTTPStatus.INTERNAL_SERVER_ERROR, "operation_failed"),
}


def _code_for(status: int) -> str:
    """``404`` -> ``"not_found"``; unknown statuses map to ``"error"``."""
    try:
        return HTTPStatus(status).phrase.lower().replace(" ", "_").replace("-", "_")
    except ValueError:
        return "error"


def problem_response(
    status: int,
    detail: str,
    *,
    code: str | None = None,
    details: dict[str, Any] | None = None,
) -> tuple[Response, int]:
    """
    Build a problem+json response and log it (5xx at error level with traceback).

    :param status: HTTP status code.
    :type status: int
    :param detail: Client-safe summary.
    :type detail: str
    :param code: Stable machine-readable code; derived from ``status`` if omitted.
    :type code: str | None
    :param details: Extra client-safe structured data.
    :type details: dict[str, Any] | None
    :returns: ``(response, status)`` pair for Flask.
    :rtype: tuple[flask.Response, int]
    """
    status = int(status)
    body: dict[str, Any] = {
        "type": "about:blank",
        "title": HTTPStatus(status).phrase,
        "status": status,
        "detail": detail,
        "code": code or _code_for(status),
        "instance": request.path,
        "request_id": ensure_request_id(),
    }
    if details:
        body["details"] = details

    if status >= 500:
        log.error("%s %s: %s", status, body["code"], detail, exc_info=True)
    else:
        log.warning("%s %s: %s", status, body["code"], detail)

    resp = jsonify(body)
    resp.mimetype = "application/problem+json"
    return resp, status


class APIError(Exception):
    """
    Error raised by the HTTP layer itself.

    :param message: Client-safe description.
    :param status_code: HTTP status, ``400`` by default.
    :param code: Stable machine-readable code.
    :param details: Optional structured payload.
    """

    def __init__(
        self,
        message: str,
        status_code: int = HTTPStatus.BAD_REQUEST,
        code: str = "bad_request",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = int(status_code)
        self.code = code
        self.details = details or {}


class Unauthorized(APIError):
    """401 for a missing or unusable identity."""

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message, HTTPStatus.UNAUTHORIZED, "unauthorized")


def service_error_to_api_error(err: ServiceError) -> APIError:
    """
    Translate a service error by its kind. The message is kept as is, since
    service errors already carry only client-safe text.

    :param err: Error raised by a service.
    :type err: ServiceError
    :rtype: APIError
    """
    status, code = SERVICE_ERROR_STATUS.get(
        err.kind, SERVICE_ERROR_STATUS[ErrorKind.OPERATION_FAILED]
    )
    return APIError(str(err), status, code)


def init_app(app: Flask) -> None:
    """Register the problem+json handlers on ``app``."""

    @app.errorhandler(APIError)
    def _api_error(err: APIError):
        return problem_response(err.status_code, err.message, code=err.code, details=err.details)

    @app.errorhandler(ServiceError)
    def _service_error(err: ServiceError):
        return _api_error(service_error_to_api_error(err))

    @app.errorhandler(HTTPException)
    def _http_error(err: HTTPException):
        status = err.code or HTTPStatus.INTERNAL_SERVER_ERROR
        if status == HTTPStatus.NOT_FOUND:
            detail = f"Route '{request.path}' not found"
        else:
            detail = (err.description or HTTPStatus(status).phrase).strip()
        return problem_response(status, detail)

    @app.errorhandler(MarshmallowValidationError)
    def _validation_error(err: MarshmallowValidationError):
        return problem_response(
            HTTPStatus.UNPROCESSABLE_ENTITY,
            "Validation failed",
            code="validation_error",
            details={"errors": err.messages},
        )

    @app.errorhandler(IntegrityError)
    def _integrity_error(err: IntegrityError):
        # The driver message names tables and constraints
        log.error("IntegrityError outside a service", exc_info=err)
        return problem_response(HTTPStatus.CONFLICT, "Resource conflict", code="conflict")

    @app.errorhandler(OperationalError)
    def _operational_error(err: OperationalError):
        return problem_response(
            HTTPStatus.SERVICE_UNAVAILABLE, "Service temporarily unavailable"
        )

    @app.errorhandler(Exception)
    def _unexpected_error(err: Exception):
        return problem_response(
            HTTPStatus.INTERNAL_SERVER_ERROR, "Unexpected error", code="internal_server_error"
        )
