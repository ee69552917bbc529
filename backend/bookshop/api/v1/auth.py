"""Authentication endpoints using the service layer."""

from __future__ import annotations

from flask import Blueprint, request

from bookshop.api.deps import auth_service, json_response, timing
from bookshop.schemas import LoginSchema, TokenResponseSchema
from bookshop.services.auth import LoginIn

bp = Blueprint("auth", __name__)

login_schema = LoginSchema()
token_schema = TokenResponseSchema()


@bp.post("/login")
@timing
def login():
    """Authenticate credentials and issue an access token."""

    data = login_schema.load(request.get_json(silent=True) or {})
    token = auth_service().login(LoginIn(username=data["username"], password=data["password"]))
    body = {"data": token_schema.dump(token)}
    return json_response(body)
