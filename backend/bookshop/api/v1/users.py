"""User endpoints. Role-based access rules are enforced upstream."""

from __future__ import annotations

from flask import Blueprint, request

from bookshop.api.deps import (
    current_user_id,
    json_response,
    purchase_service,
    require_auth,
    timing,
    user_service,
)
from bookshop.schemas import (
    OwnedBookSchema,
    TransactionSchema,
    UserCreateSchema,
    UserRoleUpdateSchema,
    UserSchema,
)
from bookshop.services.users import UserCreateIn, UserRoleUpdateIn

bp = Blueprint("users", __name__)

user_schema = UserSchema()
user_list_schema = UserSchema(many=True)
user_create_schema = UserCreateSchema()
role_update_schema = UserRoleUpdateSchema()
owned_book_list_schema = OwnedBookSchema(many=True)
transaction_list_schema = TransactionSchema(many=True)


@bp.get("")
@require_auth
@timing
def list_users():
    """Return every user."""

    users = user_service().find_all()
    return json_response({"data": user_list_schema.dump(users)})


@bp.post("")
@require_auth
@timing
def create_user():
    """Create a new user."""

    payload = user_create_schema.load(request.get_json(silent=True) or {})
    user = user_service().create(UserCreateIn(**payload))
    return json_response({"data": user_schema.dump(user)}, status=201)


@bp.get("/<int:user_id>")
@require_auth
@timing
def get_user(user_id: int):
    """Return one user by id."""

    user = user_service().find_by_id(user_id)
    return json_response({"data": user_schema.dump(user)})


@bp.get("/by-username/<string:username>")
@require_auth
@timing
def get_user_by_username(username: str):
    """Return one user by username."""

    user = user_service().find_by_username(username)
    return json_response({"data": user_schema.dump(user)})


@bp.patch("/<int:user_id>/role")
@require_auth
@timing
def update_role(user_id: int):
    """Change the role of a user."""

    payload = role_update_schema.load(request.get_json(silent=True) or {})
    user = user_service().update_role(UserRoleUpdateIn(user_id=user_id, role=payload["role"]))
    return json_response({"data": user_schema.dump(user)})


@bp.delete("/<int:user_id>")
@require_auth
@timing
def delete_user(user_id: int):
    """Delete a user; ledger history is kept."""

    deleted = user_service().delete(user_id)
    return json_response({"data": {"deleted": deleted}})


@bp.get("/me/books")
@require_auth
@timing
def my_books():
    """Return the books owned by the authenticated user."""

    books = purchase_service().owned_books(current_user_id())
    return json_response({"data": owned_book_list_schema.dump(books)})


@bp.get("/me/transactions")
@require_auth
@timing
def my_transactions():
    """Return the ledger of the authenticated user."""

    entries = purchase_service().transactions(current_user_id())
    return json_response({"data": transaction_list_schema.dump(entries)})
