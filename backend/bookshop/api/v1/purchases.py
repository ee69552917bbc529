"""Purchase endpoints. The buyer is always the token subject."""

from __future__ import annotations

from flask import Blueprint, request

from bookshop.api.deps import (
    current_user_id,
    json_response,
    purchase_service,
    require_auth,
    timing,
)
from bookshop.schemas import PurchaseCreateSchema

bp = Blueprint("purchases", __name__)

purchase_schema = PurchaseCreateSchema()


@bp.post("")
@require_auth
@timing
def buy():
    """Buy a book with the authenticated user's balance."""

    payload = purchase_schema.load(request.get_json(silent=True) or {})
    user_id = current_user_id()
    purchase_service().buy(user_id, payload["book_id"])
    return json_response(
        {"data": {"purchased": True, "user_id": user_id, "book_id": payload["book_id"]}},
        status=201,
    )
