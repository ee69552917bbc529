"""User resource schemas."""

from __future__ import annotations

from marshmallow import Schema, fields, validate

from bookshop.models.user import UserRole

_ROLES = [r.value for r in UserRole]


class UserCreateSchema(Schema):
    """Payload for creating a new user."""

    username = fields.String(required=True, validate=validate.Length(min=3, max=50))
    password = fields.String(required=True, validate=validate.Length(min=8, max=128))
    role = fields.String(load_default=UserRole.USER.value, validate=validate.OneOf(_ROLES))
    balance = fields.Integer(load_default=0, validate=validate.Range(min=0))


class UserRoleUpdateSchema(Schema):
    """Payload for changing a user's role."""

    role = fields.String(required=True, validate=validate.OneOf(_ROLES))


class UserSchema(Schema):
    """Public representation of a user entity."""

    id = fields.Integer(required=True)
    username = fields.String(required=True)
    balance = fields.Integer(required=True)
    role = fields.String(required=True)
    created_at = fields.DateTime(allow_none=True)
    updated_at = fields.DateTime(allow_none=True)
