"""Session-related Marshmallow schemas.

Input schemas are deliberately lenient: every field is optional so the
service layer owns the "required / non-blank" rules and their messages.
Both camelCase (``fullName``) and snake_case (``full_name``) keys load.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from marshmallow import EXCLUDE, Schema, fields, pre_load

from .user import UserPublicSchema


def _alias(data: Any, aliases: Mapping[str, str]) -> dict[str, Any]:
    """Copy snake_case keys onto their camelCase data keys when missing."""
    payload = dict(data or {})
    for snake, camel in aliases.items():
        if camel not in payload and snake in payload:
            payload[camel] = payload.pop(snake)
    return payload


class RegisterSchema(Schema):
    """Form fields for account registration (files travel separately)."""

    class Meta:
        unknown = EXCLUDE

    full_name = fields.String(data_key="fullName", load_default=None, allow_none=True)
    email = fields.String(load_default=None, allow_none=True)
    username = fields.String(load_default=None, allow_none=True)
    password = fields.String(load_default=None, allow_none=True)

    @pre_load
    def accept_snake_case(self, data: Any, **_: Any) -> dict[str, Any]:
        return _alias(data, {"full_name": "fullName"})


class LoginSchema(Schema):
    """Input payload for authenticating a user."""

    class Meta:
        unknown = EXCLUDE

    identifier = fields.String(load_default=None, allow_none=True)
    username = fields.String(load_default=None, allow_none=True)
    email = fields.String(load_default=None, allow_none=True)
    password = fields.String(load_default=None, allow_none=True)


class LoginResponseSchema(Schema):
    """Response payload of a successful login."""

    user = fields.Nested(UserPublicSchema, required=True)
    access_token = fields.String(data_key="accessToken", required=True)
    refresh_token = fields.String(data_key="refreshToken", required=True)
