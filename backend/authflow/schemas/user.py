"""User resource schemas."""

from __future__ import annotations

from marshmallow import Schema, fields


class UserPublicSchema(Schema):
    """Public representation of a user; no password hash, no refresh token."""

    id = fields.String(required=True)
    username = fields.String(required=True)
    email = fields.String(required=True)
    full_name = fields.String(data_key="fullName", required=True)
    avatar_url = fields.String(data_key="avatarUrl", required=True)
    cover_image_url = fields.String(data_key="coverImageUrl")
    created_at = fields.DateTime(data_key="createdAt", allow_none=True)
    updated_at = fields.DateTime(data_key="updatedAt", allow_none=True)
