"""Convenience exports for application schemas."""

from __future__ import annotations

from .auth import LoginResponseSchema, LoginSchema, RegisterSchema
from .user import UserPublicSchema

__all__ = [
    "LoginSchema",
    "LoginResponseSchema",
    "RegisterSchema",
    "UserPublicSchema",
]
