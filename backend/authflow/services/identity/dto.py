"""
Public-safe projection of a user.

Data Transfer Objects (DTOs) isolate the service layer from ORM models,
ensuring clear input/output contracts. Nothing here ever carries the
password hash or the stored refresh token.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True, slots=True)
class UserPublicOut:
    """
    Output DTO for user data safe to return to clients.

    :param id: User identifier.
    :type id: str
    :param username: Normalized username.
    :type username: str
    :param email: Normalized email.
    :type email: str
    :param full_name: Display name.
    :type full_name: str
    :param avatar_url: Public URL of the avatar.
    :type avatar_url: str
    :param cover_image_url: Public URL of the cover image, ``""`` when none.
    :type cover_image_url: str
    :param created_at: Creation timestamp.
    :type created_at: datetime | None
    :param updated_at: Last update timestamp.
    :type updated_at: datetime | None
    """

    id: str
    username: str
    email: str
    full_name: str
    avatar_url: str
    cover_image_url: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None


def to_user_public(user: Any) -> UserPublicOut:
    """
    Map an ORM ``User`` to :class:`UserPublicOut`.

    :param user: ORM user instance.
    :type user: :class:`authflow.models.user.User`
    :returns: Public-safe DTO.
    :rtype: :class:`UserPublicOut`
    """
    return UserPublicOut(
        id=user.id,
        username=user.username,
        email=user.email,
        full_name=user.full_name,
        avatar_url=user.avatar_url,
        cover_image_url=user.cover_image_url or "",
        created_at=user.created_at,
        updated_at=user.updated_at,
    )
