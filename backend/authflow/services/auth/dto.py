# authflow/services/auth/dto.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta

from authflow.services.identity.dto import UserPublicOut

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class LoginIn:
    """
    Input DTO for login.

    Either ``identifier`` (matched against username OR email) or the
    individual ``username`` / ``email`` fields locate the account.

    :param password: Raw password (to be verified). Required.
    :type password: str | None
    :param identifier: Username or email.
    :type identifier: str | None
    :param username: Username, when sent on its own.
    :type username: str | None
    :param email: Email, when sent on its own.
    :type email: str | None
    """

    password: str | None
    identifier: str | None = None
    username: str | None = None
    email: str | None = None


@dataclass(frozen=True, slots=True)
class LogoutIn:
    """
    Input DTO for logout.

    :param user_id: Identity resolved from the verified access token.
    :type user_id: str
    """

    user_id: str


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class TokenPairOut:
    """
    Output DTO with access and refresh tokens.

    :param access_token: Encoded access JWT.
    :type access_token: str
    :param refresh_token: Encoded refresh JWT.
    :type refresh_token: str
    """

    access_token: str
    refresh_token: str


@dataclass(frozen=True, slots=True)
class LoginOut:
    """
    Output DTO of a successful login.

    :param user: Public projection of the authenticated user.
    :type user: :class:`UserPublicOut`
    :param access_token: Encoded access JWT.
    :type access_token: str
    :param refresh_token: Encoded refresh JWT (also stored on the user row).
    :type refresh_token: str
    """

    user: UserPublicOut
    access_token: str
    refresh_token: str


# ------------------------------ Config DTO -------------------------------- #


@dataclass(frozen=True, slots=True)
class AuthTokenConfig:
    """
    Token emission configuration.

    :param access_expires: Access token lifetime.
    :type access_expires: timedelta
    :param refresh_expires: Refresh token lifetime.
    :type refresh_expires: timedelta
    """

    access_expires: timedelta = timedelta(minutes=15)
    refresh_expires: timedelta = timedelta(days=10)
