# authflow/services/auth/service.py
from __future__ import annotations

import logging

from authflow.repositories.user import UserRepository, normalize_identifier
from authflow.services._shared.base import BaseService, ServiceContext
from authflow.services._shared.errors import (
    AuthError,
    InternalError,
    NotFoundError,
    ValidationError,
)
from authflow.services.auth.dto import LoginIn, LoginOut, LogoutIn
from authflow.services.identity.dto import to_user_public
from authflow.services.tokens.service import TokenIssuer

log = logging.getLogger(__name__)


class AuthService(BaseService):
    """
    Session lifecycle service (login / logout).

    Login verifies credentials and delegates minting and persistence of the
    token pair to :class:`TokenIssuer`. Logout drops the stored refresh token;
    access tokens are stateless and simply expire.
    """

    def __init__(self, *, issuer: TokenIssuer, ctx: ServiceContext | None = None) -> None:
        """
        Initialize the service with its dependencies.

        :param issuer: Token issuer shared with the rest of the app.
        :param ctx: Optional request-scoped context.
        """
        super().__init__(ctx=ctx)
        self.issuer = issuer

    # ------------------------------------------------------------------ #
    # Login
    # ------------------------------------------------------------------ #

    def login(self, dto: LoginIn) -> LoginOut:
        """
        Authenticate credentials and issue a fresh token pair.

        :param dto: Login input.
        :returns: Public user plus the token pair.
        :raises ValidationError: If no identifier or no password was given.
        :raises NotFoundError: If no user matches the identifier.
        :raises AuthError: If the password does not match.
        :raises InternalError: If issuance fails.
        """
        username, email = self._resolve_identifier(dto)
        if self.is_blank(dto.password):
            raise ValidationError("Password is required")

        with self.ro_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.find_by_identifier(username=username, email=email)
            if user is None:
                raise NotFoundError("User does not exist")
            if not user.verify_password(dto.password):
                log.info(
                    "session.login_rejected: user_id=%s",
                    user.id,
                    extra={"user_id": user.id},
                )
                raise AuthError("Invalid credentials")
            user_id = user.id

        pair = self.issuer.issue(user_id)

        with self.ro_uow() as uow:
            fresh = uow.users.get(user_id)
            if fresh is None:
                raise InternalError("Something went wrong while logging in")
            public = to_user_public(fresh)

        log.info("session.login: user_id=%s", user_id, extra={"user_id": user_id})
        return LoginOut(
            user=public,
            access_token=pair.access_token,
            refresh_token=pair.refresh_token,
        )

    # ------------------------------------------------------------------ #
    # Logout
    # ------------------------------------------------------------------ #

    def logout(self, dto: LogoutIn) -> None:
        """
        Clear the stored refresh token of the authenticated user.

        :param dto: Logout input carrying the verified identity.
        :raises NotFoundError: If the user no longer exists.
        """
        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            if repo.clear_refresh_token(dto.user_id) == 0:
                raise NotFoundError("User does not exist")

        log.info("session.logout: user_id=%s", dto.user_id, extra={"user_id": dto.user_id})

    # ------------------------------------------------------------------ #
    # Utilities
    # ------------------------------------------------------------------ #

    @staticmethod
    def _resolve_identifier(dto: LoginIn) -> tuple[str | None, str | None]:
        """
        Return the ``(username, email)`` pair to look up.

        A bare ``identifier`` is matched against both columns.

        :raises ValidationError: When every identifier field is blank.
        """
        identifier = normalize_identifier(dto.identifier)
        if identifier:
            return identifier, identifier
        username = normalize_identifier(dto.username)
        email = normalize_identifier(dto.email)
        if not username and not email:
            raise ValidationError("Username or email is required")
        return username, email
