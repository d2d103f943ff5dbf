"""
TokenIssuer
===========

Mints the access/refresh pair for a user and persists the refresh token.

The access token is never stored. The refresh token overwrites whatever the
user row held before (one active session per user) through a single
``UPDATE ... WHERE id = :id``. Concurrent logins for the same user race with
last-write-wins semantics.
"""

from __future__ import annotations

import logging

from authflow.repositories.user import UserRepository
from authflow.services._shared.base import BaseService, ServiceContext
from authflow.services._shared.errors import InternalError
from authflow.services._shared.ports.token_provider import TokenProvider
from authflow.services.auth.dto import AuthTokenConfig, TokenPairOut

log = logging.getLogger(__name__)


class TokenIssuer(BaseService):
    """Issue and persist session tokens for an existing user."""

    def __init__(
        self,
        *,
        token_provider: TokenProvider,
        token_cfg: AuthTokenConfig | None = None,
        ctx: ServiceContext | None = None,
    ) -> None:
        """
        :param token_provider: Adapter holding the signing secret.
        :param token_cfg: Access/Refresh expiry configuration.
        :param ctx: Optional request-scoped context.
        """
        super().__init__(ctx=ctx)
        self.tokens = token_provider
        self.cfg = token_cfg or AuthTokenConfig()

    def issue(self, user_id: str) -> TokenPairOut:
        """
        Mint both tokens and store the refresh token on the user row.

        :param user_id: Identifier of an existing user.
        :returns: The freshly minted pair.
        :raises InternalError: On any failure (unknown user, signing error,
            lost write, database error). The cause is chained and logged.
        """
        try:
            with self.rw_uow() as uow:
                repo: UserRepository = uow.users
                user = repo.get(user_id)
                if user is None:
                    raise LookupError(f"User {user_id} not found")

                access = self.tokens.create_access_token(
                    identity=user.id,
                    additional_claims={"username": user.username, "email": user.email},
                    expires_delta=self.cfg.access_expires,
                    fresh=True,
                )
                refresh = self.tokens.create_refresh_token(
                    identity=user.id,
                    expires_delta=self.cfg.refresh_expires,
                )

                if repo.set_refresh_token(user.id, refresh) != 1:
                    raise RuntimeError(f"Refresh token for user {user_id} was not stored")
        except Exception as exc:
            log.exception(
                "token.issue_failed: user_id=%s",
                user_id,
                extra={"user_id": user_id},
            )
            raise InternalError("Token issuance failed") from exc

        return TokenPairOut(access_token=access, refresh_token=refresh)
