# authflow/infra/jwt/jwt_token_provider.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any, cast
from uuid import uuid4

import jwt

from authflow.services._shared.ports import TokenProvider

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"

# Claims the provider owns; callers cannot override them through extra claims.
RESERVED_CLAIMS = frozenset({"sub", "type", "jti", "iat", "nbf", "exp", "fresh"})


@dataclass(frozen=True, slots=True)
class JWTTokenProvider(TokenProvider):
    """
    PyJWT adapter signing tokens with an explicitly injected secret.

    The produced payloads follow the claim layout ``flask-jwt-extended``
    expects (``sub``, ``type``, ``jti``, ``fresh``), so protected routes can
    verify access tokens with ``verify_jwt_in_request`` using the same secret.

    .. note::
       Needs no Flask app context; the secret is passed in once at startup.
    """

    secret: str
    algorithm: str = "HS256"

    def __post_init__(self) -> None:
        if not self.secret:
            raise ValueError("JWTTokenProvider requires a non-empty secret.")

    def _encode(
        self,
        *,
        identity: str,
        token_type: str,
        expires_delta: timedelta,
        claims: dict[str, Any] | None = None,
        fresh: bool | None = None,
    ) -> str:
        now = datetime.now(UTC)
        payload: dict[str, Any] = {
            key: value for key, value in (claims or {}).items() if key not in RESERVED_CLAIMS
        }
        payload.update(
            {
                "sub": str(identity),
                "type": token_type,
                "jti": str(uuid4()),
                "iat": now,
                "nbf": now,
                "exp": now + expires_delta,
            }
        )
        if fresh is not None:
            payload["fresh"] = fresh
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def create_access_token(
        self,
        *,
        identity: str,
        additional_claims: dict[str, Any] | None = None,
        expires_delta: timedelta,
        fresh: bool = False,
    ) -> str:
        return self._encode(
            identity=identity,
            token_type=ACCESS_TOKEN_TYPE,
            expires_delta=expires_delta,
            claims=additional_claims,
            fresh=fresh,
        )

    def create_refresh_token(self, *, identity: str, expires_delta: timedelta) -> str:
        return self._encode(
            identity=identity,
            token_type=REFRESH_TOKEN_TYPE,
            expires_delta=expires_delta,
        )

    def decode(self, token: str) -> dict[str, Any]:
        """
        Verify signature and expiry, then return the claims.

        :raises jwt.PyJWTError: On a bad signature, expired or malformed token.
        """
        return cast(
            dict[str, Any],
            jwt.decode(token, self.secret, algorithms=[self.algorithm]),
        )
