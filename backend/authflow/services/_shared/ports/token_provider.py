from __future__ import annotations

from datetime import timedelta
from typing import Any, Protocol


class TokenProvider(Protocol):
    """Port for minting and decoding signed session tokens."""

    def create_access_token(
        self,
        *,
        identity: str,
        additional_claims: dict[str, Any] | None = None,
        expires_delta: timedelta,
        fresh: bool = False,
    ) -> str: ...

    def create_refresh_token(
        self,
        *,
        identity: str,
        expires_delta: timedelta,
    ) -> str: ...

    def decode(self, token: str) -> dict[str, Any]: ...


class StubTokenProvider(TokenProvider):
    """Deterministic token provider used in unit tests."""

    def __init__(self) -> None:
        self._seq = 0
        self._issued: dict[str, dict[str, Any]] = {}
        self.fail_with: Exception | None = None

    def _mk(
        self,
        *,
        identity: str,
        ttype: str,
        additional_claims: dict[str, Any] | None = None,
        fresh: bool | None = None,
    ) -> str:
        if self.fail_with is not None:
            raise self.fail_with
        self._seq += 1
        token = f"{ttype}.{identity}.{self._seq}"
        payload: dict[str, Any] = {"sub": identity, "type": ttype, "jti": f"jti-{self._seq}"}
        if additional_claims:
            payload.update(additional_claims)
        if fresh is not None:
            payload["fresh"] = bool(fresh)
        self._issued[token] = payload
        return token

    def create_access_token(
        self,
        *,
        identity: str,
        additional_claims: dict[str, Any] | None = None,
        expires_delta: timedelta,
        fresh: bool = False,
    ) -> str:
        return self._mk(
            identity=identity,
            ttype="access",
            additional_claims=additional_claims,
            fresh=fresh,
        )

    def create_refresh_token(self, *, identity: str, expires_delta: timedelta) -> str:
        return self._mk(identity=identity, ttype="refresh")

    def decode(self, token: str) -> dict[str, Any]:
        return self._issued[token]
