"""Service layer public API.

This package exposes the essential building blocks for the service layer so that
callers can import from :mod:`authflow.services` without knowing internal structure.

Re-exports
----------
- Base primitives (from ``authflow.services._shared.base``)
    * :class:`BaseService`
    * :class:`ServiceContext`

- Session services
    * :class:`TokenIssuer` (from ``authflow.services.tokens``)
    * :class:`AuthService` and its DTOs (from ``authflow.services.auth``)
    * :class:`UserRegistrationService` (from ``authflow.services.registration``)

- Identity DTOs (from ``authflow.services.identity``)
    * :class:`UserPublicOut`
"""

from __future__ import annotations

# Base primitives (service base + request-scoped context)
from ._shared.base import BaseService, ServiceContext
from .auth.dto import AuthTokenConfig, LoginIn, LoginOut, LogoutIn, TokenPairOut

# Session services
from .auth.service import AuthService
from .identity.dto import UserPublicOut
from .registration.dto import UserRegistrationIn
from .registration.service import UserRegistrationService
from .tokens.service import TokenIssuer

__all__ = [
    # Base
    "BaseService",
    "ServiceContext",
    # Auth
    "AuthService",
    "AuthTokenConfig",
    "LoginIn",
    "LoginOut",
    "LogoutIn",
    "TokenPairOut",
    "TokenIssuer",
    # Registration
    "UserRegistrationService",
    "UserRegistrationIn",
    # Identity
    "UserPublicOut",
]
