"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and should never import or depend
on Flask or HTTP. They serve as stable contracts between repositories,
domain models, and application services.

The translation to HTTP responses is handled by ``authflow/core/errors.py``.
"""

from __future__ import annotations

# --------------------------------------------------------------------------- #
# Base type
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - ``kind`` is a stable identifier the API layer maps to a status code.
    - ``message`` must be safe to show to clients.
    """

    kind = "error"
    default_message = "Service error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


# --------------------------------------------------------------------------- #
# Specific domain-level errors
# --------------------------------------------------------------------------- #


class ValidationError(ServiceError):
    """Malformed or missing input."""

    kind = "validation"
    default_message = "Invalid input"


class ConflictError(ServiceError):
    """Raised when an identity is already taken."""

    kind = "conflict"
    default_message = "Conflict"


class NotFoundError(ServiceError):
    """Raised when no matching entity exists."""

    kind = "not_found"
    default_message = "Resource not found"


class AuthError(ServiceError):
    """Raised when presented credentials do not match."""

    kind = "auth"
    default_message = "Invalid credentials"


class InternalError(ServiceError):
    """
    Raised for server-side failures (token issuance, lost writes).

    The underlying cause is chained (``raise ... from exc``) and logged where
    it is caught, but never part of :attr:`message`.
    """

    kind = "internal"
    default_message = "Internal error"
