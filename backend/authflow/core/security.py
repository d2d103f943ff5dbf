"""Password hashing helpers.

Thin wrappers over :mod:`werkzeug.security` so the hashing scheme lives in one
place; salts are generated per hash by werkzeug.
"""

from __future__ import annotations

from werkzeug.security import check_password_hash, generate_password_hash


def hash_password(raw: str) -> str:
    """Return a salted hash of ``raw``.

    :raises ValueError: If ``raw`` is empty or not a string.
    """
    if not isinstance(raw, str) or not raw:
        raise ValueError("Password must be a non-empty string.")
    return generate_password_hash(raw)


def verify_password(password_hash: str | None, candidate: str | None) -> bool:
    """Compare ``candidate`` against a stored hash; empty inputs never match."""
    if not password_hash or not candidate:
        return False
    # ``check_password_hash`` is untyped; coerce for mypy.
    return bool(check_password_hash(password_hash, candidate))
