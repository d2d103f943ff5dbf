"""User model: identity, credentials and the single active session."""

from __future__ import annotations

from typing import Any

from sqlalchemy import String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, validates

from authflow.core import security
from authflow.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin


class User(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Authentication identity and session record.

    Fields
    ------
    username : str
        Public handle. Stored normalized (lowercase, trimmed). Unique.
    email : str
        Login email. Stored normalized (lowercase, trimmed). Unique.
    full_name : str
        Display name.
    password_hash : str
        Salted hash (write-only setter via ``password``).
    avatar_url : str
        URL of the uploaded avatar. Required.
    cover_image_url : str
        URL of the uploaded cover image, ``""`` when none was given.
    refresh_token : str | None
        The one active refresh token; ``None`` when logged out. Written only
        through :meth:`UserRepository.set_refresh_token`, never via the ORM
        validators.

    Notes
    -----
    Access tokens are stateless and deliberately have no column.
    """

    __tablename__ = "users"

    # Columns
    username: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    email: Mapped[str] = mapped_column(String(254), nullable=False, index=True)
    full_name: Mapped[str] = mapped_column(String(100), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    avatar_url: Mapped[str] = mapped_column(String(512), nullable=False)
    cover_image_url: Mapped[str] = mapped_column(String(512), nullable=False, default="")
    refresh_token: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Constraints
    __table_args__ = (
        UniqueConstraint("email", name="uq_users_email"),
        UniqueConstraint("username", name="uq_users_username"),
    )

    # -------------------- Password API --------------------
    @property
    def password(self) -> Any:  # pragma: no cover - explicit write-only contract
        """
        Disallow reading passwords.

        :raises AttributeError: Always, to ensure password is write-only.
        """
        raise AttributeError("Password is write-only.")

    @password.setter
    def password(self, raw: str) -> None:
        """
        Hash and set the password.

        :param raw: Plain text password to hash.
        :type raw: str
        :raises ValueError: If ``raw`` is empty.
        """
        self.password_hash = security.hash_password(raw)

    def verify_password(self, raw: str | None) -> bool:
        """
        Verify a password against the stored hash.

        :param raw: Plain text password candidate.
        :type raw: str | None
        :returns: ``True`` if it matches; otherwise ``False``.
        :rtype: bool
        """
        return security.verify_password(self.password_hash, raw)

    # -------------------- Validators --------------------
    @staticmethod
    def _bounded(value: str, limit: int, label: str) -> str:
        if len(value) > limit:
            raise ValueError(f"{label} must be at most {limit} characters.")
        return value

    @validates("email")
    def _normalize_email(self, key: str, value: str) -> str:
        """
        Normalize and sanity-check the email.

        :raises ValueError: If email is missing, malformed or too long.
        """
        if not value or not isinstance(value, str):
            raise ValueError("Email is required.")
        v = value.strip().lower()
        if "@" not in v or "." not in v.split("@")[-1]:
            raise ValueError("Email format looks invalid.")
        return self._bounded(v, 254, "Email")

    @validates("username")
    def _normalize_username(self, key: str, value: str) -> str:
        """
        Lowercase and trim the username.

        Usernames may not contain ``@`` so a login identifier can never match
        one user's username and another user's email.

        :raises ValueError: If username is blank, contains ``@`` or is too long.
        """
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Username is required.")
        v = value.strip().lower()
        if "@" in v:
            raise ValueError("Username cannot contain '@'.")
        return self._bounded(v, 50, "Username")

    @validates("full_name")
    def _normalize_full_name(self, key: str, value: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Full name is required.")
        return self._bounded(value.strip(), 100, "Full name")

    @validates("avatar_url")
    def _require_avatar(self, key: str, value: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Avatar URL is required.")
        return self._bounded(value.strip(), 512, "Avatar URL")
