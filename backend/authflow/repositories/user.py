"""User repository: identity lookups and refresh-token persistence."""

from __future__ import annotations

from typing import cast

from sqlalchemy import or_, select, update

from authflow.models.user import User
from authflow.repositories.base import BaseRepository


def normalize_identifier(value: str | None) -> str | None:
    """Trim and lowercase a username/email; blank values become ``None``."""
    if value is None:
        return None
    v = value.strip().lower()
    return v or None


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    It NEVER issues tokens; it only stores what the token issuer hands it.
    """

    model = User

    # ---------------------------- Lookup helpers ----------------------------

    def find_by_identifier(
        self,
        *,
        username: str | None = None,
        email: str | None = None,
    ) -> User | None:
        """Fetch the user whose username OR email matches.

        Both values are normalized before comparison. When neither is given
        the lookup short-circuits to ``None``.

        :param username: Candidate username.
        :type username: str | None
        :param email: Candidate email.
        :type email: str | None
        :returns: Matching user or ``None``.
        :rtype: User | None
        """
        clauses = []
        norm_username = normalize_identifier(username)
        norm_email = normalize_identifier(email)
        if norm_username:
            clauses.append(User.username == norm_username)
        if norm_email:
            clauses.append(User.email == norm_email)
        if not clauses:
            return None
        stmt = select(User).where(or_(*clauses)).limit(1)
        result = self.session.execute(stmt).scalars().first()
        return cast(User | None, result)

    # ---------------------------- Session token ----------------------------

    def set_refresh_token(self, user_id: str, token: str | None) -> int:
        """Overwrite the stored refresh token in one ``UPDATE`` statement.

        The write is keyed on the primary key only and bypasses the ORM
        ``@validates`` hooks: token rotation must succeed even when other
        columns hold values the validators would reject today. Concurrent
        writers race with last-write-wins semantics.

        Objects already loaded in the session are synchronized in place.

        :param user_id: Target user id.
        :type user_id: str
        :param token: New refresh token, or ``None`` to clear it.
        :type token: str | None
        :returns: Number of rows updated (``0`` when the user does not exist).
        :rtype: int
        """
        stmt = update(User).where(User.id == user_id).values(refresh_token=token)
        result = self.session.execute(stmt)
        return int(result.rowcount or 0)

    def clear_refresh_token(self, user_id: str) -> int:
        """Drop the stored refresh token. :returns: rows updated."""
        return self.set_refresh_token(user_id, None)
