"""
UserRegistrationService
=======================

Process-level service that registers a new identity:

- Rejects blank or malformed identity fields before touching the store
  or the media uploader.
- Refuses usernames/emails already taken (pre-check plus the unique
  constraints, which catch concurrent registrations).
- Uploads the avatar (required) and cover image (optional) only once the
  identity is known to be free.
- Persists the user and returns its public projection.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from authflow.models.user import User
from authflow.repositories.user import UserRepository
from authflow.services._shared.base import BaseService, ServiceContext
from authflow.services._shared.errors import (
    ConflictError,
    InternalError,
    ValidationError,
)
from authflow.services._shared.ports.media_uploader import (
    MediaFile,
    MediaUploader,
    MediaUploadError,
)
from authflow.services.identity.dto import UserPublicOut, to_user_public
from authflow.services.registration.dto import UserRegistrationIn

log = logging.getLogger(__name__)

AVATAR_FOLDER = "avatars"
COVER_FOLDER = "covers"


class UserRegistrationService(BaseService):
    """Orchestrates the user registration process."""

    def __init__(self, *, uploader: MediaUploader, ctx: ServiceContext | None = None) -> None:
        """
        :param uploader: Media store for avatar and cover images.
        :param ctx: Optional request-scoped context.
        """
        super().__init__(ctx=ctx)
        self.uploader = uploader

    def register(self, dto: UserRegistrationIn) -> UserPublicOut:
        """
        Register a user.

        :param dto: Registration input.
        :type dto: :class:`UserRegistrationIn`
        :returns: Public projection of the stored user.
        :rtype: :class:`UserPublicOut`
        :raises ValidationError: On a blank field, a missing avatar, a failed
            avatar upload or a value the model rejects.
        :raises ConflictError: When the username or email is already in use.
        :raises InternalError: When the stored user cannot be read back.
        """
        required = (dto.full_name, dto.email, dto.username, dto.password)
        if any(self.is_blank(value) for value in required):
            raise ValidationError("All fields are required")
        # Model checks run here, before any upload can leave an orphan
        user = self._build_user(dto)

        with self.ro_uow() as uow:
            repo: UserRepository = uow.users
            if repo.find_by_identifier(username=user.username, email=user.email) is not None:
                raise ConflictError("User already exists")

        if not self._present(dto.avatar):
            raise ValidationError("Avatar file is required")
        avatar_url = self._upload_avatar(dto.avatar)
        cover_image_url = self._upload_cover(dto.cover_image)

        try:
            user.avatar_url = avatar_url
            user.cover_image_url = cover_image_url
            with self.rw_uow() as uow:
                repo_rw: UserRepository = uow.users
                repo_rw.add(user)
                user_id = user.id
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc
        except IntegrityError as exc:
            # Lost a race against a concurrent registration
            raise ConflictError("User already exists") from exc

        with self.ro_uow() as uow:
            created = uow.users.get(user_id)
            if created is None:
                raise InternalError("Something went wrong while registering the user")
            public = to_user_public(created)

        log.info("user.registered: user_id=%s", user_id, extra={"user_id": user_id})
        return public

    # ------------------------------------------------------------------ #
    # Validation
    # ------------------------------------------------------------------ #

    @staticmethod
    def _build_user(dto: UserRegistrationIn) -> User:
        """Run the model validators on a transient user; media URLs come later."""
        try:
            return User(
                full_name=dto.full_name,
                email=dto.email,
                username=dto.username,
                password=dto.password,  # model setter hashes
            )
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc

    # ------------------------------------------------------------------ #
    # Media
    # ------------------------------------------------------------------ #

    @staticmethod
    def _present(media: MediaFile | None) -> bool:
        return media is not None and media.size > 0

    def _upload_avatar(self, media: MediaFile) -> str:
        try:
            return self.uploader.upload(media, folder=AVATAR_FOLDER)
        except MediaUploadError as exc:
            log.warning("user.avatar_upload_failed: err=%s", exc)
            raise ValidationError("Avatar file is required") from exc

    def _upload_cover(self, media: MediaFile | None) -> str:
        if not self._present(media):
            return ""
        try:
            return self.uploader.upload(media, folder=COVER_FOLDER)
        except MediaUploadError as exc:
            log.warning("user.cover_upload_failed: err=%s", exc)
            return ""
