"""
DTOs for UserRegistrationService.

Contracts for the self-registration flow: identity fields plus the avatar
and optional cover image to upload.
"""

from __future__ import annotations

from dataclasses import dataclass

from authflow.services._shared.ports.media_uploader import MediaFile

# --------------------------------------------------------------------------- #
# Input
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class UserRegistrationIn:
    """
    Input payload for the registration process.

    Values are passed through untouched; the service rejects blanks and the
    model normalizes (lowercase+trim) username and email.

    :param full_name: Display name.
    :type full_name: str | None
    :param email: Login email.
    :type email: str | None
    :param username: Public handle (unique).
    :type username: str | None
    :param password: Raw password (the model setter hashes it).
    :type password: str | None
    :param avatar: Avatar image. Required.
    :type avatar: :class:`MediaFile` | None
    :param cover_image: Optional cover image.
    :type cover_image: :class:`MediaFile` | None
    """

    full_name: str | None
    email: str | None
    username: str | None
    password: str | None
    avatar: MediaFile | None = None
    cover_image: MediaFile | None = None
