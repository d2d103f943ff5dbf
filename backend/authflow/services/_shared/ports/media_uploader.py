"""Port for storing user-supplied media (avatar and cover images)."""

from __future__ import annotations

import posixpath
from dataclasses import dataclass, field
from typing import BinaryIO, Protocol
from uuid import uuid4


class MediaUploadError(Exception):
    """Raised by uploaders when the remote store rejects or loses an upload."""


@dataclass(frozen=True, slots=True)
class MediaFile:
    """
    An uploaded file, detached from the web framework.

    :param filename: Client-supplied name, used only for its extension.
    :param content_type: MIME type reported by the client.
    :param stream: Readable binary stream positioned at the start.
    :param size: Length in bytes.
    """

    filename: str
    content_type: str
    stream: BinaryIO
    size: int

    @property
    def extension(self) -> str:
        return posixpath.splitext(self.filename or "")[1].lower()


def object_key(media: MediaFile, folder: str) -> str:
    """Return ``<folder>/<uuid4><ext>``; client filenames never reach the store."""
    return f"{folder.strip('/')}/{uuid4().hex}{media.extension}"


class MediaUploader(Protocol):
    """Store a file and return its public URL."""

    def upload(self, media: MediaFile, *, folder: str) -> str: ...


@dataclass
class InMemoryMediaUploader(MediaUploader):
    """Process-local uploader keeping bytes in a dict keyed by object key."""

    base_url: str = "memory://media"
    objects: dict[str, bytes] = field(default_factory=dict)
    fail_folders: set[str] = field(default_factory=set)

    def upload(self, media: MediaFile, *, folder: str) -> str:
        if folder in self.fail_folders:
            raise MediaUploadError(f"Upload to {folder!r} rejected")
        key = object_key(media, folder)
        self.objects[key] = media.stream.read()
        return f"{self.base_url.rstrip('/')}/{key}"
