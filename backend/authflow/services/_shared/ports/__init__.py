"""
authflow.services._shared.ports
===============================

Collection of *ports* (hexagonal interfaces) the services depend on.

Modules
-------
- :mod:`token_provider`:
    Defines :class:`~.TokenProvider`, the abstraction for signing and decoding
    session tokens.

- :mod:`media_uploader`:
    Defines :class:`~.MediaUploader` and :class:`~.MediaFile`, the abstraction
    for storing avatar and cover images.

Concrete adapters live under ``authflow.infra``.
"""

from __future__ import annotations

from .media_uploader import (
    InMemoryMediaUploader,
    MediaFile,
    MediaUploader,
    MediaUploadError,
)
from .token_provider import StubTokenProvider, TokenProvider

__all__ = [
    "TokenProvider",
    "StubTokenProvider",
    "MediaUploader",
    "MediaFile",
    "MediaUploadError",
    "InMemoryMediaUploader",
]
