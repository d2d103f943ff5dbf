"""MinIO-backed media uploader."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from minio import Minio
from minio.error import MinioException, S3Error
from urllib3.exceptions import HTTPError

from authflow.services._shared.ports.media_uploader import (
    MediaFile,
    MediaUploader,
    MediaUploadError,
    object_key,
)

log = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"


class MinioMediaUploader(MediaUploader):
    """
    Store uploads in a MinIO (S3-compatible) bucket.

    Objects are written under ``<folder>/<uuid4><ext>`` and the returned URL is
    ``<public_base_url>/<bucket>/<key>``.

    :param client: Configured :class:`minio.Minio` client.
    :param bucket: Target bucket, created on first upload when missing.
    :param public_base_url: Base URL clients use to fetch objects.
    """

    def __init__(self, client: Minio, *, bucket: str, public_base_url: str) -> None:
        self.client = client
        self.bucket = bucket
        self.public_base_url = public_base_url.rstrip("/")
        self._bucket_ready = False

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> MinioMediaUploader:
        """Build the uploader from ``MINIO_*`` / ``MEDIA_PUBLIC_BASE_URL`` settings."""
        client = Minio(
            config["MINIO_ENDPOINT"],
            access_key=config["MINIO_ACCESS_KEY"],
            secret_key=config["MINIO_SECRET_KEY"],
            secure=bool(config.get("MINIO_SECURE", False)),
        )
        return cls(
            client,
            bucket=config["MINIO_BUCKET"],
            public_base_url=config["MEDIA_PUBLIC_BASE_URL"],
        )

    def ensure_bucket(self) -> None:
        """Create the bucket when it does not exist yet."""
        if self._bucket_ready:
            return
        if not self.client.bucket_exists(self.bucket):
            try:
                self.client.make_bucket(self.bucket)
            except S3Error as exc:
                # Another worker may have created it in between
                if exc.code not in {"BucketAlreadyOwnedByYou", "BucketAlreadyExists"}:
                    raise
        self._bucket_ready = True

    def upload(self, media: MediaFile, *, folder: str) -> str:
        """
        Upload ``media`` and return its public URL.

        :raises MediaUploadError: When MinIO rejects the request or is unreachable.
        """
        key = object_key(media, folder)
        try:
            self.ensure_bucket()
            self.client.put_object(
                self.bucket,
                key,
                data=media.stream,
                length=media.size,
                content_type=media.content_type or DEFAULT_CONTENT_TYPE,
            )
        except (MinioException, HTTPError, OSError) as exc:
            log.warning("media.upload_failed: bucket=%s key=%s err=%s", self.bucket, key, exc)
            raise MediaUploadError(f"Could not store {key}") from exc
        return f"{self.public_base_url}/{self.bucket}/{key}"
