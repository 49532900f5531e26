"""S3-compatible object storage (AWS S3, MinIO, etc.)."""

from __future__ import annotations

import asyncio
import hashlib
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from noticeboard.infrastructure.exceptions import StorageUploadError


class S3StorageService:
    """S3-compatible storage with server-side encryption.

    Uses boto3 (sync) via asyncio.to_thread for async API. Compatible with
    AWS S3, MinIO, DigitalOcean Spaces. Objects must be publicly readable
    (bucket policy) for the returned URL to work.
    """

    def __init__(
        self,
        bucket: str,
        region: str = "us-east-1",
        endpoint_url: str | None = None,
        access_key: str | None = None,
        secret_key: str | None = None,
        public_base_url: str | None = None,
    ) -> None:
        """Initialize S3 client.

        Args:
            bucket: Bucket name.
            region: AWS region.
            endpoint_url: Custom endpoint (MinIO/Spaces).
            access_key: Optional; uses env/IAM if not set.
            secret_key: Optional.
            public_base_url: URL prefix for objects; defaults to the bucket's virtual-host URL.
        """
        self.bucket = bucket
        self.region = region
        self.public_base_url = (
            public_base_url.rstrip("/")
            if public_base_url
            else f"https://{bucket}.s3.{region}.amazonaws.com"
        )
        extra = {} if endpoint_url is None else {"endpoint_url": endpoint_url}
        self._client = boto3.client(
            "s3",
            region_name=region,
            aws_access_key_id=access_key,
            aws_secret_access_key=secret_key,
            **extra,
        )

    def public_url(self, storage_ref: str) -> str:
        return f"{self.public_base_url}/{storage_ref}"

    async def upload(
        self,
        file_data: bytes,
        storage_ref: str,
        content_type: str,
        metadata: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        """Put the object (in a worker thread)."""
        checksum = hashlib.sha256(file_data).hexdigest()
        meta = {"sha256": checksum}
        if metadata:
            for k, v in metadata.items():
                meta[k.lower().replace("_", "-")] = v

        def _put() -> None:
            self._client.put_object(
                Bucket=self.bucket,
                Key=storage_ref,
                Body=file_data,
                ContentType=content_type,
                ServerSideEncryption="AES256",
                Metadata=meta,
            )

        try:
            await asyncio.to_thread(_put)
        except (ClientError, BotoCoreError) as e:
            raise StorageUploadError(storage_ref, str(e)) from e
        return {
            "storage_ref": storage_ref,
            "size": len(file_data),
            "checksum": checksum,
            "content_type": content_type,
            "url": self.public_url(storage_ref),
        }
