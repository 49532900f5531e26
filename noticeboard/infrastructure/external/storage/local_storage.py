"""Local filesystem storage with path validation and atomic writes."""

from __future__ import annotations

import hashlib
import os
import tempfile
from pathlib import Path
from typing import Any

import aiofiles

from noticeboard.infrastructure.exceptions import (
    StoragePermissionError,
    StorageUploadError,
)


class LocalStorageService:
    """Local filesystem storage with atomic writes and path traversal protection.

    Paths are validated against storage_root. Writes use temp file + rename.
    Files are served by the application's static mount at base_url.
    """

    def __init__(self, storage_root: str, base_url: str) -> None:
        """Initialize local storage.

        Args:
            storage_root: Base directory for all files.
            base_url: Public URL prefix the storage root is served at.
        """
        self.storage_root = Path(storage_root).resolve()
        self.base_url = base_url.rstrip("/")
        self.storage_root.mkdir(parents=True, exist_ok=True, mode=0o750)

    def _get_full_path(self, storage_ref: str) -> Path:
        """Resolve and validate path under storage_root. Raises StoragePermissionError if traversal."""
        full_path = (self.storage_root / storage_ref).resolve()
        try:
            full_path.relative_to(self.storage_root)
        except ValueError as e:
            raise StoragePermissionError(storage_ref, "path_validation") from e
        return full_path

    def public_url(self, storage_ref: str) -> str:
        return f"{self.base_url}/{storage_ref}"

    async def upload(
        self,
        file_data: bytes,
        storage_ref: str,
        content_type: str,
        metadata: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        """Write file_data atomically (temp file + rename)."""
        target_path = self._get_full_path(storage_ref)
        try:
            target_path.parent.mkdir(parents=True, exist_ok=True, mode=0o750)
            temp_fd, temp_path = tempfile.mkstemp(
                dir=target_path.parent,
                prefix=".tmp_",
                suffix=target_path.suffix,
            )
            os.close(temp_fd)
            try:
                async with aiofiles.open(temp_path, "wb") as f:
                    await f.write(file_data)
                os.chmod(temp_path, 0o640)
                os.replace(temp_path, target_path)
            finally:
                if Path(temp_path).exists():
                    os.unlink(temp_path)
        except OSError as e:
            raise StorageUploadError(storage_ref, str(e)) from e
        return {
            "storage_ref": storage_ref,
            "size": len(file_data),
            "checksum": hashlib.sha256(file_data).hexdigest(),
            "content_type": content_type,
            "url": self.public_url(storage_ref),
        }
