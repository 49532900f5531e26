"""Infrastructure exceptions for storage operations.

Storage errors extend NoticeboardException so presentation can map them
to HTTP responses consistently.
"""

from noticeboard.domain.exceptions import NoticeboardException


class StorageException(NoticeboardException):
    """Base exception for storage operations."""


class StorageUploadError(StorageException):
    """File upload failed (disk, network or backend error)."""

    retryable = True

    def __init__(self, file_path: str, reason: str) -> None:
        super().__init__(
            f"Failed to upload file: {file_path}",
            "STORAGE_UPLOAD_ERROR",
            {"file_path": file_path, "reason": reason},
        )


class StoragePermissionError(StorageException):
    """Storage reference resolves outside the storage root."""

    def __init__(self, file_path: str, operation: str) -> None:
        super().__init__(
            f"Permission denied for {operation}: {file_path}",
            "STORAGE_PERMISSION_ERROR",
            {"file_path": file_path, "operation": operation},
        )
