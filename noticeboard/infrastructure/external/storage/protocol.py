"""Storage protocol: interface for attachment storage backends."""

from typing import Any, Protocol


class StorageProtocol(Protocol):
    """Backends store bytes under a storage_ref and expose them at a public URL."""

    async def upload(
        self,
        file_data: bytes,
        storage_ref: str,
        content_type: str,
        metadata: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        """Store file_data. Returns dict with storage_ref, size, checksum, url."""
        ...

    def public_url(self, storage_ref: str) -> str:
        """Public URL at which the stored object is served."""
        ...
