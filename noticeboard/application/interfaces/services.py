"""Service interfaces (ports) for the application layer.

Protocols define contracts for external collaborators (DIP).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from noticeboard.application.dtos.analysis import AnnouncementAnalysis
    from noticeboard.application.dtos.user import Identity


# AI analysis interface
class IAnnouncementAnalyzer(Protocol):
    """Protocol for summarizing and classifying announcement content."""

    async def analyze(self, title: str, content: str) -> AnnouncementAnalysis:
        """Return summary, category and priority. Raises ExternalServiceException subclasses."""


# Identity provider interface
class IIdentityProvider(Protocol):
    """Protocol for resolving a bearer token to an identity."""

    async def get_identity(self, access_token: str) -> Identity:
        """Return the identity for the token. Raises AuthenticationException when rejected."""


# Object storage interface
class IStorageService(Protocol):
    """Protocol for attachment object storage."""

    async def upload(
        self,
        file_data: bytes,
        storage_ref: str,
        content_type: str,
        metadata: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        """Store bytes under storage_ref. Returns storage_ref, size, checksum, url."""
