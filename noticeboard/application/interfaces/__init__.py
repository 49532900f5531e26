"""Application ports (Protocols implemented by infrastructure)."""

from noticeboard.application.interfaces.repositories import (
    IAnnouncementRepository,
    IProfileRepository,
    IRoleStore,
)
from noticeboard.application.interfaces.services import (
    IAnnouncementAnalyzer,
    IIdentityProvider,
    IStorageService,
)

__all__ = [
    "IAnnouncementAnalyzer",
    "IAnnouncementRepository",
    "IIdentityProvider",
    "IProfileRepository",
    "IRoleStore",
    "IStorageService",
]
