"""Application services."""

from noticeboard.application.services.access_policy import AccessPolicy, access_policy
from noticeboard.application.services.role_verification_service import (
    RoleSecrets,
    RoleVerificationService,
)

__all__ = ["AccessPolicy", "RoleSecrets", "RoleVerificationService", "access_policy"]
