"""Role verification: checks the PIN for a requested role and records the selection."""

from __future__ import annotations

import hmac
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from noticeboard.application.dtos.role import RoleVerificationResult
from noticeboard.domain.enums import Role
from noticeboard.domain.exceptions import ValidationException
from noticeboard.shared.telemetry.logging import get_logger
from noticeboard.shared.telemetry.tracing import traced

if TYPE_CHECKING:
    from noticeboard.application.dtos.user import Identity
    from noticeboard.application.interfaces.repositories import (
        IProfileRepository,
        IRoleStore,
    )
    from noticeboard.core.config import Settings

logger = get_logger(__name__)


@dataclass(frozen=True)
class RoleSecrets:
    """PINs required for the privileged roles. repr hides the values."""

    master: str = field(repr=False)
    admin: str = field(repr=False)

    @classmethod
    def from_settings(cls, settings: Settings) -> RoleSecrets:
        return cls(
            master=settings.master_pin.get_secret_value(),
            admin=settings.admin_pin.get_secret_value(),
        )

    def secret_for(self, role: Role) -> str | None:
        """Return the PIN the role requires, or None when it requires none."""
        if role == Role.MASTER:
            return self.master
        if role == Role.ADMIN:
            return self.admin
        return None


def _credential_matches(expected: str, supplied: str) -> bool:
    """Exact, constant-time comparison. An empty configured secret never matches."""
    if not expected:
        return False
    return hmac.compare_digest(expected.encode("utf-8"), supplied.encode("utf-8"))


class RoleVerificationService:
    """Verifies a role request and, on success, replaces the caller's role."""

    def __init__(
        self,
        role_store: IRoleStore,
        secrets: RoleSecrets,
        profile_repo: IProfileRepository | None = None,
    ) -> None:
        self.role_store = role_store
        self.secrets = secrets
        self.profile_repo = profile_repo

    @traced("role_verification.verify")
    async def verify(
        self,
        identity: Identity,
        requested_role: Role,
        credential: str = "",
    ) -> RoleVerificationResult:
        """Check credential for requested_role; write the role only when it matches.

        Returns:
            RoleVerificationResult(success=True, role) after the role is stored,
            or RoleVerificationResult(success=False) with no write on mismatch.

        Raises:
            ValidationException: requested_role is not assignable.
            StoreUnavailableException: transient store failure.
        """
        if requested_role not in Role.assignable():
            raise ValidationException(
                f"Role '{requested_role.value}' cannot be requested", field="requested_role"
            )

        expected = self.secrets.secret_for(requested_role)
        if expected is not None and not _credential_matches(expected, credential or ""):
            logger.warning(
                "Role verification failed: identity=%s requested_role=%s",
                identity.id,
                requested_role.value,
            )
            return RoleVerificationResult(success=False)

        await self.role_store.set_role(identity.id, requested_role)
        if self.profile_repo is not None:
            await self.profile_repo.ensure_profile(
                identity.id, identity.email, identity.display_name
            )
        logger.info(
            "Role verified: identity=%s role=%s", identity.id, requested_role.value
        )
        return RoleVerificationResult(success=True, role=requested_role)
