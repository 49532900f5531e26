"""DTOs for role use cases (no dependency on ORM)."""

from dataclasses import dataclass
from datetime import datetime

from noticeboard.domain.enums import Role


@dataclass(frozen=True)
class RoleAssignmentResult:
    """Stored role for one identity (result of get/set/list on the role store)."""

    identity_id: str
    role: Role
    assigned_at: datetime


@dataclass(frozen=True)
class RoleVerificationResult:
    """Outcome of a role selection attempt.

    role is the role now held on success and None on a credential mismatch.
    """

    success: bool
    role: Role | None = None
