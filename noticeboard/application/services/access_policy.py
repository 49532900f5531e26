"""Access policy: which role grants which capability.

Pure lookups over a fixed table; no I/O. The table is the only place role
names are compared against capabilities.
"""

from __future__ import annotations

from noticeboard.domain.enums import Capability, Role
from noticeboard.domain.exceptions import AuthorizationException

_GRANTS: dict[Capability, frozenset[Role]] = {
    Capability.PUBLISH: frozenset({Role.MASTER, Role.ADMIN}),
    Capability.VIEW_USERS: frozenset({Role.MASTER, Role.ADMIN}),
    Capability.ARCHIVE_ANNOUNCEMENTS: frozenset({Role.MASTER, Role.ADMIN}),
    Capability.VIEW_ANNOUNCEMENTS: frozenset({Role.MASTER, Role.ADMIN, Role.USER}),
    Capability.MANAGE_OWN_PROFILE: frozenset({Role.MASTER, Role.ADMIN, Role.USER}),
    Capability.COMPLETE_ROLE_SELECTION: frozenset(Role),
}


class AccessPolicy:
    """Evaluates capabilities for a role."""

    def evaluate(self, role: Role, capability: Capability) -> bool:
        """Return True if role grants capability."""
        return role in _GRANTS.get(capability, frozenset())

    def require(self, role: Role, capability: Capability) -> None:
        """Raise AuthorizationException if role does not grant capability."""
        if not self.evaluate(role, capability):
            raise AuthorizationException(role=role.value, capability=capability.value)

    def capabilities_for(self, role: Role) -> frozenset[Capability]:
        """Return every capability granted to role."""
        return frozenset(cap for cap, roles in _GRANTS.items() if role in roles)


access_policy = AccessPolicy()
