"""Identity provider adapter."""

from noticeboard.infrastructure.external.identity.provider_client import IdentityProviderClient

__all__ = ["IdentityProviderClient"]
