"""Adapters for external services: identity provider, AI gateway, object storage."""
