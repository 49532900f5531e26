"""Core: config, limiter, exception handlers, and application bootstrap."""

from noticeboard.core.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
