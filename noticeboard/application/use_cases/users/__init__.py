"""User use cases."""

from noticeboard.application.use_cases.users.user_directory import UserDirectoryService

__all__ = ["UserDirectoryService"]
