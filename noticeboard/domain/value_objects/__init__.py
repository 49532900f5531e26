"""Domain value objects (immutable, self-validating)."""

from noticeboard.domain.value_objects.core import Attachment

__all__ = ["Attachment"]
