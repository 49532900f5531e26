"""Domain value objects for the noticeboard.

Value objects are immutable types that represent domain concepts with
self-validation. They have no identity, only value.
"""

from dataclasses import dataclass
from typing import Any

from noticeboard.domain.exceptions import ValidationException

ATTACHMENT_NAME_MAX_LENGTH = 255


@dataclass(frozen=True)
class Attachment:
    """File stored in object storage and referenced by an announcement.

    Only the returned URL, size, name and MIME type are kept; the bytes
    live in object storage.
    """

    name: str
    url: str
    size: int
    type: str

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValidationException("Attachment name is required", field="attachments.name")
        if len(self.name) > ATTACHMENT_NAME_MAX_LENGTH:
            raise ValidationException(
                f"Attachment name must not exceed {ATTACHMENT_NAME_MAX_LENGTH} characters",
                field="attachments.name",
            )
        if not self.url.startswith(("http://", "https://")):
            raise ValidationException("Attachment URL must be http(s)", field="attachments.url")
        if self.size < 0:
            raise ValidationException("Attachment size must be >= 0", field="attachments.size")

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON shape stored on the announcement row."""
        return {"name": self.name, "url": self.url, "size": self.size, "type": self.type}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Attachment":
        """Build from the stored JSON shape."""
        return cls(
            name=str(data.get("name", "")),
            url=str(data.get("url", "")),
            size=int(data.get("size", 0)),
            type=str(data.get("type", "application/octet-stream")),
        )
