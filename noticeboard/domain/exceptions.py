"""Domain exceptions for the noticeboard.

Defines domain-level exceptions that represent business rule violations and
transient failures of collaborators. Presentation layer maps them to HTTP
responses in exception handlers using error_code; callers pick UI messaging
from error_code and retryable without string-matching.
"""

from typing import Any


class NoticeboardException(Exception):
    """Base exception for all noticeboard application errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
        retryable: Whether the caller may retry the same request later.
    """

    retryable: bool = False

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for API responses."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
            "retryable": self.retryable,
        }


class ValidationException(NoticeboardException):
    """Raised when input validation fails (e.g. empty title)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(NoticeboardException):
    """Raised when the bearer token is missing or rejected by the identity provider."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationException(NoticeboardException):
    """Raised when the caller's role does not grant the requested capability."""

    def __init__(
        self,
        role: str | None = None,
        capability: str | None = None,
        message: str = "Permission denied",
    ) -> None:
        """Initialize with optional role, capability, and message.

        Args:
            role: Role the caller holds (e.g. 'user', 'unassigned').
            capability: Capability that was denied (e.g. 'publish').
            message: Human-readable message; default used when role/capability omitted.
        """
        if role and capability:
            message = f"Permission denied: role '{role}' lacks '{capability}'"
        details: dict[str, Any] = {}
        if role:
            details["role"] = role
        if capability:
            details["capability"] = capability
        super().__init__(message, "PERMISSION_DENIED", details)


class CredentialException(NoticeboardException):
    """Raised when the PIN submitted for a privileged role does not match."""

    def __init__(self, requested_role: str) -> None:
        super().__init__(
            "Invalid credential for requested role",
            "INVALID_CREDENTIAL",
            {"requested_role": requested_role},
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize with success=false, the shape of a role selection result."""
        return {"success": False, **super().to_dict()}


class ResourceNotFoundException(NoticeboardException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'announcement').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class AnnouncementArchivedException(NoticeboardException):
    """Raised when modifying an announcement that has been archived."""

    def __init__(self, announcement_id: str) -> None:
        super().__init__(
            f"Announcement is archived: {announcement_id}",
            "ANNOUNCEMENT_ARCHIVED",
            {"announcement_id": announcement_id},
        )


class StoreUnavailableException(NoticeboardException):
    """Raised on transient database failure (connection, pool or statement timeout)."""

    retryable = True

    def __init__(self, reason: str | None = None) -> None:
        details = {"reason": reason} if reason else {}
        super().__init__("Data store is temporarily unavailable", "STORE_UNAVAILABLE", details)


class UpstreamUnavailableException(NoticeboardException):
    """Raised on transient failure of the identity provider or object storage."""

    retryable = True

    def __init__(self, service: str, reason: str | None = None) -> None:
        details: dict[str, Any] = {"service": service}
        if reason:
            details["reason"] = reason
        super().__init__(
            f"Upstream service unavailable: {service}",
            "UPSTREAM_UNAVAILABLE",
            details,
        )


class ExternalServiceException(NoticeboardException):
    """Base for AI gateway failures. Never fatal to announcement creation."""

    kind: str = "unavailable"

    def __init__(self, message: str, error_code: str, status_code: int | None = None) -> None:
        details: dict[str, Any] = {"kind": self.kind}
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(message, error_code, details)


class AnalysisRateLimitedException(ExternalServiceException):
    """AI gateway answered 429."""

    kind = "rate_limited"
    retryable = True

    def __init__(self) -> None:
        super().__init__("Rate limit exceeded. Please try again later.", "AI_RATE_LIMITED", 429)


class AnalysisQuotaExceededException(ExternalServiceException):
    """AI gateway answered 402 (workspace out of credits)."""

    kind = "quota_exceeded"

    def __init__(self) -> None:
        super().__init__(
            "Payment required. Please add credits to your workspace.",
            "AI_QUOTA_EXCEEDED",
            402,
        )


class AnalysisUnavailableException(ExternalServiceException):
    """AI gateway unreachable, timed out, misconfigured, or returned an unusable answer."""

    kind = "unavailable"
    retryable = True

    def __init__(self, reason: str, status_code: int | None = None) -> None:
        super().__init__(f"AI analysis unavailable: {reason}", "AI_UNAVAILABLE", status_code)
