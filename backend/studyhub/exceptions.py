"""
Application exception hierarchy.

Services raise these; the handlers registered in main.py turn them into the
standard response envelope: {"success": false, "message": ...}.

    StudyHubError (base)          -> 500
    ├── ValidationError           -> 400
    ├── AuthenticationError       -> 401
    ├── ForbiddenError            -> 403
    ├── NotFoundError             -> 404
    ├── ConflictError             -> 409
    ├── PayloadTooLargeError      -> 413
    ├── ConfigurationError        -> 500
    └── DatabaseError             -> 500
"""

from typing import Any


class StudyHubError(Exception):
    """
    Base exception for all StudyHub application errors.

    Attributes:
        message:  Client-safe error description (returned in the response)
        context:  Extra debug info (logged, never returned)
    """

    status_code: int = 500
    default_message: str = "An unexpected error occurred"

    def __init__(self, message: str | None = None, context: dict[str, Any] | None = None):
        self.message = message or self.default_message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(StudyHubError):
    """Client input failed a business rule."""

    status_code = 400
    default_message = "Validation failed"

    def __init__(self, message: str | None = None, field: str | None = None):
        super().__init__(message, context={"field": field} if field else None)
        self.field = field


class AuthenticationError(StudyHubError):
    """Caller could not be identified."""

    status_code = 401
    default_message = "Authentication failed"


class ForbiddenError(StudyHubError):
    """Caller is identified but does not own the resource."""

    status_code = 403
    default_message = "You do not have permission to modify this resource"


class NotFoundError(StudyHubError):
    """Resource does not exist, or is not visible to the caller."""

    status_code = 404

    def __init__(self, resource: str = "Resource", resource_id: object | None = None):
        super().__init__(
            f"{resource} not found",
            context={"resource_id": str(resource_id)} if resource_id is not None else None,
        )
        self.resource = resource


class ConflictError(StudyHubError):
    """Request collides with existing state (e.g. duplicate email)."""

    status_code = 409
    default_message = "Resource already exists"


class PayloadTooLargeError(StudyHubError):
    """Text content exceeds the stored size limit."""

    status_code = 413

    def __init__(self, field: str, limit: int):
        super().__init__(
            f"{field} exceeds the maximum size of {limit} bytes",
            context={"field": field, "limit": limit},
        )
        self.field = field
        self.limit = limit


class ConfigurationError(StudyHubError):
    """Server is missing required configuration."""

    status_code = 500
    default_message = "Server misconfiguration"


class DatabaseError(StudyHubError):
    """A store operation failed. Details are logged, not returned."""

    status_code = 500
    default_message = "A database error occurred. Please try again later."
