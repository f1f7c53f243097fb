"""Widget-Relay exception hierarchy.

Every error raised below the HTTP boundary is one of these; the application
factory registers a handler that turns them into ``{success: false, ...}``
JSON bodies with the matching status code.
"""

from typing import Any


class RelayError(Exception):
    """Base exception for all Widget-Relay errors."""

    status_code = 500

    def __init__(
        self,
        message: str = "",
        code: str = "RELAY_ERROR",
        details: Any = None,
    ):
        self.message = message
        self.code = code
        self.details = details
        super().__init__(message)


class ValidationError(RelayError):
    """Raised when request input is malformed or incomplete."""

    status_code = 400

    def __init__(self, message: str = "Validation error", details: Any = None):
        super().__init__(message, code="VALIDATION_ERROR", details=details)


class AuthError(RelayError):
    """Raised when no valid organization context accompanies a request."""

    status_code = 401

    def __init__(self, message: str = "Organization not found"):
        super().__init__(message, code="UNAUTHORIZED")


class ForbiddenError(RelayError):
    """Raised when an admin credential does not match."""

    status_code = 403

    def __init__(self, message: str = "Invalid admin key"):
        super().__init__(message, code="FORBIDDEN")


class NotFoundError(RelayError):
    """Raised when a configuration is absent (or disabled, on public paths)."""

    status_code = 404

    def __init__(self, message: str = "Chat configuration not found"):
        super().__init__(message, code="NOT_FOUND")


class UpstreamError(RelayError):
    """Raised when the external workflow endpoint could not produce a reply."""

    status_code = 500

    def __init__(
        self,
        message: str = "Failed to get response from AI service",
        details: Any = None,
    ):
        super().__init__(message, code="UPSTREAM_ERROR", details=details)


class InternalError(RelayError):
    """Raised for unexpected store or relay failures."""

    status_code = 500

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message, code="INTERNAL_ERROR")


class SlugExhaustedError(InternalError):
    """Raised when no free public slug was found within the retry budget."""

    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__(f"Could not allocate a unique public slug after {attempts} attempts")
