"""Contact flow errors and their HTTP mapping.

Every error raised out of ContactService is a ContactError. The API layer
turns them into JSON bodies using status_code and error_code, so the service
stays free of FastAPI imports.
"""

from typing import Iterable, Optional


class ContactError(Exception):
    """Base class for errors surfaced at the contact handler boundary."""

    status_code: int = 500
    error_code: str = "contact_error"
    default_message: str = "Contact request failed"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ContactError):
    """Client omitted required input."""

    status_code = 400
    error_code = "validation_error"
    default_message = "Missing required fields"

    def __init__(self, missing_fields: Iterable[str] = (), message: Optional[str] = None):
        self.missing_fields = list(missing_fields)
        super().__init__(message)


class InvalidTokenError(ContactError):
    """Token is unknown, expired or already consumed."""

    status_code = 400
    error_code = "invalid_token"
    default_message = (
        "Invalid or expired verification token. "
        "Please submit the contact form again."
    )


class InternalError(ContactError):
    """Record store or mail gateway failure."""

    status_code = 500
    error_code = "internal_error"
    default_message = "An unexpected error occurred. Please try again later."
