"""Contact domain module for ContactFlow.

Implements the contact form submission flow and the email verification flow
on top of two ports: a record store and a mail gateway.
"""

from .errors import ContactError, InternalError, InvalidTokenError, ValidationError
from .models import (
    ContactSubmission,
    IssuedToken,
    OutgoingEmail,
    SubmissionOutcome,
    SubmissionResult,
    VerificationResult,
)
from .ports import (
    DuplicateSubmitterError,
    MailDeliveryError,
    MailGatewayPort,
    RecordStoreError,
    RecordStorePort,
)
from .service import ContactService
from .tokens import TokenIssuer

__all__ = [
    "ContactError",
    "InternalError",
    "InvalidTokenError",
    "ValidationError",
    "ContactSubmission",
    "IssuedToken",
    "OutgoingEmail",
    "SubmissionOutcome",
    "SubmissionResult",
    "VerificationResult",
    "DuplicateSubmitterError",
    "MailDeliveryError",
    "MailGatewayPort",
    "RecordStoreError",
    "RecordStorePort",
    "ContactService",
    "TokenIssuer",
]
