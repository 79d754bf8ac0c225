"""Value objects passed between the contact service and its collaborators"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class IssuedToken:
    """A freshly generated verification token and the moment it stops working."""
    token: str
    expires_at: datetime


@dataclass(frozen=True)
class OutgoingEmail:
    """A rendered email ready for the mail gateway.

    Attributes:
        to: Recipient address
        subject: Subject line
        html: HTML body
        reply_to: Optional Reply-To address
        from_name: Optional sender display name (address comes from config)
    """
    to: str
    subject: str
    html: str
    reply_to: Optional[str] = None
    from_name: Optional[str] = None


@dataclass
class ContactSubmission:
    """Raw contact form input. Any field may be missing."""
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    message: Optional[str] = None


class SubmissionOutcome(str, Enum):
    """Which branch of the submission flow ran."""
    NEW_SUBMITTER = "new_submitter"
    UNVERIFIED_RESUBMISSION = "unverified_resubmission"
    VERIFIED_SUBMITTER = "verified_submitter"

    @property
    def awaiting_verification(self) -> bool:
        return self is not SubmissionOutcome.VERIFIED_SUBMITTER


@dataclass(frozen=True)
class SubmissionResult:
    outcome: SubmissionOutcome
    message: str


@dataclass(frozen=True)
class VerificationResult:
    """Summary of a successful verification.

    Attributes:
        submitter_email: Email that is now verified
        notified: Messages whose admin notification was sent
        failed: Messages whose admin notification could not be sent
        message: Text returned to the client
    """
    submitter_email: str
    notified: int
    failed: int
    message: str
