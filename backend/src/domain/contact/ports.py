"""Contact flow ports - Domain interfaces for the record store and mail gateway.

Adapters implement these interfaces; ContactService only ever talks to the
ports, which lets tests swap in in-memory fakes.

Architecture: Hexagonal - Port interfaces in domain layer
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from models.message import Message
from models.submitter import Submitter

from .models import OutgoingEmail


class RecordStoreError(Exception):
    """Base exception for record store operations."""
    pass


class DuplicateSubmitterError(RecordStoreError):
    """A submitter with this email already exists.

    Raised when two first-time submissions for the same email race and the
    loser hits the uniqueness constraint.
    """

    def __init__(self, email: str):
        self.email = email
        super().__init__("Submitter already exists for this email")


class MailDeliveryError(Exception):
    """The mail gateway could not hand the message to the transport."""
    pass


class RecordStorePort(ABC):
    """Port interface for persisting submitters and messages.

    Every write is durable when the call returns; there are no multi-call
    transactions. Implementations raise RecordStoreError (or a subclass) for
    any storage failure.
    """

    @abstractmethod
    def find_submitter_by_email(self, email: str) -> Optional[Submitter]:
        """Look up a submitter by exact (case-sensitive) email."""
        pass

    @abstractmethod
    def find_submitter_by_token(self, token: str, now: datetime) -> Optional[Submitter]:
        """Look up the submitter holding token whose expiry is after now.

        Returns None for unknown, expired and already-consumed tokens alike.
        """
        pass

    @abstractmethod
    def add_submitter(self, submitter: Submitter) -> Submitter:
        """Persist a new submitter.

        Raises:
            DuplicateSubmitterError: If the email is already taken
            RecordStoreError: On any other storage failure
        """
        pass

    @abstractmethod
    def save_submitter(self, submitter: Submitter) -> Submitter:
        """Persist changes made to an existing submitter."""
        pass

    @abstractmethod
    def consume_token(self, submitter: Submitter, token: str, now: datetime) -> bool:
        """Mark the submitter verified and clear the token, if it still holds it.

        The check and the update are one atomic step, so of several requests
        presenting the same token only one gets True.
        """
        pass

    @abstractmethod
    def add_message(self, submitter: Submitter, body: str) -> Message:
        """Append a message to the submitter's log."""
        pass

    @abstractmethod
    def list_messages(self, submitter: Submitter) -> List[Message]:
        """All messages ever recorded for the submitter, oldest first."""
        pass


class MailGatewayPort(ABC):
    """Port interface for outbound email.

    One call sends one message. There is no retry; a failure raises
    MailDeliveryError and the caller decides what to do with it.
    """

    @abstractmethod
    def send(self, email: OutgoingEmail) -> None:
        """Send a single email.

        Raises:
            MailDeliveryError: If the transport rejects or cannot be reached
        """
        pass
