"""In-memory collaborators for contact flow tests.

Provides fakes for the two contact ports plus a controllable clock:
- InMemoryContactStore: RecordStorePort backed by dicts, with failure injection
- RecordingMailGateway: MailGatewayPort that records every email sent
- MutableClock: callable returning a settable "now"

Usage:
    store = InMemoryContactStore()
    mailer = RecordingMailGateway()
    service = ContactService(store, mailer, TokenIssuer(), "admin@test.com", "https://site.test")
"""

import re
from datetime import datetime, timedelta
from typing import Callable, Dict, List, Optional, Set
from uuid import uuid4

from domain.contact.models import OutgoingEmail
from domain.contact.ports import (
    DuplicateSubmitterError,
    MailDeliveryError,
    MailGatewayPort,
    RecordStoreError,
    RecordStorePort,
)
from domain.contact.templates import ADMIN_NOTIFICATION_SUBJECT, VERIFICATION_SUBJECT
from models.message import Message
from models.submitter import Submitter

_TOKEN_IN_LINK = re.compile(r"verify-email\?token=([0-9a-f]+)")


class MutableClock:
    """Clock whose current time tests can set or advance."""

    def __init__(self, now: Optional[datetime] = None):
        self.now = now or datetime(2026, 1, 15, 12, 0, 0)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


class InMemoryContactStore(RecordStorePort):
    """Dict-backed record store.

    Attributes:
        fail_on: Method names that raise RecordStoreError when called
        simulate_race: When True, the next email lookup misses an existing
            submitter so the following insert hits the uniqueness check
    """

    def __init__(self):
        self.submitters: Dict[str, Submitter] = {}
        self.messages: List[Message] = []
        self.fail_on: Set[str] = set()
        self.simulate_race = False
        self._tick = 0

    def _check(self, method: str) -> None:
        if method in self.fail_on:
            raise RecordStoreError(f"{method} unavailable")

    def _stamp(self) -> datetime:
        # Strictly increasing creation times keep ordering deterministic
        self._tick += 1
        return datetime(2026, 1, 1) + timedelta(seconds=self._tick)

    def find_submitter_by_email(self, email: str) -> Optional[Submitter]:
        self._check("find_submitter_by_email")
        if self.simulate_race:
            self.simulate_race = False
            return None
        return self.submitters.get(email)

    def find_submitter_by_token(self, token: str, now: datetime) -> Optional[Submitter]:
        self._check("find_submitter_by_token")
        for submitter in self.submitters.values():
            if (
                submitter.verification_token == token
                and submitter.token_expires_at is not None
                and submitter.token_expires_at > now
            ):
                return submitter
        return None

    def add_submitter(self, submitter: Submitter) -> Submitter:
        self._check("add_submitter")
        if submitter.email in self.submitters:
            raise DuplicateSubmitterError(submitter.email)
        submitter.id = submitter.id or uuid4()
        submitter.created_at = submitter.created_at or self._stamp()
        self.submitters[submitter.email] = submitter
        return submitter

    def save_submitter(self, submitter: Submitter) -> Submitter:
        self._check("save_submitter")
        self.submitters[submitter.email] = submitter
        return submitter

    def consume_token(self, submitter: Submitter, token: str, now: datetime) -> bool:
        self._check("consume_token")
        if (
            submitter.verification_token != token
            or submitter.token_expires_at is None
            or submitter.token_expires_at <= now
        ):
            return False
        submitter.verified = True
        submitter.verification_token = None
        submitter.token_expires_at = None
        return True

    def add_message(self, submitter: Submitter, body: str) -> Message:
        self._check("add_message")
        message = Message(id=uuid4(), submitter_id=submitter.id, body=body, created_at=self._stamp())
        self.messages.append(message)
        return message

    def list_messages(self, submitter: Submitter) -> List[Message]:
        self._check("list_messages")
        owned = [m for m in self.messages if m.submitter_id == submitter.id]
        return sorted(owned, key=lambda m: m.created_at)

    def messages_for(self, email: str) -> List[Message]:
        submitter = self.submitters[email]
        return [m for m in self.messages if m.submitter_id == submitter.id]


class RecordingMailGateway(MailGatewayPort):
    """Mail gateway that keeps every sent email in memory.

    Set fail_when to a predicate to make matching sends raise MailDeliveryError.
    Failed sends are recorded in `failed`, not in `sent`.
    """

    def __init__(self):
        self.sent: List[OutgoingEmail] = []
        self.failed: List[OutgoingEmail] = []
        self.fail_when: Optional[Callable[[OutgoingEmail], bool]] = None

    def send(self, email: OutgoingEmail) -> None:
        if self.fail_when is not None and self.fail_when(email):
            self.failed.append(email)
            raise MailDeliveryError("SMTP server unavailable")
        self.sent.append(email)

    def fail_all(self) -> None:
        self.fail_when = lambda email: True

    @property
    def verification_emails(self) -> List[OutgoingEmail]:
        return [e for e in self.sent if e.subject == VERIFICATION_SUBJECT]

    @property
    def admin_notifications(self) -> List[OutgoingEmail]:
        return [e for e in self.sent if e.subject == ADMIN_NOTIFICATION_SUBJECT]

    def last_token(self) -> str:
        """Token from the most recent verification email."""
        return token_from_email(self.verification_emails[-1])


def token_from_email(email: OutgoingEmail) -> str:
    match = _TOKEN_IN_LINK.search(email.html)
    if not match:
        raise AssertionError(f"No verification link in email: {email.subject}")
    return match.group(1)
