"""Contact service - submission and email verification flows.

Submission:
    unknown email      -> create unverified submitter, store message, send verification link
    unverified email   -> refresh details, reissue token, store message, send verification link
    verified email     -> store message, notify administrator immediately

Verification:
    token must match a submitter and not be expired. The submitter becomes
    verified, the token is consumed and every stored message for that
    submitter is forwarded to the administrator, one email per message.

The service holds no state between calls; collaborators are injected per
request. Writes are not wrapped in a transaction: a message stays stored even
if the email that follows it fails.
"""

import logging
from datetime import datetime
from typing import Callable, List, Optional, Tuple

from models.base import utcnow
from models.submitter import Submitter
from observability.metrics import (
    contact_emails_sent_total,
    contact_submissions_total,
    contact_verifications_total,
)

from .errors import InternalError, InvalidTokenError, ValidationError
from .models import (
    ContactSubmission,
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
from .templates import build_admin_notification, build_verification_email
from .tokens import TokenIssuer

logger = logging.getLogger(__name__)

CHECK_EMAIL_MESSAGE = (
    "Please check your email to verify your address before we process your message"
)
MESSAGE_SENT_MESSAGE = "Your message has been sent successfully"
VERIFIED_MESSAGE = "Email verified successfully. Your message has been sent."
SUBMIT_FAILED_MESSAGE = "Failed to process your message"
VERIFY_FAILED_MESSAGE = "Failed to verify email"

# (attribute on ContactSubmission, name reported to the client)
REQUIRED_FIELDS = (
    ("first_name", "firstName"),
    ("last_name", "lastName"),
    ("email", "email"),
    ("message", "message"),
)


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


def _token_hint(token: str) -> str:
    """Enough of a token to correlate logs without leaking it."""
    return f"{token[:6]}..." if len(token) > 6 else "***"


def _email_hint(email: str) -> str:
    local, _, domain = email.partition("@")
    return f"{local[:1]}***@{domain}" if domain else "***"


class ContactService:
    """Runs the contact form and verification flows against injected collaborators.

    Example:
        service = ContactService(
            store=SqlAlchemyContactStore(db),
            mailer=SmtpMailGateway.from_settings(settings),
            token_issuer=TokenIssuer(),
            admin_email="owner@example.com",
            frontend_url="https://example.com",
        )
        result = service.submit(ContactSubmission(...))
    """

    def __init__(
        self,
        store: RecordStorePort,
        mailer: MailGatewayPort,
        token_issuer: TokenIssuer,
        admin_email: str,
        frontend_url: str,
        site_name: str = "ContactFlow",
        clock: Callable[[], datetime] = utcnow,
    ):
        self.store = store
        self.mailer = mailer
        self.token_issuer = token_issuer
        self.admin_email = admin_email
        self.frontend_url = frontend_url
        self.site_name = site_name
        self.clock = clock

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------

    def submit(self, submission: ContactSubmission) -> SubmissionResult:
        """Handle one contact form submission.

        Raises:
            ValidationError: If firstName, lastName, email or message is blank
            InternalError: If the record store or mail gateway fails
        """
        missing = [
            api_name
            for attr, api_name in REQUIRED_FIELDS
            if _is_blank(getattr(submission, attr))
        ]
        if missing:
            contact_submissions_total.labels(outcome="rejected").inc()
            logger.warning(f"Contact submission rejected, missing fields: {', '.join(missing)}")
            raise ValidationError(missing)

        try:
            outcome = self._submit(submission)
        except DuplicateSubmitterError as e:
            # Lost the lookup-then-create race against a concurrent first submission
            contact_submissions_total.labels(outcome="error").inc()
            logger.error(f"Concurrent first submission for {_email_hint(e.email)}")
            raise InternalError(SUBMIT_FAILED_MESSAGE) from e
        except (RecordStoreError, MailDeliveryError) as e:
            contact_submissions_total.labels(outcome="error").inc()
            logger.error(f"Error processing contact form: {e}", exc_info=True)
            raise InternalError(SUBMIT_FAILED_MESSAGE) from e

        contact_submissions_total.labels(outcome=outcome.value).inc()
        logger.info(f"Contact submission accepted ({outcome.value})")

        message = CHECK_EMAIL_MESSAGE if outcome.awaiting_verification else MESSAGE_SENT_MESSAGE
        return SubmissionResult(outcome=outcome, message=message)

    def _submit(self, submission: ContactSubmission) -> SubmissionOutcome:
        submitter = self.store.find_submitter_by_email(submission.email)

        if submitter is None:
            outcome = SubmissionOutcome.NEW_SUBMITTER
            submitter = self._create_submitter(submission)
        elif not submitter.verified:
            outcome = SubmissionOutcome.UNVERIFIED_RESUBMISSION
            # Details may have changed; only the newest token stays valid
            submitter.first_name = submission.first_name
            submitter.last_name = submission.last_name
            submitter.phone = submission.phone or None
            issued = self.token_issuer.issue()
            submitter.issue_token(issued.token, issued.expires_at)
            submitter = self.store.save_submitter(submitter)
        else:
            outcome = SubmissionOutcome.VERIFIED_SUBMITTER

        self.store.add_message(submitter, submission.message)

        if outcome.awaiting_verification:
            self._send(
                build_verification_email(
                    submitter,
                    self.frontend_url,
                    ttl_hours=self._ttl_hours,
                    from_name=self.site_name,
                ),
                template="verification",
            )
        else:
            self._send(
                build_admin_notification(
                    submitter, submission.message, self.admin_email, site_name=self.site_name
                ),
                template="admin_notification",
            )
        return outcome

    def _create_submitter(self, submission: ContactSubmission) -> Submitter:
        issued = self.token_issuer.issue()
        submitter = Submitter(
            email=submission.email,
            first_name=submission.first_name,
            last_name=submission.last_name,
            phone=submission.phone or None,
            verified=False,
            verification_token=issued.token,
            token_expires_at=issued.expires_at,
        )
        return self.store.add_submitter(submitter)

    @property
    def _ttl_hours(self) -> int:
        return int(self.token_issuer.ttl.total_seconds() // 3600)

    # ------------------------------------------------------------------
    # Verification
    # ------------------------------------------------------------------

    def verify(self, token: Optional[str]) -> VerificationResult:
        """Consume a verification token and flush the submitter's messages.

        Notifications are sent one at a time, oldest message first. A failed
        send is logged and skipped; the remaining messages are still sent and
        the verification itself stands.

        Raises:
            ValidationError: If token is missing
            InvalidTokenError: If token is unknown, expired or already used
            InternalError: If the record store fails
        """
        if _is_blank(token):
            contact_verifications_total.labels(result="rejected").inc()
            raise ValidationError(["token"], message="Verification token is required")

        try:
            submitter = self.store.find_submitter_by_token(token, self.clock())
        except RecordStoreError as e:
            contact_verifications_total.labels(result="error").inc()
            logger.error(f"Error verifying email: {e}", exc_info=True)
            raise InternalError(VERIFY_FAILED_MESSAGE) from e

        if submitter is None:
            contact_verifications_total.labels(result="invalid_token").inc()
            logger.warning(f"Invalid or expired verification token {_token_hint(token)}")
            raise InvalidTokenError()

        try:
            # A concurrent request may have consumed the same token since the lookup
            consumed = self.store.consume_token(submitter, token, self.clock())
            pending = self.store.list_messages(submitter) if consumed else []
        except RecordStoreError as e:
            contact_verifications_total.labels(result="error").inc()
            logger.error(f"Error verifying email: {e}", exc_info=True)
            raise InternalError(VERIFY_FAILED_MESSAGE) from e

        if not consumed:
            contact_verifications_total.labels(result="invalid_token").inc()
            logger.warning(f"Verification token {_token_hint(token)} already consumed")
            raise InvalidTokenError()

        notified, failed = self._flush(submitter, [m.body for m in pending])

        contact_verifications_total.labels(result="verified").inc()
        logger.info(
            f"Submitter verified, {notified} notification(s) sent, {failed} failed",
            extra={"submitter_id": str(submitter.id)},
        )
        return VerificationResult(
            submitter_email=submitter.email,
            notified=notified,
            failed=failed,
            message=VERIFIED_MESSAGE,
        )

    def _flush(self, submitter: Submitter, bodies: List[str]) -> Tuple[int, int]:
        notified = failed = 0
        for body in bodies:
            email = build_admin_notification(
                submitter, body, self.admin_email, site_name=self.site_name
            )
            try:
                self._send(email, template="admin_notification")
            except MailDeliveryError:
                failed += 1
                logger.error(
                    "Admin notification failed, continuing with remaining messages",
                    extra={"submitter_id": str(submitter.id)},
                    exc_info=True,
                )
                continue
            notified += 1
        return notified, failed

    # ------------------------------------------------------------------

    def _send(self, email: OutgoingEmail, template: str) -> None:
        try:
            self.mailer.send(email)
        except MailDeliveryError:
            contact_emails_sent_total.labels(template=template, status="error").inc()
            raise
        contact_emails_sent_total.labels(template=template, status="success").inc()
