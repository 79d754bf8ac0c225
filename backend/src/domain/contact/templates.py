"""Email templates for the contact flow.

Two templates exist: the verification email sent to the submitter and the
notification sent to the administrator once a message is cleared for
delivery. User-supplied values are HTML-escaped before interpolation.
"""

from html import escape
from urllib.parse import quote

from models.submitter import Submitter

from .models import OutgoingEmail

VERIFICATION_SUBJECT = "Please Verify Your Email Address"
ADMIN_NOTIFICATION_SUBJECT = "New Verified Contact Form Submission"
NOT_PROVIDED = "Not provided"


def build_verification_url(frontend_url: str, token: str) -> str:
    """Link the frontend turns into GET /api/verify-email?token=..."""
    return f"{frontend_url.rstrip('/')}/verify-email?token={quote(token, safe='')}"


def build_verification_email(
    submitter: Submitter,
    frontend_url: str,
    ttl_hours: int = 24,
    from_name: str = "ContactFlow",
) -> OutgoingEmail:
    if not submitter.verification_token:
        raise ValueError("Submitter has no verification token to send")

    url = escape(build_verification_url(frontend_url, submitter.verification_token))
    html = f"""
      <h2>Email Verification</h2>
      <p>Hello {escape(submitter.first_name)} {escape(submitter.last_name)},</p>
      <p>Thank you for getting in touch. Please verify your email address by clicking the link below:</p>
      <p><a href="{url}">Verify Email Address</a></p>
      <p>This link will expire in {ttl_hours} hours.</p>
      <p>If you did not submit a contact form, please ignore this email.</p>
    """
    return OutgoingEmail(
        to=submitter.email,
        subject=VERIFICATION_SUBJECT,
        html=html,
        from_name=from_name,
    )


def build_admin_notification(
    submitter: Submitter,
    body: str,
    admin_email: str,
    site_name: str = "ContactFlow",
) -> OutgoingEmail:
    # Preserve line breaks from the textarea
    rendered_body = "<br>".join(escape(line) for line in body.splitlines()) or escape(body)
    html = f"""
      <h2>New Contact Form Submission</h2>
      <p><strong>Name:</strong> {escape(submitter.full_name)}</p>
      <p><strong>Email:</strong> {escape(submitter.email)} (Verified)</p>
      <p><strong>Phone:</strong> {escape(submitter.phone or NOT_PROVIDED)}</p>
      <p><strong>Message:</strong></p>
      <p>{rendered_body}</p>
    """
    return OutgoingEmail(
        to=admin_email,
        subject=ADMIN_NOTIFICATION_SUBJECT,
        html=html,
        reply_to=submitter.email,
        from_name=f"{submitter.full_name} via {site_name}",
    )
