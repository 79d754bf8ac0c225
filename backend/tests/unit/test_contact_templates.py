"""Unit tests for contact email templates"""

from datetime import datetime

import pytest

from domain.contact.templates import (
    ADMIN_NOTIFICATION_SUBJECT,
    VERIFICATION_SUBJECT,
    build_admin_notification,
    build_verification_email,
    build_verification_url,
)
from models.submitter import Submitter


def make_submitter(**overrides) -> Submitter:
    fields = dict(
        email="ada@example.com",
        first_name="Ada",
        last_name="Lovelace",
        phone=None,
        verified=False,
        verification_token="ab" * 32,
        token_expires_at=datetime(2026, 1, 2),
    )
    fields.update(overrides)
    return Submitter(**fields)


class TestVerificationEmail:
    """Test build_verification_email"""

    def test_link_points_at_frontend_verify_page(self):
        submitter = make_submitter()

        email = build_verification_email(submitter, "https://site.test")

        assert f'href="https://site.test/verify-email?token={"ab" * 32}"' in email.html

    def test_trailing_slash_on_frontend_url_is_ignored(self):
        assert (
            build_verification_url("https://site.test/", "abc")
            == "https://site.test/verify-email?token=abc"
        )

    def test_addressed_to_submitter_and_states_expiry(self):
        email = build_verification_email(make_submitter(), "https://site.test")

        assert email.to == "ada@example.com"
        assert email.subject == VERIFICATION_SUBJECT
        assert "expire in 24 hours" in email.html
        assert "Hello Ada Lovelace" in email.html
        assert email.reply_to is None

    def test_names_are_html_escaped(self):
        submitter = make_submitter(first_name="<script>", last_name="&co")

        email = build_verification_email(submitter, "https://site.test")

        assert "<script>" not in email.html
        assert "&lt;script&gt; &amp;co" in email.html

    def test_requires_token(self):
        with pytest.raises(ValueError):
            build_verification_email(make_submitter(verification_token=None), "https://site.test")


class TestAdminNotification:
    """Test build_admin_notification"""

    def test_reply_to_is_submitter(self):
        email = build_admin_notification(make_submitter(), "hi", "admin@test.com")

        assert email.to == "admin@test.com"
        assert email.reply_to == "ada@example.com"
        assert email.subject == ADMIN_NOTIFICATION_SUBJECT
        assert email.from_name == "Ada Lovelace via ContactFlow"

    def test_missing_phone_reads_not_provided(self):
        email = build_admin_notification(make_submitter(phone=None), "hi", "admin@test.com")

        assert "Not provided" in email.html

    def test_phone_is_included(self):
        email = build_admin_notification(make_submitter(phone="+1 555 0100"), "hi", "admin@test.com")

        assert "+1 555 0100" in email.html
        assert "Not provided" not in email.html

    def test_body_is_escaped_and_keeps_line_breaks(self):
        email = build_admin_notification(
            make_submitter(), "line one\n<b>line two</b>", "admin@test.com"
        )

        assert "line one<br>&lt;b&gt;line two&lt;/b&gt;" in email.html

    def test_site_name_in_sender(self):
        email = build_admin_notification(
            make_submitter(), "hi", "admin@test.com", site_name="Portfolio"
        )

        assert email.from_name == "Ada Lovelace via Portfolio"
