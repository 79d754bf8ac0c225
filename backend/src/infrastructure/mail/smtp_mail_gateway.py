"""SMTP Mail Gateway - Implementation of MailGatewayPort using smtplib.

Sends one message per call over a fresh SMTP connection. Implicit TLS is used
when configured (SMTP_SECURE), otherwise the connection is upgraded with
STARTTLS whenever the server advertises it.

Architecture: Hexagonal - Adapter implementation in infrastructure layer
"""

import logging
import smtplib
import ssl
from email.errors import MessageError
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr, formatdate, make_msgid
from typing import Optional

from config import Settings
from domain.contact.models import OutgoingEmail
from domain.contact.ports import MailDeliveryError, MailGatewayPort

logger = logging.getLogger(__name__)


def _header(value: str) -> str:
    if "\r" in value or "\n" in value:
        raise ValueError("Header value contains a line break")
    return value


class SmtpMailGateway(MailGatewayPort):
    """Outbound mail over SMTP.

    Example:
        gateway = SmtpMailGateway.from_settings(get_settings())
        gateway.send(OutgoingEmail(to="a@example.com", subject="Hi", html="<p>Hi</p>"))
    """

    def __init__(
        self,
        host: str,
        port: int,
        sender_address: str,
        username: Optional[str] = None,
        password: Optional[str] = None,
        use_ssl: bool = False,
        timeout: float = 10.0,
        default_from_name: Optional[str] = None,
    ):
        self.host = host
        self.port = port
        self.sender_address = sender_address
        self.username = username
        self.password = password
        self.use_ssl = use_ssl
        self.timeout = timeout
        self.default_from_name = default_from_name

    @classmethod
    def from_settings(cls, settings: Settings) -> "SmtpMailGateway":
        return cls(
            host=settings.SMTP_HOST,
            port=settings.SMTP_PORT,
            sender_address=settings.sender_address,
            username=settings.SMTP_USER,
            password=settings.SMTP_PASSWORD,
            use_ssl=settings.SMTP_SECURE,
            timeout=settings.SMTP_TIMEOUT_SECONDS,
            default_from_name=settings.MAIL_FROM_NAME,
        )

    def build_mime(self, email: OutgoingEmail) -> MIMEMultipart:
        """Render an OutgoingEmail as a MIME message.

        Raises:
            ValueError: If a header value contains a CR or LF
        """
        msg = MIMEMultipart("alternative")
        msg["Subject"] = _header(email.subject)
        msg["From"] = _header(
            formataddr((email.from_name or self.default_from_name or "", self.sender_address))
        )
        msg["To"] = _header(email.to)
        msg["Date"] = formatdate(localtime=False)
        msg["Message-ID"] = make_msgid()
        if email.reply_to:
            msg["Reply-To"] = _header(email.reply_to)
        msg.attach(MIMEText(email.html, "html", "utf-8"))
        return msg

    def send(self, email: OutgoingEmail) -> None:
        try:
            msg = self.build_mime(email)
            with self._connect() as smtp:
                if self.username:
                    smtp.login(self.username, self.password or "")
                smtp.send_message(msg)
        except (smtplib.SMTPException, OSError, MessageError, ValueError) as e:
            logger.error(
                f"SMTP delivery to {self.host}:{self.port} failed: {e}",
                extra={"error_type": type(e).__name__},
            )
            raise MailDeliveryError(f"Failed to send '{email.subject}': {e}") from e

        logger.info(f"Email sent: {email.subject}")

    def _connect(self) -> smtplib.SMTP:
        context = ssl.create_default_context()
        if self.use_ssl:
            return smtplib.SMTP_SSL(self.host, self.port, timeout=self.timeout, context=context)

        smtp = smtplib.SMTP(self.host, self.port, timeout=self.timeout)
        try:
            smtp.ehlo()
            if smtp.has_extn("starttls"):
                smtp.starttls(context=context)
                smtp.ehlo()
        except (smtplib.SMTPException, OSError):
            smtp.close()
            raise
        return smtp
