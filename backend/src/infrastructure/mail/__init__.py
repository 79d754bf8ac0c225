"""Outbound mail adapters."""

from .smtp_mail_gateway import SmtpMailGateway

__all__ = ["SmtpMailGateway"]
