"""Observability module for ContactFlow.

Provides structured logging, metrics, request correlation and health checks.
"""

from .logging_config import configure_logging, get_logger
from .metrics import (
    contact_emails_sent_total,
    contact_submissions_total,
    contact_verifications_total,
)
from .request_id import request_id_var, get_request_id, set_request_id, generate_request_id
from .health import HealthStatus
from .middleware import RequestIDMiddleware

__all__ = [
    # Logging
    "configure_logging",
    "get_logger",
    # Metrics
    "contact_emails_sent_total",
    "contact_submissions_total",
    "contact_verifications_total",
    # Request ID
    "request_id_var",
    "get_request_id",
    "set_request_id",
    "generate_request_id",
    # Health
    "HealthStatus",
    # Middleware
    "RequestIDMiddleware",
]
