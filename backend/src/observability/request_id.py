"""Request ID management for request correlation.

The ID lives in a ContextVar so it follows the request across the threadpool
hop FastAPI makes for sync endpoints.
"""

import re
import uuid
from contextvars import ContextVar
from typing import Optional

NO_REQUEST_ID = "no-request-id"

# Accept caller-supplied IDs only if they look like an opaque identifier
_VALID_REQUEST_ID = re.compile(r"[A-Za-z0-9._-]{1,128}")

request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


def generate_request_id() -> str:
    """Generate a new unique request ID (UUID v4)."""
    return str(uuid.uuid4())


def resolve_request_id(header_value: Optional[str]) -> str:
    """Reuse an inbound X-Request-ID when it is well formed, else mint one."""
    if header_value and _VALID_REQUEST_ID.fullmatch(header_value):
        return header_value
    return generate_request_id()


def get_request_id() -> str:
    return request_id_var.get() or NO_REQUEST_ID


def set_request_id(request_id: Optional[str]) -> None:
    request_id_var.set(request_id)
