"""Verification token issuer.

Tokens are opaque random hex strings; the caller persists them together with
the expiry on the submitter row.
"""

import secrets
from datetime import datetime, timedelta
from typing import Callable

from models.base import utcnow

from .models import IssuedToken

DEFAULT_TOKEN_TTL = timedelta(hours=24)
DEFAULT_TOKEN_BYTES = 32


class TokenIssuer:
    """Generates verification tokens with a fixed lifetime.

    Example:
        issuer = TokenIssuer(ttl=timedelta(hours=24))
        issued = issuer.issue()
        submitter.issue_token(issued.token, issued.expires_at)
    """

    def __init__(
        self,
        ttl: timedelta = DEFAULT_TOKEN_TTL,
        nbytes: int = DEFAULT_TOKEN_BYTES,
        clock: Callable[[], datetime] = utcnow,
    ):
        if nbytes < 16:
            raise ValueError("Verification tokens need at least 128 bits of entropy")
        if ttl <= timedelta(0):
            raise ValueError("Token TTL must be positive")
        self.ttl = ttl
        self.nbytes = nbytes
        self.clock = clock

    def issue(self) -> IssuedToken:
        return IssuedToken(
            token=secrets.token_hex(self.nbytes),
            expires_at=self.clock() + self.ttl,
        )
