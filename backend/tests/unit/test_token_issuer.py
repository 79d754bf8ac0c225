"""Unit tests for verification token generation

Tests cover:
- Token format and entropy
- Expiry calculation from the injected clock
- Constructor guards
"""

import re
from datetime import datetime, timedelta

import pytest

from domain.contact.tokens import TokenIssuer


class TestIssue:
    """Test TokenIssuer.issue()"""

    def test_token_is_64_lowercase_hex_chars(self):
        issued = TokenIssuer().issue()

        assert re.fullmatch(r"[0-9a-f]{64}", issued.token)

    def test_expiry_is_24_hours_after_now(self):
        now = datetime(2026, 3, 1, 8, 30)
        issuer = TokenIssuer(clock=lambda: now)

        issued = issuer.issue()

        assert issued.expires_at == now + timedelta(hours=24)

    def test_custom_ttl(self):
        now = datetime(2026, 3, 1, 8, 30)
        issuer = TokenIssuer(ttl=timedelta(hours=2), clock=lambda: now)

        assert issuer.issue().expires_at == now + timedelta(hours=2)

    def test_tokens_do_not_repeat(self):
        issuer = TokenIssuer()

        tokens = {issuer.issue().token for _ in range(500)}

        assert len(tokens) == 500

    def test_nbytes_controls_length(self):
        assert len(TokenIssuer(nbytes=16).issue().token) == 32


class TestConstructor:
    """Test TokenIssuer argument validation"""

    def test_rejects_less_than_128_bits(self):
        with pytest.raises(ValueError, match="128 bits"):
            TokenIssuer(nbytes=15)

    @pytest.mark.parametrize("ttl", [timedelta(0), timedelta(hours=-1)])
    def test_rejects_non_positive_ttl(self, ttl):
        with pytest.raises(ValueError, match="TTL"):
            TokenIssuer(ttl=ttl)
