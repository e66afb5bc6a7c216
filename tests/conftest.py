"""
Shared fixtures for otp_engine tests.
"""

import pytest


RFC4226_SECRET = b"12345678901234567890"


class FixedRandomSource:
    """Random source that replays a predetermined byte stream."""

    def __init__(self, data: bytes):
        self._data = bytearray(data)

    def token_bytes(self, n: int) -> bytes:
        if n > len(self._data):
            raise AssertionError("FixedRandomSource ran out of bytes")
        chunk = bytes(self._data[:n])
        del self._data[:n]
        return chunk


@pytest.fixture
def rfc_secret():
    return RFC4226_SECRET


@pytest.fixture
def fixed_random():
    """Factory for deterministic random sources."""
    return FixedRandomSource
