"""
Random Source
=============
Injectable source of cryptographically secure random bytes.
"""

import secrets
from typing import Protocol, runtime_checkable


@runtime_checkable
class RandomSource(Protocol):
    """Anything that can hand out secure random bytes."""

    def token_bytes(self, n: int) -> bytes:
        ...


class SystemRandomSource:
    """
    Random source backed by the operating system CSPRNG.

    Thread-safe; holds no state of its own.
    """

    def token_bytes(self, n: int) -> bytes:
        if n < 0:
            raise ValueError("Byte count cannot be negative")
        return secrets.token_bytes(n)

    def __repr__(self) -> str:
        return "SystemRandomSource()"


default_random_source = SystemRandomSource()
