"""
HOTP Generator
==============
Counter-based one-time passwords (RFC 4226).
"""

import hmac
import struct
from typing import Optional, Union

from .config import DEFAULT_DIGITS, HashAlgorithm
from .exceptions import InvalidSecret

MAX_COUNTER = 2 ** 64 - 1


def require_secret(secret: bytes) -> bytes:
    """Return the secret as bytes, raising InvalidSecret if unusable."""
    if not isinstance(secret, (bytes, bytearray, memoryview)):
        raise InvalidSecret(f"Secret must be bytes, got {type(secret).__name__}")
    secret = bytes(secret)
    if not secret:
        raise InvalidSecret()
    return secret


def dynamic_truncate(digest: bytes) -> int:
    """
    Apply RFC 4226 dynamic truncation to an HMAC digest.

    The low nibble of the last byte selects a 4-byte window; the top bit of
    that window is cleared so the result is a 31-bit unsigned integer.
    """
    offset = digest[-1] & 0x0F
    return struct.unpack(">I", digest[offset:offset + 4])[0] & 0x7FFFFFFF


def generate_hotp(
    secret: bytes,
    counter: int,
    digits: int = DEFAULT_DIGITS,
    algorithm: Union[HashAlgorithm, str] = HashAlgorithm.SHA1,
) -> str:
    """
    Generate an HOTP code.

    Args:
        secret: Raw shared secret bytes
        counter: Moving factor, 0 <= counter < 2**64
        digits: Length of the resulting code
        algorithm: HMAC hash function

    Returns:
        Zero-padded decimal code of length `digits`

    Raises:
        InvalidSecret: If the secret is empty or not bytes
        ValueError: If counter or digits are out of range
    """
    key = require_secret(secret)
    if not 0 <= counter <= MAX_COUNTER:
        raise ValueError(f"Counter must fit in an unsigned 64-bit integer, got {counter}")
    if digits < 1:
        raise ValueError(f"digits must be positive, got {digits}")

    digestmod = HashAlgorithm.parse(algorithm).digestmod
    digest = hmac.new(key, struct.pack(">Q", counter), digestmod).digest()
    code = dynamic_truncate(digest) % (10 ** digits)
    return str(code).zfill(digits)


def codes_match(candidate: str, expected: str) -> bool:
    """Length check, then constant-time comparison of two codes."""
    if not isinstance(candidate, str):
        return False
    if len(candidate) != len(expected):
        return False
    return hmac.compare_digest(candidate.encode(), expected.encode())


def try_counter(
    candidate: str,
    secret: bytes,
    counter: int,
    digits: int = DEFAULT_DIGITS,
    algorithm: Union[HashAlgorithm, str] = HashAlgorithm.SHA1,
) -> Optional[int]:
    """
    Check a candidate against a single counter.

    Returns the counter on a match, None otherwise (including counters that
    fall outside the 64-bit range at the edges of a window).
    """
    if not 0 <= counter <= MAX_COUNTER:
        return None
    expected = generate_hotp(secret, counter, digits=digits, algorithm=algorithm)
    return counter if codes_match(candidate, expected) else None


def verify_hotp(
    candidate: str,
    secret: bytes,
    counter: int,
    digits: int = DEFAULT_DIGITS,
    algorithm: Union[HashAlgorithm, str] = HashAlgorithm.SHA1,
    look_ahead: int = 0,
) -> Optional[int]:
    """
    Verify an HOTP code against the expected counter and a look-ahead range.

    The engine keeps no counter state: on success the caller should persist
    the returned counter + 1 as the next expected counter.

    Args:
        candidate: Code supplied by the user
        secret: Raw shared secret bytes
        counter: Next expected counter
        digits: Code length
        algorithm: HMAC hash function
        look_ahead: Extra counters to try after `counter`

    Returns:
        The matching counter, or None if nothing in range matched
    """
    require_secret(secret)
    if look_ahead < 0:
        raise ValueError(f"look_ahead cannot be negative, got {look_ahead}")

    for attempt in range(counter, counter + look_ahead + 1):
        matched = try_counter(candidate, secret, attempt, digits=digits, algorithm=algorithm)
        if matched is not None:
            return matched
    return None
