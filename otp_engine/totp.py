"""
TOTP Verifier
=============
Time-based one-time passwords (RFC 6238) with drift-tolerant verification.
"""

import time
from typing import Optional, Union

from .config import DEFAULT_DIGITS, DEFAULT_TIME_STEP, DEFAULT_WINDOW, HashAlgorithm
from .hotp import require_secret, generate_hotp, try_counter


def counter_at(now: float, step: int = DEFAULT_TIME_STEP) -> int:
    """Return floor(now / step), the TOTP counter for a Unix timestamp."""
    if step <= 0:
        raise ValueError(f"step must be positive, got {step}")
    return int(now // step)


def current_code(
    secret: bytes,
    now: Optional[float] = None,
    step: int = DEFAULT_TIME_STEP,
    digits: int = DEFAULT_DIGITS,
    algorithm: Union[HashAlgorithm, str] = HashAlgorithm.SHA1,
) -> str:
    """
    Generate the TOTP code valid at `now`.

    Args:
        secret: Raw shared secret bytes
        now: Unix timestamp (defaults to the current time)
        step: Time step in seconds
        digits: Code length
        algorithm: HMAC hash function

    Returns:
        Zero-padded decimal code
    """
    if now is None:
        now = time.time()
    return generate_hotp(secret, counter_at(now, step), digits=digits, algorithm=algorithm)


def match_totp_counter(
    candidate: str,
    secret: bytes,
    now: Optional[float] = None,
    step: int = DEFAULT_TIME_STEP,
    digits: int = DEFAULT_DIGITS,
    window: int = DEFAULT_WINDOW,
    algorithm: Union[HashAlgorithm, str] = HashAlgorithm.SHA1,
    last_accepted_counter: Optional[int] = None,
) -> Optional[int]:
    """
    Find the counter within the drift window that produced `candidate`.

    Offsets in [-window, window] are tried in ascending order and the first
    match wins. When `last_accepted_counter` is given, counters at or below
    it are never accepted, which lets callers reject replays without the
    engine holding any state.

    Returns:
        The matching counter, or None
    """
    require_secret(secret)
    if window < 0:
        raise ValueError(f"window cannot be negative, got {window}")
    if now is None:
        now = time.time()

    current = counter_at(now, step)
    for offset in range(-window, window + 1):
        counter = current + offset
        if last_accepted_counter is not None and counter <= last_accepted_counter:
            continue
        matched = try_counter(candidate, secret, counter, digits=digits, algorithm=algorithm)
        if matched is not None:
            return matched
    return None


def verify_totp(
    candidate: str,
    secret: bytes,
    now: Optional[float] = None,
    step: int = DEFAULT_TIME_STEP,
    digits: int = DEFAULT_DIGITS,
    window: int = DEFAULT_WINDOW,
    algorithm: Union[HashAlgorithm, str] = HashAlgorithm.SHA1,
    last_accepted_counter: Optional[int] = None,
) -> bool:
    """
    Verify a TOTP code with +/- `window` steps of clock drift tolerance.

    A mismatch is a normal False result; only an invalid secret raises.
    """
    return match_totp_counter(
        candidate,
        secret,
        now=now,
        step=step,
        digits=digits,
        window=window,
        algorithm=algorithm,
        last_accepted_counter=last_accepted_counter,
    ) is not None
