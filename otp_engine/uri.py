"""
OTP URI Builder
===============
otpauth:// provisioning URIs for QR-code enrollment in authenticator apps.
"""

from typing import Union
from urllib.parse import quote

from . import base32
from .config import DEFAULT_DIGITS, DEFAULT_TIME_STEP, HashAlgorithm
from .exceptions import ConfigurationError


def percent_encode(value: str) -> str:
    """Escape everything outside the RFC 3986 unreserved set."""
    return quote(value, safe="")


def _label(issuer: str, account_name: str) -> str:
    return f"{percent_encode(issuer)}:{percent_encode(account_name)}"


def _algorithm_name(algorithm: Union[HashAlgorithm, str]) -> str:
    try:
        return HashAlgorithm.parse(algorithm).value
    except ConfigurationError:
        # Unknown names are passed through rather than rejected
        return percent_encode(str(algorithm).upper())


def build_uri(
    secret: bytes,
    account_name: str,
    issuer: str,
    algorithm: Union[HashAlgorithm, str] = HashAlgorithm.SHA1,
    digits: int = DEFAULT_DIGITS,
    step: int = DEFAULT_TIME_STEP,
) -> str:
    """
    Build an otpauth://totp/ provisioning URI.

    Issuer and account name are encoded independently, and the label uses
    the same encoding as the query parameters.

    Args:
        secret: Raw shared secret bytes (rendered as base32)
        account_name: User identifier shown in the authenticator app
        issuer: Service name shown in the authenticator app
        algorithm: HMAC hash function
        digits: Code length
        step: Time step in seconds

    Returns:
        Provisioning URI string
    """
    return (
        f"otpauth://totp/{_label(issuer, account_name)}"
        f"?secret={base32.encode(secret)}"
        f"&issuer={percent_encode(issuer)}"
        f"&algorithm={_algorithm_name(algorithm)}"
        f"&digits={digits}"
        f"&period={step}"
    )


def build_hotp_uri(
    secret: bytes,
    account_name: str,
    issuer: str,
    counter: int = 0,
    algorithm: Union[HashAlgorithm, str] = HashAlgorithm.SHA1,
    digits: int = DEFAULT_DIGITS,
) -> str:
    """Build an otpauth://hotp/ provisioning URI starting at `counter`."""
    return (
        f"otpauth://hotp/{_label(issuer, account_name)}"
        f"?secret={base32.encode(secret)}"
        f"&issuer={percent_encode(issuer)}"
        f"&algorithm={_algorithm_name(algorithm)}"
        f"&digits={digits}"
        f"&counter={counter}"
    )
