"""
OTP Exceptions
==============
Exception classes for OTP generation, decoding and configuration.
"""

from typing import Optional


class OTPError(Exception):
    """Base exception for all OTP engine errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InvalidSecret(OTPError):
    """Raised when a shared secret is empty or structurally invalid."""

    def __init__(self, message: str = "Secret must be a non-empty byte sequence"):
        super().__init__(message)


class InvalidEncoding(OTPError):
    """Raised when base32 input contains a character outside the alphabet."""

    def __init__(
        self,
        message: str,
        character: Optional[str] = None,
        position: Optional[int] = None,
    ):
        self.character = character
        self.position = position
        super().__init__(message)


class DecodeFailure(OTPError):
    """Raised when a stored artifact (secret, recovery hash) is malformed."""
    pass


class ConfigurationError(OTPError, ValueError):
    """Raised when an OTPConfig is constructed with invalid values."""
    pass
