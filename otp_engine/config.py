"""
OTP Configuration
=================
Engine configuration and supported HMAC algorithms.
"""

import hashlib
import os
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Union

from .exceptions import ConfigurationError

DEFAULT_DIGITS = 6
DEFAULT_TIME_STEP = 30  # seconds
DEFAULT_WINDOW = 1  # +/- one step of clock drift
DEFAULT_SECRET_LENGTH = 20  # 160 bits
DEFAULT_RECOVERY_CODE_COUNT = 8

MIN_DIGITS = 6
MAX_DIGITS = 10  # 31-bit truncated value has at most 10 decimal digits
MIN_SECRET_LENGTH = 16


class HashAlgorithm(str, Enum):
    """HMAC hash functions understood by authenticator apps."""
    SHA1 = "SHA1"
    SHA256 = "SHA256"
    SHA512 = "SHA512"

    @property
    def digestmod(self) -> Callable:
        return {
            HashAlgorithm.SHA1: hashlib.sha1,
            HashAlgorithm.SHA256: hashlib.sha256,
            HashAlgorithm.SHA512: hashlib.sha512,
        }[self]

    @classmethod
    def parse(cls, value: Union[str, "HashAlgorithm"]) -> "HashAlgorithm":
        """Accept 'sha1', 'SHA-256', HashAlgorithm.SHA512 and similar."""
        if isinstance(value, cls):
            return value
        name = str(value).upper().replace("-", "").replace("_", "")
        try:
            return cls(name)
        except ValueError:
            raise ConfigurationError(f"Unsupported HMAC algorithm: {value}") from None


@dataclass(frozen=True)
class OTPConfig:
    """Immutable configuration for an OTP engine instance."""
    digits: int = DEFAULT_DIGITS
    time_step: int = DEFAULT_TIME_STEP
    window: int = DEFAULT_WINDOW
    algorithm: HashAlgorithm = HashAlgorithm.SHA1
    issuer: Optional[str] = None
    secret_length: int = DEFAULT_SECRET_LENGTH
    recovery_code_count: int = DEFAULT_RECOVERY_CODE_COUNT

    def __post_init__(self):
        object.__setattr__(self, "algorithm", HashAlgorithm.parse(self.algorithm))

        if not MIN_DIGITS <= self.digits <= MAX_DIGITS:
            raise ConfigurationError(
                f"digits must be between {MIN_DIGITS} and {MAX_DIGITS}, got {self.digits}"
            )
        if self.time_step <= 0:
            raise ConfigurationError(f"time_step must be positive, got {self.time_step}")
        if self.window < 0:
            raise ConfigurationError(f"window cannot be negative, got {self.window}")
        if self.secret_length < MIN_SECRET_LENGTH:
            raise ConfigurationError(
                f"secret_length must be at least {MIN_SECRET_LENGTH} bytes"
            )
        if self.recovery_code_count < 1:
            raise ConfigurationError("recovery_code_count must be at least 1")

    @classmethod
    def from_env(cls, prefix: str = "OTP_") -> "OTPConfig":
        """
        Build a config from environment variables.

        Reads {prefix}DIGITS, {prefix}TIME_STEP, {prefix}WINDOW,
        {prefix}ALGORITHM, {prefix}ISSUER, {prefix}SECRET_LENGTH and
        {prefix}RECOVERY_CODE_COUNT, falling back to the defaults.
        """
        try:
            return cls(
                digits=int(os.environ.get(f"{prefix}DIGITS", DEFAULT_DIGITS)),
                time_step=int(os.environ.get(f"{prefix}TIME_STEP", DEFAULT_TIME_STEP)),
                window=int(os.environ.get(f"{prefix}WINDOW", DEFAULT_WINDOW)),
                algorithm=os.environ.get(f"{prefix}ALGORITHM", HashAlgorithm.SHA1.value),
                issuer=os.environ.get(f"{prefix}ISSUER") or None,
                secret_length=int(
                    os.environ.get(f"{prefix}SECRET_LENGTH", DEFAULT_SECRET_LENGTH)
                ),
                recovery_code_count=int(
                    os.environ.get(f"{prefix}RECOVERY_CODE_COUNT", DEFAULT_RECOVERY_CODE_COUNT)
                ),
            )
        except ConfigurationError:
            raise
        except ValueError as e:
            raise ConfigurationError(f"Invalid OTP environment configuration: {e}") from e
