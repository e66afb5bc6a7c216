"""
OTP Engine
==========
HOTP/TOTP one-time passwords, base32 secrets, provisioning URIs and
account-recovery codes.
"""

__version__ = "1.0.0"

# Configuration
from otp_engine.config import (
    OTPConfig,
    HashAlgorithm,
    DEFAULT_DIGITS,
    DEFAULT_TIME_STEP,
    DEFAULT_WINDOW,
)

# Exceptions
from otp_engine.exceptions import (
    OTPError,
    InvalidSecret,
    InvalidEncoding,
    DecodeFailure,
    ConfigurationError,
)

# Randomness
from otp_engine.random_source import (
    RandomSource,
    SystemRandomSource,
    default_random_source,
)

# Base32
from otp_engine import base32

# HOTP / TOTP
from otp_engine.hotp import generate_hotp, verify_hotp, dynamic_truncate
from otp_engine.totp import counter_at, current_code, verify_totp, match_totp_counter

# Provisioning
from otp_engine.uri import build_uri, build_hotp_uri

# Recovery Codes
from otp_engine.recovery import (
    generate_recovery_codes,
    hash_recovery_code,
    verify_recovery_code,
    find_recovery_code,
    RecoveryCodeRecord,
    RecoveryCodeState,
)

# Authenticator
from otp_engine.authenticator import TOTPAuthenticator, Enrollment

# Logging
from otp_engine.logging_config import configure_logging

__all__ = [
    # Configuration
    "OTPConfig",
    "HashAlgorithm",
    "DEFAULT_DIGITS",
    "DEFAULT_TIME_STEP",
    "DEFAULT_WINDOW",
    # Exceptions
    "OTPError",
    "InvalidSecret",
    "InvalidEncoding",
    "DecodeFailure",
    "ConfigurationError",
    # Randomness
    "RandomSource",
    "SystemRandomSource",
    "default_random_source",
    # Base32
    "base32",
    # HOTP / TOTP
    "generate_hotp",
    "verify_hotp",
    "dynamic_truncate",
    "counter_at",
    "current_code",
    "verify_totp",
    "match_totp_counter",
    # Provisioning
    "build_uri",
    "build_hotp_uri",
    # Recovery Codes
    "generate_recovery_codes",
    "hash_recovery_code",
    "verify_recovery_code",
    "find_recovery_code",
    "RecoveryCodeRecord",
    "RecoveryCodeState",
    # Authenticator
    "TOTPAuthenticator",
    "Enrollment",
    # Logging
    "configure_logging",
]
