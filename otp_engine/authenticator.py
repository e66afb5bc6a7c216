"""
TOTP Authenticator
==================
High-level enrollment and verification bound to one engine configuration.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple
import structlog

from . import base32
from .config import OTPConfig
from .exceptions import ConfigurationError, InvalidSecret, OTPError
from .hotp import generate_hotp, require_secret, verify_hotp
from .random_source import RandomSource, default_random_source
from .recovery import (
    RecoveryCodeRecord,
    generate_recovery_codes,
    hash_recovery_code,
    verify_recovery_code,
)
from .totp import counter_at, current_code, match_totp_counter
from .uri import build_uri

logger = structlog.get_logger(__name__)


@dataclass
class Enrollment:
    """Everything produced when a user enrolls in TOTP."""
    secret: bytes = field(repr=False)
    secret_b32: str = field(repr=False)
    uri: str = field(repr=False)
    recovery_codes: List[str] = field(repr=False)
    recovery_records: List[RecoveryCodeRecord]


class TOTPAuthenticator:
    """
    TOTP engine instance.

    Holds an immutable OTPConfig and a random source; keeps no other state.
    Compatible with Google Authenticator, Authy and similar apps at the
    default settings (SHA1, 6 digits, 30 second period).
    """

    def __init__(
        self,
        config: Optional[OTPConfig] = None,
        random_source: Optional[RandomSource] = None,
    ):
        self.config = config or OTPConfig()
        self.random_source = random_source or default_random_source

    # Secrets

    def generate_secret(self) -> bytes:
        """Generate a new raw shared secret of `config.secret_length` bytes."""
        secret = self.random_source.token_bytes(self.config.secret_length)
        logger.info("OTP secret generated", length=len(secret))
        return secret

    @staticmethod
    def encode_secret(secret: bytes) -> str:
        """Render a raw secret as unpadded base32 for display."""
        return base32.encode(require_secret(secret))

    @staticmethod
    def decode_secret(secret_b32: str) -> bytes:
        """
        Parse a base32 secret.

        Raises:
            InvalidEncoding: On characters outside the base32 alphabet
            InvalidSecret: If the text decodes to zero bytes
        """
        secret = base32.decode(secret_b32)
        if not secret:
            raise InvalidSecret("Base32 secret decodes to an empty byte sequence")
        return secret

    # Codes

    def generate_code(self, secret: bytes, now: Optional[float] = None) -> str:
        """Generate the TOTP code valid at `now` (default: current time)."""
        return current_code(
            secret,
            now=now,
            step=self.config.time_step,
            digits=self.config.digits,
            algorithm=self.config.algorithm,
        )

    def generate_hotp(self, secret: bytes, counter: int) -> str:
        """Generate an HOTP code for an explicit counter."""
        return generate_hotp(
            secret,
            counter,
            digits=self.config.digits,
            algorithm=self.config.algorithm,
        )

    def current_counter(self, now: float) -> int:
        return counter_at(now, self.config.time_step)

    def match_code(
        self,
        code: str,
        secret: bytes,
        now: Optional[float] = None,
        last_accepted_counter: Optional[int] = None,
    ) -> Optional[int]:
        """
        Verify a TOTP code and return the counter it matched.

        Callers that need replay protection persist the returned counter
        and pass it back as `last_accepted_counter` on the next attempt.
        Any OTPError is logged and reported as no match.
        """
        candidate = "".join((code or "").split())
        try:
            matched = match_totp_counter(
                candidate,
                secret,
                now=now,
                step=self.config.time_step,
                digits=self.config.digits,
                window=self.config.window,
                algorithm=self.config.algorithm,
                last_accepted_counter=last_accepted_counter,
            )
        except OTPError as e:
            logger.warning("TOTP verification failed", error=type(e).__name__)
            return None

        if matched is None:
            logger.warning("Invalid TOTP attempt", window=self.config.window)
        else:
            logger.debug("TOTP code verified", counter=matched)
        return matched

    def verify_code(
        self,
        code: str,
        secret: bytes,
        now: Optional[float] = None,
        last_accepted_counter: Optional[int] = None,
    ) -> bool:
        """Verify a TOTP code within the configured drift window."""
        return self.match_code(
            code, secret, now=now, last_accepted_counter=last_accepted_counter
        ) is not None

    def verify_hotp(
        self,
        code: str,
        secret: bytes,
        counter: int,
        look_ahead: int = 0,
    ) -> Optional[int]:
        """Verify an HOTP code; returns the matching counter or None."""
        candidate = "".join((code or "").split())
        try:
            return verify_hotp(
                candidate,
                secret,
                counter,
                digits=self.config.digits,
                algorithm=self.config.algorithm,
                look_ahead=look_ahead,
            )
        except OTPError as e:
            logger.warning("HOTP verification failed", error=type(e).__name__)
            return None

    # Provisioning

    def provisioning_uri(
        self,
        secret: bytes,
        account_name: str,
        issuer: Optional[str] = None,
    ) -> str:
        """
        Build the otpauth:// URI for QR-code enrollment.

        Raises:
            ConfigurationError: If no issuer is given and none is configured
        """
        issuer = issuer or self.config.issuer
        if not issuer:
            raise ConfigurationError("An issuer is required to build a provisioning URI")
        return build_uri(
            secret,
            account_name,
            issuer,
            algorithm=self.config.algorithm,
            digits=self.config.digits,
            step=self.config.time_step,
        )

    # Recovery codes

    def generate_recovery_codes(self, count: Optional[int] = None) -> List[str]:
        count = self.config.recovery_code_count if count is None else count
        codes = generate_recovery_codes(count, random_source=self.random_source)
        logger.info("Recovery codes generated", count=len(codes))
        return codes

    def create_recovery_codes(
        self,
        count: Optional[int] = None,
    ) -> Tuple[List[str], List[RecoveryCodeRecord]]:
        """
        Generate recovery codes and their storage records.

        Returns:
            Tuple of (plain_codes, records); show the plain codes to the
            user once and persist only the records
        """
        codes = self.generate_recovery_codes(count)
        records = [RecoveryCodeRecord(code_hash=hash_recovery_code(code)) for code in codes]
        return codes, records

    @staticmethod
    def hash_recovery_code(code: str) -> str:
        return hash_recovery_code(code)

    def verify_recovery_code(self, code: str, stored_hash: str) -> bool:
        """Verify a recovery code; malformed stored hashes count as a mismatch."""
        try:
            return verify_recovery_code(code, stored_hash)
        except OTPError as e:
            logger.warning("Recovery code verification failed", error=type(e).__name__)
            return False

    # Enrollment

    def enroll(self, account_name: str, issuer: Optional[str] = None) -> Enrollment:
        """
        Run the full enrollment flow for one account.

        Args:
            account_name: User identifier shown in the authenticator app
            issuer: Service name (defaults to config.issuer)

        Returns:
            Enrollment with the raw secret to store, its base32 form, the
            provisioning URI and a fresh batch of recovery codes
        """
        secret = self.generate_secret()
        uri = self.provisioning_uri(secret, account_name, issuer)
        codes, records = self.create_recovery_codes()

        logger.info(
            "TOTP enrollment created",
            algorithm=self.config.algorithm.value,
            digits=self.config.digits,
            period=self.config.time_step,
            recovery_codes=len(codes),
        )

        return Enrollment(
            secret=secret,
            secret_b32=base32.encode(secret),
            uri=uri,
            recovery_codes=codes,
            recovery_records=records,
        )
