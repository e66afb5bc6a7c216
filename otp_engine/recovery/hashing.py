"""
Recovery Code Hashing
=====================
Normalization, hashing and verification of recovery codes for storage.
"""

import hashlib
import hmac
import re
from typing import Iterable, Optional
import structlog

from ..exceptions import DecodeFailure
from .generator import RECOVERY_ALPHABET, SEPARATOR

_WELL_FORMED = re.compile(rf"^[{RECOVERY_ALPHABET}]{{4}}-[{RECOVERY_ALPHABET}]{{4}}$")
_HEX_DIGEST = re.compile(r"^[0-9a-f]{64}$")

logger = structlog.get_logger(__name__)


def normalize_recovery_code(code: str) -> str:
    """Strip surrounding whitespace and hyphens, then uppercase."""
    return code.strip().replace(SEPARATOR, "").upper()


def is_well_formed_recovery_code(code: str) -> bool:
    """Check that a code has the displayed XXXX-XXXX shape."""
    return bool(_WELL_FORMED.match(code.strip().upper()))


def hash_recovery_code(code: str) -> str:
    """
    Hash a recovery code for storage.

    Args:
        code: Plain recovery code, with or without the hyphen

    Returns:
        SHA-256 hex digest of the normalized code
    """
    return hashlib.sha256(normalize_recovery_code(code).encode("utf-8")).hexdigest()


def _stored_digest(stored_hash: str) -> str:
    digest = stored_hash.strip().lower()
    if not _HEX_DIGEST.match(digest):
        raise DecodeFailure("Stored recovery code hash is not a SHA-256 hex digest")
    return digest


def verify_recovery_code(code: str, stored_hash: str) -> bool:
    """
    Verify a recovery code against its stored hash.

    Uses constant-time comparison so partial digest matches are not
    observable through timing.

    Raises:
        DecodeFailure: If `stored_hash` is not a SHA-256 hex digest
    """
    expected = _stored_digest(stored_hash)
    return hmac.compare_digest(hash_recovery_code(code), expected)


def find_recovery_code(code: str, stored_hashes: Iterable[str]) -> Optional[int]:
    """
    Locate the stored hash matching `code`.

    Malformed stored hashes are skipped so one bad row cannot hide a
    valid code stored after it.

    Returns:
        Index into `stored_hashes` so the caller can mark it consumed,
        or None if no hash matches
    """
    for index, stored_hash in enumerate(stored_hashes):
        try:
            if verify_recovery_code(code, stored_hash):
                return index
        except DecodeFailure:
            logger.warning("Skipping malformed recovery code hash", index=index)
    return None
