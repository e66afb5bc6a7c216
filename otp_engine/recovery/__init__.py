"""
Recovery Codes
==============
Single-use account-recovery codes: generation, hashing and verification.
"""

# Re-export all public APIs
from .models import RecoveryCodeState, RecoveryCodeRecord
from .generator import (
    RECOVERY_ALPHABET,
    DEFAULT_BATCH_SIZE,
    generate_recovery_code,
    generate_recovery_codes,
    format_recovery_code,
    map_random_bytes,
)
from .hashing import (
    normalize_recovery_code,
    is_well_formed_recovery_code,
    hash_recovery_code,
    verify_recovery_code,
    find_recovery_code,
)

__all__ = [
    # Models
    "RecoveryCodeState",
    "RecoveryCodeRecord",
    # Generator
    "RECOVERY_ALPHABET",
    "DEFAULT_BATCH_SIZE",
    "generate_recovery_code",
    "generate_recovery_codes",
    "format_recovery_code",
    "map_random_bytes",
    # Hashing
    "normalize_recovery_code",
    "is_well_formed_recovery_code",
    "hash_recovery_code",
    "verify_recovery_code",
    "find_recovery_code",
]
