"""
Recovery Code Generator
=======================
Human-readable single-use recovery codes in XXXX-XXXX form.
"""

from typing import List, Optional

from ..random_source import RandomSource, default_random_source

# Excludes visually ambiguous characters (0, O, 1, I)
RECOVERY_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
GROUP_SIZE = 4
CODE_LENGTH = GROUP_SIZE * 2
SEPARATOR = "-"
DEFAULT_BATCH_SIZE = 8


def map_random_bytes(
    random_source: RandomSource,
    length: int,
    alphabet: str = RECOVERY_ALPHABET,
) -> str:
    """
    Draw `length` characters from `alphabet` using random bytes.

    Plain modulo is only uniform when the alphabet size divides 256; for any
    other size, bytes at or above the largest multiple are rejected.
    """
    size = len(alphabet)
    if not 0 < size <= 256:
        raise ValueError("Alphabet must contain between 1 and 256 symbols")
    limit = 256 - (256 % size)

    chars: List[str] = []
    while len(chars) < length:
        for byte in random_source.token_bytes(length - len(chars)):
            if byte < limit:
                chars.append(alphabet[byte % size])
    return "".join(chars)


def format_recovery_code(raw: str) -> str:
    """Split an 8-character code into two hyphen-joined groups."""
    return f"{raw[:GROUP_SIZE]}{SEPARATOR}{raw[GROUP_SIZE:]}"


def generate_recovery_code(random_source: Optional[RandomSource] = None) -> str:
    """Generate one recovery code from 8 random bytes."""
    source = random_source or default_random_source
    return format_recovery_code(map_random_bytes(source, CODE_LENGTH))


def generate_recovery_codes(
    count: int = DEFAULT_BATCH_SIZE,
    random_source: Optional[RandomSource] = None,
) -> List[str]:
    """
    Generate a batch of recovery codes.

    Args:
        count: Number of codes to generate
        random_source: Source of secure random bytes

    Returns:
        List of codes like "ABCD-EF23"
    """
    if count < 0:
        raise ValueError(f"count cannot be negative, got {count}")
    return [generate_recovery_code(random_source) for _ in range(count)]
