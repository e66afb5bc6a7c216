"""
Base32 Codec
============
RFC 4648 base32 encoding without padding, as used for OTP secrets.

Authenticator apps expect secrets in this form, so the codec works 5 bits at
a time across byte boundaries rather than relying on padded 40-bit blocks.
"""

from .exceptions import InvalidEncoding

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"

_INDEX = {char: value for value, char in enumerate(ALPHABET)}


def encode(data: bytes) -> str:
    """
    Encode bytes as unpadded uppercase base32.

    Args:
        data: Raw bytes to encode

    Returns:
        Base32 string using the alphabet A-Z2-7
    """
    chars = []
    buffer = 0
    bits = 0

    for byte in data:
        buffer = (buffer << 8) | byte
        bits += 8
        while bits >= 5:
            bits -= 5
            chars.append(ALPHABET[(buffer >> bits) & 0x1F])
        buffer &= (1 << bits) - 1

    if bits > 0:
        # Final partial group is left-aligned and filled with zero bits
        chars.append(ALPHABET[(buffer << (5 - bits)) & 0x1F])

    return "".join(chars)


def normalize(text: str) -> str:
    """Uppercase, drop all whitespace and any trailing '=' padding."""
    return "".join(text.split()).upper().rstrip("=")


def decode(text: str) -> bytes:
    """
    Decode a base32 string back into bytes.

    Input is case-insensitive and may contain whitespace or trailing
    padding. Leftover bits that do not complete a byte are dropped.

    Args:
        text: Base32 string

    Returns:
        Decoded bytes

    Raises:
        InvalidEncoding: If a character falls outside the base32 alphabet
    """
    output = bytearray()
    buffer = 0
    bits = 0

    for position, char in enumerate(normalize(text)):
        value = _INDEX.get(char)
        if value is None:
            raise InvalidEncoding(
                f"Invalid base32 character {char!r} at position {position}",
                character=char,
                position=position,
            )
        buffer = (buffer << 5) | value
        bits += 5
        if bits >= 8:
            bits -= 8
            output.append((buffer >> bits) & 0xFF)
            buffer &= (1 << bits) - 1

    return bytes(output)
