"""
Unit Tests for Recovery Codes
=============================
"""

import re

import pytest

CODE_PATTERN = re.compile(r"^[A-Z2-9]{4}-[A-Z2-9]{4}$")


class TestGenerateRecoveryCodes:
    """Tests for recovery code generation."""

    def test_default_batch(self):
        """Should generate 8 well-formed codes by default."""
        from otp_engine.recovery import generate_recovery_codes

        codes = generate_recovery_codes()

        assert len(codes) == 8
        for code in codes:
            assert CODE_PATTERN.match(code)
            for ambiguous in "0O1I":
                assert ambiguous not in code

    def test_custom_count(self):
        from otp_engine.recovery import generate_recovery_codes

        assert len(generate_recovery_codes(3)) == 3
        assert generate_recovery_codes(0) == []

    def test_negative_count(self):
        from otp_engine.recovery import generate_recovery_codes

        with pytest.raises(ValueError):
            generate_recovery_codes(-1)

    def test_deterministic_source(self, fixed_random):
        """Bytes map onto the alphabet by modulo 32."""
        from otp_engine.recovery import generate_recovery_codes

        source = fixed_random(bytes(range(8)) + bytes([32, 33, 63, 64, 255, 254, 100, 200]))

        codes = generate_recovery_codes(2, random_source=source)

        assert codes == ["ABCD-EFGH", "AB9A-98EJ"]

    def test_rejection_sampling_for_uneven_alphabet(self, fixed_random):
        """Bytes beyond the largest multiple of the alphabet size are redrawn."""
        from otp_engine.recovery import map_random_bytes

        source = fixed_random(bytes([255, 3, 250, 7]))

        assert map_random_bytes(source, 2, alphabet="0123456789") == "37"


class TestRecoveryHashing:
    """Tests for recovery code hashing and verification."""

    def test_hash_is_sha256_hex(self):
        from otp_engine.recovery import hash_recovery_code

        digest = hash_recovery_code("ABCD-EFGH")

        assert len(digest) == 64
        assert digest == hash_recovery_code("ABCDEFGH")

    def test_normalization(self):
        """Hyphens, case and surrounding whitespace should not matter."""
        from otp_engine.recovery import hash_recovery_code, verify_recovery_code

        stored = hash_recovery_code("ABCD-EFGH")

        assert verify_recovery_code("abcd-efgh", stored) is True
        assert verify_recovery_code(" abcdefgh ", stored) is True

    def test_generated_codes_verify(self):
        from otp_engine.recovery import (
            generate_recovery_codes,
            hash_recovery_code,
            verify_recovery_code,
        )

        for code in generate_recovery_codes():
            assert verify_recovery_code(code, hash_recovery_code(code)) is True

    def test_single_character_mutation_fails(self):
        """Changing any one character must break verification."""
        from otp_engine.recovery import (
            RECOVERY_ALPHABET,
            generate_recovery_codes,
            hash_recovery_code,
            verify_recovery_code,
        )

        code = generate_recovery_codes(1)[0]
        stored = hash_recovery_code(code)

        for index, char in enumerate(code):
            if char == "-":
                continue
            replacement = next(c for c in RECOVERY_ALPHABET if c != char)
            mutated = code[:index] + replacement + code[index + 1:]
            assert verify_recovery_code(mutated, stored) is False

    def test_malformed_stored_hash(self):
        """A stored hash that is not a SHA-256 digest is a DecodeFailure."""
        from otp_engine.exceptions import DecodeFailure
        from otp_engine.recovery import verify_recovery_code

        with pytest.raises(DecodeFailure):
            verify_recovery_code("ABCD-EFGH", "not-a-digest")

    def test_find_recovery_code(self):
        from otp_engine.recovery import find_recovery_code, hash_recovery_code

        stored = [hash_recovery_code(c) for c in ("AAAA-BBBB", "CCCC-DDDD", "EEEE-FFFF")]

        assert find_recovery_code("cccc-dddd", stored) == 1
        assert find_recovery_code("GGGG-HHHH", stored) is None

    def test_find_skips_malformed_rows(self):
        """A bad stored row before the matching hash does not end the search."""
        from otp_engine.recovery import find_recovery_code, hash_recovery_code

        stored = ["legacy-bad-row", hash_recovery_code("CCCC-DDDD")]

        assert find_recovery_code("CCCC-DDDD", stored) == 1
        assert find_recovery_code("GGGG-HHHH", stored) is None

    def test_inner_whitespace_not_normalized(self):
        """Only surrounding whitespace is stripped."""
        from otp_engine.recovery import hash_recovery_code, verify_recovery_code

        stored = hash_recovery_code("ABCD-EFGH")

        assert verify_recovery_code("AB CD-EFGH", stored) is False

    def test_well_formed(self):
        from otp_engine.recovery import is_well_formed_recovery_code

        assert is_well_formed_recovery_code("ABCD-EF23") is True
        assert is_well_formed_recovery_code("abcd-ef23") is True
        assert is_well_formed_recovery_code("ABCD-EF01") is False
        assert is_well_formed_recovery_code("ABCDEF23") is False


class TestRecoveryCodeRecord:
    """Tests for the recovery code lifecycle."""

    def test_lifecycle(self):
        from otp_engine.recovery import RecoveryCodeRecord, RecoveryCodeState

        record = RecoveryCodeRecord(code_hash="a" * 64)

        assert record.state == RecoveryCodeState.HASHED
        assert record.is_usable

        record.mark_consumed()

        assert record.state == RecoveryCodeState.CONSUMED
        assert record.consumed_at is not None
        assert not record.is_usable

    def test_consumed_is_terminal(self):
        from otp_engine.recovery import RecoveryCodeRecord

        record = RecoveryCodeRecord(code_hash="a" * 64)
        record.mark_consumed()

        with pytest.raises(ValueError):
            record.mark_consumed()
        with pytest.raises(ValueError):
            record.mark_expired()

    def test_expired_cannot_be_consumed(self):
        from otp_engine.recovery import RecoveryCodeRecord, RecoveryCodeState

        record = RecoveryCodeRecord(code_hash="a" * 64)
        record.mark_expired()

        assert record.state == RecoveryCodeState.EXPIRED
        with pytest.raises(ValueError):
            record.mark_consumed()

    def test_expired_is_terminal(self):
        from otp_engine.recovery import RecoveryCodeRecord

        record = RecoveryCodeRecord(code_hash="a" * 64)
        record.mark_expired()

        with pytest.raises(ValueError):
            record.mark_expired()
