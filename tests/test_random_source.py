"""
Unit Tests for the Random Source
================================
"""

import pytest


class TestSystemRandomSource:
    """Tests for the OS-backed random source."""

    def test_token_bytes(self):
        from otp_engine.random_source import SystemRandomSource

        source = SystemRandomSource()

        assert len(source.token_bytes(20)) == 20
        assert source.token_bytes(0) == b""
        assert source.token_bytes(32) != source.token_bytes(32)

    def test_negative_count(self):
        from otp_engine.random_source import SystemRandomSource

        with pytest.raises(ValueError):
            SystemRandomSource().token_bytes(-1)

    def test_satisfies_protocol(self, fixed_random):
        """Both the default source and test doubles fit the protocol."""
        from otp_engine.random_source import RandomSource, default_random_source

        assert isinstance(default_random_source, RandomSource)
        assert isinstance(fixed_random(b""), RandomSource)
