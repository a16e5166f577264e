"""
Unit tests for KeyGenerator.
"""
import pytest

from nomenclator.errors import EntropyUnavailable
from nomenclator.key_generator import KEY_SIZE, KeyGenerator


class TestGenerate:
    """Tests for generate method."""

    def test_returns_bytes(self, key_generator):
        """Should return bytes."""
        assert isinstance(key_generator.generate(), bytes)

    def test_length(self, key_generator):
        """Every key should be exactly 32 bytes."""
        for _ in range(100):
            assert len(key_generator.generate()) == KEY_SIZE == 32

    def test_uniqueness(self, key_generator):
        """Independently generated keys should never collide."""
        keys = {key_generator.generate() for _ in range(5000)}
        assert len(keys) == 5000

    def test_uses_injected_source(self):
        """Source should be called with the key size."""
        calls = []

        def source(n):
            calls.append(n)
            return b'\x01' * n

        assert KeyGenerator(source=source).generate() == b'\x01' * 32
        assert calls == [32]


class TestEntropyFailures:
    """Tests for entropy source failures."""

    def test_os_error(self, mocker):
        """OSError from the source should become EntropyUnavailable."""
        source = mocker.MagicMock(side_effect=OSError("getrandom failed"))
        with pytest.raises(EntropyUnavailable) as exc_info:
            KeyGenerator(source=source).generate()
        assert "getrandom failed" in str(exc_info.value)
        assert exc_info.value.requested == 32

    def test_short_read(self):
        """Fewer bytes than requested should be rejected."""
        with pytest.raises(EntropyUnavailable):
            KeyGenerator(source=lambda n: b'\x00' * (n - 1)).generate()

    def test_invalid_key_size(self):
        """Non-positive sizes are rejected up front."""
        with pytest.raises(ValueError):
            KeyGenerator(key_size=0)
