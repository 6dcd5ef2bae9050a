"""Unit tests for utility functions."""

from tlapp.utils import generate_id


class TestGenerateId:
    """Test cases for generate_id()."""

    def test_returns_hex_string(self):
        """Test IDs are 32 hex characters."""
        value = generate_id()
        assert len(value) == 32
        int(value, 16)

    def test_ids_are_unique(self):
        """Test consecutive IDs differ."""
        assert len({generate_id() for _ in range(100)}) == 100
