"""Tests for proxy ID generation."""

import re

import pytest

from app.services.id_generator import PROXY_ID_ALPHABET, generate_proxy_id


class TestGenerateProxyId:
    """Test the random proxy ID generator."""

    def test_default_length_is_eight(self):
        assert len(generate_proxy_id()) == 8

    def test_custom_length(self):
        assert len(generate_proxy_id(12)) == 12
        assert len(generate_proxy_id(1)) == 1

    def test_only_lowercase_alphanumerics(self):
        for _ in range(200):
            assert re.fullmatch(r"[a-z0-9]{8}", generate_proxy_id())

    def test_alphabet_has_36_symbols(self):
        assert len(PROXY_ID_ALPHABET) == 36
        assert len(set(PROXY_ID_ALPHABET)) == 36

    def test_ids_vary(self):
        ids = {generate_proxy_id() for _ in range(100)}
        assert len(ids) > 95

    def test_rejects_non_positive_length(self):
        with pytest.raises(ValueError):
            generate_proxy_id(0)
