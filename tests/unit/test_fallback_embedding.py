"""Unit tests for the deterministic fallback embedding."""

import hashlib

import pytest

from docrag.embedding.fallback import fallback_embedding


class TestFallbackEmbedding:
    def test_is_pure(self):
        assert fallback_embedding("hello world", 64) == fallback_embedding("hello world", 64)

    @pytest.mark.parametrize("dim", [1, 7, 32, 33, 384, 768])
    def test_has_requested_length(self, dim):
        assert len(fallback_embedding("some text", dim)) == dim

    @pytest.mark.parametrize("text", ["", "a", "Name: Alice. Skills: Go, Rust, Python.", "ü" * 50])
    def test_components_in_unit_range(self, text):
        vector = fallback_embedding(text, 100)
        assert all(-1.0 <= v <= 1.0 for v in vector)

    def test_first_value_follows_digest(self):
        digest = hashlib.sha256(b"hello|0").digest()
        assert fallback_embedding("hello", 1)[0] == pytest.approx(digest[0] / 255 * 2 - 1)

    def test_rehashes_with_counter_after_32_bytes(self):
        second = hashlib.sha256(b"hello|1").digest()
        vector = fallback_embedding("hello", 40)
        assert vector[32] == pytest.approx(second[0] / 255 * 2 - 1)

    def test_shorter_vector_is_prefix_of_longer(self):
        assert fallback_embedding("text", 50) == fallback_embedding("text", 100)[:50]

    def test_different_texts_differ(self):
        assert fallback_embedding("alpha", 32) != fallback_embedding("beta", 32)

    @pytest.mark.parametrize("dim", [0, -3])
    def test_rejects_non_positive_dimension(self, dim):
        with pytest.raises(ValueError):
            fallback_embedding("text", dim)
