"""Tests for Argon2id hashing of passwords and verification codes."""

from mydiary.core.passwords import (
    hash_secret,
    verify_against_dummy,
    verify_secret,
)


class TestHashSecret:
    """Tests for hash_secret()."""

    def test_produces_argon2id_encoding(self):
        encoded = hash_secret("Abcd1!")
        assert encoded.startswith("$argon2id$")

    def test_never_contains_plaintext(self):
        assert "Abcd1!" not in hash_secret("Abcd1!")

    def test_same_secret_hashes_differently(self):
        """A fresh salt per call gives distinct encodings."""
        assert hash_secret("Abcd1!") != hash_secret("Abcd1!")

    def test_encoding_carries_configured_cost(self):
        # Test settings lower the cost to t=1, m=8, p=1
        assert "m=8,t=1,p=1" in hash_secret("Abcd1!")


class TestVerifySecret:
    """Tests for verify_secret()."""

    def test_round_trip(self):
        assert verify_secret("Abcd1!", hash_secret("Abcd1!")) is True

    def test_wrong_secret(self):
        assert verify_secret("Abcd1?", hash_secret("Abcd1!")) is False

    def test_malformed_hash_is_a_mismatch(self):
        assert verify_secret("Abcd1!", "not-a-hash") is False

    def test_codes_verify_like_passwords(self):
        encoded = hash_secret("123456")
        assert verify_secret("123456", encoded) is True
        assert verify_secret("654321", encoded) is False


class TestVerifyAgainstDummy:
    """verify_against_dummy() always reports a mismatch."""

    def test_returns_false(self):
        assert verify_against_dummy("Abcd1!") is False

    def test_returns_false_for_the_dummy_secret(self):
        assert verify_against_dummy("mydiary-dummy-secret") is False
