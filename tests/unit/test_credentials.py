"""
Unit tests for Argon2CredentialHasher.
"""

from unittest.mock import patch

import pytest
from argon2.exceptions import HashingError as Argon2HashingError

from src.domain.credentials import Argon2CredentialHasher
from src.domain.exceptions import HashingError


class TestHash:
    """Tests for hash method."""

    def test_produces_argon2id_phc_string(self, hasher: Argon2CredentialHasher) -> None:
        digest = hasher.hash("correct-horse-battery")
        assert digest.startswith("$argon2id$v=19$")

    def test_salted(self, hasher: Argon2CredentialHasher) -> None:
        """Same password hashed twice gives two different digests."""
        assert hasher.hash("correct-horse-battery") != hasher.hash("correct-horse-battery")

    def test_default_parameters_are_memory_hard(self) -> None:
        """Production defaults embed 64 MiB memory and 3 passes."""
        digest = Argon2CredentialHasher().hash("correct-horse-battery")
        assert "m=65536,t=3,p=4" in digest

    def test_library_failure_raises_hashing_error(self, hasher: Argon2CredentialHasher) -> None:
        with patch("argon2.PasswordHasher.hash", side_effect=Argon2HashingError("boom")):
            with pytest.raises(HashingError):
                hasher.hash("correct-horse-battery")


class TestVerify:
    """Tests for verify method."""

    def test_matching_password(self, hasher: Argon2CredentialHasher) -> None:
        digest = hasher.hash("correct-horse-battery")
        assert hasher.verify(digest, "correct-horse-battery") is True

    def test_wrong_password(self, hasher: Argon2CredentialHasher) -> None:
        digest = hasher.hash("correct-horse-battery")
        assert hasher.verify(digest, "wrong-horse-battery") is False

    def test_digest_verifies_across_parameters(self, hasher: Argon2CredentialHasher) -> None:
        """Parameters travel in the digest, so any instance can verify it."""
        digest = hasher.hash("correct-horse-battery")
        assert Argon2CredentialHasher().verify(digest, "correct-horse-battery") is True

    def test_invalid_digest_returns_false(self, hasher: Argon2CredentialHasher) -> None:
        assert hasher.verify("$2b$10$notargon", "correct-horse-battery") is False
