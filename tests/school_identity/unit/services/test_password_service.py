"""Unit tests for PasswordHashingService."""

from unittest.mock import Mock

import bcrypt
import pytest

from school_identity import PasswordHashingService, WeakPasswordError


class TestPasswordHashingService:
    """Tests for password hashing and verification."""

    def setup_method(self):
        """Set up test fixtures."""
        self.service = PasswordHashingService(rounds=4)  # Low rounds for fast tests

    def test_default_rounds(self):
        assert PasswordHashingService().rounds == 10

    def test_hash_returns_bcrypt_format(self):
        """Test that hash returns a valid bcrypt hash."""
        hashed = self.service.hash("secure_password123")

        # bcrypt hashes start with $2b$ or $2a$
        assert hashed.startswith("$2")
        assert len(hashed) == 60

    def test_hash_embeds_cost_factor(self):
        hashed = self.service.hash("secure_password123")

        assert hashed.split("$")[2] == "04"

    def test_hash_is_not_plaintext(self):
        password = "secure_password123"

        assert password not in self.service.hash(password)

    def test_verify_correct_password(self):
        """Test that verify returns True for correct password."""
        password = "my_secret_password"
        hashed = self.service.hash(password)

        assert self.service.verify(password, hashed) is True

    def test_verify_incorrect_password(self):
        """Test that verify returns False for incorrect password."""
        hashed = self.service.hash("my_secret_password")

        assert self.service.verify("wrong_password", hashed) is False

    def test_verify_invalid_hash_returns_false(self):
        """Test that verify returns False for invalid hash format."""
        assert self.service.verify("password", "not_a_valid_hash") is False
        assert self.service.verify("password", "") is False

    def test_verify_empty_password_returns_false(self):
        hashed = self.service.hash("my_secret_password")

        assert self.service.verify("", hashed) is False

    def test_hash_produces_different_hashes(self):
        """Same password twice gives different hashes (random salt)."""
        password = "same_password"
        hash1 = self.service.hash(password)
        hash2 = self.service.hash(password)

        assert hash1 != hash2
        assert self.service.verify(password, hash1)
        assert self.service.verify(password, hash2)

    def test_verifies_hash_from_plain_bcrypt(self):
        """Hashes made elsewhere with bcrypt verify through the salt they embed."""
        stored = bcrypt.hashpw(b"legacy-password", bcrypt.gensalt(rounds=4))

        assert self.service.verify("legacy-password", stored.decode("utf-8"))

    def test_dummy_verify_returns_nothing(self):
        assert self.service.dummy_verify("whatever-password") is None
        assert self.service.dummy_verify("") is None

    def test_dummy_verify_never_hashes(self, monkeypatch):
        """The dummy hash exists before the first unknown-email login."""
        hashpw = Mock(side_effect=AssertionError("hashpw called on login path"))
        monkeypatch.setattr(bcrypt, "hashpw", hashpw)

        self.service.dummy_verify("whatever-password")

        hashpw.assert_not_called()


class TestPasswordValidation:
    """Tests for password strength validation."""

    def setup_method(self):
        """Set up test fixtures."""
        self.service = PasswordHashingService(rounds=4)

    def test_validate_empty_password_raises(self):
        with pytest.raises(WeakPasswordError, match="cannot be empty"):
            self.service.validate_strength("")

    def test_validate_short_password_raises(self):
        with pytest.raises(WeakPasswordError, match="at least 8 characters"):
            self.service.validate_strength("short")

    def test_validate_too_long_password_raises(self):
        """bcrypt only looks at the first 72 bytes."""
        with pytest.raises(WeakPasswordError, match="cannot exceed 72 bytes"):
            self.service.validate_strength("a" * 73)

    def test_validate_counts_bytes_not_characters(self):
        # 40 characters, 80 bytes
        with pytest.raises(WeakPasswordError, match="cannot exceed 72 bytes"):
            self.service.validate_strength("ü" * 40)

    def test_validate_accepts_boundaries(self):
        self.service.validate_strength("a" * 8)
        self.service.validate_strength("a" * 72)

    def test_hash_rejects_weak_password(self):
        with pytest.raises(WeakPasswordError):
            self.service.hash("short")


class TestNeedsRehash:
    """Tests for cost factor upgrade detection."""

    def test_same_rounds_no_rehash(self):
        service = PasswordHashingService(rounds=4)
        hashed = service.hash("my_secret_password")

        assert service.needs_rehash(hashed) is False

    def test_different_rounds_needs_rehash(self):
        old = PasswordHashingService(rounds=4)
        new = PasswordHashingService(rounds=5)

        assert new.needs_rehash(old.hash("my_secret_password")) is True

    def test_garbage_hash_needs_rehash(self):
        service = PasswordHashingService(rounds=4)

        assert service.needs_rehash("garbage") is True
