"""Unit tests for PasswordHashingService."""

import bcrypt
import pytest

from bookshelf_auth import PasswordHashingService, WeakPasswordError


class TestPasswordHashing:
    """Tests for hashing and verification."""

    def setup_method(self):
        """Set up test fixtures (minimum cost keeps the suite fast)."""
        self.service = PasswordHashingService(rounds=4)

    def test_hash_is_not_plaintext(self):
        hashed = self.service.hash("secret-pass")
        assert hashed != "secret-pass"
        assert hashed.startswith("$2")

    def test_verify_correct_password(self):
        hashed = self.service.hash("secret-pass")
        assert self.service.verify("secret-pass", hashed) is True

    def test_verify_wrong_password(self):
        hashed = self.service.hash("secret-pass")
        assert self.service.verify("wrong-pass", hashed) is False

    def test_verify_with_malformed_hash_returns_false(self):
        assert self.service.verify("secret-pass", "not-a-bcrypt-hash") is False

    def test_same_password_hashes_differently(self):
        assert self.service.hash("secret-pass") != self.service.hash("secret-pass")

    def test_needs_rehash_when_rounds_differ(self):
        hashed = PasswordHashingService(rounds=5).hash("secret-pass")
        assert self.service.needs_rehash(hashed) is True
        assert PasswordHashingService(rounds=5).needs_rehash(hashed) is False

    def test_needs_rehash_for_unparseable_hash(self):
        assert self.service.needs_rehash("not-a-bcrypt-hash") is True

    def test_verify_dummy_always_fails(self):
        assert self.service.verify_dummy("secret-pass") is False
        assert self.service.verify_dummy("dummy-password") is False
        assert self.service.verify_dummy("x" * 100) is False

    def test_verify_dummy_runs_bcrypt(self, monkeypatch):
        calls = []
        real_checkpw = bcrypt.checkpw

        def counting_checkpw(password, hashed):
            calls.append(hashed)
            return real_checkpw(password, hashed)

        monkeypatch.setattr(bcrypt, "checkpw", counting_checkpw)
        self.service.verify_dummy("secret-pass")
        self.service.verify_dummy("other-pass")

        assert len(calls) == 2
        assert calls[0] == calls[1]
        assert calls[0].startswith(b"$2b$04$")


class TestPasswordStrength:
    """Tests for password strength validation."""

    def setup_method(self):
        """Set up test fixtures."""
        self.service = PasswordHashingService(rounds=4)

    @pytest.mark.parametrize("password", ["", "12345"])
    def test_short_password_raises(self, password):
        with pytest.raises(WeakPasswordError):
            self.service.hash(password)

    def test_password_over_72_bytes_raises(self):
        with pytest.raises(WeakPasswordError, match="72 bytes"):
            self.service.validate_strength("é" * 40)

    def test_six_characters_is_enough(self):
        self.service.validate_strength("123456")

    @pytest.mark.parametrize("rounds", [3, 32])
    def test_rounds_out_of_range_raise(self, rounds):
        with pytest.raises(ValueError, match="between 4 and 31"):
            PasswordHashingService(rounds=rounds)
