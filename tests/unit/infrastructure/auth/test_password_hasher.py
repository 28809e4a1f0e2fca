"""Unit tests for password hashing utilities."""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from toolhub.infrastructure.auth.password_hasher import (
    PasswordCheck,
    hash_password,
    hash_password_async,
    needs_rehash,
    verify_password,
    verify_password_async,
)


class TestHashPassword:
    """Tests for hash_password function."""

    def test_hash_password_returns_argon2id_hash(self):
        hashed = hash_password("SecureP@ss123!")

        assert hashed.startswith("$argon2id$")
        assert "m=65536,t=3,p=1" in hashed

    def test_hash_password_different_for_same_input(self):
        """Hashing the same password twice produces different hashes (random salt)."""
        password = "SecureP@ss123!"

        assert hash_password(password) != hash_password(password)

    def test_hash_does_not_contain_plaintext(self):
        assert "SecureP@ss123!" not in hash_password("SecureP@ss123!")

    def test_fresh_hash_does_not_need_rehash(self):
        assert needs_rehash(hash_password("SecureP@ss123!")) is False


class TestVerifyPassword:
    """Tests for verify_password function."""

    def test_verify_password_correct(self):
        hashed = hash_password("SecureP@ss123!")

        assert verify_password(hashed, "SecureP@ss123!") is PasswordCheck.MATCH

    def test_verify_password_incorrect(self):
        hashed = hash_password("SecureP@ss123!")

        assert verify_password(hashed, "WrongPassword") is PasswordCheck.MISMATCH

    def test_verify_password_case_sensitive(self):
        hashed = hash_password("SecureP@ss123!")

        assert verify_password(hashed, "securep@ss123!") is PasswordCheck.MISMATCH

    def test_verify_password_with_special_characters(self):
        password = "P@ssw0rd!#$%^&*()"

        assert verify_password(hash_password(password), password) is PasswordCheck.MATCH

    @pytest.mark.parametrize(
        "password", ["", " ", "pässwörd", "密码🔒", "tab\tand\nnewline", "x" * 1024]
    )
    def test_verify_password_unusual_inputs(self, password):
        hashed = hash_password(password)

        assert verify_password(hashed, password) is PasswordCheck.MATCH
        assert verify_password(hashed, password + "!") is PasswordCheck.MISMATCH

    def test_verify_password_malformed_hash_is_error(self):
        """A corrupt stored hash is reported as an error, not a mismatch."""
        assert verify_password("not-an-argon2-hash", "anything") is PasswordCheck.ERROR


class TestPasswordProperties:
    @settings(max_examples=10, deadline=None)
    @given(password=st.text(), other=st.text())
    def test_hash_matches_only_its_own_password(self, password, other):
        hashed = hash_password(password)

        assert verify_password(hashed, password) is PasswordCheck.MATCH
        if other != password:
            assert verify_password(hashed, other) is PasswordCheck.MISMATCH


class TestAsyncWrappers:
    @pytest.mark.asyncio
    async def test_hash_and_verify_async(self):
        hashed = await hash_password_async("SecureP@ss123!")

        assert await verify_password_async(hashed, "SecureP@ss123!") is PasswordCheck.MATCH
        assert await verify_password_async(hashed, "nope") is PasswordCheck.MISMATCH
