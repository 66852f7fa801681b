"""
Tests for account operations (signup, login, me, logout).
"""

import asyncio

import pytest

from authservice.auth import authenticate
from authservice.db import SessionClaim
from authservice.errors import (
    DuplicateEmail, InvalidCredentials, InvalidInput, MissingField, Unauthorized,
    WeakPassword,
)


class TestSignup:

    @pytest.mark.asyncio
    async def test_signup_normalizes_email_and_trims_name(self, accounts, store):
        user = await accounts.signup("  Ada ", "Ada@Example.com", "secret1")
        assert user.name == "Ada"
        assert user.email == "ada@example.com"
        record = await store.lookup("ada@example.com")
        assert record.password_hash != "secret1"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("name,email,password", [
        (None, "ada@example.com", "secret1"),
        ("Ada", None, "secret1"),
        ("Ada", "ada@example.com", None),
        ("   ", "ada@example.com", "secret1"),
        ("Ada", "  ", "secret1"),
        ("Ada", "ada@example.com", ""),
    ])
    async def test_missing_field(self, accounts, name, email, password):
        with pytest.raises(MissingField):
            await accounts.signup(name, email, password)

    @pytest.mark.asyncio
    async def test_password_with_nul_byte_is_invalid_input(self, accounts, store):
        with pytest.raises(InvalidInput):
            await accounts.signup("Ada", "ada@example.com", "secret\x00x")
        assert len(store) == 0

    @pytest.mark.asyncio
    async def test_weak_password(self, accounts, store):
        with pytest.raises(WeakPassword):
            await accounts.signup("Ada", "ada@example.com", "12345")
        assert len(store) == 0

    @pytest.mark.asyncio
    async def test_six_characters_is_enough(self, accounts):
        user = await accounts.signup("Ada", "ada@example.com", "123456")
        assert user.email == "ada@example.com"

    @pytest.mark.asyncio
    async def test_duplicate_with_different_case(self, accounts):
        await accounts.signup("Ada", "Ada@Example.com", "secret1")
        with pytest.raises(DuplicateEmail):
            await accounts.signup("Ada Again", " ADA@example.COM ", "secret2")

    @pytest.mark.asyncio
    async def test_concurrent_signups_same_email(self, accounts, store):
        results = await asyncio.gather(
            accounts.signup("Ada", "ada@example.com", "secret1"),
            accounts.signup("Eve", "ADA@example.com", "secret2"),
            return_exceptions=True,
        )
        assert sum(1 for r in results if isinstance(r, DuplicateEmail)) == 1
        assert len(store) == 1


class TestLogin:

    @pytest.mark.asyncio
    async def test_signup_then_login(self, accounts, session_manager):
        await accounts.signup("Ada", "Ada@Example.com", "secret1")
        token, user = await accounts.login("ada@example.com", "secret1")
        assert user.name == "Ada"
        assert user.email == "ada@example.com"
        assert session_manager.verify(token) == SessionClaim(email="ada@example.com", name="Ada")

    @pytest.mark.asyncio
    async def test_login_normalizes_email(self, accounts):
        await accounts.signup("Ada", "ada@example.com", "secret1")
        _, user = await accounts.login("  ADA@Example.com", "secret1")
        assert user.email == "ada@example.com"

    @pytest.mark.asyncio
    async def test_wrong_password_and_unknown_email_look_the_same(self, accounts):
        await accounts.signup("Ada", "ada@example.com", "secret1")

        with pytest.raises(InvalidCredentials) as wrong_password:
            await accounts.login("ada@example.com", "wrong1")
        with pytest.raises(InvalidCredentials) as unknown_email:
            await accounts.login("nobody@example.com", "secret1")

        assert wrong_password.value.to_dict() == unknown_email.value.to_dict()
        assert wrong_password.value.status_code == unknown_email.value.status_code == 401

    @pytest.mark.asyncio
    @pytest.mark.parametrize("email,password", [(None, "secret1"), ("ada@example.com", None), ("", "")])
    async def test_missing_field(self, accounts, email, password):
        with pytest.raises(MissingField):
            await accounts.login(email, password)


class TestMe:

    @pytest.mark.asyncio
    async def test_me_with_fresh_token(self, accounts):
        await accounts.signup("Ada", "ada@example.com", "secret1")
        token, _ = await accounts.login("ada@example.com", "secret1")
        user = await accounts.me(token)
        assert user.model_dump() == {"name": "Ada", "email": "ada@example.com"}

    @pytest.mark.asyncio
    async def test_me_without_token(self, accounts):
        with pytest.raises(Unauthorized):
            await accounts.me(None)

    @pytest.mark.asyncio
    async def test_me_with_expired_token(self, accounts, past_session_manager):
        await accounts.signup("Ada", "ada@example.com", "secret1")
        token = past_session_manager.issue(SessionClaim(email="ada@example.com", name="Ada"))
        with pytest.raises(Unauthorized):
            await accounts.me(token)

    @pytest.mark.asyncio
    async def test_me_after_user_removed(self, accounts, store):
        await accounts.signup("Ada", "ada@example.com", "secret1")
        token, _ = await accounts.login("ada@example.com", "secret1")
        await store.remove("ada@example.com")
        with pytest.raises(Unauthorized):
            await accounts.me(token)

    @pytest.mark.asyncio
    async def test_logout_is_stateless(self, accounts):
        await accounts.signup("Ada", "ada@example.com", "secret1")
        token, _ = await accounts.login("ada@example.com", "secret1")
        assert (await accounts.logout())["ok"] is True
        # Nothing is revoked server-side
        assert (await accounts.me(token)).email == "ada@example.com"


class TestGuard:
    """Tests for authenticate()."""

    def test_no_token(self, session_manager):
        with pytest.raises(Unauthorized):
            authenticate(session_manager, None)
        with pytest.raises(Unauthorized):
            authenticate(session_manager, "")

    def test_valid_token(self, session_manager):
        claim = SessionClaim(email="ada@example.com", name="Ada")
        assert authenticate(session_manager, session_manager.issue(claim)) == claim

    def test_invalid_token(self, session_manager):
        with pytest.raises(Unauthorized):
            authenticate(session_manager, "not.a.token")

    def test_expired_token(self, session_manager, past_session_manager):
        token = past_session_manager.issue(SessionClaim(email="ada@example.com"))
        with pytest.raises(Unauthorized):
            authenticate(session_manager, token)
