"""Unit tests for the authentication service"""

from datetime import datetime, timedelta, timezone
import asyncio
import time

import pytest
from jose import jwt

from task_manager.application.services.auth_service import AuthenticationService, TokenBlacklist
from task_manager.infrastructure.config.settings import AuthConfig
from task_manager.domain.exceptions import (
    AuthenticationError, InvalidTokenError, IncorrectPasswordError,
    UserAlreadyExistsError, UserNotFoundError
)


PASSWORD = "Password123"


@pytest.fixture
def token_blacklist():
    return TokenBlacklist()


@pytest.fixture
def auth_service(user_service, auth_config, token_blacklist):
    return AuthenticationService(user_service, auth_config, token_blacklist)


class TestRegistration:

    @pytest.mark.asyncio
    async def test_register_hashes_password(self, auth_service):
        user = await auth_service.register("alice", "alice@example.com", PASSWORD)

        assert user.password_hash != PASSWORD
        assert user.password_hash.startswith("$2")

    @pytest.mark.asyncio
    async def test_register_duplicate_email(self, auth_service):
        await auth_service.register("alice", "alice@example.com", PASSWORD)

        with pytest.raises(UserAlreadyExistsError):
            await auth_service.register("bob", "alice@example.com", PASSWORD)


class TestLogin:

    @pytest.mark.asyncio
    async def test_login_returns_token_with_claims(self, auth_service, auth_config):
        user = await auth_service.register("alice", "alice@example.com", PASSWORD)

        token = await auth_service.login("alice@example.com", PASSWORD)
        payload = jwt.decode(token, auth_config.secret_key, algorithms=[auth_config.algorithm])

        assert payload["sub"] == user.id
        assert payload["id"] == user.id
        assert payload["email"] == "alice@example.com"
        assert payload["username"] == "alice"
        assert payload["exp"] - payload["iat"] == auth_config.access_token_expire_minutes * 60
        assert payload["jti"]

    @pytest.mark.asyncio
    async def test_wrong_password_and_unknown_email_look_the_same(self, auth_service):
        await auth_service.register("alice", "alice@example.com", PASSWORD)

        with pytest.raises(AuthenticationError) as wrong_password:
            await auth_service.login("alice@example.com", "Wrong12345")
        with pytest.raises(AuthenticationError) as unknown_email:
            await auth_service.login("nobody@example.com", PASSWORD)

        assert str(wrong_password.value) == str(unknown_email.value) == "Authentication failed"


class TestTokens:

    @pytest.mark.asyncio
    async def test_verify_token(self, auth_service):
        user = await auth_service.register("alice", "alice@example.com", PASSWORD)
        token = await auth_service.login("alice@example.com", PASSWORD)

        verified = await auth_service.verify_token(token)

        assert verified.id == user.id

    @pytest.mark.asyncio
    async def test_verify_garbage_token(self, auth_service):
        with pytest.raises(InvalidTokenError, match="Invalid token"):
            await auth_service.verify_token("not-a-jwt")

    @pytest.mark.asyncio
    async def test_verify_expired_token(self, auth_service):
        user = await auth_service.register("alice", "alice@example.com", PASSWORD)
        token = auth_service._generate_token(user, expires_delta=timedelta(seconds=-10))

        with pytest.raises(InvalidTokenError, match="Token expired"):
            await auth_service.verify_token(token)

    @pytest.mark.asyncio
    async def test_verify_token_for_deleted_user(self, auth_service, user_service):
        user = await auth_service.register("alice", "alice@example.com", PASSWORD)
        token = await auth_service.login("alice@example.com", PASSWORD)
        await user_service.delete_user(user.id)

        with pytest.raises(InvalidTokenError):
            await auth_service.verify_token(token)

    @pytest.mark.asyncio
    async def test_refresh_issues_distinct_valid_token(self, auth_service):
        await auth_service.register("alice", "alice@example.com", PASSWORD)
        token = await auth_service.login("alice@example.com", PASSWORD)

        refreshed = await auth_service.refresh_token(token)

        assert refreshed != token
        assert (await auth_service.verify_token(refreshed)).email == "alice@example.com"

    @pytest.mark.asyncio
    async def test_logout_blacklists_token(self, auth_service, token_blacklist):
        await auth_service.register("alice", "alice@example.com", PASSWORD)
        token = await auth_service.login("alice@example.com", PASSWORD)

        await auth_service.logout(token)

        assert token_blacklist.is_token_blacklisted(token)
        with pytest.raises(InvalidTokenError, match="Token has been revoked"):
            await auth_service.verify_token(token)


class TestChangePassword:

    @pytest.mark.asyncio
    async def test_change_password(self, auth_service):
        user = await auth_service.register("alice", "alice@example.com", PASSWORD)

        await auth_service.change_password(user.id, PASSWORD, "NewPassword456")

        with pytest.raises(AuthenticationError):
            await auth_service.login("alice@example.com", PASSWORD)
        assert await auth_service.login("alice@example.com", "NewPassword456")

    @pytest.mark.asyncio
    async def test_wrong_current_password(self, auth_service):
        user = await auth_service.register("alice", "alice@example.com", PASSWORD)

        with pytest.raises(IncorrectPasswordError, match="Current password is incorrect"):
            await auth_service.change_password(user.id, "Wrong12345", "NewPassword456")

    @pytest.mark.asyncio
    async def test_unknown_user(self, auth_service):
        with pytest.raises(UserNotFoundError):
            await auth_service.change_password("missing", PASSWORD, "NewPassword456")


class TestTokenBlacklist:

    def test_cleanup_drops_expired_entries(self, token_blacklist):
        token_blacklist.blacklisted_tokens["old"] = datetime.now(timezone.utc) - timedelta(seconds=1)
        token_blacklist.blacklisted_tokens["new"] = datetime.now(timezone.utc) + timedelta(minutes=5)

        assert token_blacklist.cleanup_expired_tokens() == 1
        assert not token_blacklist.is_token_blacklisted("old")
        assert token_blacklist.is_token_blacklisted("new")

    def test_blacklisting_prunes_expired_entries(self, token_blacklist):
        token_blacklist.blacklist_token("old", datetime.now(timezone.utc) - timedelta(seconds=1))
        token_blacklist.blacklist_token("new", datetime.now(timezone.utc) + timedelta(minutes=5))

        assert list(token_blacklist.blacklisted_tokens) == ["new"]


class TestPasswordHashingConcurrency:

    @pytest.mark.asyncio
    async def test_register_keeps_event_loop_responsive(self, user_service, token_blacklist):
        service = AuthenticationService(
            user_service, AuthConfig(secret_key="test-secret", bcrypt_salt_rounds=12), token_blacklist
        )
        gaps = []
        running = True

        async def ticker():
            last = time.perf_counter()
            while running:
                await asyncio.sleep(0.005)
                now = time.perf_counter()
                gaps.append(now - last)
                last = now

        ticks = asyncio.create_task(ticker())
        await service.register("alice", "alice@example.com", PASSWORD)
        running = False
        await ticks

        assert len(gaps) > 5
        assert max(gaps) < 0.1
