"""Unit tests for the user service"""

import pytest

from task_manager.domain.entities.user import UserUpdate
from task_manager.domain.exceptions import UserAlreadyExistsError, UserNotFoundError


class TestUserService:

    @pytest.mark.asyncio
    async def test_create_user(self, user_service, user_repository):
        user = await user_service.create_user("alice", "alice@example.com", "hash")

        assert user.id in user_repository.users
        assert (await user_service.get_user_by_email("alice@example.com")).id == user.id

    @pytest.mark.asyncio
    async def test_duplicate_email_rejected(self, user_service):
        await user_service.create_user("alice", "alice@example.com", "hash")

        with pytest.raises(UserAlreadyExistsError, match="User with this email already exists"):
            await user_service.create_user("alice2", "alice@example.com", "hash")

    @pytest.mark.asyncio
    async def test_update_user(self, user_service):
        user = await user_service.create_user("alice", "alice@example.com", "hash")

        updated = await user_service.update_user(user.id, UserUpdate(username="alicia"))

        assert updated.username == "alicia"
        assert updated.password_hash == "hash"
        assert (await user_service.get_user_by_id(user.id)).username == "alicia"

    @pytest.mark.asyncio
    async def test_update_missing_user(self, user_service):
        with pytest.raises(UserNotFoundError):
            await user_service.update_user("missing", UserUpdate(username="x"))

    @pytest.mark.asyncio
    async def test_delete_user(self, user_service):
        user = await user_service.create_user("alice", "alice@example.com", "hash")

        assert await user_service.delete_user(user.id) is True
        assert await user_service.delete_user(user.id) is False
        assert await user_service.get_user_by_id(user.id) is None
