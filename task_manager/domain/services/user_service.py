"""User domain service"""

from typing import Optional
from uuid import uuid4
import logging

from ..entities.user import User, UserUpdate
from ..exceptions import UserAlreadyExistsError, UserNotFoundError
from ..repositories.user_repository import UserRepository


logger = logging.getLogger(__name__)


class UserService:
    """User management on top of the user repository"""
    
    def __init__(self, user_repository: UserRepository):
        self.user_repository = user_repository
    
    async def create_user(self, username: str, email: str, password_hash: str) -> User:
        """Create a user; the password must already be hashed"""
        existing_user = await self.user_repository.find_by_email(email)
        if existing_user:
            raise UserAlreadyExistsError()
        
        user = User(
            id=uuid4().hex,
            username=username,
            email=email,
            password_hash=password_hash
        )
        saved = await self.user_repository.save(user)
        logger.info(f"User created: {saved.id}")
        return saved
    
    async def update_user(self, user_id: str, updates: UserUpdate) -> User:
        """Update user fields that are set"""
        user = await self.user_repository.find_by_id(user_id)
        if not user:
            raise UserNotFoundError()
        
        if updates.username is not None:
            user.update_username(updates.username)
        if updates.email is not None:
            user.update_email(updates.email)
        if updates.password_hash is not None:
            user.update_password(updates.password_hash)
        
        return await self.user_repository.save(user)
    
    async def delete_user(self, user_id: str) -> bool:
        return await self.user_repository.delete(user_id)
    
    async def get_user_by_id(self, user_id: str) -> Optional[User]:
        return await self.user_repository.find_by_id(user_id)
    
    async def get_user_by_email(self, email: str) -> Optional[User]:
        return await self.user_repository.find_by_email(email)
