"""User repository interface"""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..entities.user import User


class UserRepository(ABC):
    """Abstract repository for user operations"""
    
    @abstractmethod
    async def find_by_id(self, user_id: str) -> Optional[User]:
        """Find user by ID"""
        pass
    
    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[User]:
        """Find user by email"""
        pass
    
    @abstractmethod
    async def save(self, user: User) -> User:
        """Insert or replace a user"""
        pass
    
    @abstractmethod
    async def delete(self, user_id: str) -> bool:
        """Delete a user, returning whether it existed"""
        pass
    
    @abstractmethod
    async def find_all(self) -> List[User]:
        """Find all users"""
        pass
