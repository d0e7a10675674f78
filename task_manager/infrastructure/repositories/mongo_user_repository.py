"""MongoDB implementation of user repository"""

from typing import Any, Dict, List, Optional
import logging

from pymongo.errors import DuplicateKeyError, PyMongoError

from ...domain.entities.user import User
from ...domain.exceptions import UserAlreadyExistsError
from ...domain.repositories.user_repository import UserRepository
from ..database.connection import MongoConnection, USERS_COLLECTION


logger = logging.getLogger(__name__)


class MongoUserRepository(UserRepository):
    """MongoDB implementation of UserRepository"""

    def __init__(self, connection: MongoConnection):
        self.connection = connection

    @property
    def collection(self):
        return self.connection.get_collection(USERS_COLLECTION)

    async def find_by_id(self, user_id: str) -> Optional[User]:
        return await self._find_one({"_id": user_id})

    async def find_by_email(self, email: str) -> Optional[User]:
        return await self._find_one({"email": email})

    async def find_all(self) -> List[User]:
        try:
            documents = await self.collection.find({}).to_list(length=None)
        except PyMongoError as e:
            logger.error(f"Failed to list users: {e}")
            raise UserRepositoryError(f"Failed to list users: {e}") from e
        return [self._map_to_domain(document) for document in documents]

    async def save(self, user: User) -> User:
        """Insert or replace a user"""
        try:
            await self.collection.replace_one(
                {"_id": user.id},
                self._map_to_document(user),
                upsert=True
            )
        except DuplicateKeyError as e:
            logger.warning(f"Duplicate email on user save: {user.id}")
            raise UserAlreadyExistsError() from e
        except PyMongoError as e:
            logger.error(f"Failed to save user: {e}")
            raise UserRepositoryError(f"Failed to save user: {e}") from e
        return user

    async def delete(self, user_id: str) -> bool:
        try:
            result = await self.collection.delete_one({"_id": user_id})
        except PyMongoError as e:
            logger.error(f"Failed to delete user: {e}")
            raise UserRepositoryError(f"Failed to delete user: {e}") from e
        return result.deleted_count > 0

    async def _find_one(self, query: Dict[str, Any]) -> Optional[User]:
        try:
            document = await self.collection.find_one(query)
        except PyMongoError as e:
            logger.error(f"Failed to find user: {e}")
            raise UserRepositoryError(f"Failed to find user: {e}") from e
        return self._map_to_domain(document) if document else None

    def _map_to_document(self, user: User) -> Dict[str, Any]:
        return {
            "_id": user.id,
            "username": user.username,
            "email": user.email,
            "password_hash": user.password_hash,
            "created_at": user.created_at,
            "updated_at": user.updated_at
        }

    def _map_to_domain(self, document: Dict[str, Any]) -> User:
        return User(
            id=str(document["_id"]),
            username=document["username"],
            email=document["email"],
            password_hash=document["password_hash"],
            created_at=document["created_at"],
            updated_at=document["updated_at"]
        )


class UserRepositoryError(Exception):
    """User repository errors"""
    pass
