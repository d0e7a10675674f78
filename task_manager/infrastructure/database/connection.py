"""MongoDB connection management"""

from typing import Any, Callable, Dict, Optional
import asyncio
import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo import ASCENDING
from pymongo.errors import PyMongoError

from ..config.settings import DatabaseConfig


logger = logging.getLogger(__name__)

USERS_COLLECTION = "users"
TASKS_COLLECTION = "tasks"


class MongoConnection:
    """Async MongoDB connection with exponential back-off on connect"""

    def __init__(
        self,
        config: DatabaseConfig,
        environment: str = "development",
        client_factory: Optional[Callable[..., Any]] = None
    ):
        self.config = config
        self.environment = environment
        self._client_factory = client_factory or AsyncIOMotorClient
        self._client: Optional[AsyncIOMotorClient] = None
        self._db: Optional[AsyncIOMotorDatabase] = None
        self.retry_count = 0

    @property
    def is_connected(self) -> bool:
        return self._db is not None

    def retry_delay(self, attempt: int) -> float:
        """Delay in seconds before retry number `attempt` (starting at 0)"""
        return self.config.base_retry_interval * (2 ** attempt)

    async def connect(self) -> bool:
        """Connect to MongoDB, retrying with exponential back-off"""
        while True:
            client = None
            try:
                client = self._client_factory(
                    self.config.uri,
                    serverSelectionTimeoutMS=self.config.server_selection_timeout_ms,
                    tz_aware=True
                )
                await client.admin.command("ping")
                self._client = client
                self._db = client[self.config.database]
                self.retry_count = 0
                logger.info(f"Connected to MongoDB database {self.config.database}")
                return True

            except PyMongoError as e:
                logger.error(f"MongoDB connection error: {e}")
                if client is not None:
                    client.close()

            if self.retry_count >= self.config.max_retry_attempts:
                message = f"Failed to connect to MongoDB after {self.retry_count} retries"
                if self.environment == "development":
                    raise DatabaseConnectionError(message)
                logger.error(message)
                return False

            delay = self.retry_delay(self.retry_count)
            self.retry_count += 1
            logger.warning(
                f"Retrying MongoDB connection in {delay}s "
                f"(attempt {self.retry_count}/{self.config.max_retry_attempts})"
            )
            await asyncio.sleep(delay)

    def get_collection(self, name: str) -> AsyncIOMotorCollection:
        """Get a collection by name"""
        if self._db is None:
            raise DatabaseConnectionError("Database not connected")
        return self._db[name]

    async def ensure_indexes(self) -> None:
        """Create the indexes the repositories rely on"""
        users = self.get_collection(USERS_COLLECTION)
        tasks = self.get_collection(TASKS_COLLECTION)
        await users.create_index([("email", ASCENDING)], unique=True)
        await tasks.create_index([("created_by_user_id", ASCENDING)])
        await tasks.create_index([("category.name", ASCENDING)])
        logger.info("MongoDB indexes ensured")

    async def health_check(self) -> Dict[str, Any]:
        """Check database health"""
        if self._client is None:
            return {"status": "unhealthy", "error": "not connected"}
        try:
            await self._client.admin.command("ping")
            return {"status": "healthy", "database": self.config.database}
        except PyMongoError as e:
            logger.error(f"Database health check failed: {e}")
            return {"status": "unhealthy", "error": str(e)}

    async def close(self) -> None:
        """Close database connection"""
        if self._client is not None:
            self._client.close()
            self._client = None
            self._db = None
            logger.info("MongoDB connection closed")


class DatabaseConnectionError(Exception):
    """Database connection errors"""
    pass
