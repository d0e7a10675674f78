"""MongoDB implementation of task repository"""

from typing import Any, Dict, List, Optional
import logging

from pymongo.errors import PyMongoError

from ...domain.entities.task import Task, Category, TaskStatus, TaskPriority
from ...domain.repositories.task_repository import TaskRepository
from ..database.connection import MongoConnection, TASKS_COLLECTION


logger = logging.getLogger(__name__)


class MongoTaskRepository(TaskRepository):
    """MongoDB implementation of TaskRepository"""

    def __init__(self, connection: MongoConnection):
        self.connection = connection

    @property
    def collection(self):
        return self.connection.get_collection(TASKS_COLLECTION)

    async def find_by_id(self, task_id: str) -> Optional[Task]:
        """Find task by ID"""
        try:
            document = await self.collection.find_one({"_id": task_id})
        except PyMongoError as e:
            logger.error(f"Failed to find task by ID: {e}")
            raise TaskRepositoryError(f"Failed to find task: {e}") from e
        return self._map_to_domain(document) if document else None

    async def find_by_user(self, user_id: str) -> List[Task]:
        return await self._find_many({"created_by_user_id": user_id})

    async def find_by_category_and_user(self, user_id: str, category: Category) -> List[Task]:
        return await self._find_many({
            "created_by_user_id": user_id,
            "category.name": category.name
        })

    async def find_by_category(self, category: Category) -> List[Task]:
        return await self._find_many({"category.name": category.name})

    async def find_all(self) -> List[Task]:
        return await self._find_many({})

    async def save(self, task: Task) -> Task:
        """Insert or replace a task"""
        try:
            await self.collection.replace_one(
                {"_id": task.id},
                self._map_to_document(task),
                upsert=True
            )
        except PyMongoError as e:
            logger.error(f"Failed to save task: {e}")
            raise TaskRepositoryError(f"Failed to save task: {e}") from e
        return task

    async def delete(self, task_id: str) -> bool:
        """Delete task by ID"""
        try:
            result = await self.collection.delete_one({"_id": task_id})
        except PyMongoError as e:
            logger.error(f"Failed to delete task: {e}")
            raise TaskRepositoryError(f"Failed to delete task: {e}") from e
        return result.deleted_count > 0

    async def _find_many(self, query: Dict[str, Any]) -> List[Task]:
        try:
            documents = await self.collection.find(query).to_list(length=None)
        except PyMongoError as e:
            logger.error(f"Failed to query tasks: {e}")
            raise TaskRepositoryError(f"Failed to query tasks: {e}") from e
        return [self._map_to_domain(document) for document in documents]

    def _map_to_document(self, task: Task) -> Dict[str, Any]:
        """Map domain entity to a Mongo document"""
        return {
            "_id": task.id,
            "title": task.title,
            "description": task.description,
            "status": task.status.value,
            "priority": task.priority.value,
            "due_date": task.due_date,
            "created_by_user_id": task.created_by_user_id,
            "category": {
                "name": task.category.name,
                "description": task.category.description
            },
            "created_at": task.created_at,
            "updated_at": task.updated_at
        }

    def _map_to_domain(self, document: Dict[str, Any]) -> Task:
        """Map a Mongo document to domain entity"""
        category = document.get("category") or {}
        return Task(
            id=str(document["_id"]),
            title=document["title"],
            description=document["description"],
            status=TaskStatus(document["status"]),
            priority=TaskPriority(document.get("priority", TaskPriority.MEDIUM.value)),
            due_date=document["due_date"],
            created_by_user_id=document["created_by_user_id"],
            category=Category(
                name=category.get("name", ""),
                description=category.get("description")
            ),
            created_at=document["created_at"],
            updated_at=document["updated_at"]
        )


class TaskRepositoryError(Exception):
    """Task repository errors"""
    pass
