"""Task domain service"""

from datetime import datetime
from typing import List, Optional
import logging

from ..entities.task import Task, Category, TaskPriority, TaskUpdate
from ..exceptions import TaskNotFoundError, TaskValidationError
from ..repositories.task_repository import TaskRepository
from .task_factory import TaskFactory


logger = logging.getLogger(__name__)


class TaskService:
    """Task operations on top of the task repository"""
    
    def __init__(self, task_repository: TaskRepository, task_factory: TaskFactory):
        self.task_repository = task_repository
        self.task_factory = task_factory
    
    async def create_task(
        self,
        title: str,
        description: str,
        due_date: datetime,
        created_by_user_id: str,
        category: Category,
        priority: TaskPriority = TaskPriority.MEDIUM
    ) -> Task:
        """Create and persist a new task"""
        task = self.task_factory.create_task(
            title,
            description,
            due_date,
            created_by_user_id,
            category,
            priority
        )
        saved = await self.task_repository.save(task)
        logger.info(f"Task created: {saved.id} for user {created_by_user_id}")
        return saved
    
    async def update_task(self, task_id: str, updates: TaskUpdate) -> Task:
        """Apply a partial update to an existing task"""
        task = await self.task_repository.find_by_id(task_id)
        if not task:
            raise TaskNotFoundError()
        
        if updates.is_empty():
            return task

        if updates.title is not None:
            if not updates.title.strip():
                raise TaskValidationError("Task title cannot be empty")
            task.update_title(updates.title.strip())
        if updates.description is not None:
            if not updates.description.strip():
                raise TaskValidationError("Task description cannot be empty")
            task.update_description(updates.description.strip())
        if updates.status is not None:
            task.update_status(updates.status)
        if updates.priority is not None:
            task.update_priority(updates.priority)
        if updates.category is not None:
            task.update_category(updates.category)
        if updates.due_date is not None:
            task.update_due_date(updates.due_date)
        
        return await self.task_repository.save(task)
    
    async def delete_task(self, task_id: str) -> None:
        """Delete a task"""
        deleted = await self.task_repository.delete(task_id)
        if not deleted:
            raise TaskNotFoundError()
        logger.info(f"Task deleted: {task_id}")
    
    async def get_task_by_id(self, task_id: str) -> Optional[Task]:
        return await self.task_repository.find_by_id(task_id)
    
    async def get_tasks_by_user(self, user_id: str) -> List[Task]:
        return await self.task_repository.find_by_user(user_id)
    
    async def get_tasks_by_user_and_category(self, user_id: str, category: Category) -> List[Task]:
        return await self.task_repository.find_by_category_and_user(user_id, category)
    
    async def get_tasks_by_category(self, category: Category) -> List[Task]:
        return await self.task_repository.find_by_category(category)
    
    async def get_all_tasks(self) -> List[Task]:
        return await self.task_repository.find_all()
