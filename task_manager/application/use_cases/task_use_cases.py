"""Task use cases

Each use case wraps a single task service call.
"""

from datetime import datetime
from typing import List, Optional

from ...domain.entities.task import Task, Category, TaskPriority, TaskStatus, TaskUpdate
from ...domain.services.task_service import TaskService


class CreateTaskUseCase:
    """Create a task for a user"""

    def __init__(self, task_service: TaskService):
        self.task_service = task_service

    async def execute(
        self,
        title: str,
        description: str,
        due_date: datetime,
        created_by_user_id: str,
        category: Category,
        priority: TaskPriority = TaskPriority.MEDIUM
    ) -> Task:
        return await self.task_service.create_task(
            title, description, due_date, created_by_user_id, category, priority
        )


class GetTaskByIdUseCase:

    def __init__(self, task_service: TaskService):
        self.task_service = task_service

    async def execute(self, task_id: str) -> Optional[Task]:
        return await self.task_service.get_task_by_id(task_id)


class GetTasksByUserUseCase:

    def __init__(self, task_service: TaskService):
        self.task_service = task_service

    async def execute(self, user_id: str) -> List[Task]:
        return await self.task_service.get_tasks_by_user(user_id)


class GetTasksByCategoryUseCase:
    """List tasks in a category across all users"""

    def __init__(self, task_service: TaskService):
        self.task_service = task_service

    async def execute(self, category: Category) -> List[Task]:
        return await self.task_service.get_tasks_by_category(category)


class GetTasksByUserAndCategoryUseCase:

    def __init__(self, task_service: TaskService):
        self.task_service = task_service

    async def execute(self, user_id: str, category: Category) -> List[Task]:
        return await self.task_service.get_tasks_by_user_and_category(user_id, category)


class UpdateTaskUseCase:

    def __init__(self, task_service: TaskService):
        self.task_service = task_service

    async def execute(self, task_id: str, updates: TaskUpdate) -> Task:
        return await self.task_service.update_task(task_id, updates)


class DeleteTaskUseCase:

    def __init__(self, task_service: TaskService):
        self.task_service = task_service

    async def execute(self, task_id: str) -> None:
        await self.task_service.delete_task(task_id)


class MarkTaskAsCompletedUseCase:
    """Move a task to DONE"""

    def __init__(self, task_service: TaskService):
        self.task_service = task_service

    async def execute(self, task_id: str) -> Task:
        return await self.task_service.update_task(task_id, TaskUpdate(status=TaskStatus.DONE))
