"""Mock repository implementations for testing"""

from copy import deepcopy
from typing import Dict, List, Optional

from ...domain.entities.task import Task, Category
from ...domain.entities.user import User
from ...domain.exceptions import UserAlreadyExistsError
from ...domain.repositories.task_repository import TaskRepository
from ...domain.repositories.user_repository import UserRepository


class MockTaskRepository(TaskRepository):
    """In-memory task repository for testing"""

    def __init__(self):
        self.tasks: Dict[str, Task] = {}
        self.call_count = 0
        self.last_call_args = {}

    async def find_by_id(self, task_id: str) -> Optional[Task]:
        self.call_count += 1
        self.last_call_args['find_by_id'] = task_id

        task = self.tasks.get(task_id)
        return deepcopy(task) if task else None

    async def find_by_user(self, user_id: str) -> List[Task]:
        self.call_count += 1
        self.last_call_args['find_by_user'] = user_id

        return [deepcopy(t) for t in self.tasks.values() if t.created_by_user_id == user_id]

    async def find_by_category_and_user(self, user_id: str, category: Category) -> List[Task]:
        self.call_count += 1
        self.last_call_args['find_by_category_and_user'] = (user_id, category)

        return [
            deepcopy(t) for t in self.tasks.values()
            if t.created_by_user_id == user_id and t.category.name == category.name
        ]

    async def find_by_category(self, category: Category) -> List[Task]:
        self.call_count += 1
        self.last_call_args['find_by_category'] = category

        return [deepcopy(t) for t in self.tasks.values() if t.category.name == category.name]

    async def save(self, task: Task) -> Task:
        self.call_count += 1
        self.last_call_args['save'] = task

        self.tasks[task.id] = deepcopy(task)
        return task

    async def delete(self, task_id: str) -> bool:
        self.call_count += 1
        self.last_call_args['delete'] = task_id

        return self.tasks.pop(task_id, None) is not None

    async def find_all(self) -> List[Task]:
        self.call_count += 1
        return [deepcopy(t) for t in self.tasks.values()]


class MockUserRepository(UserRepository):
    """In-memory user repository with a unique email constraint"""

    def __init__(self):
        self.users: Dict[str, User] = {}
        self.call_count = 0
        self.last_call_args = {}

    async def find_by_id(self, user_id: str) -> Optional[User]:
        self.call_count += 1
        self.last_call_args['find_by_id'] = user_id

        user = self.users.get(user_id)
        return deepcopy(user) if user else None

    async def find_by_email(self, email: str) -> Optional[User]:
        self.call_count += 1
        self.last_call_args['find_by_email'] = email

        for user in self.users.values():
            if user.email == email:
                return deepcopy(user)
        return None

    async def save(self, user: User) -> User:
        self.call_count += 1
        self.last_call_args['save'] = user

        for existing in self.users.values():
            if existing.email == user.email and existing.id != user.id:
                raise UserAlreadyExistsError()
        self.users[user.id] = deepcopy(user)
        return user

    async def delete(self, user_id: str) -> bool:
        self.call_count += 1
        self.last_call_args['delete'] = user_id

        return self.users.pop(user_id, None) is not None

    async def find_all(self) -> List[User]:
        self.call_count += 1
        return [deepcopy(u) for u in self.users.values()]
