"""Task repository interface"""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..entities.task import Task, Category


class TaskRepository(ABC):
    """Abstract repository for task operations"""
    
    @abstractmethod
    async def find_by_id(self, task_id: str) -> Optional[Task]:
        """Find task by ID"""
        pass
    
    @abstractmethod
    async def find_by_user(self, user_id: str) -> List[Task]:
        """Find all tasks created by a user"""
        pass
    
    @abstractmethod
    async def find_by_category_and_user(self, user_id: str, category: Category) -> List[Task]:
        """Find a user's tasks in a category"""
        pass
    
    @abstractmethod
    async def find_by_category(self, category: Category) -> List[Task]:
        """Find tasks in a category across all users"""
        pass
    
    @abstractmethod
    async def save(self, task: Task) -> Task:
        """Insert or replace a task"""
        pass
    
    @abstractmethod
    async def delete(self, task_id: str) -> bool:
        """Delete a task, returning whether it existed"""
        pass
    
    @abstractmethod
    async def find_all(self) -> List[Task]:
        """Find all tasks"""
        pass
