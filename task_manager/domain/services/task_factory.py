"""Task factory: validates input and builds new tasks"""

from datetime import datetime
from uuid import uuid4
import logging

from ..entities.clock import utc_now, as_utc
from ..entities.task import Task, Category, TaskStatus, TaskPriority
from ..exceptions import TaskValidationError


logger = logging.getLogger(__name__)


class TaskFactory:
    """Creates tasks that satisfy the domain invariants"""
    
    def create_task(
        self,
        title: str,
        description: str,
        due_date: datetime,
        created_by_user_id: str,
        category: Category,
        priority: TaskPriority = TaskPriority.MEDIUM
    ) -> Task:
        """Validate input and create a new TODO task"""
        self._validate_task_input(created_by_user_id, title, description, due_date)
        
        now = utc_now()
        task = Task(
            id=self._generate_task_id(),
            title=title.strip(),
            description=description.strip(),
            status=TaskStatus.TODO,
            priority=priority,
            due_date=due_date,
            created_by_user_id=created_by_user_id,
            category=category,
            created_at=now,
            updated_at=now
        )
        logger.debug(f"Task built: {task}")
        return task
    
    def _validate_task_input(
        self,
        created_by_user_id: str,
        title: str,
        description: str,
        due_date: datetime
    ) -> None:
        if not title or not title.strip():
            raise TaskValidationError("Task title cannot be empty")
        if not description or not description.strip():
            raise TaskValidationError("Task description cannot be empty")
        if not isinstance(due_date, datetime):
            raise TaskValidationError("Invalid due date")
        if as_utc(due_date) < utc_now():
            raise TaskValidationError("Due date cannot be in the past")
        if not created_by_user_id or not created_by_user_id.strip():
            raise TaskValidationError("User ID cannot be empty")
    
    def _generate_task_id(self) -> str:
        return uuid4().hex
