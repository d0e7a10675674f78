"""Task domain entities"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Optional

from .clock import utc_now, as_utc


class TaskStatus(str, Enum):
    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"


class TaskPriority(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


@dataclass(frozen=True)
class Category:
    """Category value object"""
    name: str
    description: Optional[str] = None

    def with_name(self, name: str) -> "Category":
        """Copy of this category with another name"""
        return replace(self, name=name)

    def with_description(self, description: str) -> "Category":
        """Copy of this category with another description"""
        return replace(self, description=description)

    def __str__(self) -> str:
        if self.description:
            return f"Category: {self.name} ({self.description})"
        return f"Category: {self.name}"


@dataclass
class Task:
    """Task aggregate root"""
    id: str
    title: str
    description: str
    status: TaskStatus
    priority: TaskPriority
    due_date: datetime
    created_by_user_id: str
    category: Category
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def __post_init__(self):
        self.due_date = as_utc(self.due_date)
        self.created_at = as_utc(self.created_at)
        self.updated_at = as_utc(self.updated_at)

    def update_title(self, title: str) -> None:
        self.title = title
        self._touch()

    def update_description(self, description: str) -> None:
        self.description = description
        self._touch()

    def update_status(self, status: TaskStatus) -> None:
        self.status = status
        self._touch()

    def update_priority(self, priority: TaskPriority) -> None:
        self.priority = priority
        self._touch()

    def update_due_date(self, due_date: datetime) -> None:
        self.due_date = as_utc(due_date)
        self._touch()

    def update_category(self, category: Category) -> None:
        self.category = category
        self._touch()

    def mark_completed(self) -> None:
        """Move the task to DONE without touching any other field"""
        self.update_status(TaskStatus.DONE)

    @property
    def is_overdue(self) -> bool:
        """Check if the due date has passed"""
        return self.due_date < utc_now()

    def _touch(self) -> None:
        self.updated_at = utc_now()

    def __str__(self) -> str:
        return f"Task {self.id}: {self.title} ({self.status.value}) - Category: {self.category.name}"


@dataclass
class TaskUpdate:
    """Partial task update; only fields that are set get applied"""
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    due_date: Optional[datetime] = None
    category: Optional[Category] = None

    def is_empty(self) -> bool:
        """Check if the update carries no changes"""
        return all(
            value is None
            for value in (self.title, self.description, self.status,
                          self.priority, self.due_date, self.category)
        )
