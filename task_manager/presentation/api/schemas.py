"""Request and response models for the HTTP API"""

from datetime import datetime
from typing import List, Optional, Union
import re

from pydantic import BaseModel, EmailStr, Field, field_validator

from ...domain.entities.task import Task, Category, TaskPriority, TaskStatus, TaskUpdate
from ...domain.entities.user import User


PASSWORD_MIN_LENGTH = 8
# bcrypt only reads the first 72 bytes
PASSWORD_MAX_LENGTH = 72


def validate_password_strength(password: str) -> str:
    if len(password) < PASSWORD_MIN_LENGTH:
        raise ValueError(f"Password must be at least {PASSWORD_MIN_LENGTH} characters long")
    if len(password.encode("utf-8")) > PASSWORD_MAX_LENGTH:
        raise ValueError(f"Password must be at most {PASSWORD_MAX_LENGTH} bytes long")
    if not re.search(r"[A-Za-z]", password) or not re.search(r"\d", password):
        raise ValueError("Password must contain at least one letter and one number")
    return password


# Auth

class RegisterRequest(BaseModel):
    username: str
    email: EmailStr
    password: str

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        v = v.strip()
        if not 3 <= len(v) <= 30:
            raise ValueError("Username must be between 3 and 30 characters")
        return v

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        return validate_password_strength(v)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(..., min_length=1)
    new_password: str

    @field_validator("new_password")
    @classmethod
    def validate_new_password(cls, v: str) -> str:
        return validate_password_strength(v)


class RegisterResponse(BaseModel):
    message: str
    user_id: str


class TokenResponse(BaseModel):
    token: str
    token_type: str = "bearer"
    expires_in: int


class MessageResponse(BaseModel):
    message: str


class UserProfileResponse(BaseModel):
    id: str
    username: str
    email: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, user: User) -> "UserProfileResponse":
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            created_at=user.created_at,
            updated_at=user.updated_at
        )


# Tasks

class CategoryModel(BaseModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Category name cannot be empty")
        return v

    def to_domain(self) -> Category:
        return Category(name=self.name, description=self.description)

    @classmethod
    def from_domain(cls, category: Category) -> "CategoryModel":
        return cls(name=category.name, description=category.description)


def parse_category(value: Union[str, CategoryModel]) -> Category:
    """Accept a bare category name or a {name, description} object"""
    if isinstance(value, CategoryModel):
        return value.to_domain()
    return Category(name=value.strip())


class CreateTaskRequest(BaseModel):
    title: str
    description: str
    due_date: datetime
    category: Union[str, CategoryModel]
    priority: TaskPriority = TaskPriority.MEDIUM

    @field_validator("category")
    @classmethod
    def validate_category(cls, v):
        if isinstance(v, str) and not v.strip():
            raise ValueError("Category cannot be empty")
        return v


class UpdateTaskRequest(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    due_date: Optional[datetime] = None
    category: Optional[Union[str, CategoryModel]] = None

    @field_validator("category")
    @classmethod
    def validate_category(cls, v):
        if isinstance(v, str) and not v.strip():
            raise ValueError("Category cannot be empty")
        return v

    def to_domain(self) -> TaskUpdate:
        return TaskUpdate(
            title=self.title,
            description=self.description,
            status=self.status,
            priority=self.priority,
            due_date=self.due_date,
            category=parse_category(self.category) if self.category is not None else None
        )


class TaskResponse(BaseModel):
    id: str
    title: str
    description: str
    status: TaskStatus
    priority: TaskPriority
    due_date: datetime
    created_by_user_id: str
    category: CategoryModel
    created_at: datetime
    updated_at: datetime
    is_overdue: bool

    @classmethod
    def from_entity(cls, task: Task) -> "TaskResponse":
        return cls(
            id=task.id,
            title=task.title,
            description=task.description,
            status=task.status,
            priority=task.priority,
            due_date=task.due_date,
            created_by_user_id=task.created_by_user_id,
            category=CategoryModel.from_domain(task.category),
            created_at=task.created_at,
            updated_at=task.updated_at,
            is_overdue=task.is_overdue
        )


class TaskSummaryResponse(BaseModel):
    """List item view of a task"""
    id: str
    title: str
    status: TaskStatus
    priority: TaskPriority
    due_date: datetime
    category: CategoryModel
    is_overdue: bool

    @classmethod
    def from_entity(cls, task: Task) -> "TaskSummaryResponse":
        return cls(
            id=task.id,
            title=task.title,
            status=task.status,
            priority=task.priority,
            due_date=task.due_date,
            category=CategoryModel.from_domain(task.category),
            is_overdue=task.is_overdue
        )


def to_summaries(tasks: List[Task]) -> List[TaskSummaryResponse]:
    return [TaskSummaryResponse.from_entity(task) for task in tasks]
