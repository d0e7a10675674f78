"""Unit tests for task and user entities"""

from datetime import datetime, timedelta, timezone

import pytest

from task_manager.domain.entities.task import Task, TaskUpdate, Category, TaskStatus, TaskPriority
from task_manager.domain.entities.user import User


class TestCategory:
    """Test Category value object"""

    def test_with_name_returns_copy(self):
        category = Category(name="work", description="Work items")
        renamed = category.with_name("home")

        assert renamed.name == "home"
        assert renamed.description == "Work items"
        assert category.name == "work"

    def test_with_description_returns_copy(self):
        category = Category(name="work")
        described = category.with_description("Office")

        assert described.description == "Office"
        assert category.description is None

    def test_str(self):
        assert str(Category(name="work")) == "Category: work"
        assert str(Category(name="work", description="Office")) == "Category: work (Office)"

    def test_is_immutable(self):
        category = Category(name="work")
        with pytest.raises(AttributeError):
            category.name = "home"


class TestTask:
    """Test Task entity"""

    def test_update_title_touches_updated_at(self, sample_task):
        before = sample_task.updated_at
        sample_task.update_title("New title")

        assert sample_task.title == "New title"
        assert sample_task.updated_at >= before

    def test_mark_completed_changes_status_only(self, sample_task):
        sample_task.mark_completed()

        assert sample_task.status == TaskStatus.DONE
        assert sample_task.title == "Write report"
        assert sample_task.priority == TaskPriority.HIGH
        assert sample_task.category == Category(name="work", description="Work items")

    def test_is_overdue(self, sample_task):
        assert sample_task.is_overdue is False

        sample_task.update_due_date(datetime.now(timezone.utc) - timedelta(minutes=1))
        assert sample_task.is_overdue is True

    def test_naive_datetimes_are_treated_as_utc(self):
        task = Task(
            id="t1",
            title="Title",
            description="Description",
            status=TaskStatus.TODO,
            priority=TaskPriority.LOW,
            due_date=datetime(2030, 1, 1, 12, 0),
            created_by_user_id="u1",
            category=Category(name="misc")
        )

        assert task.due_date.tzinfo == timezone.utc
        assert task.due_date.hour == 12

    def test_str(self, sample_task):
        assert str(sample_task) == "Task task-1: Write report (TODO) - Category: work"


class TestTaskUpdate:

    def test_is_empty(self):
        assert TaskUpdate().is_empty()
        assert not TaskUpdate(status=TaskStatus.DONE).is_empty()


class TestUser:

    def test_update_password(self):
        user = User(id="u1", username="alice", email="alice@example.com", password_hash="old")
        before = user.updated_at
        user.update_password("new")

        assert user.password_hash == "new"
        assert user.updated_at >= before
        assert user.created_at.tzinfo is not None
