"""Pytest configuration and fixtures for task manager tests"""

from datetime import datetime, timedelta, timezone
from typing import Dict

import pytest
from fastapi.testclient import TestClient

from task_manager.application.services.dependency_injection import DIContainer
from task_manager.application.services.service_configuration import configure_services
from task_manager.domain.entities.task import Task, Category, TaskStatus, TaskPriority
from task_manager.domain.services.task_factory import TaskFactory
from task_manager.domain.services.task_service import TaskService
from task_manager.domain.services.user_service import UserService
from task_manager.infrastructure.config.settings import AppConfig, AuthConfig, LoggingConfig
from task_manager.presentation.api.app import create_application
from task_manager.tests.mocks.mock_repositories import MockTaskRepository, MockUserRepository


TEST_PASSWORD = "Password123"


@pytest.fixture
def settings():
    """Application settings tuned for fast tests"""
    return AppConfig(
        auth=AuthConfig(secret_key="test-secret", bcrypt_salt_rounds=4),
        logging=LoggingConfig(enable_file_logging=False)
    )


@pytest.fixture
def auth_config(settings):
    return settings.auth


@pytest.fixture
def task_repository():
    """In-memory task repository"""
    return MockTaskRepository()


@pytest.fixture
def user_repository():
    """In-memory user repository"""
    return MockUserRepository()


@pytest.fixture
def task_service(task_repository):
    return TaskService(task_repository, TaskFactory())


@pytest.fixture
def user_service(user_repository):
    return UserService(user_repository)


@pytest.fixture
def container(settings, task_repository, user_repository):
    """DI container wired to in-memory repositories"""
    return configure_services(
        DIContainer(),
        settings,
        task_repository=task_repository,
        user_repository=user_repository
    )


@pytest.fixture
def app(settings, container):
    """Create FastAPI test application"""
    return create_application(settings=settings, container=container)


@pytest.fixture
def client(app):
    """Create test client"""
    return TestClient(app)


def _register(client: TestClient, username: str = "alice", email: str = "alice@example.com",
              password: str = TEST_PASSWORD) -> str:
    response = client.post(
        "/auth/register",
        json={"username": username, "email": email, "password": password}
    )
    assert response.status_code == 201, response.text
    return response.json()["user_id"]


def _login(client: TestClient, email: str = "alice@example.com", password: str = TEST_PASSWORD) -> str:
    response = client.post("/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()["token"]


def _bearer(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def register_user():
    """Register a user through the API and return its id"""
    return _register


@pytest.fixture
def login_user():
    """Log in through the API and return the token"""
    return _login


@pytest.fixture
def bearer():
    """Build an Authorization header for a token"""
    return _bearer


@pytest.fixture
def auth_headers(client):
    """Headers for a registered and logged-in user"""
    _register(client)
    return _bearer(_login(client))


@pytest.fixture
def future_date():
    return datetime.now(timezone.utc) + timedelta(days=7)


@pytest.fixture
def sample_task(future_date):
    """Sample task entity"""
    return Task(
        id="task-1",
        title="Write report",
        description="Quarterly report",
        status=TaskStatus.TODO,
        priority=TaskPriority.HIGH,
        due_date=future_date,
        created_by_user_id="user-1",
        category=Category(name="work", description="Work items")
    )
