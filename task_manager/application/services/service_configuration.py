"""Service configuration for dependency injection"""

from typing import Optional
import logging

from .auth_service import AuthenticationService, TokenBlacklist
from .dependency_injection import DIContainer
from ..use_cases.task_use_cases import (
    CreateTaskUseCase, GetTaskByIdUseCase, GetTasksByUserUseCase,
    GetTasksByCategoryUseCase, GetTasksByUserAndCategoryUseCase,
    UpdateTaskUseCase, DeleteTaskUseCase, MarkTaskAsCompletedUseCase
)
from ...domain.repositories.task_repository import TaskRepository
from ...domain.repositories.user_repository import UserRepository
from ...domain.services.task_factory import TaskFactory
from ...domain.services.task_service import TaskService
from ...domain.services.user_service import UserService
from ...infrastructure.config.settings import AppConfig, AuthConfig
from ...infrastructure.database.connection import MongoConnection
from ...infrastructure.repositories.mongo_task_repository import MongoTaskRepository
from ...infrastructure.repositories.mongo_user_repository import MongoUserRepository


logger = logging.getLogger(__name__)

TASK_USE_CASES = (
    CreateTaskUseCase,
    GetTaskByIdUseCase,
    GetTasksByUserUseCase,
    GetTasksByCategoryUseCase,
    GetTasksByUserAndCategoryUseCase,
    UpdateTaskUseCase,
    DeleteTaskUseCase,
    MarkTaskAsCompletedUseCase,
)


class TaskManagerServiceConfiguration:
    """Task manager service configuration"""

    def __init__(self, container: DIContainer):
        self.container = container

    def configure_services(
        self,
        config: AppConfig,
        connection: Optional[MongoConnection] = None,
        task_repository: Optional[TaskRepository] = None,
        user_repository: Optional[UserRepository] = None
    ) -> DIContainer:
        """Configure all services; explicit repositories replace the Mongo ones"""
        container = self.container

        # Configuration
        container.register_singleton(AppConfig, instance=config)
        container.register_singleton(AuthConfig, instance=config.auth)

        self._configure_repositories(container, connection, task_repository, user_repository)
        self._configure_domain_services(container)
        self._configure_application_services(container)

        logger.info("Task manager services configured")
        return container

    def _configure_repositories(
        self,
        container: DIContainer,
        connection: Optional[MongoConnection],
        task_repository: Optional[TaskRepository],
        user_repository: Optional[UserRepository]
    ):
        """Configure repository services"""
        if connection is not None:
            container.register_singleton(MongoConnection, instance=connection)

        if task_repository is not None:
            container.register_singleton(TaskRepository, instance=task_repository)
        elif connection is not None:
            container.register_singleton(
                TaskRepository,
                implementation=MongoTaskRepository,
                dependencies={"connection": MongoConnection}
            )

        if user_repository is not None:
            container.register_singleton(UserRepository, instance=user_repository)
        elif connection is not None:
            container.register_singleton(
                UserRepository,
                implementation=MongoUserRepository,
                dependencies={"connection": MongoConnection}
            )

        if not (container.is_registered(TaskRepository) and container.is_registered(UserRepository)):
            raise ValueError("A database connection or both repositories are required")

    def _configure_domain_services(self, container: DIContainer):
        """Configure domain services"""
        container.register_singleton(TaskFactory, implementation=TaskFactory)

        container.register_singleton(
            TaskService,
            implementation=TaskService,
            dependencies={"task_repository": TaskRepository, "task_factory": TaskFactory}
        )

        container.register_singleton(
            UserService,
            implementation=UserService,
            dependencies={"user_repository": UserRepository}
        )

    def _configure_application_services(self, container: DIContainer):
        """Configure application services"""
        container.register_singleton(TokenBlacklist, implementation=TokenBlacklist)

        container.register_singleton(
            AuthenticationService,
            implementation=AuthenticationService,
            dependencies={
                "user_service": UserService,
                "auth_config": AuthConfig,
                "token_blacklist": TokenBlacklist
            }
        )

        for use_case in TASK_USE_CASES:
            container.register_transient(
                use_case,
                implementation=use_case,
                dependencies={"task_service": TaskService}
            )


def configure_services(
    container: DIContainer,
    config: AppConfig,
    connection: Optional[MongoConnection] = None,
    task_repository: Optional[TaskRepository] = None,
    user_repository: Optional[UserRepository] = None
) -> DIContainer:
    """Register every service of the task manager on the container"""
    return TaskManagerServiceConfiguration(container).configure_services(
        config,
        connection=connection,
        task_repository=task_repository,
        user_repository=user_repository
    )
