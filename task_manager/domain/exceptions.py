"""Domain errors

Each error carries the message clients see; the presentation layer maps
error types to HTTP status codes.
"""


class DomainError(Exception):
    """Base class for domain errors"""
    default_message = "Domain error"

    def __init__(self, message: str = None):
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


class TaskValidationError(DomainError, ValueError):
    """Task input violates a domain rule"""
    default_message = "Invalid task"


class NotFoundError(DomainError, LookupError):
    default_message = "Not found"


class TaskNotFoundError(NotFoundError):
    default_message = "Task not found"


class UserNotFoundError(NotFoundError):
    default_message = "User not found"


class UserAlreadyExistsError(DomainError, ValueError):
    default_message = "User with this email already exists"


class AuthenticationError(DomainError):
    """Credentials or token were rejected"""
    default_message = "Authentication failed"


class InvalidTokenError(AuthenticationError):
    default_message = "Invalid token"


class IncorrectPasswordError(DomainError, ValueError):
    default_message = "Current password is incorrect"
