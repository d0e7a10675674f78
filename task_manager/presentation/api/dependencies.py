"""FastAPI dependencies: container access and bearer authentication"""

from typing import Callable, Optional, Type, TypeVar
import logging

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from ...application.services.auth_service import AuthenticationService
from ...application.services.dependency_injection import DIContainer
from ...domain.entities.user import User
from ...domain.exceptions import AuthenticationError


logger = logging.getLogger(__name__)

T = TypeVar("T")

security = HTTPBearer(auto_error=False)


def get_container(request: Request) -> DIContainer:
    """Get the DI container attached to the application"""
    container = getattr(request.app.state, "container", None)
    if container is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service not ready"
        )
    return container


def provide(service_type: Type[T]) -> Callable:
    """Build a dependency that resolves `service_type` from the container"""

    async def resolve_service(container: DIContainer = Depends(get_container)) -> T:
        return await container.resolve(service_type)

    resolve_service.__name__ = f"get_{service_type.__name__}"
    return resolve_service


get_auth_service = provide(AuthenticationService)


async def get_bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> str:
    """Extract the bearer token from the Authorization header"""
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="No token provided",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return credentials.credentials


async def get_current_user(
    token: str = Depends(get_bearer_token),
    auth_service: AuthenticationService = Depends(get_auth_service)
) -> User:
    """Get current authenticated user"""
    try:
        return await auth_service.verify_token(token)
    except AuthenticationError as e:
        logger.warning(f"Rejected token: {e}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )
