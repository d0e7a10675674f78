"""Authentication API controller"""

from fastapi import APIRouter, Depends, HTTPException, status
import logging

from .dependencies import get_auth_service, get_bearer_token, get_current_user
from .schemas import (
    RegisterRequest, RegisterResponse, LoginRequest, TokenResponse,
    ChangePasswordRequest, MessageResponse, UserProfileResponse
)
from ...application.services.auth_service import AuthenticationService, PasswordHashingError
from ...domain.entities.user import User
from ...domain.exceptions import (
    AuthenticationError, IncorrectPasswordError, UserAlreadyExistsError,
    UserNotFoundError
)


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"])


def _token_response(auth_service: AuthenticationService, token: str) -> TokenResponse:
    return TokenResponse(token=token, expires_in=auth_service.token_lifetime_seconds)


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
async def register(
    request: RegisterRequest,
    auth_service: AuthenticationService = Depends(get_auth_service)
):
    """Register new user"""
    try:
        user = await auth_service.register(request.username, request.email, request.password)
    except UserAlreadyExistsError as e:
        logger.warning(f"Registration rejected: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except PasswordHashingError as e:
        logger.error(f"Registration failed: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

    return RegisterResponse(message="User registered successfully", user_id=user.id)


@router.post("/login", response_model=TokenResponse)
async def login(
    request: LoginRequest,
    auth_service: AuthenticationService = Depends(get_auth_service)
):
    """Login user"""
    try:
        token = await auth_service.login(request.email, request.password)
    except AuthenticationError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )
    return _token_response(auth_service, token)


@router.post("/logout", response_model=MessageResponse)
async def logout(
    token: str = Depends(get_bearer_token),
    current_user: User = Depends(get_current_user),
    auth_service: AuthenticationService = Depends(get_auth_service)
):
    """Logout user"""
    try:
        await auth_service.logout(token)
    except AuthenticationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return MessageResponse(message="Logged out successfully")


@router.post("/refresh-token", response_model=TokenResponse)
async def refresh_token(
    token: str = Depends(get_bearer_token),
    auth_service: AuthenticationService = Depends(get_auth_service)
):
    """Issue a new token for a valid one"""
    try:
        new_token = await auth_service.refresh_token(token)
    except AuthenticationError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )
    return _token_response(auth_service, new_token)


@router.post("/change-password", response_model=MessageResponse)
async def change_password(
    request: ChangePasswordRequest,
    current_user: User = Depends(get_current_user),
    auth_service: AuthenticationService = Depends(get_auth_service)
):
    """Change user password"""
    try:
        await auth_service.change_password(
            current_user.id, request.current_password, request.new_password
        )
    except IncorrectPasswordError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except UserNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return MessageResponse(message="Password changed successfully")


@router.get("/profile", response_model=UserProfileResponse)
async def get_profile(current_user: User = Depends(get_current_user)):
    """Get current user information"""
    return UserProfileResponse.from_entity(current_user)
