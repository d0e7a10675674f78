"""Authentication application service

Password hashing (bcrypt), JWT issuing/verification (python-jose) and the
token blacklist used to invalidate tokens on logout.
"""

from datetime import datetime, timedelta, timezone
from typing import Dict, Optional
from uuid import uuid4
import asyncio
import logging

import bcrypt
from jose import jwt, JWTError, ExpiredSignatureError

from ...domain.entities.user import User, UserUpdate
from ...domain.exceptions import (
    AuthenticationError, InvalidTokenError, IncorrectPasswordError,
    UserNotFoundError
)
from ...domain.services.user_service import UserService
from ...infrastructure.config.settings import AuthConfig


logger = logging.getLogger(__name__)


class TokenBlacklist:
    """In-memory blacklist of revoked tokens, kept until they expire"""

    def __init__(self):
        self.blacklisted_tokens: Dict[str, datetime] = {}

    def blacklist_token(self, token: str, expires_at: datetime) -> None:
        """Add token to blacklist, dropping entries that have expired"""
        self.cleanup_expired_tokens()
        self.blacklisted_tokens[token] = expires_at

    def is_token_blacklisted(self, token: str) -> bool:
        """Check if token is blacklisted"""
        if token not in self.blacklisted_tokens:
            return False

        # Entries live only as long as the token itself
        if datetime.now(timezone.utc) > self.blacklisted_tokens[token]:
            del self.blacklisted_tokens[token]
            return False

        return True

    def cleanup_expired_tokens(self) -> int:
        """Remove expired tokens from blacklist"""
        now = datetime.now(timezone.utc)
        expired_tokens = [
            token for token, expires_at in self.blacklisted_tokens.items()
            if now > expires_at
        ]

        for token in expired_tokens:
            del self.blacklisted_tokens[token]
        return len(expired_tokens)

    async def cleanup(self):
        self.blacklisted_tokens.clear()


class AuthenticationService:
    """Registration, login and token handling"""

    def __init__(self, user_service: UserService, auth_config: AuthConfig, token_blacklist: TokenBlacklist):
        self.user_service = user_service
        self.config = auth_config
        self.token_blacklist = token_blacklist

    @property
    def token_lifetime_seconds(self) -> int:
        return self.config.access_token_expire_minutes * 60

    async def register(self, username: str, email: str, password: str) -> User:
        """Register a new user"""
        logger.info("Processing user registration")
        password_hash = await self._hash_password(password)
        return await self.user_service.create_user(username, email, password_hash)

    async def login(self, email: str, password: str) -> str:
        """Authenticate a user and return a JWT"""
        user = await self.user_service.get_user_by_email(email)
        if not user:
            logger.warning("Login failed: unknown email")
            raise AuthenticationError()

        if not await self._verify_password(password, user.password_hash):
            logger.warning(f"Login failed: invalid password for user {user.id}")
            raise AuthenticationError()

        logger.info(f"User logged in: {user.id}")
        return self._generate_token(user)

    async def verify_token(self, token: str) -> User:
        """Verify a JWT and return the user it belongs to"""
        try:
            payload = jwt.decode(token, self.config.secret_key, algorithms=[self.config.algorithm])
        except ExpiredSignatureError:
            raise InvalidTokenError("Token expired")
        except JWTError as e:
            logger.debug(f"Token decode failed: {e}")
            raise InvalidTokenError()

        if self.token_blacklist.is_token_blacklisted(token):
            raise InvalidTokenError("Token has been revoked")

        user_id = payload.get("sub")
        if not user_id:
            raise InvalidTokenError()

        user = await self.user_service.get_user_by_id(user_id)
        if not user:
            raise InvalidTokenError("User not found")
        return user

    async def refresh_token(self, token: str) -> str:
        """Issue a fresh token for a valid one"""
        user = await self.verify_token(token)
        return self._generate_token(user)

    async def change_password(self, user_id: str, current_password: str, new_password: str) -> None:
        """Change a user's password after checking the current one"""
        user = await self.user_service.get_user_by_id(user_id)
        if not user:
            raise UserNotFoundError()

        if not await self._verify_password(current_password, user.password_hash):
            raise IncorrectPasswordError()

        new_password_hash = await self._hash_password(new_password)
        await self.user_service.update_user(user_id, UserUpdate(password_hash=new_password_hash))
        logger.info(f"Password changed for user {user_id}")

    async def logout(self, token: str) -> None:
        """Invalidate a token until it expires"""
        try:
            payload = jwt.decode(token, self.config.secret_key, algorithms=[self.config.algorithm])
        except JWTError:
            raise InvalidTokenError()

        expires_at = datetime.fromtimestamp(payload["exp"], tz=timezone.utc)
        self.token_blacklist.blacklist_token(token, expires_at)
        logger.info(f"User logged out: {payload.get('sub')}")

    def _generate_token(self, user: User, expires_delta: Optional[timedelta] = None) -> str:
        issued_at = datetime.now(timezone.utc)
        expire = issued_at + (expires_delta or timedelta(minutes=self.config.access_token_expire_minutes))
        payload = {
            "sub": user.id,
            "id": user.id,
            "email": user.email,
            "username": user.username,
            "iat": issued_at,
            "exp": expire,
            "jti": uuid4().hex
        }
        return jwt.encode(payload, self.config.secret_key, algorithm=self.config.algorithm)

    async def _hash_password(self, password: str) -> str:
        try:
            salt = bcrypt.gensalt(rounds=self.config.bcrypt_salt_rounds)
            hashed = await asyncio.to_thread(bcrypt.hashpw, password.encode("utf-8"), salt)
            return hashed.decode("utf-8")
        except (ValueError, TypeError) as e:
            logger.error(f"Error hashing password: {e}")
            raise PasswordHashingError("Failed to hash password") from e

    async def _verify_password(self, password: str, password_hash: str) -> bool:
        if not password or not password_hash:
            return False
        try:
            return await asyncio.to_thread(
                bcrypt.checkpw, password.encode("utf-8"), password_hash.encode("utf-8")
            )
        except ValueError as e:
            logger.error(f"Error verifying password: {e}")
            return False


class PasswordHashingError(Exception):
    """Password could not be hashed"""
    pass
