"""User domain entities"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from .clock import utc_now, as_utc


@dataclass
class User:
    """User entity"""
    id: str
    username: str
    email: str
    password_hash: str
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def __post_init__(self):
        self.created_at = as_utc(self.created_at)
        self.updated_at = as_utc(self.updated_at)

    def update_username(self, username: str) -> None:
        self.username = username
        self.updated_at = utc_now()

    def update_email(self, email: str) -> None:
        self.email = email
        self.updated_at = utc_now()

    def update_password(self, password_hash: str) -> None:
        """Replace the stored password hash"""
        self.password_hash = password_hash
        self.updated_at = utc_now()

    def __str__(self) -> str:
        return f"User {self.id}: {self.username} ({self.email})"


@dataclass
class UserUpdate:
    """User update request"""
    username: Optional[str] = None
    email: Optional[str] = None
    password_hash: Optional[str] = None
