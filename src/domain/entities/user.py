"""
User Entity

Represents a person who can sign in to the portal.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from .enums import UserRole


def normalize_email(email: str) -> str:
    return email.strip().lower()


class User(SQLModel, table=True):
    """
    User entity - represents a person who can sign in to the portal.

    Business Rules:
    - Email is stored normalized (trimmed, lower-cased), so the unique
      constraint makes uniqueness case-insensitive
    - password_hash is None for accounts created through an OAuth provider
    - Suspended users cannot log in, refresh or verify tokens
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: Optional[str] = Field(default=None, max_length=60)  # Bcrypt output

    name: str = Field(max_length=255)
    role: UserRole = Field(default=UserRole.student)
    suspended: bool = Field(default=False)

    # Timestamps
    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )

    __table_args__ = (Index("idx_user_role", "role"),)

    @property
    def has_password(self) -> bool:
        return self.password_hash is not None
