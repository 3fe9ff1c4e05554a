"""
OAuthAccount Entity

Binds a local user to an account at an external identity provider.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel


class OAuthAccount(SQLModel, table=True):
    """
    OAuthAccount entity - federated identity link.

    Business Rules:
    - (provider, provider_account_id) is globally unique: one provider
      account can never be linked to two local users
    - (user_id, provider) is unique: a user links each provider at most once
    - Provider tokens are refreshed on every repeat callback
    """

    __tablename__ = "oauth_accounts"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)
    provider: str = Field(max_length=50)
    provider_account_id: str = Field(max_length=255)

    # Provider token bundle
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    expires_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    token_type: Optional[str] = Field(default=None, max_length=50)
    scope: Optional[str] = None
    id_token: Optional[str] = None
    session_state: Optional[str] = None

    # Timestamps
    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )

    __table_args__ = (
        Index(
            "idx_oauth_provider_account",
            "provider",
            "provider_account_id",
            unique=True,
        ),
        Index("idx_oauth_user_provider", "user_id", "provider", unique=True),
    )
