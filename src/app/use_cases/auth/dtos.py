"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for auth domain.
Provides type safety and clear contracts between layers.
"""

from typing import Optional

from pydantic import BaseModel

from src.domain.entities import User, UserRole


# ============================================================================
# Command DTOs
# ============================================================================


class RegisterCommand(BaseModel):
    """
    Register command - represents validated registration intent

    A None password creates a federated-identity-only account.
    """

    email: str
    password: Optional[str] = None
    name: str
    role: UserRole = UserRole.student


# ============================================================================
# Response DTOs
# ============================================================================


class TokenPair(BaseModel):
    """Access token plus the refresh token backing its session"""

    access_token: str
    refresh_token: str


class LoginResponse(TokenPair):
    """Response for user login use case"""

    user: User


class RefreshTokenResponse(TokenPair):
    """Response for refresh token use case"""
