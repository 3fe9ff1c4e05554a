"""
Authentication Use Cases

All authentication-related business logic.
"""

from .register_use_case import RegisterUseCase
from .login_use_case import LoginUseCase
from .logout_use_case import LogoutUseCase
from .refresh_token_use_case import RefreshTokenUseCase
from .verify_token_use_case import VerifyTokenUseCase
from .change_password_use_case import ChangePasswordUseCase
from .request_password_reset_use_case import RequestPasswordResetUseCase
from .confirm_password_reset_use_case import ConfirmPasswordResetUseCase
from .session_issuer import issue_session
from .dtos import (
    RegisterCommand,
    TokenPair,
    LoginResponse,
    RefreshTokenResponse,
)

__all__ = [
    # Use Cases
    "RegisterUseCase",
    "LoginUseCase",
    "LogoutUseCase",
    "RefreshTokenUseCase",
    "VerifyTokenUseCase",
    "ChangePasswordUseCase",
    "RequestPasswordResetUseCase",
    "ConfirmPasswordResetUseCase",
    # Primitives
    "issue_session",
    # DTOs - Commands
    "RegisterCommand",
    # DTOs - Responses
    "TokenPair",
    "LoginResponse",
    "RefreshTokenResponse",
]
