"""
Use Cases

All use cases are organized into domain folders:
- auth/: Registration, login, token refresh and password flows
- users/: Session inspection and revocation
- oauth/: Federated identity sign-in and account linking

Import from subdirectories for better organization.
"""

from .auth import (
    RegisterUseCase,
    RegisterCommand,
    LoginUseCase,
    LogoutUseCase,
    RefreshTokenUseCase,
    VerifyTokenUseCase,
    ChangePasswordUseCase,
    RequestPasswordResetUseCase,
    ConfirmPasswordResetUseCase,
)
from .users import (
    RevokeSessionsUseCase,
)
from .oauth import (
    HandleOAuthCallbackUseCase,
    LinkOAuthAccountUseCase,
    UnlinkOAuthAccountUseCase,
    OAuthAccountsUseCase,
)

__all__ = [
    # Auth
    "RegisterUseCase",
    "RegisterCommand",
    "LoginUseCase",
    "LogoutUseCase",
    "RefreshTokenUseCase",
    "VerifyTokenUseCase",
    "ChangePasswordUseCase",
    "RequestPasswordResetUseCase",
    "ConfirmPasswordResetUseCase",
    # Users
    "RevokeSessionsUseCase",
    # OAuth
    "HandleOAuthCallbackUseCase",
    "LinkOAuthAccountUseCase",
    "UnlinkOAuthAccountUseCase",
    "OAuthAccountsUseCase",
]
