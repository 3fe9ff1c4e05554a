"""
OAuth Use Cases

Federated identity sign-in, linking and provider token management.
"""

from .handle_callback_use_case import HandleOAuthCallbackUseCase
from .link_oauth_account_use_case import LinkOAuthAccountUseCase
from .unlink_oauth_account_use_case import UnlinkOAuthAccountUseCase
from .oauth_accounts_use_case import OAuthAccountsUseCase
from .dtos import (
    CallbackBranch,
    OAuthCallbackResponse,
    OAuthProfile,
    OAuthTokenBundle,
)

__all__ = [
    # Use Cases
    "HandleOAuthCallbackUseCase",
    "LinkOAuthAccountUseCase",
    "UnlinkOAuthAccountUseCase",
    "OAuthAccountsUseCase",
    # DTOs
    "CallbackBranch",
    "OAuthCallbackResponse",
    "OAuthProfile",
    "OAuthTokenBundle",
]
