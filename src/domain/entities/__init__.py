"""
Portal Auth Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

from .enums import UserRole

from .user import User, normalize_email
from .oauth_account import OAuthAccount

__all__ = [
    # Enums
    "UserRole",
    # Entities
    "User",
    "OAuthAccount",
    # Helpers
    "normalize_email",
]
