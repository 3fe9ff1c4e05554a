"""
OAuth Use Case DTOs (Data Transfer Objects)

Profiles and token bundles arrive already exchanged with the provider.
"""

from datetime import datetime, timedelta
from enum import Enum
from typing import Optional

from pydantic import BaseModel

from src.domain.entities import User


class OAuthProfile(BaseModel):
    """User profile returned by the identity provider"""

    provider: str = "google"
    id: str  # Provider account ID
    email: str
    name: str
    given_name: Optional[str] = None
    family_name: Optional[str] = None
    picture: Optional[str] = None
    verified_email: Optional[bool] = None


class OAuthTokenBundle(BaseModel):
    """Tokens issued by the identity provider"""

    access_token: str
    refresh_token: Optional[str] = None
    expires_in: Optional[int] = None  # Seconds
    id_token: Optional[str] = None
    token_type: str = "Bearer"
    scope: str = "openid profile email"

    def expires_at(self) -> Optional[datetime]:
        if not self.expires_in:
            return None
        return datetime.utcnow() + timedelta(seconds=self.expires_in)


class CallbackBranch(str, Enum):
    """How an OAuth callback resolves to a local user"""

    existing_link = "existing_link"  # Provider account already linked
    email_match = "email_match"  # Unlinked, but a local user owns the email
    new_user = "new_user"  # Neither exists


class OAuthCallbackResponse(BaseModel):
    """Response for OAuth callback use case"""

    user: User
    is_new_user: bool
    access_token: str
    refresh_token: str
