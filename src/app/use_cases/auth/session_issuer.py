"""
Session Issuer

Token-issuance primitive shared by password login and OAuth callbacks.
"""

from config import ApplicationConfig
from src.api.utils.jwt import generate_jwt, generate_refresh_token
from src.app.repositories.session_store import ISessionStore
from src.domain.entities import User, UserRole
from .dtos import TokenPair


async def issue_session(sessions: ISessionStore, user: User) -> TokenPair:
    """
    Mint an access token and a brand-new refresh token for a user.

    The refresh token is persisted with the configured session TTL. Every call
    creates a distinct session, so parallel logins never collide.
    """
    access_token = generate_jwt(user.id, UserRole(user.role).value)
    refresh_token = generate_refresh_token()
    await sessions.create(
        refresh_token, str(user.id), ApplicationConfig.SESSION_TTL_SECONDS
    )
    return TokenPair(access_token=access_token, refresh_token=refresh_token)
