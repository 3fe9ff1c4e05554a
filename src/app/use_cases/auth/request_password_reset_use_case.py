"""
Request Password Reset Use Case

Issues a single-use password reset grant.
"""

import hashlib
import logging

from config import ApplicationConfig
from src.api.utils.jwt import generate_refresh_token
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import normalize_email
from src.domain.errors import NotFoundError

logger = logging.getLogger(__name__)


class RequestPasswordResetUseCase:
    """
    Use case for requesting password reset.

    Business Rules:
    - Generate cryptographically secure token
    - Store only the SHA-256 hash of the token, keyed to the user id
    - Grant expires after PASSWORD_RESET_TTL_SECONDS
    - Unknown emails raise NotFoundError; callers that must not reveal
      account existence map it to a neutral response
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, email: str) -> str:
        """
        Execute request password reset use case.

        Args:
            email: User's email address

        Returns:
            The plaintext reset token (to be delivered out of band)
        """
        async with self.uow:
            user = await self.uow.users.get_by_email(normalize_email(email))
            if user is None:
                raise NotFoundError("User not found")

            reset_token = generate_refresh_token()
            token_hash = hashlib.sha256(reset_token.encode()).hexdigest()

            await self.uow.password_reset_tokens.create(
                token_hash, str(user.id), ApplicationConfig.PASSWORD_RESET_TTL_SECONDS
            )

        logger.info(f"Password reset requested for user {user.id}")
        return reset_token
