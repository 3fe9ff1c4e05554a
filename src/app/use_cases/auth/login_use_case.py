"""
Login Use Case

Handles credential authentication and opens a new session.
"""

import logging

from src.api.utils.password import verify_password
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import normalize_email
from src.domain.errors import ForbiddenError, InvalidCredentialsError
from .dtos import LoginResponse
from .session_issuer import issue_session

logger = logging.getLogger(__name__)


class LoginUseCase:
    """
    Use case for user login and token issuance.

    Business Rules:
    - Unknown email, password-less account and wrong password are
      indistinguishable: same error, same bcrypt cost
    - Suspended users are rejected after the password check
    - Every successful login opens a new session; parallel logins for the
      same user each get their own refresh token
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, email: str, password: str) -> LoginResponse:
        """
        Execute login use case.

        Args:
            email: User email
            password: Plain text password

        Returns:
            LoginResponse containing tokens and the user

        Raises:
            InvalidCredentialsError: bad email/password or federated-only account
            ForbiddenError: account is suspended
        """
        async with self.uow:
            user = await self.uow.users.get_by_email(normalize_email(email))

            password_hash = user.password_hash if user is not None else None
            password_valid = await verify_password(password, password_hash)
            if user is None or not password_valid:
                raise InvalidCredentialsError("Invalid email or password")

            if user.suspended:
                logger.warning(f"Suspended user {user.id} attempted to log in")
                raise ForbiddenError("Your account has been suspended")

            tokens = await issue_session(self.uow.sessions, user)

        logger.info(f"User {user.id} logged in")
        return LoginResponse(
            access_token=tokens.access_token,
            refresh_token=tokens.refresh_token,
            user=user,
        )
