import logging

from src.api.utils.password import hash_password
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import User, UserRole, normalize_email
from src.domain.errors import AlreadyExistsError
from .dtos import RegisterCommand

logger = logging.getLogger(__name__)


class RegisterUseCase:
    """
    Register Use Case

    Business Logic:
    1. Normalize email (trim + lowercase)
    2. Reject an email that is already registered
    3. Hash password with bcrypt if one was given
    4. Create User (password_hash=None marks a federated-only account)
    5. Commit - no session is created
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, command: RegisterCommand) -> User:
        """
        Execute register use case

        Args:
            command: RegisterCommand with email, optional password, name, role

        Returns:
            Created User

        Raises:
            AlreadyExistsError: email already registered (including a
                concurrent registration that won the unique index)
            InvalidPasswordError: password longer than bcrypt accepts
        """
        email = normalize_email(command.email)

        async with self.uow:
            existing_user = await self.uow.users.get_by_email(email)
            if existing_user:
                raise AlreadyExistsError(f"User with email {email} already exists")

            password_hash = None
            if command.password is not None:
                password_hash = await hash_password(command.password)

            user = User(
                email=email,
                password_hash=password_hash,
                name=command.name,
                role=command.role,
                suspended=False,
            )
            user = await self.uow.users.create(user)
            await self.uow.commit()

        logger.info(f"Registered user {user.id} with role {UserRole(user.role).value}")
        return user
