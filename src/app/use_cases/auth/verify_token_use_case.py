from src.api.utils.jwt import decode_jwt
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import User
from src.domain.errors import ForbiddenError, NotFoundError


class VerifyTokenUseCase:
    """
    Resolves an access token to its user.

    The token is stateless and cannot reflect a suspension that happened after
    it was issued, so the user is always re-read from the store.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, access_token: str) -> User:
        """
        Raises:
            TokenExpiredError / TokenInvalidError: token fails verification
            NotFoundError: the embedded user no longer exists
            ForbiddenError: the user is suspended
        """
        payload = decode_jwt(access_token)

        async with self.uow:
            user = await self.uow.users.get_by_id(payload.user_id)

        if user is None:
            raise NotFoundError("User not found")
        if user.suspended:
            raise ForbiddenError("Your account has been suspended")
        return user
