from src.app.services.unit_of_work import UnitOfWork


class LogoutUseCase:
    """Ends a session. Logging out an unknown or expired token is not an error."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, refresh_token: str) -> None:
        async with self.uow:
            await self.uow.sessions.delete(refresh_token)
