import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from src.domain.errors import AuthError
from .error import status_code_for

logger = logging.getLogger(__name__)


async def handle_auth_error(request: Request, exc: AuthError):
    error_dict = {"code": exc.code, "message": exc.message}
    logger.warning(f"Auth error: {error_dict}")
    return JSONResponse(status_code=status_code_for(exc), content={"error": error_dict})


def create_app(ApplicationConfig) -> FastAPI:
    """
    Build the application shell.

    Feature routers (classes, assignments, grading) are mounted by the
    portal; this factory only wires the auth error contract.
    """
    app = FastAPI(title="Portal Auth", version="0.1.0")
    app.state.config = ApplicationConfig

    app.add_exception_handler(AuthError, handle_auth_error)

    return app
