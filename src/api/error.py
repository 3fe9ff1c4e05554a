from typing import Dict, Type

from fastapi import status

from src.domain.errors import (
    AlreadyExistsError,
    AuthError,
    ForbiddenError,
    InvalidCredentialsError,
    InvalidPasswordError,
    NotFoundError,
    UnauthorizedError,
)

# Most specific classes first; subclasses of UnauthorizedError inherit 401
ERROR_STATUS_CODES: Dict[Type[AuthError], int] = {
    AlreadyExistsError: status.HTTP_409_CONFLICT,
    InvalidCredentialsError: status.HTTP_401_UNAUTHORIZED,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ForbiddenError: status.HTTP_403_FORBIDDEN,
    UnauthorizedError: status.HTTP_401_UNAUTHORIZED,
    InvalidPasswordError: status.HTTP_400_BAD_REQUEST,
}


def status_code_for(error: AuthError) -> int:
    for error_type, status_code in ERROR_STATUS_CODES.items():
        if isinstance(error, error_type):
            return status_code
    return status.HTTP_400_BAD_REQUEST
