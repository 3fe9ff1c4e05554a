"""
Auth Domain Errors

Stable error kinds raised by the authentication core. Callers map them to
transport responses; nothing here knows about HTTP.
"""


class AuthError(Exception):
    """Base error carrying a stable code and a human readable message"""

    code = "AUTH_ERROR"
    default_message = "Authentication error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class AlreadyExistsError(AuthError):
    """Uniqueness violation - duplicate email or duplicate OAuth link"""

    code = "ALREADY_EXISTS"
    default_message = "Resource already exists"


class InvalidCredentialsError(AuthError):
    code = "INVALID_CREDENTIALS"
    default_message = "Invalid credentials"


class NotFoundError(AuthError):
    code = "NOT_FOUND"
    default_message = "Resource not found"


class ForbiddenError(AuthError):
    code = "FORBIDDEN"
    default_message = "Forbidden"


class UnauthorizedError(AuthError):
    """Unknown or expired session token, or an access token that fails verification"""

    code = "UNAUTHORIZED"
    default_message = "Unauthorized"


class TokenExpiredError(UnauthorizedError):
    code = "TOKEN_EXPIRED"
    default_message = "Token has expired"


class TokenInvalidError(UnauthorizedError):
    code = "TOKEN_INVALID"
    default_message = "Token is invalid"


class InvalidPasswordError(AuthError):
    """New password rejected before hashing"""

    code = "INVALID_PASSWORD"
    default_message = "Password is not acceptable"
