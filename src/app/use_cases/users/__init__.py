"""
User Session Use Cases

Session inspection and revocation.
"""

from .revoke_sessions_use_case import RevokeSessionsUseCase

__all__ = [
    "RevokeSessionsUseCase",
]
