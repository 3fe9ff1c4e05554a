"""
Owner Lookup

Resolves the user behind a session, reset grant or OAuth link. A reference
whose user has been deleted is reported as dangling so callers can clean it
up before failing.
"""

from enum import Enum
from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from src.app.repositories.user_repository import IUserRepository
from src.domain.entities import User


class OwnerStatus(str, Enum):
    found = "found"
    dangling = "dangling"


class OwnerLookup(BaseModel):
    status: OwnerStatus
    user: Optional[User] = None

    @classmethod
    def found(cls, user: User) -> "OwnerLookup":
        return cls(status=OwnerStatus.found, user=user)

    @classmethod
    def dangling(cls) -> "OwnerLookup":
        return cls(status=OwnerStatus.dangling)

    @property
    def is_dangling(self) -> bool:
        return self.status == OwnerStatus.dangling


async def resolve_owner(users: IUserRepository, user_id: UUID) -> OwnerLookup:
    # Store errors propagate: a transient failure is not a dangling reference
    user = await users.get_by_id(user_id)
    if user is None:
        return OwnerLookup.dangling()
    return OwnerLookup.found(user)
