"""User repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.user import User


class IUserRepository(Protocol):
    """Repository interface for User accounts."""

    async def get(self, id: UUID) -> User | None:
        """Get a user by ID."""
        ...

    async def add(self, user: User) -> User:
        """Record an account that is not stored yet."""
        ...

    async def delete(self, id: UUID) -> bool:
        """Delete a user account and return success status."""
        ...
