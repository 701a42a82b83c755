"""Profile repository protocol."""

from typing import Protocol
from uuid import UUID

from domain.entities.profile import Profile, ProfileWithOwner


class IProfileRepository(Protocol):
    """Repository interface for Profile aggregates."""

    async def get_by_user(self, user_id: UUID) -> Profile | None:
        """Get the profile owned by a user."""
        ...

    async def get_with_owner(self, user_id: UUID) -> ProfileWithOwner | None:
        """Get a user's profile joined with the owner's public view."""
        ...

    async def list_with_owner(self) -> list[ProfileWithOwner]:
        """Get every profile joined with its owner's public view."""
        ...

    async def list_with_owner_for_user(self, user_id: UUID) -> list[ProfileWithOwner]:
        """Get the profiles owned by a user (zero or one) with the owner view."""
        ...

    async def create(self, profile: Profile) -> Profile:
        """Create a new profile."""
        ...

    async def update(self, profile: Profile) -> Profile:
        """Overwrite an existing profile with the given aggregate state."""
        ...

    async def delete_by_user(self, user_id: UUID) -> bool:
        """Delete a user's profile and return whether one existed."""
        ...
