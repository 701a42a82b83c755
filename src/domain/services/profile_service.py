"""Profile service layer: reads, upsert and account removal."""

from typing import Callable, List, Optional
from uuid import UUID

import structlog

from core.exceptions import ProfileNotFoundError
from domain.entities.profile import Profile, ProfileWithOwner
from domain.entities.profile_patch import ProfilePatch
from domain.entities.user import User
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


class ProfileService:
    """Service layer for Profile business logic."""

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def get_own(self, user_id: UUID) -> ProfileWithOwner:
        """Get the acting user's profile with their public view."""
        async with self._uow_factory() as uow:
            found = await uow.profiles.get_with_owner(user_id)
            if not found:
                raise ProfileNotFoundError(str(user_id))
            return found

    async def list_all(self) -> List[ProfileWithOwner]:
        """Get every profile. Unpaginated."""
        async with self._uow_factory() as uow:
            return await uow.profiles.list_with_owner()  # type: ignore[no-any-return]

    async def get_by_user(self, user_id: UUID) -> List[ProfileWithOwner]:
        """Get the profiles owned by any user; an empty list is a valid answer."""
        async with self._uow_factory() as uow:
            views = await uow.profiles.list_with_owner_for_user(user_id)
            return views  # type: ignore[no-any-return]

    async def upsert(
        self, user_id: UUID, patch: ProfilePatch, owner: Optional[User] = None
    ) -> Profile:
        """Create the user's profile from ``patch``, or merge ``patch`` into it.

        ``owner`` is the account as the token describes it. It is stored first
        when the users table has no row for it yet, so the profile always has
        an owner to reference.

        Required fields are checked by the caller. Two concurrent first writes
        for the same user race between the lookup and the insert; the unique
        owner constraint in the store rejects the second one.
        """
        async with self._uow_factory() as uow:
            if owner is not None and await uow.users.get(user_id) is None:
                await uow.users.add(owner)
                logger.info("user_synced", user_id=str(user_id))

            existing = await uow.profiles.get_by_user(user_id)

            if existing:
                merged = patch.apply(existing)
                saved = await uow.profiles.update(merged)
                logger.info(
                    "profile_updated",
                    user_id=str(user_id),
                    fields=sorted(patch.changes()),
                )
            else:
                saved = await uow.profiles.create(patch.create(user_id))
                logger.info("profile_created", user_id=str(user_id))

            await uow.commit()
            return saved

    async def delete_account(self, user_id: UUID) -> None:
        """Remove the user's profile and then the user account itself."""
        async with self._uow_factory() as uow:
            had_profile = await uow.profiles.delete_by_user(user_id)
            had_user = await uow.users.delete(user_id)
            await uow.commit()
            logger.info(
                "account_deleted",
                user_id=str(user_id),
                profile_deleted=had_profile,
                user_deleted=had_user,
            )
