"""Experience and education editing on an existing profile."""

from typing import Callable, Optional
from uuid import UUID

import structlog

from core.exceptions import ProfileNotFoundError
from domain.entities.profile import (
    Education,
    Experience,
    Profile,
    TimelineEntry,
    TimelineKind,
)
from domain.entities.timeline import find_entry, prepend_entry, remove_entry
from domain.repositories.unit_of_work import IUnitOfWork

logger = structlog.get_logger()


class TimelineService:
    """Service layer for a profile's experience and education entries.

    Every edit reads the whole profile, changes one sub-collection and writes
    the profile back. Concurrent edits of the same profile are
    last-writer-wins.
    """

    def __init__(self, uow_factory: Callable[[], IUnitOfWork]) -> None:
        self._uow_factory = uow_factory

    async def add_experience(self, user_id: UUID, experience: Experience) -> Profile:
        return await self._prepend(user_id, TimelineKind.EXPERIENCE, experience)

    async def add_education(self, user_id: UUID, education: Education) -> Profile:
        return await self._prepend(user_id, TimelineKind.EDUCATION, education)

    async def remove_experience(
        self, user_id: UUID, experience_id: Optional[UUID]
    ) -> Profile:
        return await self._remove(user_id, TimelineKind.EXPERIENCE, experience_id)

    async def remove_education(self, user_id: UUID, education_id: Optional[UUID]) -> Profile:
        return await self._remove(user_id, TimelineKind.EDUCATION, education_id)

    async def _prepend(
        self, user_id: UUID, kind: TimelineKind, entry: TimelineEntry
    ) -> Profile:
        """Insert ``entry`` as the newest item of the ``kind`` collection."""
        async with self._uow_factory() as uow:
            profile = await self._require_profile(uow, user_id)
            profile.set_timeline(kind, prepend_entry(profile.timeline(kind), entry))

            updated = await uow.profiles.update(profile)
            await uow.commit()
            logger.info(
                "timeline_entry_added",
                user_id=str(user_id),
                kind=kind.value,
                entry_id=str(entry.id),
            )
            return updated

    async def _remove(
        self, user_id: UUID, kind: TimelineKind, entry_id: Optional[UUID]
    ) -> Profile:
        """Drop the entry with ``entry_id``; an unknown id changes nothing."""
        async with self._uow_factory() as uow:
            profile = await self._require_profile(uow, user_id)
            entries = profile.timeline(kind)
            found = find_entry(entries, entry_id) is not None

            profile.set_timeline(kind, remove_entry(entries, entry_id))
            updated = await uow.profiles.update(profile)
            await uow.commit()
            logger.info(
                "timeline_entry_removed" if found else "timeline_entry_missing",
                user_id=str(user_id),
                kind=kind.value,
                entry_id=str(entry_id),
            )
            return updated

    async def _require_profile(self, uow: IUnitOfWork, user_id: UUID) -> Profile:
        """Load the user's profile; editing never creates one."""
        profile = await uow.profiles.get_by_user(user_id)
        if not profile:
            raise ProfileNotFoundError(str(user_id))
        return profile
