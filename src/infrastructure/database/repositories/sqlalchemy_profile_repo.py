"""SQLAlchemy implementation of Profile repository."""

from datetime import date, datetime
from typing import Any, Optional
from uuid import UUID

from sqlalchemy import Select, delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities.profile import (
    Education,
    Experience,
    Profile,
    ProfileWithOwner,
    SocialLinks,
)
from domain.entities.user import UserSummary
from infrastructure.database.models import ProfileModel, UserModel


class SQLAlchemyProfileRepository:
    """SQLAlchemy implementation of IProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_user(self, user_id: UUID) -> Profile | None:
        """Get the profile owned by a user."""
        model = await self._get_model(user_id)
        return self._to_entity(model) if model else None

    async def get_with_owner(self, user_id: UUID) -> ProfileWithOwner | None:
        """Get a user's profile joined with the owner's public view."""
        stmt = self._with_owner().where(ProfileModel.user_id == user_id)
        result = await self._session.execute(stmt)
        row = result.first()
        if row is None:
            return None
        profile_model, user_model = row
        return self._to_view(profile_model, user_model)

    async def list_with_owner(self) -> list[ProfileWithOwner]:
        """Get every profile joined with its owner's public view."""
        stmt = self._with_owner().order_by(ProfileModel.created_at)
        result = await self._session.execute(stmt)
        return [self._to_view(profile_model, user_model) for profile_model, user_model in result]

    async def list_with_owner_for_user(self, user_id: UUID) -> list[ProfileWithOwner]:
        """Get the profiles owned by a user with the owner view."""
        stmt = self._with_owner().where(ProfileModel.user_id == user_id)
        result = await self._session.execute(stmt)
        return [self._to_view(profile_model, user_model) for profile_model, user_model in result]

    async def create(self, profile: Profile) -> Profile:
        """Create a new profile."""
        model = self._to_model(profile)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_entity(model)

    async def update(self, profile: Profile) -> Profile:
        """Overwrite an existing profile with the given aggregate state."""
        model = await self._get_model(profile.user_id)

        if not model:
            raise ValueError(f"Profile for user {profile.user_id} not found")

        model.company = profile.company
        model.website = profile.website
        model.location = profile.location
        model.bio = profile.bio
        model.status = profile.status
        model.github_username = profile.github_username
        # New containers so the JSON columns are flagged as changed
        model.skills = list(profile.skills)
        model.social = self._social_to_json(profile.social)
        model.experience = [self._experience_to_json(e) for e in profile.experience]
        model.education = [self._education_to_json(e) for e in profile.education]
        model.updated_at = datetime.utcnow()

        await self._session.flush()
        return self._to_entity(model)

    async def delete_by_user(self, user_id: UUID) -> bool:
        """Delete a user's profile."""
        stmt = delete(ProfileModel).where(ProfileModel.user_id == user_id)
        result = await self._session.execute(stmt)
        await self._session.flush()
        return bool(result.rowcount)  # type: ignore[attr-defined]

    async def _get_model(self, user_id: UUID) -> ProfileModel | None:
        stmt = select(ProfileModel).where(ProfileModel.user_id == user_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    def _with_owner() -> Select[tuple[ProfileModel, UserModel]]:
        """Profiles left-joined with their owning user."""
        return select(ProfileModel, UserModel).outerjoin(
            UserModel, UserModel.id == ProfileModel.user_id
        )

    def _to_view(
        self, profile_model: ProfileModel, user_model: Optional[UserModel]
    ) -> ProfileWithOwner:
        owner = (
            UserSummary(
                id=user_model.id,
                name=user_model.name,
                avatar_url=user_model.avatar_url,
            )
            if user_model
            else None
        )
        return ProfileWithOwner(profile=self._to_entity(profile_model), owner=owner)

    def _to_entity(self, model: ProfileModel) -> Profile:
        """Convert ORM model to domain entity."""
        return Profile(
            id=model.id,
            user_id=model.user_id,
            company=model.company,
            website=model.website,
            location=model.location,
            bio=model.bio,
            status=model.status,
            github_username=model.github_username,
            skills=list(model.skills or []),
            social=SocialLinks(**(model.social or {})),
            experience=[self._experience_from_json(e) for e in model.experience or []],
            education=[self._education_from_json(e) for e in model.education or []],
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

    def _to_model(self, entity: Profile) -> ProfileModel:
        """Convert domain entity to ORM model."""
        return ProfileModel(
            id=entity.id,
            user_id=entity.user_id,
            company=entity.company,
            website=entity.website,
            location=entity.location,
            bio=entity.bio,
            status=entity.status,
            github_username=entity.github_username,
            skills=list(entity.skills),
            social=self._social_to_json(entity.social),
            experience=[self._experience_to_json(e) for e in entity.experience],
            education=[self._education_to_json(e) for e in entity.education],
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    # JSON document helpers

    @staticmethod
    def _social_to_json(social: SocialLinks) -> dict[str, Any]:
        return {
            "youtube": social.youtube,
            "twitter": social.twitter,
            "facebook": social.facebook,
            "linkedin": social.linkedin,
            "instagram": social.instagram,
        }

    @staticmethod
    def _experience_to_json(entry: Experience) -> dict[str, Any]:
        return {
            "id": str(entry.id),
            "title": entry.title,
            "company": entry.company,
            "location": entry.location,
            "from_date": entry.from_date.isoformat(),
            "to_date": entry.to_date.isoformat() if entry.to_date else None,
            "current": entry.current,
            "description": entry.description,
        }

    @staticmethod
    def _experience_from_json(data: dict[str, Any]) -> Experience:
        return Experience(
            id=UUID(data["id"]),
            title=data["title"],
            company=data["company"],
            location=data.get("location"),
            from_date=date.fromisoformat(data["from_date"]),
            to_date=date.fromisoformat(data["to_date"]) if data.get("to_date") else None,
            current=bool(data.get("current", False)),
            description=data.get("description"),
        )

    @staticmethod
    def _education_to_json(entry: Education) -> dict[str, Any]:
        return {
            "id": str(entry.id),
            "school": entry.school,
            "degree": entry.degree,
            "field_of_study": entry.field_of_study,
            "from_date": entry.from_date.isoformat(),
            "to_date": entry.to_date.isoformat() if entry.to_date else None,
            "current": entry.current,
            "description": entry.description,
        }

    @staticmethod
    def _education_from_json(data: dict[str, Any]) -> Education:
        return Education(
            id=UUID(data["id"]),
            school=data["school"],
            degree=data["degree"],
            field_of_study=data["field_of_study"],
            from_date=date.fromisoformat(data["from_date"]),
            to_date=date.fromisoformat(data["to_date"]) if data.get("to_date") else None,
            current=bool(data.get("current", False)),
            description=data.get("description"),
        )
