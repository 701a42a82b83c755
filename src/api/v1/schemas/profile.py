"""Pydantic schemas for Profile API."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from domain.entities.profile import Education, Experience, Profile, ProfileWithOwner
from domain.entities.profile_patch import ProfilePatch, parse_skills, project_profile_fields


class ProfileUpsert(BaseModel):
    """Schema for creating or updating the caller's profile.

    ``skills`` is a comma-separated list, e.g. ``"python, sql, docker"``.
    Empty optional fields are ignored rather than cleared.
    """

    status: str = Field(..., min_length=1, max_length=255)
    skills: str = Field(..., min_length=1)
    company: str | None = Field(None, max_length=255)
    website: str | None = Field(None, max_length=500)
    location: str | None = Field(None, max_length=255)
    bio: str | None = None
    github_username: str | None = Field(None, max_length=100)
    youtube: str | None = Field(None, max_length=500)
    twitter: str | None = Field(None, max_length=500)
    facebook: str | None = Field(None, max_length=500)
    linkedin: str | None = Field(None, max_length=500)
    instagram: str | None = Field(None, max_length=500)

    @field_validator("status")
    @classmethod
    def validate_status(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("status is required")
        return v

    @field_validator("skills")
    @classmethod
    def validate_skills(cls, v: str) -> str:
        if not parse_skills(v):
            raise ValueError("skills is required")
        return v

    def to_patch(self) -> ProfilePatch:
        return project_profile_fields(**self.model_dump())


class ExperienceCreate(BaseModel):
    """Schema for adding an experience entry."""

    title: str = Field(..., min_length=1, max_length=255)
    company: str = Field(..., min_length=1, max_length=255)
    from_date: date
    location: str | None = Field(None, max_length=255)
    to_date: date | None = None
    current: bool = False
    description: str | None = None

    def to_entity(self) -> Experience:
        return Experience(**self.model_dump())


class EducationCreate(BaseModel):
    """Schema for adding an education entry."""

    school: str = Field(..., min_length=1, max_length=255)
    degree: str = Field(..., min_length=1, max_length=255)
    field_of_study: str = Field(..., min_length=1, max_length=255)
    from_date: date
    to_date: date | None = None
    current: bool = False
    description: str | None = None

    def to_entity(self) -> Education:
        return Education(**self.model_dump())


class SocialResponse(BaseModel):
    """Social links of a profile; unset links are null."""

    model_config = ConfigDict(from_attributes=True)

    youtube: str | None = None
    twitter: str | None = None
    facebook: str | None = None
    linkedin: str | None = None
    instagram: str | None = None


class ExperienceResponse(BaseModel):
    """Schema for an experience entry."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    company: str
    location: str | None = None
    from_date: date
    to_date: date | None = None
    current: bool
    description: str | None = None


class EducationResponse(BaseModel):
    """Schema for an education entry."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    school: str
    degree: str
    field_of_study: str
    from_date: date
    to_date: date | None = None
    current: bool
    description: str | None = None


class OwnerResponse(BaseModel):
    """Public view of a profile's owner."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str | None = None
    avatar_url: str | None = None


class ProfileResponse(BaseModel):
    """Schema for Profile response."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "user_id": "456e4567-e89b-12d3-a456-426614174000",
                "user": {
                    "id": "456e4567-e89b-12d3-a456-426614174000",
                    "name": "Budi Santoso",
                    "avatar_url": "https://gravatar.com/avatar/abc",
                },
                "status": "Developer",
                "skills": ["python", "sql"],
                "social": {"twitter": "https://twitter.com/budi"},
                "experience": [],
                "education": [],
            }
        },
    )

    id: UUID
    user_id: UUID
    user: OwnerResponse | None = None
    company: str | None = None
    website: str | None = None
    location: str | None = None
    bio: str | None = None
    status: str | None = None
    github_username: str | None = None
    skills: list[str]
    social: SocialResponse
    experience: list[ExperienceResponse]
    education: list[EducationResponse]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, profile: Profile) -> "ProfileResponse":
        return cls.model_validate(profile)

    @classmethod
    def from_view(cls, view: ProfileWithOwner) -> "ProfileResponse":
        response = cls.model_validate(view.profile)
        if view.owner:
            response.user = OwnerResponse.model_validate(view.owner)
        return response


class ProfileListResponse(BaseModel):
    """Schema for list of Profiles."""

    data: list[ProfileResponse]


class ProfileDetailResponse(BaseModel):
    """Schema for single Profile."""

    data: ProfileResponse

