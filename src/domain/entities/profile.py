"""Profile aggregate and its timeline entries."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import StrEnum
from typing import Optional
from uuid import UUID, uuid4

from domain.entities.user import UserSummary


class TimelineKind(StrEnum):
    """The two ordered sub-collections of a profile."""

    EXPERIENCE = "experience"
    EDUCATION = "education"


@dataclass
class SocialLinks:
    """Social network links. Every field is independently optional."""

    youtube: Optional[str] = None
    twitter: Optional[str] = None
    facebook: Optional[str] = None
    linkedin: Optional[str] = None
    instagram: Optional[str] = None


@dataclass
class Experience:
    """A job held by the profile owner."""

    title: str
    company: str
    from_date: date
    id: UUID = field(default_factory=uuid4)
    location: Optional[str] = None
    to_date: Optional[date] = None
    current: bool = False
    description: Optional[str] = None


@dataclass
class Education:
    """A school attended by the profile owner."""

    school: str
    degree: str
    field_of_study: str
    from_date: date
    id: UUID = field(default_factory=uuid4)
    to_date: Optional[date] = None
    current: bool = False
    description: Optional[str] = None


TimelineEntry = Experience | Education


@dataclass
class Profile:
    """Domain entity for a user's profile.

    A user has at most one profile. It is created on the first write and
    edited in place afterwards; ``experience`` and ``education`` are kept
    most-recent-first.
    """

    user_id: UUID
    id: UUID = field(default_factory=uuid4)
    company: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    status: Optional[str] = None
    github_username: Optional[str] = None
    skills: list[str] = field(default_factory=list)
    social: SocialLinks = field(default_factory=SocialLinks)
    experience: list[Experience] = field(default_factory=list)
    education: list[Education] = field(default_factory=list)
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def __post_init__(self) -> None:
        """Ensure updated_at is always at least as recent as created_at."""
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at

    def timeline(self, kind: TimelineKind) -> list[TimelineEntry]:
        """Return the sub-collection named by ``kind``."""
        if kind is TimelineKind.EXPERIENCE:
            return list(self.experience)
        return list(self.education)

    def set_timeline(self, kind: TimelineKind, entries: list[TimelineEntry]) -> None:
        """Replace the sub-collection named by ``kind``."""
        if kind is TimelineKind.EXPERIENCE:
            self.experience = entries  # type: ignore[assignment]
        else:
            self.education = entries  # type: ignore[assignment]


@dataclass(frozen=True, slots=True)
class ProfileWithOwner:
    """Read-only value object: a Profile bundled with its owner's public view."""

    profile: Profile
    owner: UserSummary | None
