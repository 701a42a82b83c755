"""Sparse profile updates.

A :class:`ProfilePatch` records only the fields a caller actually supplied.
Absent and empty inputs are left out entirely, so applying a patch never
blanks a value the caller did not mention.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Optional
from uuid import UUID

from domain.entities.profile import Profile, SocialLinks

SCALAR_FIELDS = ("company", "website", "location", "bio", "status", "github_username")
SOCIAL_FIELDS = ("youtube", "twitter", "facebook", "linkedin", "instagram")


def parse_skills(raw: Optional[str]) -> list[str]:
    """Split a comma-delimited skills string into trimmed, non-empty names.

    >>> parse_skills("go, rust ,  python")
    ['go', 'rust', 'python']
    >>> parse_skills(" , ")
    []
    """
    if not raw:
        return []
    return [skill.strip() for skill in raw.split(",") if skill.strip()]


@dataclass(frozen=True, slots=True)
class SocialPatch:
    """Supplied social links; ``None`` means not supplied."""

    youtube: Optional[str] = None
    twitter: Optional[str] = None
    facebook: Optional[str] = None
    linkedin: Optional[str] = None
    instagram: Optional[str] = None

    def changes(self) -> dict[str, str]:
        return {
            name: getattr(self, name)
            for name in SOCIAL_FIELDS
            if getattr(self, name) is not None
        }

    def apply(self, links: SocialLinks) -> SocialLinks:
        """Return ``links`` with every supplied link overwritten."""
        return replace(links, **self.changes())


@dataclass(frozen=True, slots=True)
class ProfilePatch:
    """Supplied profile fields; ``None`` means not supplied."""

    company: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    status: Optional[str] = None
    github_username: Optional[str] = None
    skills: Optional[tuple[str, ...]] = None
    social: SocialPatch = field(default_factory=SocialPatch)

    def changes(self) -> dict[str, Any]:
        """Mapping of the supplied fields only, social links nested."""
        result: dict[str, Any] = {
            name: getattr(self, name)
            for name in SCALAR_FIELDS
            if getattr(self, name) is not None
        }
        if self.skills is not None:
            result["skills"] = list(self.skills)
        social = self.social.changes()
        if social:
            result["social"] = social
        return result

    def apply(self, profile: Profile) -> Profile:
        """Merge the supplied fields into an existing profile in place."""
        for name in SCALAR_FIELDS:
            value = getattr(self, name)
            if value is not None:
                setattr(profile, name, value)
        if self.skills is not None:
            profile.skills = list(self.skills)
        profile.social = self.social.apply(profile.social)
        return profile

    def create(self, user_id: UUID) -> Profile:
        """Build a new profile made of exactly the supplied fields."""
        scalars = {
            name: getattr(self, name)
            for name in SCALAR_FIELDS
            if getattr(self, name) is not None
        }
        return Profile(
            user_id=user_id,
            skills=list(self.skills or ()),
            social=SocialLinks(**self.social.changes()),
            **scalars,
        )


def project_profile_fields(
    *,
    company: Optional[str] = None,
    website: Optional[str] = None,
    location: Optional[str] = None,
    bio: Optional[str] = None,
    status: Optional[str] = None,
    github_username: Optional[str] = None,
    skills: Optional[str] = None,
    youtube: Optional[str] = None,
    twitter: Optional[str] = None,
    facebook: Optional[str] = None,
    linkedin: Optional[str] = None,
    instagram: Optional[str] = None,
) -> ProfilePatch:
    """Build a patch from raw optional inputs, dropping empty ones.

    ``skills`` is the raw comma-delimited string; when it yields no names the
    field is treated as not supplied.
    """
    skill_names = parse_skills(skills)
    return ProfilePatch(
        company=company or None,
        website=website or None,
        location=location or None,
        bio=bio or None,
        status=status or None,
        github_username=github_username or None,
        skills=tuple(skill_names) if skill_names else None,
        social=SocialPatch(
            youtube=youtube or None,
            twitter=twitter or None,
            facebook=facebook or None,
            linkedin=linkedin or None,
            instagram=instagram or None,
        ),
    )
