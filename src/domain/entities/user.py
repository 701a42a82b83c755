"""User domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4


@dataclass
class User:
    """Domain entity for an account (synced from the identity provider)."""

    id: UUID = field(default_factory=uuid4)
    email: str = ""
    name: str | None = None
    avatar_url: str | None = None
    created_at: datetime = field(default_factory=datetime.utcnow)


@dataclass(frozen=True, slots=True)
class UserSummary:
    """Read-only public view of a user: what profiles are shown with."""

    id: UUID
    name: str | None = None
    avatar_url: str | None = None
