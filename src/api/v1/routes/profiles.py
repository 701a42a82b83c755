"""Profile API routes."""

from typing import Any, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Request

from api.dependencies.auth import CurrentUser
from api.v1.dependencies import (
    get_github_client,
    get_profile_service,
    get_timeline_service,
)
from api.v1.schemas.common import ErrorResponse, MessageResponse
from api.v1.schemas.profile import (
    EducationCreate,
    ExperienceCreate,
    ProfileDetailResponse,
    ProfileListResponse,
    ProfileResponse,
    ProfileUpsert,
)
from core.exceptions import ProfileNotFoundError
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter
from domain.entities.user import User
from domain.services.profile_service import ProfileService
from domain.services.timeline_service import TimelineService
from infrastructure.github.client import GitHubClient

router = APIRouter(prefix="/profiles", tags=["profiles"])


def _parse_entry_id(raw: str) -> Optional[UUID]:
    """Entry id from the path; an unreadable one is None and matches no entry."""
    try:
        return UUID(raw)
    except ValueError:
        return None


@router.get(
    "/me",
    response_model=ProfileDetailResponse,
    summary="Get my profile",
    responses={
        400: {"model": ErrorResponse, "description": "There is no profile for this user"}
    },
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_my_profile(
    request: Request,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Get the authenticated user's profile with their name and avatar."""
    view = await service.get_own(user.id)
    return ProfileDetailResponse(data=ProfileResponse.from_view(view))


@router.get(
    "",
    response_model=ProfileListResponse,
    summary="List all profiles",
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def list_profiles(
    request: Request,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileListResponse:
    """Get every profile. Public, unpaginated."""
    views = await service.list_all()
    return ProfileListResponse(data=[ProfileResponse.from_view(v) for v in views])


@router.get(
    "/user/{user_id}",
    response_model=ProfileListResponse,
    summary="Get profiles by user",
    responses={400: {"model": ErrorResponse, "description": "Malformed user id"}},
)
@limiter.limit(READ_LIMIT)  # type: ignore[untyped-decorator]
async def get_profiles_by_user(
    request: Request,
    user_id: str,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileListResponse:
    """Get the profile of any user. A user without a profile yields an empty list."""
    try:
        owner_id = UUID(user_id)
    except ValueError:
        raise ProfileNotFoundError(user_id)

    views = await service.get_by_user(owner_id)
    return ProfileListResponse(data=[ProfileResponse.from_view(v) for v in views])


@router.post(
    "",
    response_model=ProfileDetailResponse,
    summary="Create or update my profile",
    responses={
        200: {"description": "Profile created or updated"},
        400: {"model": ErrorResponse, "description": "status and skills are required"},
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def upsert_profile(
    request: Request,
    body: ProfileUpsert,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> ProfileDetailResponse:
    """Create the profile on first call; afterwards merge the supplied fields."""
    owner = User(id=user.id, email=user.email, name=user.name, avatar_url=user.avatar_url)
    profile = await service.upsert(user.id, body.to_patch(), owner=owner)
    return ProfileDetailResponse(data=ProfileResponse.from_entity(profile))


@router.delete(
    "",
    response_model=MessageResponse,
    summary="Delete my profile and account",
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def delete_account(
    request: Request,
    user: CurrentUser,
    service: ProfileService = Depends(get_profile_service),
) -> MessageResponse:
    """Delete the authenticated user's profile and then the user itself."""
    await service.delete_account(user.id)
    return MessageResponse(message="User deleted")


@router.put(
    "/experience",
    response_model=ProfileDetailResponse,
    summary="Add an experience entry",
    responses={
        400: {"model": ErrorResponse, "description": "Missing required fields or no profile"}
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def add_experience(
    request: Request,
    body: ExperienceCreate,
    user: CurrentUser,
    service: TimelineService = Depends(get_timeline_service),
) -> ProfileDetailResponse:
    """Add an experience entry in front of the existing ones."""
    profile = await service.add_experience(user.id, body.to_entity())
    return ProfileDetailResponse(data=ProfileResponse.from_entity(profile))


@router.delete(
    "/experience/{experience_id}",
    response_model=ProfileDetailResponse,
    summary="Remove an experience entry",
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def remove_experience(
    request: Request,
    experience_id: str,
    user: CurrentUser,
    service: TimelineService = Depends(get_timeline_service),
) -> ProfileDetailResponse:
    """Remove an experience entry. Unknown ids leave the profile unchanged."""
    profile = await service.remove_experience(user.id, _parse_entry_id(experience_id))
    return ProfileDetailResponse(data=ProfileResponse.from_entity(profile))


@router.put(
    "/education",
    response_model=ProfileDetailResponse,
    summary="Add an education entry",
    responses={
        400: {"model": ErrorResponse, "description": "Missing required fields or no profile"}
    },
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def add_education(
    request: Request,
    body: EducationCreate,
    user: CurrentUser,
    service: TimelineService = Depends(get_timeline_service),
) -> ProfileDetailResponse:
    """Add an education entry in front of the existing ones."""
    profile = await service.add_education(user.id, body.to_entity())
    return ProfileDetailResponse(data=ProfileResponse.from_entity(profile))


@router.delete(
    "/education/{education_id}",
    response_model=ProfileDetailResponse,
    summary="Remove an education entry",
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def remove_education(
    request: Request,
    education_id: str,
    user: CurrentUser,
    service: TimelineService = Depends(get_timeline_service),
) -> ProfileDetailResponse:
    """Remove an education entry. Unknown ids leave the profile unchanged."""
    profile = await service.remove_education(user.id, _parse_entry_id(education_id))
    return ProfileDetailResponse(data=ProfileResponse.from_entity(profile))


@router.get(
    "/github/{username}",
    summary="List a GitHub user's repositories",
    responses={404: {"model": ErrorResponse, "description": "No github profile found"}},
)
@limiter.limit(WRITE_LIMIT)  # type: ignore[untyped-decorator]
async def get_github_repos(
    request: Request,
    username: str,
    client: GitHubClient = Depends(get_github_client),
) -> Any:
    """Proxy GitHub's repository listing for ``username`` (five oldest first)."""
    return await client.list_repos(username)
