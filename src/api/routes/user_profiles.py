"""User profile API routes."""

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from api.dependencies import get_user_profile_service
from api.schemas.common import ErrorResponse
from api.schemas.user_profile import UserProfileRequest, UserProfileResponse
from domain.services.user_profile_service import UserProfileService

router = APIRouter(prefix="/userProfile", tags=["user-profiles"])


@router.get(
    "/getAllUsers",
    response_model=list[UserProfileResponse],
    summary="List all user profiles",
)
async def get_all_user_profiles(
    service: UserProfileService = Depends(get_user_profile_service),
) -> list[UserProfileResponse]:
    """Get every profile with its addresses nested."""
    profiles = await service.get_all_user_profiles()
    return [UserProfileResponse.from_entity(profile) for profile in profiles]


@router.post(
    "/createUser",
    response_class=PlainTextResponse,
    summary="Create a user profile",
    responses={
        200: {"description": "Profile created, body carries the new ID"},
        400: {"model": ErrorResponse, "description": "Invalid payload or duplicate email"},
    },
)
async def create_user_profile(
    body: UserProfileRequest,
    service: UserProfileService = Depends(get_user_profile_service),
) -> str:
    """Create a new profile. Emails must be unique across all profiles."""
    return await service.create_user_profile(body.to_entity())


@router.get(
    "/getUser/{id}",
    response_model=UserProfileResponse,
    summary="Get a user profile",
    responses={404: {"model": ErrorResponse, "description": "User not found"}},
)
async def get_user_profile(
    id: int,
    service: UserProfileService = Depends(get_user_profile_service),
) -> UserProfileResponse:
    profile = await service.get_user_profile(id)
    return UserProfileResponse.from_entity(profile)


@router.put(
    "/editUser/{id}",
    response_class=PlainTextResponse,
    summary="Edit a user profile",
    responses={
        400: {"model": ErrorResponse, "description": "Invalid payload or duplicate email"},
        404: {"model": ErrorResponse, "description": "User not found"},
    },
)
async def edit_user_profile(
    id: int,
    body: UserProfileRequest,
    service: UserProfileService = Depends(get_user_profile_service),
) -> str:
    """Replace a profile's fields. The ID in the path wins over any ID in the body."""
    return await service.edit_user_profile(id, body.to_entity())


@router.delete(
    "/removeUserProfile/{id}",
    response_class=PlainTextResponse,
    summary="Remove a user profile",
    responses={404: {"model": ErrorResponse, "description": "User not found"}},
)
async def remove_user_profile(
    id: int,
    service: UserProfileService = Depends(get_user_profile_service),
) -> str:
    """Remove a profile. Its addresses are removed with it."""
    return await service.remove_user_profile(id)
