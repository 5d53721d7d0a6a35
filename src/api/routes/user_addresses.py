"""User address API routes."""

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from api.dependencies import get_user_address_service
from api.schemas.common import ErrorResponse
from api.schemas.user_address import UserAddressRequest, UserAddressResponse
from domain.services.user_address_service import UserAddressService

router = APIRouter(prefix="/userAddress", tags=["user-addresses"])


@router.get(
    "/getAllUsers",
    response_model=list[UserAddressResponse],
    summary="List all user addresses",
)
async def get_all_user_addresses(
    service: UserAddressService = Depends(get_user_address_service),
) -> list[UserAddressResponse]:
    """Get every address with its owning profile flattened in."""
    items = await service.get_all_user_addresses()
    return [UserAddressResponse.from_aggregate(item) for item in items]


@router.post(
    "/createUserAddress",
    response_class=PlainTextResponse,
    summary="Create a user address",
    responses={
        200: {"description": "Address created, body carries the new ID"},
        400: {"model": ErrorResponse, "description": "Invalid payload or unknown profile"},
    },
)
async def create_user_address(
    body: UserAddressRequest,
    service: UserAddressService = Depends(get_user_address_service),
) -> str:
    """Create an address for an existing profile."""
    return await service.create_user_address(body.to_entity())


@router.get(
    "/getUser/{id}",
    response_model=UserAddressResponse,
    summary="Get a user address",
    responses={404: {"model": ErrorResponse, "description": "User Address not found"}},
)
async def get_user_address(
    id: int,
    service: UserAddressService = Depends(get_user_address_service),
) -> UserAddressResponse:
    item = await service.get_user_address(id)
    return UserAddressResponse.from_aggregate(item)


@router.put(
    "/editUser/{id}",
    response_class=PlainTextResponse,
    summary="Edit a user address",
    responses={
        400: {"model": ErrorResponse, "description": "Invalid payload or profile change"},
        404: {"model": ErrorResponse, "description": "User Address not found"},
    },
)
async def edit_user_address(
    id: int,
    body: UserAddressRequest,
    service: UserAddressService = Depends(get_user_address_service),
) -> str:
    """Replace an address's fields. The owning profile cannot change."""
    return await service.edit_user_address(id, body.to_entity())


@router.delete(
    "/removeUserAddress/{id}",
    response_class=PlainTextResponse,
    summary="Remove a user address",
    responses={404: {"model": ErrorResponse, "description": "User Address not found"}},
)
async def remove_user_address(
    id: int,
    service: UserAddressService = Depends(get_user_address_service),
) -> str:
    return await service.remove_user_address(id)
