"""User routes"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from ...api.dependencies import get_unit_of_work, get_current_user, get_current_admin_user
from ...application.dtos.user_dtos import UserDto, UpdateMeDto, AdminUpdateUserDto
from ...application.use_cases.user_profile_use_cases import UserProfileUseCases
from ...domain.entities.user import User
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...domain.value_objects.entity_ids import UserId

router = APIRouter()


@router.get("/me", response_model=UserDto)
async def get_me(current_user: User = Depends(get_current_user)):
    """Get current user profile"""
    return UserDto.from_entity(current_user)


@router.patch("/update-me", response_model=UserDto)
async def update_me(
    request: UpdateMeDto,
    current_user: User = Depends(get_current_user),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    """Update name, email or photo"""
    return await UserProfileUseCases(unit_of_work).update_me(current_user, request)


@router.delete("/delete-me", status_code=status.HTTP_204_NO_CONTENT)
async def delete_me(
    current_user: User = Depends(get_current_user),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    """Deactivate own account"""
    await UserProfileUseCases(unit_of_work).delete_me(current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/", response_model=List[UserDto])
async def list_users(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    include_inactive: bool = False,
    admin: User = Depends(get_current_admin_user),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    """List users (admin only)"""
    return await UserProfileUseCases(unit_of_work).list_users(page, limit, include_inactive)


@router.get("/{user_id}", response_model=UserDto)
async def get_user(
    user_id: UUID,
    admin: User = Depends(get_current_admin_user),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    return await UserProfileUseCases(unit_of_work).get_user(UserId(user_id))


@router.patch("/{user_id}", response_model=UserDto)
async def update_user(
    user_id: UUID,
    request: AdminUpdateUserDto,
    admin: User = Depends(get_current_admin_user),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    """Update user (admin only). Do NOT update passwords with this!"""
    return await UserProfileUseCases(unit_of_work).update_user(UserId(user_id), request)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: UUID,
    admin: User = Depends(get_current_admin_user),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    await UserProfileUseCases(unit_of_work).delete_user(UserId(user_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
