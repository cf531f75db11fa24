"""
User Management API
"""

from fastapi import APIRouter, Depends, Response, status

from aicalendar.api.errors import unwrap_or_raise
from aicalendar.core.dependencies import get_current_user_id, get_user_service
from aicalendar.schemas.user import (
    CreateUserRequest,
    UpdateUserRequest,
    UserResponse,
    UserListResponse,
)
from aicalendar.services.user_service import UserService


router = APIRouter(
    prefix="/users",
    tags=["Users"]
)


@router.get("", response_model=UserListResponse)
async def list_users(
    current_user_id: str = Depends(get_current_user_id),
    service: UserService = Depends(get_user_service)
):
    users = unwrap_or_raise(service.list_users())
    return UserListResponse(users=users, total_count=len(users))


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: str,
    current_user_id: str = Depends(get_current_user_id),
    service: UserService = Depends(get_user_service)
):
    return unwrap_or_raise(service.get_user(user_id))


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(request: CreateUserRequest, service: UserService = Depends(get_user_service)):
    return unwrap_or_raise(service.create_user(**request.model_dump()))


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: str,
    request: UpdateUserRequest,
    current_user_id: str = Depends(get_current_user_id),
    service: UserService = Depends(get_user_service)
):
    updates = request.model_dump(exclude_unset=True)
    return unwrap_or_raise(service.update_user(user_id, updates, current_user_id))


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: str,
    current_user_id: str = Depends(get_current_user_id),
    service: UserService = Depends(get_user_service)
):
    unwrap_or_raise(service.delete_user(user_id, current_user_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
