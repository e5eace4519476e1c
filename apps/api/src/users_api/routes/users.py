"""User API routes.

Handlers are plain functions so FastAPI runs the blocking store and bcrypt
calls in its threadpool.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, Query, status
from users_api.models.envelope import PaginatedResponse, SuccessResponse
from users_api.services import get_user_service
from users_common.models.user import User
from users_common.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"], redirect_slashes=False)


@router.get("", response_model=PaginatedResponse[User])
@router.get("/", response_model=PaginatedResponse[User], include_in_schema=False)
def list_users(
    page: int = Query(1, ge=1, description="Page number, 1-based"),
    limit: int = Query(10, ge=1, description="Page size"),
    search: str | None = Query(None, description="Matches name or email, case-insensitive"),
    service: UserService = Depends(get_user_service),
) -> PaginatedResponse[User]:
    users, pagination = service.list_users(page=page, limit=limit, search=search)
    return PaginatedResponse[User](data=users, pagination=pagination)


@router.get("/{user_id}", response_model=SuccessResponse[User])
def get_user(user_id: str, service: UserService = Depends(get_user_service)) -> SuccessResponse[User]:
    return SuccessResponse[User](data=service.get_user(user_id))


@router.post("", response_model=SuccessResponse[User], status_code=status.HTTP_201_CREATED)
@router.post("/", response_model=SuccessResponse[User], status_code=status.HTTP_201_CREATED, include_in_schema=False)
def create_user(
    payload: dict[str, Any] = Body(...),
    service: UserService = Depends(get_user_service),
) -> SuccessResponse[User]:
    """Create a user. The response never includes the password."""
    return SuccessResponse[User](data=service.create_user(payload))


@router.put("/{user_id}", response_model=SuccessResponse[User])
def update_user(
    user_id: str,
    payload: dict[str, Any] = Body(...),
    service: UserService = Depends(get_user_service),
) -> SuccessResponse[User]:
    """Update any subset of name, email, password and isActive."""
    return SuccessResponse[User](data=service.update_user(user_id, payload))


@router.delete("/{user_id}", response_model=SuccessResponse[User])
def delete_user(user_id: str, service: UserService = Depends(get_user_service)) -> SuccessResponse[User]:
    """Delete a user and return its last state."""
    return SuccessResponse[User](data=service.delete_user(user_id))
