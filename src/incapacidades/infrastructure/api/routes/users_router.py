"""Router for user management.

Administrators manage every user; other users may only read and edit
their own record.
"""

from fastapi import APIRouter, Query

from incapacidades.core.config import get_settings
from incapacidades.core.exceptions import ForbiddenError
from incapacidades.core.logging import get_logger
from incapacidades.domain.entities import PublicUser, Role
from incapacidades.domain.services import UserUpdate
from incapacidades.infrastructure.api.dependencies import UserServiceDep
from incapacidades.infrastructure.api.guards import AdminUser, CurrentUser
from incapacidades.infrastructure.api.schemas import (
    MessageResponse,
    PaginationMeta,
    UserListResponse,
    UserResponse,
    UserUpdateRequest,
)

router = APIRouter()
logger = get_logger(__name__)


def _ensure_admin_or_self(current_user: PublicUser, user_id: str) -> None:
    if current_user.role != Role.ADMIN and current_user.id != user_id:
        raise ForbiddenError("Insufficient permissions")


@router.get("/profile", response_model=UserResponse)
async def get_profile(current_user: CurrentUser) -> UserResponse:
    """Get the authenticated user's own profile."""
    return UserResponse.model_validate(current_user)


@router.get("", response_model=UserListResponse)
async def list_users(
    current_user: AdminUser,
    user_service: UserServiceDep,
    page: int = Query(1, ge=1, description="Page number (1-indexed)"),
    limit: int | None = Query(None, ge=1, description="Items per page"),
) -> UserListResponse:
    """List all users, newest first (admin only)."""
    settings = get_settings()
    limit = min(limit or settings.default_page_size, settings.max_page_size)

    result = await user_service.list_users(page=page, limit=limit)
    return UserListResponse(
        data=[UserResponse.model_validate(u) for u in result.items],
        meta=PaginationMeta(
            page=result.page,
            limit=result.limit,
            total=result.total,
            total_pages=result.total_pages,
        ),
    )


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: str,
    current_user: CurrentUser,
    user_service: UserServiceDep,
) -> UserResponse:
    """Get a user by ID (admin or the user themselves)."""
    _ensure_admin_or_self(current_user, user_id)
    user = await user_service.get_user(user_id)
    return UserResponse.model_validate(user)


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: str,
    request: UserUpdateRequest,
    current_user: CurrentUser,
    user_service: UserServiceDep,
) -> UserResponse:
    """Update a user (admin or the user themselves).

    Only administrators may change ``role`` or ``isActive``.
    """
    _ensure_admin_or_self(current_user, user_id)

    changes = UserUpdate(**request.model_dump(exclude_unset=True, exclude_none=True))
    if current_user.role != Role.ADMIN and (
        changes.role is not None or changes.is_active is not None
    ):
        raise ForbiddenError("Only administrators can change role or active status")

    user = await user_service.update_user(user_id, changes)
    logger.info("User updated via API", user_id=user_id, updated_by=current_user.id)
    return UserResponse.model_validate(user)


@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: str,
    current_user: AdminUser,
    user_service: UserServiceDep,
) -> MessageResponse:
    """Deactivate a user (admin only). The record is kept."""
    await user_service.deactivate_user(user_id)
    logger.info("User deactivated via API", user_id=user_id, deactivated_by=current_user.id)
    return MessageResponse(message="User deactivated successfully")
