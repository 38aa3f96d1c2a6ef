"""User registration and account endpoints."""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from ayra.api.middleware.auth import get_current_user
from ayra.config import get_settings
from ayra.models.user import UserCreate, UserDB, UserProfile, UserResponse, UserUpdate
from ayra.services.database import get_db_session
from ayra.services.user_manager import UserManager

router = APIRouter(prefix="/users", tags=["users"])


def _manager(db: AsyncSession) -> UserManager:
    return UserManager(db, tolerance=get_settings().coordinate_tolerance)


def _require_self(current_user: UserDB, email: str, action: str) -> None:
    if current_user.email != email.lower():
        raise PermissionError(f"You can only {action} your own account.")


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a user",
)
async def create_user(
    request: UserCreate,
    db: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    """Register a new user.

    Raises:
        DuplicateEmailError: If the email is already registered
    """
    user = await _manager(db).create_user(request)
    return UserResponse.model_validate(user)


@router.get("/me", response_model=UserProfile, summary="Current user profile")
async def read_me(current_user: UserDB = Depends(get_current_user)) -> UserProfile:
    return UserProfile.model_validate(current_user)


@router.put("/{email}", response_model=UserProfile, summary="Update own account")
async def update_user(
    email: str,
    request: UserUpdate,
    db: AsyncSession = Depends(get_db_session),
    current_user: UserDB = Depends(get_current_user),
) -> UserProfile:
    """Update the caller's own account.

    Raises:
        PermissionError: If the email belongs to another user
        DuplicateEmailError: If the new email is taken
    """
    _require_self(current_user, email, "update")
    user = await _manager(db).update_user(email, request)
    return UserProfile.model_validate(user)


@router.delete(
    "/{email}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete own account",
)
async def delete_user(
    email: str,
    db: AsyncSession = Depends(get_db_session),
    current_user: UserDB = Depends(get_current_user),
) -> Response:
    _require_self(current_user, email, "delete")
    await _manager(db).delete_user(email)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
