"""Login endpoint issuing bearer tokens."""

import structlog
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ayra.models.user import LoginRequest, TokenResponse
from ayra.services.database import get_db_session
from ayra.services.security import create_access_token
from ayra.services.user_manager import UserManager

router = APIRouter(prefix="/auth", tags=["auth"])

logger = structlog.get_logger(__name__)


@router.post("/login", response_model=TokenResponse, summary="Obtain an access token")
async def login(
    request: LoginRequest,
    db: AsyncSession = Depends(get_db_session),
) -> TokenResponse:
    """Exchange email and password for a bearer token.

    Raises:
        AuthenticationError: If the credentials do not match a user
    """
    user = await UserManager(db).authenticate(request.email, request.password)
    token, expires_in = create_access_token(user.email)
    logger.info("login_succeeded", user_id=user.id)
    return TokenResponse(access_token=token, expires_in=expires_in)
