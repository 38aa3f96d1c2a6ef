"""Authentication dependencies for FastAPI."""

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from ayra.models.user import UserDB
from ayra.services.database import get_db_session
from ayra.services.exceptions import AuthenticationError
from ayra.services.security import decode_access_token
from ayra.services.user_manager import UserManager

# Security scheme for Swagger UI; errors are raised by us, not by the scheme
security = HTTPBearer(auto_error=False)


class AuthMiddleware:
    """Bearer token authentication against the users table."""

    def extract_subject(self, credentials: HTTPAuthorizationCredentials | None) -> str:
        """Validate the bearer token and return the email it was issued to.

        Args:
            credentials: Parsed Authorization header

        Returns:
            Subject email from the token

        Raises:
            AuthenticationError: If the header is missing or the token is invalid or expired
        """
        if credentials is None:
            raise AuthenticationError("Missing Authorization header")

        if credentials.scheme.lower() != "bearer" or not credentials.credentials:
            raise AuthenticationError("Invalid Authorization header format. Expected: Bearer <token>")

        subject = decode_access_token(credentials.credentials)
        if subject is None:
            raise AuthenticationError("Invalid or expired token")

        return subject

    async def load_user(
        self, credentials: HTTPAuthorizationCredentials | None, db_session: AsyncSession
    ) -> UserDB:
        """Resolve the token subject to a stored user.

        Raises:
            AuthenticationError: If the token is invalid or its user no longer exists
        """
        email = self.extract_subject(credentials)
        user = await UserManager(db_session).find_by_email(email)
        if user is None:
            raise AuthenticationError("Invalid or expired token")
        return user


# Global instance
auth_middleware = AuthMiddleware()


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    db: AsyncSession = Depends(get_db_session),
) -> UserDB:
    """FastAPI dependency for getting current authenticated user.

    Example:
        @router.get("/users/me")
        async def me(user: UserDB = Depends(get_current_user)):
            return UserProfile.model_validate(user)
    """
    return await auth_middleware.load_user(credentials, db)
