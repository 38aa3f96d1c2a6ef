"""User account management."""

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ayra.models.user import UserCreate, UserDB, UserUpdate
from ayra.services.coordinate_resolver import (
    COORDINATE_TOLERANCE,
    CoordinateResolver,
    link_coordinates,
)
from ayra.services.coordinate_store import CoordinateStore
from ayra.services.exceptions import AuthenticationError, DuplicateEmailError, EntityNotFoundError
from ayra.services.security import hash_password, verify_password

logger = structlog.get_logger(__name__)


class UserManager:
    """Registers, looks up, updates and deletes users.

    Users are identified by email. Passwords are stored as bcrypt
    hashes and are only ever compared, never returned.
    """

    def __init__(self, db_session: AsyncSession, tolerance: float = COORDINATE_TOLERANCE):
        """Initialize user manager.

        Args:
            db_session: Database session for persistence
            tolerance: Coordinate matching window in degrees
        """
        self.db_session = db_session
        self.resolver = CoordinateResolver(CoordinateStore(db_session), tolerance=tolerance)

    async def create_user(self, request: UserCreate) -> UserDB:
        """Register a new user.

        Coordinates are optional; when present they are resolved to a
        shared coordinate row.

        Args:
            request: Registration payload

        Returns:
            The persisted user

        Raises:
            DuplicateEmailError: If the email is already registered
            CoordinatesNotFoundError: If the coordinate id does not exist
        """
        email = request.email.lower()
        if await self.find_by_email(email) is not None:
            raise DuplicateEmailError(email)

        coordinates = await self.resolver.resolve_optional(request.coordinates)

        user = UserDB(
            name=request.name,
            email=email,
            password=hash_password(request.password),
            phone=request.phone,
        )
        link_coordinates(user, coordinates)

        self.db_session.add(user)
        await self._commit_checking_email(email)

        logger.info(
            "user_created",
            user_id=user.id,
            coordinates_id=user.coordinates_id,
        )
        return user

    async def find_by_email(self, email: str) -> UserDB | None:
        """Find a user by email (case-insensitive)."""
        query = select(UserDB).where(UserDB.email == email.lower())
        result = await self.db_session.execute(query)
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> UserDB:
        """Get a user by email.

        Raises:
            EntityNotFoundError: If no user has this email
        """
        user = await self.find_by_email(email)
        if user is None:
            raise EntityNotFoundError("User", email)
        return user

    async def authenticate(self, email: str, password: str) -> UserDB:
        """Check credentials and return the matching user.

        Raises:
            AuthenticationError: If the email is unknown or the password is wrong
        """
        user = await self.find_by_email(email)
        if user is None or not verify_password(password, user.password):
            logger.info("login_failed")
            raise AuthenticationError("Invalid email or password")
        return user

    async def update_user(self, email: str, request: UserUpdate) -> UserDB:
        """Apply the non-null fields of an update to a user.

        Args:
            email: Current email of the user to update
            request: Fields to change

        Returns:
            The updated user

        Raises:
            EntityNotFoundError: If no user has this email
            DuplicateEmailError: If the new email belongs to someone else
        """
        user = await self.get_by_email(email)

        if request.name is not None:
            user.name = request.name
        if request.email is not None:
            new_email = request.email.lower()
            if new_email != user.email:
                if await self.find_by_email(new_email) is not None:
                    raise DuplicateEmailError(new_email)
                user.email = new_email
        if request.phone is not None:
            user.phone = request.phone
        if request.password is not None:
            user.password = hash_password(request.password)

        await self._commit_checking_email(user.email)
        logger.info("user_updated", user_id=user.id)
        return user

    async def delete_user(self, email: str) -> None:
        """Delete a user by email.

        Raises:
            EntityNotFoundError: If no user has this email
        """
        user = await self.get_by_email(email)
        await self.db_session.delete(user)
        await self.db_session.commit()
        logger.info("user_deleted", user_id=user.id)

    async def _commit_checking_email(self, email: str) -> None:
        # A concurrent registration can slip past the lookup; the unique index catches it
        try:
            await self.db_session.flush()
        except IntegrityError as exc:
            raise DuplicateEmailError(email) from exc
        await self.db_session.commit()
