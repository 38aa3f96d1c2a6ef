"""Domain exceptions raised by the service layer.

Each exception carries the HTTP status and error type the API reports
for it; the mapping to responses lives in the error handler middleware.
"""

from fastapi import status


class AyraError(Exception):
    """Base class for domain errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_type: str = "internal_error"

    def __init__(self, message: str, details: str | dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details


class BadRequestError(AyraError):
    status_code = status.HTTP_400_BAD_REQUEST
    error_type = "bad_request"


class MissingCoordinatesError(BadRequestError):
    """Raised when an entity that requires coordinates arrives without them."""

    def __init__(self, message: str = "Coordinates are required."):
        super().__init__(message)


class InvalidSortError(BadRequestError):
    """Raised for a sort expression naming an unknown field or direction."""


class NotFoundError(AyraError):
    status_code = status.HTTP_404_NOT_FOUND
    error_type = "not_found"


class CoordinatesNotFoundError(NotFoundError):
    """Raised when a supplied coordinate identifier does not exist."""

    def __init__(self, coordinates_id: int):
        super().__init__(
            f"Coordinates {coordinates_id} not found",
            details={"coordinates_id": coordinates_id},
        )
        self.coordinates_id = coordinates_id


class EntityNotFoundError(NotFoundError):
    """Raised when a marker, user or alert lookup misses."""

    def __init__(self, entity: str, key: int | str):
        super().__init__(f"{entity} {key} not found")
        self.entity = entity
        self.key = key


class ConflictError(AyraError):
    status_code = status.HTTP_409_CONFLICT
    error_type = "conflict"


class DuplicateEmailError(ConflictError):
    """Raised when an email is already registered to another user."""

    def __init__(self, email: str):
        super().__init__(f"Email {email} is already registered")
        self.email = email


class EntityInUseError(ConflictError):
    """Raised when deleting a row that other rows still reference."""


class AuthenticationError(AyraError):
    """Raised for missing, malformed, expired or unknown credentials."""

    status_code = status.HTTP_401_UNAUTHORIZED
    error_type = "unauthorized"
