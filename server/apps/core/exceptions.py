"""Error taxonomy shared by every API-facing app.

Business logic raises these; ``ApiErrorMiddleware`` turns them into
JSON responses with the matching status code.
"""

from http import HTTPStatus
from typing import ClassVar


class ApiError(Exception):
    """Base class for errors that terminate a request."""

    status_code: ClassVar[int] = HTTPStatus.INTERNAL_SERVER_ERROR
    default_message: ClassVar[str] = 'Server error'

    def __init__(self, message: str | None = None) -> None:
        """Initialize ApiError.

        Args:
            message: Short, user-safe description. Falls back to the
                class default when omitted.
        """
        self.message = message or self.default_message
        super().__init__(self.message)


class BadRequestError(ApiError):
    """Malformed or missing input."""

    status_code = HTTPStatus.BAD_REQUEST
    default_message = 'Bad request'


class UnauthorizedError(ApiError):
    """Missing or invalid caller credential."""

    status_code = HTTPStatus.UNAUTHORIZED
    default_message = 'Authentication required'


class ForbiddenError(ApiError):
    """Valid caller without sufficient rights."""

    status_code = HTTPStatus.FORBIDDEN
    default_message = 'Not authorized'


class NotFoundError(ApiError):
    """Requested entity does not exist."""

    status_code = HTTPStatus.NOT_FOUND
    default_message = 'Not found'


class ConflictError(ApiError):
    """Uniqueness or duplicate violation."""

    status_code = HTTPStatus.CONFLICT
    default_message = 'Conflict'


class ServerError(ApiError):
    """Unexpected failure of this service or a backing service."""


class ServiceUnavailableError(ServerError):
    """A backing service could not be reached or answered badly."""

    status_code = HTTPStatus.SERVICE_UNAVAILABLE
    default_message = 'Service unavailable'
