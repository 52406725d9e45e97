"""Middleware that renders API errors as JSON."""

import logging
from collections.abc import Callable
from typing import Final, final

from django.core.exceptions import ValidationError
from django.http import HttpRequest, HttpResponse, JsonResponse

from server.apps.core.exceptions import (
    ApiError,
    BadRequestError,
    ServerError,
    UnauthorizedError,
)

logger = logging.getLogger(__name__)

_API_PREFIX: Final = '/api/'


@final
class ApiErrorMiddleware:
    """Convert exceptions raised by API views into JSON responses.

    Known errors map to their status code and short message. Anything
    else is logged with its traceback and answered with a generic 500,
    so internal detail never reaches the caller.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        """Initialize the middleware.

        Args:
            get_response: Next handler in the chain.
        """
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        """Pass the request through unchanged."""
        return self.get_response(request)

    def process_exception(
        self,
        request: HttpRequest,
        exception: Exception,
    ) -> HttpResponse | None:
        """Render the exception for API paths.

        Args:
            request: Request that failed.
            exception: Raised exception.

        Returns:
            JSON error response, or None for non-API paths so Django's
            default handling applies.
        """
        if not request.path.startswith(_API_PREFIX):
            return None

        if isinstance(exception, ValidationError):
            exception = BadRequestError('; '.join(exception.messages))

        if isinstance(exception, ApiError):
            if isinstance(exception, ServerError):
                logger.error(
                    '%s %s failed: %s',
                    request.method,
                    request.path,
                    exception.message,
                )
            else:
                logger.info(
                    '%s %s rejected (%d): %s',
                    request.method,
                    request.path,
                    exception.status_code,
                    exception.message,
                )
            return error_response(exception)

        logger.error(
            'Unhandled error on %s %s',
            request.method,
            request.path,
            exc_info=exception,
        )
        return error_response(ServerError())


def error_response(error: ApiError) -> JsonResponse:
    """Build the JSON body for an API error.

    Args:
        error: Error to render.

    Returns:
        ``{"msg": ...}`` response with the error's status code.
    """
    response = JsonResponse({'msg': error.message}, status=error.status_code)
    if isinstance(error, UnauthorizedError):
        response['WWW-Authenticate'] = 'Bearer'
    return response
