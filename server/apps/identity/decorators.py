"""View decorators for bearer-token authentication."""

import functools
from collections.abc import Callable
from typing import Any, Final

from django.http import HttpRequest, HttpResponse

from server.apps.core.exceptions import UnauthorizedError
from server.apps.identity.logic.tokens import resolve_token

_BEARER_PREFIX: Final = 'Bearer '

# Header used by the original single-page client
_LEGACY_TOKEN_HEADER: Final = 'x-auth-token'


def get_request_token(request: HttpRequest) -> str | None:
    """Extract the bearer token from request headers.

    Args:
        request: Incoming request.

    Returns:
        Token string, or None when no credential was sent.
    """
    authorization = request.headers.get('Authorization', '')
    if authorization.startswith(_BEARER_PREFIX):
        return authorization.removeprefix(_BEARER_PREFIX).strip() or None
    return request.headers.get(_LEGACY_TOKEN_HEADER) or None


def token_required(
    view: Callable[..., HttpResponse],
) -> Callable[..., HttpResponse]:
    """Require a valid bearer token and set ``request.user``.

    Args:
        view: View function to protect.

    Returns:
        Wrapped view raising UnauthorizedError for anonymous callers.
    """

    @functools.wraps(view)
    def wrapper(request: HttpRequest, *args: Any, **kwargs: Any) -> HttpResponse:
        token = get_request_token(request)
        if token is None:
            raise UnauthorizedError('No token, authorization denied')
        request.user = resolve_token(token)
        return view(request, *args, **kwargs)

    return wrapper
