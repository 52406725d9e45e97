"""Bearer tokens for API authentication.

Tokens are the user's primary key signed with Django's
``TimestampSigner``. They expire after ``ACCESS_TOKEN_MAX_AGE`` seconds
and need no server-side storage.
"""

import logging
from typing import TYPE_CHECKING, Final

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core import signing

from server.apps.core.exceptions import UnauthorizedError

if TYPE_CHECKING:
    from server.apps.identity.models import User

logger = logging.getLogger(__name__)

_TOKEN_SALT: Final = 'server.apps.identity.access-token'


def _get_signer() -> signing.TimestampSigner:
    return signing.TimestampSigner(salt=_TOKEN_SALT)


def issue_token(user: 'User') -> str:
    """Issue a bearer token for the user.

    Args:
        user: Authenticated user.

    Returns:
        Signed token string.
    """
    return _get_signer().sign(str(user.pk))


def resolve_token(token: str) -> 'User':
    """Verify a bearer token and load its user.

    Args:
        token: Token from the request header.

    Returns:
        User the token was issued to.

    Raises:
        UnauthorizedError: If the token is malformed, tampered with,
            expired, or its user no longer exists or is inactive.
    """
    try:
        user_id = _get_signer().unsign(
            token,
            max_age=settings.ACCESS_TOKEN_MAX_AGE,
        )
    except signing.SignatureExpired as error:
        logger.info('Rejected expired token')
        raise UnauthorizedError('Token has expired') from error
    except signing.BadSignature as error:
        logger.info('Rejected token with bad signature')
        raise UnauthorizedError('Token is not valid') from error

    user = get_user_model().objects.filter(pk=user_id, is_active=True).first()
    if user is None:
        raise UnauthorizedError('Token is not valid')
    return user
