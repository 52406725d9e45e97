"""Business logic for registration and login."""

import logging
from typing import TYPE_CHECKING

from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password
from django.core.validators import validate_email
from django.db import IntegrityError, transaction

from server.apps.core.exceptions import (
    BadRequestError,
    ConflictError,
    UnauthorizedError,
)

if TYPE_CHECKING:
    from server.apps.identity.models import User

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    """Normalize email for storage and comparison.

    Args:
        email: Raw email as typed by the user.

    Returns:
        Stripped, lowercase email.
    """
    return email.strip().lower()


def register_user(
    email: str | None,
    password: str | None,
    display_name: str = '',
) -> 'User':
    """Create a new account.

    Args:
        email: Login email, must not be registered yet.
        password: Plain-text password, checked by Django's validators.
        display_name: Optional name shown in the UI.

    Returns:
        Created user.

    Raises:
        BadRequestError: If email or password is missing.
        ValidationError: If email is malformed or password is too weak.
        ConflictError: If the email is already registered.
    """
    if not isinstance(email, str) or not isinstance(password, str):
        raise BadRequestError('Email and password are required')
    if not email.strip() or not password:
        raise BadRequestError('Email and password are required')

    email = normalize_email(email)
    validate_email(email)

    user_model = get_user_model()
    if user_model.objects.filter(email__iexact=email).exists():
        logger.warning('Registration rejected, email taken: %s', email)
        raise ConflictError('User already exists')

    candidate = user_model(
        username=email,
        email=email,
        display_name=display_name.strip(),
    )
    validate_password(password, user=candidate)
    candidate.set_password(password)

    try:
        with transaction.atomic():
            candidate.save()
    except IntegrityError as error:
        # Lost a race with a concurrent registration
        raise ConflictError('User already exists') from error

    logger.info('Registered user %s (ID: %d)', email, candidate.id)
    return candidate


def authenticate_user(email: str | None, password: str | None) -> 'User':
    """Check credentials and return the matching user.

    Args:
        email: Login email.
        password: Plain-text password.

    Returns:
        Authenticated user.

    Raises:
        UnauthorizedError: If credentials are missing or wrong, or the
            account is inactive.
    """
    if not isinstance(email, str) or not isinstance(password, str):
        raise UnauthorizedError('Invalid credentials')

    user = get_user_model().objects.filter(
        email__iexact=normalize_email(email),
    ).first()

    if user is None or not user.is_active or not user.check_password(password):
        logger.warning('Failed login attempt for %s', email)
        raise UnauthorizedError('Invalid credentials')

    logger.info('User logged in: %s', user.email)
    return user
