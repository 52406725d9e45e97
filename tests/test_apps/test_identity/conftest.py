"""Shared fixtures for identity app tests."""

import pytest
from django.contrib.auth import get_user_model

User = get_user_model()


@pytest.fixture
def password():
    """Password that passes the configured validators."""
    return 'correct-horse-42'


@pytest.fixture
def user(db, password):
    """Create registered test user.

    Returns:
        User instance for testing.
    """
    return User.objects.create_user(
        username='alice@example.com',
        email='alice@example.com',
        password=password,
        display_name='Alice',
    )
