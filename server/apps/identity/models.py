"""Database models for identity app."""

from typing import Final, final, override

from django.contrib.auth.models import AbstractUser
from django.db import models

_DISPLAY_NAME_MAX_LENGTH: Final = 150


@final
class User(AbstractUser):
    """Account that owns and collaborates on files.

    Email is the login identifier and must be unique. On registration
    ``username`` is set to the email so Django's admin keeps working.
    """

    email = models.EmailField(
        'email address',
        unique=True,
    )

    display_name = models.CharField(
        max_length=_DISPLAY_NAME_MAX_LENGTH,
        blank=True,
        default='',
    )

    class Meta(AbstractUser.Meta):
        """Model metadata."""

        swappable = 'AUTH_USER_MODEL'

    @override
    def __str__(self) -> str:
        """String representation."""
        return self.email

    def get_display_name(self) -> str:
        """Name shown in the UI, falling back to the email."""
        return self.display_name or self.email
