"""Lookup of registered users for other apps."""

from typing import TYPE_CHECKING, Protocol, final

from django.contrib.auth import get_user_model

if TYPE_CHECKING:
    from server.apps.identity.models import User


class UserDirectory(Protocol):
    """Capability to find registered users by email."""

    def find_by_email(self, email: str) -> 'User | None':
        """Return the user registered with ``email``, if any."""


@final
class DjangoUserDirectory:
    """``UserDirectory`` backed by the Django user table."""

    def find_by_email(self, email: str) -> 'User | None':
        """Find an active user by email, ignoring case.

        Args:
            email: Email address to look up.

        Returns:
            Matching user or None.
        """
        return get_user_model().objects.filter(
            email__iexact=email.strip(),
            is_active=True,
        ).first()
