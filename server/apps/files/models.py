"""Database models for files app."""

import uuid
from pathlib import Path
from typing import ClassVar, Final, final, override

from django.conf import settings
from django.db import models

# Constants for field max lengths
_FILENAME_MAX_LENGTH: Final = 255
_STORAGE_KEY_MAX_LENGTH: Final = 1024  # S3 object key limit
_MIME_TYPE_MAX_LENGTH: Final = 255
_SHARE_TOKEN_MAX_LENGTH: Final = 64
_PERMISSION_MAX_LENGTH: Final = 8


@final
class File(models.Model):
    """Metadata for an object held in S3-compatible storage.

    The bytes live in the bucket under ``storage_key``; this record is
    written only after the client reports a finished upload. Sharing
    state (public flag, share token, collaborators) belongs to the file
    and is deleted with it.
    """

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
    )

    # Owner relationship, fixed at creation
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='files',
        db_index=True,
    )

    original_filename = models.CharField(
        max_length=_FILENAME_MAX_LENGTH,
        help_text='Filename as uploaded by the user',
    )

    storage_key = models.CharField(
        max_length=_STORAGE_KEY_MAX_LENGTH,
        unique=True,
        help_text='Object key in storage: uploads/{user_id}/{ts}-{name}',
    )

    mime_type = models.CharField(
        max_length=_MIME_TYPE_MAX_LENGTH,
        help_text='Content type reported by the client',
    )

    size_bytes = models.BigIntegerField(
        help_text='File size in bytes',
    )

    uploaded_at = models.DateTimeField(auto_now_add=True, db_index=True)

    # Sharing
    is_public = models.BooleanField(
        default=False,
        help_text='Anyone with the share link can download',
    )

    share_token = models.CharField(
        max_length=_SHARE_TOKEN_MAX_LENGTH,
        unique=True,
        null=True,
        blank=True,
        default=None,
        help_text='Generated on first publish, kept when unpublished',
    )

    class Meta:
        """Model metadata."""

        verbose_name = 'File'  # type: ignore[mutable-override]
        verbose_name_plural = 'Files'  # type: ignore[mutable-override]
        ordering: ClassVar[list[str]] = ['-uploaded_at']

        indexes: ClassVar[list[models.Index]] = [
            # Optimize "my files, newest first" listing
            models.Index(
                fields=['owner', '-uploaded_at'],
                name='files_owner_recent_idx',
            ),
        ]

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'{self.owner.email}:{self.original_filename}'

    def get_extension(self) -> str:
        """Extract file extension.

        Example: 'Report.PDF' -> 'pdf'

        Returns:
            Extension without dot (lowercase).
        """
        extension = Path(self.original_filename).suffix
        return extension.lstrip('.').lower()

    def is_publicly_readable(self) -> bool:
        """Check whether the share link currently resolves.

        Returns:
            True only when the file is public and has a token.
        """
        return self.is_public and bool(self.share_token)


@final
class Collaborator(models.Model):
    """User granted access to a file by its owner.

    Rows are kept in insertion order; changing the permission does not
    move a collaborator.
    """

    class Permission(models.TextChoices):
        """Access level granted to a collaborator."""

        VIEW = 'view', 'Can view'
        EDIT = 'edit', 'Can edit'

    file = models.ForeignKey(
        File,
        on_delete=models.CASCADE,
        related_name='collaborators',
    )

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='collaborations',
    )

    # Snapshot of the user's email when invited
    email = models.EmailField()

    permission = models.CharField(
        max_length=_PERMISSION_MAX_LENGTH,
        choices=Permission.choices,
        default=Permission.VIEW,
    )

    added_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        """Model metadata."""

        verbose_name = 'Collaborator'  # type: ignore[mutable-override]
        verbose_name_plural = 'Collaborators'  # type: ignore[mutable-override]
        ordering: ClassVar[list[str]] = ['id']

        constraints: ClassVar[list[models.BaseConstraint]] = [
            # A user appears at most once per file
            models.UniqueConstraint(
                fields=['file', 'user'],
                name='collaborators_file_user_unique',
            ),
        ]

    @override
    def __str__(self) -> str:
        """String representation."""
        return f'{self.email} ({self.permission}) on {self.file_id}'

    def allows(self, permission: str) -> bool:
        """Check if this grant covers the requested access level.

        Edit access implies view access.

        Args:
            permission: Requested level ('view' or 'edit').

        Returns:
            True if the grant is sufficient.
        """
        if permission == self.Permission.VIEW:
            return True
        return self.permission == self.Permission.EDIT
