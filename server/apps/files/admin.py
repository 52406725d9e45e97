"""Django admin configuration for files app."""

from typing import Final

from django.contrib import admin
from django.db.models import QuerySet
from django.http import HttpRequest

from server.apps.files.models import Collaborator, File

_KILOBYTE: Final = 1024


def _format_bytes(size_bytes: int) -> str:
    """Format bytes in human-readable format.

    Args:
        size_bytes: Size in bytes.

    Returns:
        Formatted size string (e.g., '1.5 MB', '234 KB').
    """
    if size_bytes < _KILOBYTE:
        return f'{size_bytes} B'
    size = size_bytes / _KILOBYTE
    for unit in ('KB', 'MB'):
        if size < _KILOBYTE:
            return f'{size:.1f} {unit}'
        size /= _KILOBYTE
    return f'{size:.1f} GB'


class CollaboratorInline(admin.TabularInline):
    """Collaborators listed on the file page, in insertion order."""

    model = Collaborator
    extra = 0
    fields = ['user', 'email', 'permission', 'added_at']
    readonly_fields = ['email', 'added_at']
    raw_id_fields = ['user']


@admin.register(File)
class FileAdmin(admin.ModelAdmin[File]):
    """Admin interface for File model."""

    list_display = [
        'original_filename',
        'owner',
        'size_display',
        'mime_type',
        'is_public',
        'uploaded_at',
    ]

    list_filter = [
        'is_public',
        'mime_type',
        'uploaded_at',
    ]

    search_fields = [
        'original_filename',
        'storage_key',
        'owner__email',
    ]

    # Ownership, storage key and token never change after creation
    readonly_fields = [
        'id',
        'owner',
        'storage_key',
        'size_bytes',
        'mime_type',
        'share_token',
        'uploaded_at',
    ]

    fieldsets = (
        ('File Information', {
            'fields': ('id', 'original_filename', 'owner'),
        }),
        ('Storage', {
            'fields': ('storage_key', 'size_bytes', 'mime_type'),
        }),
        ('Sharing', {
            'fields': ('is_public', 'share_token'),
        }),
        ('Timestamps', {
            'fields': ('uploaded_at',),
        }),
    )

    inlines = [CollaboratorInline]

    def size_display(self, obj: File) -> str:
        """Display file size in human-readable format.

        Args:
            obj: File instance.

        Returns:
            Formatted size string.
        """
        return _format_bytes(obj.size_bytes)
    size_display.short_description = 'Size'  # type: ignore[attr-defined]

    def get_queryset(self, request: HttpRequest) -> QuerySet[File]:
        """Optimize queryset with select_related.

        Args:
            request: HTTP request.

        Returns:
            Optimized QuerySet.
        """
        return super().get_queryset(request).select_related('owner')
