"""Django admin configuration for identity app."""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from server.apps.identity.models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """Admin interface for User model."""

    list_display = [
        'email',
        'display_name',
        'is_active',
        'is_staff',
        'date_joined',
    ]

    search_fields = [
        'email',
        'display_name',
        'username',
    ]

    ordering = ['email']

    fieldsets = (
        *BaseUserAdmin.fieldsets,
        ('Profile', {
            'fields': ('display_name',),
        }),
    )
