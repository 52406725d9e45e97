"""Django app configuration for identity app."""

from django.apps import AppConfig


class IdentityConfig(AppConfig):
    """Configuration for identity app."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'server.apps.identity'
    verbose_name = 'Identity'
