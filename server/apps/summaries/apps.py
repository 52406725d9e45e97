"""Django app configuration for summaries app."""

from django.apps import AppConfig


class SummariesConfig(AppConfig):
    """Configuration for summaries app."""

    name = 'server.apps.summaries'
    verbose_name = 'AI summaries'
