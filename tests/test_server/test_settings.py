"""Tests for environment-specific storage credentials."""

import importlib
import sys

import pytest
from decouple import UndefinedValueError
from django.conf import settings

_PRODUCTION: str = 'server.settings.environments.production'


def test_development_storage_credentials():
    """Test that development falls back to local MinIO credentials."""
    options = settings.STORAGES['default']['OPTIONS']

    assert options['access_key']
    assert options['secret_key']


def test_production_requires_storage_credentials(monkeypatch):
    """Test that production refuses to start without S3 credentials."""
    monkeypatch.setenv('DJANGO_SECRET_KEY', 'production-secret')
    monkeypatch.setenv('DOMAIN_NAME', 'drive.example.com')
    monkeypatch.delenv('AWS_ACCESS_KEY_ID', raising=False)
    monkeypatch.delenv('AWS_SECRET_ACCESS_KEY', raising=False)
    monkeypatch.delitem(sys.modules, _PRODUCTION, raising=False)

    with pytest.raises(UndefinedValueError, match='AWS_ACCESS_KEY_ID'):
        importlib.import_module(_PRODUCTION)
