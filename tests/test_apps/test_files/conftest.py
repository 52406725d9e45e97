"""Shared fixtures for files app tests."""

import itertools

import boto3
import pytest
from django.conf import settings
from django.contrib.auth import get_user_model
from moto import mock_aws

from server.apps.files.infrastructure.storage import FileStorage
from server.apps.files.logic import file_operations, sharing_operations
from server.apps.files.models import File
from server.apps.identity.logic.tokens import issue_token

User = get_user_model()

_key_counter = itertools.count(1_700_000_000_000)


@pytest.fixture
def user(db):
    """Create test user (file owner).

    Returns:
        User instance for testing.
    """
    return User.objects.create_user(
        username='owner@example.com',
        password='testpass123',
        email='owner@example.com',
    )


@pytest.fixture
def other_user(db):
    """Create second test user for isolation tests.

    Returns:
        Second user instance.
    """
    return User.objects.create_user(
        username='u2@x.com',
        password='testpass123',
        email='u2@x.com',
    )


@pytest.fixture
def third_user(db):
    """Create third test user, never invited anywhere.

    Returns:
        Third user instance.
    """
    return User.objects.create_user(
        username='stranger@example.com',
        password='testpass123',
        email='stranger@example.com',
    )


@pytest.fixture
def mock_s3():
    """Mock S3 service with the configured bucket.

    Yields:
        boto3 S3 resource with the bucket created.
    """
    bucket_name = settings.STORAGES['default']['OPTIONS']['bucket_name']
    with mock_aws():
        conn = boto3.resource('s3', region_name='us-east-1')
        conn.create_bucket(Bucket=bucket_name)
        yield conn


@pytest.fixture
def bucket(mock_s3):
    """The mocked bucket resource.

    Returns:
        boto3 Bucket.
    """
    bucket_name = settings.STORAGES['default']['OPTIONS']['bucket_name']
    return mock_s3.Bucket(bucket_name)


@pytest.fixture
def make_file(user):
    """Factory creating File records directly in the database.

    Returns:
        Callable accepting owner and field overrides.
    """

    def factory(owner=None, name='report.pdf', **fields):
        owner = owner or user
        fields.setdefault(
            'storage_key',
            f'uploads/{owner.id}/{next(_key_counter)}-{name}',
        )
        fields.setdefault('mime_type', 'application/pdf')
        fields.setdefault('size_bytes', 1024)
        return File.objects.create(
            owner=owner,
            original_filename=name,
            **fields,
        )

    return factory


@pytest.fixture
def auth_headers():
    """Build bearer auth headers for a user.

    Returns:
        Callable mapping a user to request headers.
    """

    def factory(for_user):
        return {'Authorization': f'Bearer {issue_token(for_user)}'}

    return factory


@pytest.fixture
def storage(mock_s3, monkeypatch):
    """Fresh FileStorage bound to the mocked bucket.

    Also installed as the default storage of the logic layer, so views
    exercise the same instance.

    Returns:
        FileStorage instance.
    """
    file_storage = FileStorage(**settings.STORAGES['default']['OPTIONS'])
    monkeypatch.setattr(file_operations, 'get_storage', lambda: file_storage)
    monkeypatch.setattr(
        sharing_operations,
        'get_storage',
        lambda: file_storage,
    )
    return file_storage
