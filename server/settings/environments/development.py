"""Settings for local development and tests."""

from typing import Final

from server.settings.components import config
from server.settings.components.storages import STORAGES

DEBUG: Final = True

ALLOWED_HOSTS = [
    config('DOMAIN_NAME', default='localhost'),
    'localhost',
    '127.0.0.1',
    'testserver',
]

# Faster hashing keeps the test suite quick
PASSWORD_HASHERS = [
    'django.contrib.auth.hashers.MD5PasswordHasher',
]

# Local MinIO credentials unless real ones are provided
STORAGES['default']['OPTIONS'].update({
    'access_key': config('AWS_ACCESS_KEY_ID', default='minioadmin'),
    'secret_key': config('AWS_SECRET_ACCESS_KEY', default='minioadmin'),
})
