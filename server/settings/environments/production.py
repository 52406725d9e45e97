"""Settings for production deployments."""

from typing import Final

from server.settings.components import config
from server.settings.components.storages import STORAGES

DEBUG: Final = False

SECRET_KEY = config('DJANGO_SECRET_KEY')

ALLOWED_HOSTS = [
    config('DOMAIN_NAME'),
]

SECURE_CONTENT_TYPE_NOSNIFF = True
SECURE_REFERRER_POLICY = 'same-origin'
SESSION_COOKIE_SECURE = True
CSRF_COOKIE_SECURE = True

STORAGES['default']['OPTIONS'].update({
    'access_key': config('AWS_ACCESS_KEY_ID'),
    'secret_key': config('AWS_SECRET_ACCESS_KEY'),
})
