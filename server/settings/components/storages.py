"""Django storage configuration for S3-compatible backends.

This module configures django-storages to work with:
- MinIO for local development
- AWS S3 or Cloudflare R2 in production

Clients upload and download directly against the bucket using
pre-signed URLs; the API never proxies file bytes.
"""

from typing import Any, Final

from server.settings.components import config

STORAGES: Final[dict[str, dict[str, Any]]] = {
    'default': {
        'BACKEND': 'server.apps.files.infrastructure.storage.FileStorage',
        'OPTIONS': {
            'bucket_name': config(
                'AWS_STORAGE_BUCKET_NAME',
                default='cloud-drive',
            ),
            # Credentials are filled in per environment
            'access_key': None,
            'secret_key': None,
            'endpoint_url': config(
                'AWS_S3_ENDPOINT_URL',
                default=None,
            ),
            'region_name': config(
                'AWS_S3_REGION_NAME',
                default='us-east-1',
            ),
            'file_overwrite': False,  # Prevent accidental overwrites
            'default_acl': None,  # Inherit bucket ACL
            'querystring_auth': True,  # Private bucket, signed URLs only
        },
    },
    'staticfiles': {
        'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage',
    },
}

# Lifetime of pre-signed URLs, in seconds
UPLOAD_URL_EXPIRE: Final = config('UPLOAD_URL_EXPIRE', cast=int, default=3600)
DOWNLOAD_URL_EXPIRE: Final = config(
    'DOWNLOAD_URL_EXPIRE',
    cast=int,
    default=900,
)
