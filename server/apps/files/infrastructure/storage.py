"""Custom storage backend for S3-compatible storage."""

import logging
from typing import Final, final, override

from django.conf import settings
from storages.backends.s3 import S3Storage
from storages.utils import clean_name

logger = logging.getLogger(__name__)

_DEFAULT_UPLOAD_EXPIRE: Final = 3600
_DEFAULT_DOWNLOAD_EXPIRE: Final = 900


@final
class FileStorage(S3Storage):
    """Custom S3 storage backend for user files.

    Extends django-storages S3Storage with:
    - Pre-signed upload grants (clients PUT bytes directly to the bucket)
    - Pre-signed download grants with optional attachment disposition
    - Enhanced error logging
    """

    def generate_upload_url(
        self,
        name: str,
        content_type: str,
        expire: int | None = None,
    ) -> str:
        """Create a time-limited URL for uploading one object.

        Args:
            name: Storage key the client must upload to.
            content_type: Content type the client must send.
            expire: Lifetime in seconds, defaults to ``UPLOAD_URL_EXPIRE``.

        Returns:
            Pre-signed PUT URL.

        Raises:
            Exception: If URL signing fails.
        """
        if expire is None:
            expire = getattr(settings, 'UPLOAD_URL_EXPIRE', _DEFAULT_UPLOAD_EXPIRE)

        try:
            upload_url = self.bucket.meta.client.generate_presigned_url(
                'put_object',
                Params={
                    'Bucket': self.bucket_name,
                    'Key': self._normalize_name(clean_name(name)),
                    'ContentType': content_type,
                },
                ExpiresIn=expire,
            )
        except Exception:
            logger.exception('Failed to sign upload URL: %s', name)
            raise

        logger.info('Issued upload URL for %s (expires in %ds)', name, expire)
        return upload_url

    def generate_download_url(
        self,
        name: str,
        download_filename: str | None = None,
        expire: int | None = None,
    ) -> str:
        """Create a time-limited URL for downloading one object.

        Args:
            name: Storage key of the object.
            download_filename: When set, the response forces a download
                under this filename.
            expire: Lifetime in seconds, defaults to ``DOWNLOAD_URL_EXPIRE``.

        Returns:
            Pre-signed GET URL.
        """
        if expire is None:
            expire = getattr(
                settings,
                'DOWNLOAD_URL_EXPIRE',
                _DEFAULT_DOWNLOAD_EXPIRE,
            )

        parameters = None
        if download_filename:
            quoted = download_filename.replace('"', '')
            parameters = {
                'ResponseContentDisposition': f'attachment; filename="{quoted}"',
            }

        logger.debug('Issuing download URL for %s', name)
        return self.url(name, parameters=parameters, expire=expire)

    @override
    def delete(self, name: str) -> None:
        """Delete file from S3 with error handling and logging.

        Args:
            name: Storage path of file to delete.

        Raises:
            Exception: If S3 delete fails.
        """
        try:
            logger.info('Deleting file from storage: %s', name)
            super().delete(name)
            logger.info('Successfully deleted file: %s', name)
        except Exception:
            logger.exception('Failed to delete file from storage: %s', name)
            raise
