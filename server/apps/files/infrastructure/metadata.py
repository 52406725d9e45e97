"""Storage key and content-type helpers for files."""

import mimetypes
import time
from pathlib import PurePosixPath
from typing import Final

from django.core.exceptions import ValidationError

_UPLOADS_PREFIX: Final = 'uploads'
_FALLBACK_MIME_TYPE: Final = 'application/octet-stream'


def detect_mime_type(filename: str) -> str:
    """Guess MIME type from the filename extension.

    Args:
        filename: Filename with extension.

    Returns:
        MIME type string (e.g., 'image/jpeg', 'application/pdf').
        Returns 'application/octet-stream' if type cannot be determined.
    """
    mime_type, _ = mimetypes.guess_type(filename)
    if mime_type is None:
        return _FALLBACK_MIME_TYPE
    return mime_type


def sanitize_filename(filename: str) -> str:
    """Reduce a client-supplied filename to its final component.

    Args:
        filename: Filename, possibly with directories (e.g. 'a/../b.txt').

    Returns:
        Bare filename (e.g. 'b.txt'); backslashes count as separators.

    Raises:
        ValidationError: If nothing usable remains.
    """
    name = PurePosixPath(filename.replace('\\', '/')).name.strip()
    if name in {'', '.', '..'}:
        raise ValidationError('Filename cannot be empty')
    return name


def get_user_prefix(user_id: int) -> str:
    """Key prefix reserved for one user's uploads.

    Args:
        user_id: Owner's user ID.

    Returns:
        Prefix such as 'uploads/42/'.
    """
    return f'{_UPLOADS_PREFIX}/{user_id}/'


def build_storage_key(
    user_id: int,
    filename: str,
    timestamp_ms: int | None = None,
) -> str:
    """Build a fresh storage key for an upload.

    Args:
        user_id: Owner's user ID.
        filename: Client filename.
        timestamp_ms: Milliseconds since epoch, defaults to now.

    Returns:
        Key like 'uploads/42/1700000000000-report.pdf'.
    """
    if timestamp_ms is None:
        timestamp_ms = time.time_ns() // 1_000_000
    return '{prefix}{timestamp}-{name}'.format(
        prefix=get_user_prefix(user_id),
        timestamp=timestamp_ms,
        name=sanitize_filename(filename),
    )


def validate_storage_key(user_id: int, storage_key: str) -> None:
    """Validate storage key follows user isolation rules.

    Ensures the key lives under the user's upload prefix so nobody
    can register metadata for another user's object.

    Args:
        user_id: Owner's user ID.
        storage_key: Key reported by the client.

    Raises:
        ValidationError: If the key is empty, escapes the prefix or
            belongs to another user.
    """
    if not storage_key:
        raise ValidationError('Storage key cannot be empty')

    prefix = get_user_prefix(user_id)
    if not storage_key.startswith(prefix):
        raise ValidationError(
            f'Storage key must start with {prefix}',
        )

    remainder = storage_key.removeprefix(prefix)
    parts = PurePosixPath(remainder).parts
    if not parts or '..' in parts:
        raise ValidationError('Storage key must name an object')
