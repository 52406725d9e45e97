"""Business logic for file operations."""

import dataclasses
import logging
import uuid
from typing import TYPE_CHECKING, Any, final

from django.core.exceptions import ValidationError
from django.core.files.storage import default_storage
from django.db import IntegrityError, transaction
from django.db.models import QuerySet

from server.apps.core.exceptions import (
    BadRequestError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
)
from server.apps.files.infrastructure.metadata import (
    build_storage_key,
    detect_mime_type,
    validate_storage_key,
)
from server.apps.files.models import Collaborator, File

if TYPE_CHECKING:
    from server.apps.files.infrastructure.storage import FileStorage
    from server.apps.identity.models import User

logger = logging.getLogger(__name__)


@final
@dataclasses.dataclass(frozen=True, slots=True)
class UploadGrant:
    """Pre-signed upload target handed to the client."""

    upload_url: str
    storage_key: str


def get_storage() -> 'FileStorage':
    """Get the configured default storage backend.

    Returns:
        FileStorage instance with proper S3 configuration.
    """
    return default_storage  # type: ignore[return-value]


def list_owned_by(user: 'User', query: str = '') -> QuerySet[File]:
    """List files owned by the user, newest first.

    Args:
        user: Owner of files.
        query: Optional case-insensitive filename filter.

    Returns:
        QuerySet of File objects (empty when the user has none).
    """
    files = File.objects.filter(owner=user)
    query = query.strip()
    if query:
        files = files.filter(original_filename__icontains=query)
    return files.order_by('-uploaded_at', '-pk').prefetch_related(
        'collaborators',
    )


def list_shared_with(user: 'User') -> QuerySet[File]:
    """List files other users shared with this user, newest first.

    Args:
        user: Collaborator.

    Returns:
        QuerySet of File objects.
    """
    return (
        File.objects.filter(collaborators__user=user)
        .select_related('owner')
        .prefetch_related('collaborators')
        .order_by('-uploaded_at', '-pk')
    )


def get_file(file_id: uuid.UUID | str) -> File:
    """Get file by ID.

    Args:
        file_id: File primary key.

    Returns:
        File instance.

    Raises:
        NotFoundError: If the file does not exist.
    """
    try:
        return File.objects.select_related('owner').get(pk=file_id)
    except (File.DoesNotExist, ValidationError) as error:
        # A malformed UUID can never match a file
        raise NotFoundError('File not found') from error


def ensure_owner(file_instance: File, caller: 'User') -> None:
    """Require the caller to own the file.

    Args:
        file_instance: File being accessed.
        caller: Authenticated user.

    Raises:
        ForbiddenError: If the caller is not the owner.
    """
    if file_instance.owner_id != caller.pk:
        logger.warning(
            'User %s denied owner access to file %s',
            caller.pk,
            file_instance.pk,
        )
        raise ForbiddenError('Not authorized')


def can_access(
    file_instance: File,
    user: 'User',
    permission: str = Collaborator.Permission.VIEW,
) -> bool:
    """Check whether a user may access a file at the given level.

    The owner has every permission. Collaborators have the level they
    were granted; edit implies view.

    Args:
        file_instance: File being accessed.
        user: User asking for access.
        permission: Requested level ('view' or 'edit').

    Returns:
        True if access is allowed.
    """
    if file_instance.owner_id == user.pk:
        return True
    grant = file_instance.collaborators.filter(user=user).first()
    return grant is not None and grant.allows(permission)


def _ensure_fits(field_name: str, field_value: str) -> None:
    max_length = File._meta.get_field(field_name).max_length
    if max_length is not None and len(field_value) > max_length:
        raise ValidationError(
            '{field} cannot be longer than {limit} characters'.format(
                field=field_name,
                limit=max_length,
            ),
        )


def _is_whole_number(field_value: Any) -> bool:
    # JSON numbers may arrive as floats such as 10.0
    if isinstance(field_value, bool):
        return False
    if isinstance(field_value, float):
        return field_value.is_integer()
    return isinstance(field_value, int)


def generate_upload_url(
    user: 'User',
    filename: str | None,
    content_type: str | None = None,
    storage: 'FileStorage | None' = None,
) -> UploadGrant:
    """Reserve a storage key and sign an upload URL for it.

    Args:
        user: Uploading user.
        filename: Client filename.
        content_type: Content type the client will send. Guessed from
            the filename when omitted.
        storage: Storage backend, defaults to the configured one.

    Returns:
        UploadGrant with the URL and the key to finalize later.

    Raises:
        BadRequestError: If the filename is missing.
        ValidationError: If the filename is too long to register.
    """
    if not filename or not isinstance(filename, str):
        raise BadRequestError('Filename is required')
    _ensure_fits('original_filename', filename.strip())
    if not content_type:
        content_type = detect_mime_type(filename)

    storage = storage or get_storage()
    storage_key = build_storage_key(user.pk, filename)
    _ensure_fits('storage_key', storage_key)
    upload_url = storage.generate_upload_url(storage_key, content_type)
    return UploadGrant(upload_url=upload_url, storage_key=storage_key)


def _validate_metadata(
    owner: 'User',
    original_filename: Any,
    storage_key: Any,
    mime_type: Any,
    size_bytes: Any,
) -> int:
    missing = [
        field_name
        for field_name, field_value in (
            ('original_filename', original_filename),
            ('storage_key', storage_key),
            ('mime_type', mime_type),
        )
        if not isinstance(field_value, str) or not field_value.strip()
    ]
    if size_bytes is None:
        missing.append('size_bytes')
    if missing:
        raise ValidationError(
            'Missing required fields: {fields}'.format(
                fields=', '.join(missing),
            ),
        )

    if not _is_whole_number(size_bytes):
        raise ValidationError('File size must be an integer')
    size = int(size_bytes)
    if size < 0:
        raise ValidationError('File size cannot be negative')

    _ensure_fits('original_filename', original_filename.strip())
    _ensure_fits('storage_key', storage_key)
    _ensure_fits('mime_type', mime_type.strip())
    validate_storage_key(owner.pk, storage_key)
    return size


def create_file(
    owner: 'User',
    *,
    original_filename: Any,
    storage_key: Any,
    mime_type: Any,
    size_bytes: Any,
) -> File:
    """Register metadata for an object the client finished uploading.

    The client uploads directly to storage first, so this call trusts
    its report that the bytes exist.

    Args:
        owner: Owner of the new file.
        original_filename: Filename as uploaded.
        storage_key: Key returned by ``generate_upload_url``.
        mime_type: Content type of the object.
        size_bytes: Object size in bytes.

    Returns:
        Created File instance, private and without collaborators.

    Raises:
        ValidationError: If required metadata is missing or invalid.
        ConflictError: If the storage key is already registered.
    """
    size = _validate_metadata(
        owner,
        original_filename,
        storage_key,
        mime_type,
        size_bytes,
    )

    try:
        with transaction.atomic():
            file_instance = File.objects.create(
                owner=owner,
                original_filename=original_filename.strip(),
                storage_key=storage_key,
                mime_type=mime_type.strip(),
                size_bytes=size,
            )
    except IntegrityError as error:
        logger.warning('Storage key already registered: %s', storage_key)
        raise ConflictError('File is already registered') from error

    logger.info(
        'File record created in database: %s (ID: %s)',
        storage_key,
        file_instance.pk,
    )
    return file_instance


def generate_download_url(
    file_id: uuid.UUID | str,
    caller: 'User',
    storage: 'FileStorage | None' = None,
) -> str:
    """Sign a download URL for the owner or a collaborator.

    Args:
        file_id: ID of the file.
        caller: Authenticated user.
        storage: Storage backend, defaults to the configured one.

    Returns:
        Pre-signed download URL.

    Raises:
        NotFoundError: If the file does not exist.
        ForbiddenError: If the caller has no access to the file.
    """
    file_instance = get_file(file_id)
    if not can_access(file_instance, caller):
        logger.warning(
            'User %s denied download of file %s',
            caller.pk,
            file_instance.pk,
        )
        raise ForbiddenError('Not authorized')

    storage = storage or get_storage()
    return storage.generate_download_url(
        file_instance.storage_key,
        download_filename=file_instance.original_filename,
    )


def delete_file(
    file_id: uuid.UUID | str,
    caller: 'User',
    storage: 'FileStorage | None' = None,
) -> None:
    """Delete file from storage and database.

    Order matters: the object is removed from storage first, then the
    record. If storage deletion fails the record stays, so metadata
    never points at missing bytes. A crash between the two steps leaves
    an orphaned object in the bucket.

    Args:
        file_id: ID of file to delete.
        caller: Authenticated user, must be the owner.
        storage: Storage backend, defaults to the configured one.

    Raises:
        NotFoundError: If the file does not exist.
        ForbiddenError: If the caller is not the owner.
        Exception: If storage or DB deletion fails.
    """
    file_instance = get_file(file_id)
    ensure_owner(file_instance, caller)

    storage_key = file_instance.storage_key
    logger.info('Deleting file: ID=%s, key=%s', file_instance.pk, storage_key)

    storage = storage or get_storage()
    storage.delete(storage_key)

    try:
        with transaction.atomic():
            file_instance.delete()
    except Exception:
        logger.exception(
            'Failed to delete file record after storage delete: ID=%s',
            file_id,
        )
        raise

    logger.info('File record deleted from database: ID=%s', file_id)
