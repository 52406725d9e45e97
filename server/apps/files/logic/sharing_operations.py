"""Business logic for public links and collaborators.

Only the owner may change a file's sharing state. Every mutation runs
in a transaction with the file row locked (``select_for_update``), so
concurrent edits to the same file serialize and always see the current
collaborator list.
"""

import dataclasses
import logging
import secrets
import string
import uuid
from typing import TYPE_CHECKING, Final, final

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import transaction

from server.apps.core.exceptions import (
    BadRequestError,
    ConflictError,
    NotFoundError,
)
from server.apps.files.logic.file_operations import (
    ensure_owner,
    get_file,
    get_storage,
)
from server.apps.files.models import Collaborator, File
from server.apps.identity.logic.directory import (
    DjangoUserDirectory,
    UserDirectory,
)

if TYPE_CHECKING:
    from server.apps.files.infrastructure.storage import FileStorage
    from server.apps.identity.models import User

logger = logging.getLogger(__name__)

_TOKEN_ALPHABET: Final = string.ascii_letters + string.digits
_MIN_TOKEN_LENGTH: Final = 20
_DEFAULT_TOKEN_LENGTH: Final = 24


@final
@dataclasses.dataclass(frozen=True, slots=True)
class PublicLinkState:
    """Public sharing state reported back to the owner."""

    is_public: bool
    public_link: str | None


@final
@dataclasses.dataclass(frozen=True, slots=True)
class SharingInfo:
    """Complete sharing state of a file."""

    is_public: bool
    public_link: str | None
    collaborators: list[Collaborator]


@final
@dataclasses.dataclass(frozen=True, slots=True)
class PublicFileGrant:
    """Read-only view of a public file with a one-off download URL."""

    filename: str
    size_bytes: int
    mime_type: str
    download_url: str


def get_token_length() -> int:
    """Get share token length.

    Returns:
        Length from settings, never below 20 characters.
    """
    length = getattr(settings, 'SHARE_TOKEN_LENGTH', _DEFAULT_TOKEN_LENGTH)
    return max(length, _MIN_TOKEN_LENGTH)


def generate_share_token() -> str:
    """Generate a share token unused by any file.

    Uses ``secrets`` so tokens cannot be guessed; regenerates on the
    (practically impossible) collision with an existing token.

    Returns:
        Random alphanumeric token.
    """
    length = get_token_length()
    while True:
        token = ''.join(
            secrets.choice(_TOKEN_ALPHABET) for _ in range(length)
        )
        if not File.objects.filter(share_token=token).exists():
            return token
        logger.warning('Share token collision, regenerating')


def build_public_link(file_instance: File) -> str | None:
    """Build the public link for a file.

    Args:
        file_instance: File to link to.

    Returns:
        ``{SHARE_BASE_URL}/share/{token}`` when the file is publicly
        readable, otherwise None.
    """
    if not file_instance.is_publicly_readable():
        return None
    base_url = settings.SHARE_BASE_URL.rstrip('/')
    return f'{base_url}/share/{file_instance.share_token}'


def _lock_owned_file(file_id: uuid.UUID | str, caller: 'User') -> File:
    """Load and lock a file the caller owns.

    Must be called inside ``transaction.atomic()``.

    Raises:
        NotFoundError: If the file does not exist.
        ForbiddenError: If the caller is not the owner.
    """
    try:
        file_instance = (
            File.objects.select_for_update()
            .filter(pk=file_id)
            .first()
        )
    except ValidationError as error:
        raise NotFoundError('File not found') from error

    if file_instance is None:
        raise NotFoundError('File not found')
    ensure_owner(file_instance, caller)
    return file_instance


def _validate_permission(permission: object) -> str:
    if permission not in Collaborator.Permission.values:
        raise BadRequestError(
            "Permission must be 'view' or 'edit'",
        )
    return str(permission)


def _list_collaborators(file_instance: File) -> list[Collaborator]:
    return list(
        file_instance.collaborators.select_related('user').order_by('pk'),
    )


def set_public(
    file_id: uuid.UUID | str,
    caller: 'User',
    enable: bool,
) -> PublicLinkState:
    """Enable or disable public sharing for a file.

    The first publish generates a share token. Unpublishing only clears
    the flag: the token stays, so publishing again restores the same
    link.

    Args:
        file_id: ID of the file.
        caller: Authenticated user, must be the owner.
        enable: Desired public state.

    Returns:
        Resulting public state and link.

    Raises:
        NotFoundError: If the file does not exist.
        ForbiddenError: If the caller is not the owner.
    """
    with transaction.atomic():
        file_instance = _lock_owned_file(file_id, caller)

        update_fields = ['is_public']
        file_instance.is_public = enable
        if enable and not file_instance.share_token:
            file_instance.share_token = generate_share_token()
            update_fields.append('share_token')
        file_instance.save(update_fields=update_fields)

    logger.info(
        'File %s public sharing %s by user %s',
        file_instance.pk,
        'enabled' if enable else 'disabled',
        caller.pk,
    )
    return PublicLinkState(
        is_public=file_instance.is_public,
        public_link=build_public_link(file_instance),
    )


def get_sharing_info(file_id: uuid.UUID | str, caller: 'User') -> SharingInfo:
    """Get public state and collaborators of a file.

    Args:
        file_id: ID of the file.
        caller: Authenticated user, must be the owner.

    Returns:
        SharingInfo for the file.

    Raises:
        NotFoundError: If the file does not exist.
        ForbiddenError: If the caller is not the owner.
    """
    file_instance = get_file(file_id)
    ensure_owner(file_instance, caller)
    collaborators = _list_collaborators(file_instance)

    return SharingInfo(
        is_public=file_instance.is_public,
        public_link=build_public_link(file_instance),
        collaborators=collaborators,
    )


def add_collaborator(  # noqa: WPS211
    file_id: uuid.UUID | str,
    caller: 'User',
    email: str | None,
    permission: str | None = None,
    directory: UserDirectory | None = None,
) -> list[Collaborator]:
    """Grant a registered user access to a file.

    Args:
        file_id: ID of the file.
        caller: Authenticated user, must be the owner.
        email: Email of the user to invite.
        permission: 'view' (default) or 'edit'.
        directory: User lookup, defaults to the Django user table.

    Returns:
        Full collaborator list in insertion order.

    Raises:
        NotFoundError: If the file or the invited user does not exist.
        ForbiddenError: If the caller is not the owner.
        BadRequestError: If the email is missing or the permission is
            unknown.
        ConflictError: If the invitee is the owner or already a
            collaborator.
    """
    directory = directory or DjangoUserDirectory()

    with transaction.atomic():
        file_instance = _lock_owned_file(file_id, caller)

        if not email or not isinstance(email, str):
            raise BadRequestError('Email is required')
        permission = _validate_permission(
            permission or Collaborator.Permission.VIEW,
        )

        invitee = directory.find_by_email(email)
        if invitee is None:
            raise NotFoundError('User not found with this email address')

        if invitee.pk == file_instance.owner_id:
            raise ConflictError('You cannot add yourself as a collaborator')

        if file_instance.collaborators.filter(user=invitee).exists():
            raise ConflictError('User is already a collaborator')

        Collaborator.objects.create(
            file=file_instance,
            user=invitee,
            email=invitee.email,
            permission=permission,
        )
        collaborators = _list_collaborators(file_instance)

    logger.info(
        'User %s added to file %s with %s permission',
        invitee.pk,
        file_instance.pk,
        permission,
    )
    return collaborators


def update_collaborator_permission(
    file_id: uuid.UUID | str,
    caller: 'User',
    target_user_id: int,
    permission: str | None,
) -> list[Collaborator]:
    """Change a collaborator's permission, keeping their position.

    Args:
        file_id: ID of the file.
        caller: Authenticated user, must be the owner.
        target_user_id: User ID of the collaborator.
        permission: New level, 'view' or 'edit'.

    Returns:
        Full collaborator list in insertion order.

    Raises:
        NotFoundError: If the file does not exist or the user is not a
            collaborator.
        ForbiddenError: If the caller is not the owner.
        BadRequestError: If the permission is unknown.
    """
    with transaction.atomic():
        file_instance = _lock_owned_file(file_id, caller)
        permission = _validate_permission(permission)

        updated = file_instance.collaborators.filter(
            user_id=target_user_id,
        ).update(permission=permission)
        if not updated:
            raise NotFoundError('Collaborator not found')
        collaborators = _list_collaborators(file_instance)

    logger.info(
        'User %s permission on file %s changed to %s',
        target_user_id,
        file_instance.pk,
        permission,
    )
    return collaborators


def remove_collaborator(
    file_id: uuid.UUID | str,
    caller: 'User',
    target_user_id: int,
) -> list[Collaborator]:
    """Revoke a collaborator's access.

    Removing a user who is not a collaborator changes nothing.

    Args:
        file_id: ID of the file.
        caller: Authenticated user, must be the owner.
        target_user_id: User ID of the collaborator.

    Returns:
        Resulting collaborator list in insertion order.

    Raises:
        NotFoundError: If the file does not exist.
        ForbiddenError: If the caller is not the owner.
    """
    with transaction.atomic():
        file_instance = _lock_owned_file(file_id, caller)
        deleted, _ = file_instance.collaborators.filter(
            user_id=target_user_id,
        ).delete()
        collaborators = _list_collaborators(file_instance)

    if deleted:
        logger.info(
            'User %s removed from file %s',
            target_user_id,
            file_instance.pk,
        )
    return collaborators


def resolve_public_access(
    token: str,
    storage: 'FileStorage | None' = None,
) -> PublicFileGrant:
    """Resolve a share token to a downloadable public file.

    The public flag gates access: a token kept on an unpublished file
    does not resolve.

    Args:
        token: Share token from the public link.
        storage: Storage backend, defaults to the configured one.

    Returns:
        PublicFileGrant with file details and a fresh download URL.

    Raises:
        NotFoundError: If no public file has this token.
    """
    file_instance = File.objects.filter(
        share_token=token,
        is_public=True,
    ).first()
    if not token or file_instance is None:
        raise NotFoundError('File not found or not publicly shared')

    storage = storage or get_storage()
    download_url = storage.generate_download_url(
        file_instance.storage_key,
        download_filename=file_instance.original_filename,
    )

    logger.info('Public access granted to file %s', file_instance.pk)
    return PublicFileGrant(
        filename=file_instance.original_filename,
        size_bytes=file_instance.size_bytes,
        mime_type=file_instance.mime_type,
        download_url=download_url,
    )
