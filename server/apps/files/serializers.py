"""JSON representations of files and sharing state.

Keys follow the camelCase wire format of the single-page client.
"""

from typing import Any

from server.apps.files.logic.sharing_operations import (
    PublicFileGrant,
    PublicLinkState,
    SharingInfo,
    build_public_link,
)
from server.apps.files.models import Collaborator, File


def serialize_collaborator(collaborator: Collaborator) -> dict[str, Any]:
    """Serialize one collaborator entry."""
    return {
        'userId': collaborator.user_id,
        'email': collaborator.email,
        'permission': collaborator.permission,
    }


def serialize_collaborators(
    collaborators: list[Collaborator],
) -> list[dict[str, Any]]:
    """Serialize a collaborator list, keeping its order."""
    return [serialize_collaborator(entry) for entry in collaborators]


def serialize_file(file_instance: File) -> dict[str, Any]:
    """Serialize file metadata together with its sharing state.

    Args:
        file_instance: File to serialize. Collaborators should be
            prefetched when serializing many files.

    Returns:
        JSON-ready dictionary.
    """
    return {
        'id': str(file_instance.pk),
        'originalFilename': file_instance.original_filename,
        's3Key': file_instance.storage_key,
        'mimetype': file_instance.mime_type,
        'fileSize': file_instance.size_bytes,
        'uploadDate': file_instance.uploaded_at.isoformat(),
        'owner': file_instance.owner_id,
        'isPublic': file_instance.is_public,
        'publicLink': build_public_link(file_instance),
        'collaborators': serialize_collaborators(
            list(file_instance.collaborators.all()),
        ),
    }


def serialize_shared_file(
    file_instance: File,
    viewer_id: int,
) -> dict[str, Any]:
    """Serialize a file for a collaborator.

    Sharing state belongs to the owner: the storage key, public link
    and other collaborators are left out. Only the viewer's own
    permission is reported.

    Args:
        file_instance: File shared with the viewer. Owner and
            collaborators should be prefetched.
        viewer_id: User ID of the collaborator.

    Returns:
        JSON-ready dictionary.
    """
    permission = next(
        (
            grant.permission
            for grant in file_instance.collaborators.all()
            if grant.user_id == viewer_id
        ),
        None,
    )
    return {
        'id': str(file_instance.pk),
        'originalFilename': file_instance.original_filename,
        'mimetype': file_instance.mime_type,
        'fileSize': file_instance.size_bytes,
        'uploadDate': file_instance.uploaded_at.isoformat(),
        'owner': file_instance.owner_id,
        'ownerEmail': file_instance.owner.email,
        'permission': permission,
    }


def serialize_public_state(state: PublicLinkState) -> dict[str, Any]:
    """Serialize the result of toggling public sharing."""
    return {
        'isPublic': state.is_public,
        'publicLink': state.public_link,
    }


def serialize_sharing_info(info: SharingInfo) -> dict[str, Any]:
    """Serialize the full sharing state of a file."""
    return {
        'isPublic': info.is_public,
        'publicLink': info.public_link,
        'collaborators': serialize_collaborators(info.collaborators),
    }


def serialize_public_grant(grant: PublicFileGrant) -> dict[str, Any]:
    """Serialize the public download descriptor."""
    return {
        'filename': grant.filename,
        'size': grant.size_bytes,
        'mimetype': grant.mime_type,
        'downloadUrl': grant.download_url,
    }
