"""HTTP views for file registry and sharing endpoints.

Views only translate between HTTP and the logic layer; errors raised
by the logic propagate to ``ApiErrorMiddleware``.
"""

import uuid
from http import HTTPStatus

from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import (
    require_GET,
    require_http_methods,
    require_POST,
)

from server.apps.core.exceptions import BadRequestError
from server.apps.core.http import parse_json_body
from server.apps.files import serializers
from server.apps.files.logic import file_operations, sharing_operations
from server.apps.identity.decorators import token_required


@require_GET
@token_required
def file_list(request: HttpRequest) -> JsonResponse:
    """List the caller's files, newest first, optionally searched."""
    files = file_operations.list_owned_by(
        request.user,
        request.GET.get('search', ''),
    )
    return JsonResponse(
        [serializers.serialize_file(entry) for entry in files],
        safe=False,
    )


@require_GET
@token_required
def shared_file_list(request: HttpRequest) -> JsonResponse:
    """List files other users shared with the caller."""
    files = file_operations.list_shared_with(request.user)
    return JsonResponse(
        [
            serializers.serialize_shared_file(entry, request.user.pk)
            for entry in files
        ],
        safe=False,
    )


@csrf_exempt
@require_POST
@token_required
def generate_upload_url(request: HttpRequest) -> JsonResponse:
    """Issue a pre-signed upload URL and the key to finalize with."""
    payload = parse_json_body(request)
    grant = file_operations.generate_upload_url(
        request.user,
        payload.get('filename'),
        payload.get('filetype'),
    )
    return JsonResponse({
        'uploadUrl': grant.upload_url,
        's3Key': grant.storage_key,
    })


@csrf_exempt
@require_POST
@token_required
def finalize_upload(request: HttpRequest) -> JsonResponse:
    """Register metadata once the client finished uploading."""
    payload = parse_json_body(request)
    file_instance = file_operations.create_file(
        request.user,
        original_filename=payload.get('originalFilename'),
        storage_key=payload.get('s3Key'),
        mime_type=payload.get('mimetype'),
        size_bytes=payload.get('fileSize'),
    )
    return JsonResponse(
        serializers.serialize_file(file_instance),
        status=HTTPStatus.CREATED,
    )


@require_GET
@token_required
def download_url(request: HttpRequest, file_id: uuid.UUID) -> JsonResponse:
    """Issue a pre-signed download URL to the owner or a collaborator."""
    url = file_operations.generate_download_url(file_id, request.user)
    return JsonResponse({'downloadUrl': url})


@csrf_exempt
@require_http_methods(['DELETE'])
@token_required
def file_detail(request: HttpRequest, file_id: uuid.UUID) -> JsonResponse:
    """Delete a file from storage and the registry."""
    file_operations.delete_file(file_id, request.user)
    return JsonResponse({'msg': 'File deleted successfully'})


@require_GET
@token_required
def sharing_info(request: HttpRequest, file_id: uuid.UUID) -> JsonResponse:
    """Return public state and collaborators of an owned file."""
    info = sharing_operations.get_sharing_info(file_id, request.user)
    return JsonResponse(serializers.serialize_sharing_info(info))


@csrf_exempt
@require_POST
@token_required
def public_toggle(request: HttpRequest, file_id: uuid.UUID) -> JsonResponse:
    """Enable or disable the public link of a file."""
    payload = parse_json_body(request)
    enable = payload.get('isPublic')
    if not isinstance(enable, bool):
        raise BadRequestError('isPublic must be true or false')

    state = sharing_operations.set_public(file_id, request.user, enable)
    return JsonResponse(serializers.serialize_public_state(state))


@csrf_exempt
@require_POST
@token_required
def collaborator_list(
    request: HttpRequest,
    file_id: uuid.UUID,
) -> JsonResponse:
    """Invite a registered user as collaborator."""
    payload = parse_json_body(request)
    collaborators = sharing_operations.add_collaborator(
        file_id,
        request.user,
        payload.get('email'),
        payload.get('permission'),
    )
    return JsonResponse(
        serializers.serialize_collaborators(collaborators),
        safe=False,
    )


@csrf_exempt
@require_http_methods(['PATCH', 'DELETE'])
@token_required
def collaborator_detail(
    request: HttpRequest,
    file_id: uuid.UUID,
    user_id: int,
) -> JsonResponse:
    """Change a collaborator's permission (PATCH) or remove them (DELETE)."""
    if request.method == 'PATCH':
        payload = parse_json_body(request)
        collaborators = sharing_operations.update_collaborator_permission(
            file_id,
            request.user,
            user_id,
            payload.get('permission'),
        )
    else:
        collaborators = sharing_operations.remove_collaborator(
            file_id,
            request.user,
            user_id,
        )
    return JsonResponse(
        serializers.serialize_collaborators(collaborators),
        safe=False,
    )


@require_GET
def public_file(request: HttpRequest, share_token: str) -> JsonResponse:
    """Resolve a public share token; no authentication required."""
    grant = sharing_operations.resolve_public_access(share_token)
    return JsonResponse(serializers.serialize_public_grant(grant))
