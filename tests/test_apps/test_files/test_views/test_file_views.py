"""Tests for file registry HTTP endpoints."""

import uuid
from http import HTTPStatus

import pytest
from django.urls import reverse

from server.apps.files.models import File


@pytest.mark.django_db
def test_file_list_requires_token(client):
    """Test that anonymous callers are rejected."""
    response = client.get(reverse('files:file_list'))

    assert response.status_code == HTTPStatus.UNAUTHORIZED
    assert response.json() == {'msg': 'No token, authorization denied'}
    assert response['WWW-Authenticate'] == 'Bearer'


@pytest.mark.django_db
def test_file_list_invalid_token(client):
    """Test that forged tokens are rejected."""
    response = client.get(
        reverse('files:file_list'),
        headers={'Authorization': 'Bearer forged'},
    )

    assert response.status_code == HTTPStatus.UNAUTHORIZED
    assert response.json() == {'msg': 'Token is not valid'}


@pytest.mark.django_db
def test_file_list(client, user, other_user, make_file, auth_headers):
    """Test listing the caller's own files."""
    mine = make_file(name='notes.txt', size_bytes=10)
    make_file(owner=other_user, name='theirs.txt')

    response = client.get(
        reverse('files:file_list'),
        headers=auth_headers(user),
    )

    assert response.status_code == HTTPStatus.OK
    body = response.json()
    assert len(body) == 1
    assert body[0]['id'] == str(mine.pk)
    assert body[0]['originalFilename'] == 'notes.txt'
    assert body[0]['s3Key'] == mine.storage_key
    assert body[0]['fileSize'] == 10
    assert body[0]['owner'] == user.pk
    assert body[0]['isPublic'] is False
    assert body[0]['publicLink'] is None
    assert body[0]['collaborators'] == []


@pytest.mark.django_db
def test_file_list_search(client, user, make_file, auth_headers):
    """Test the search query parameter."""
    make_file(name='Budget.xlsx')
    make_file(name='photo.jpg')

    response = client.get(
        reverse('files:file_list'),
        {'search': 'budget'},
        headers=auth_headers(user),
    )

    assert [entry['originalFilename'] for entry in response.json()] == [
        'Budget.xlsx',
    ]


@pytest.mark.django_db
def test_file_list_legacy_header(client, user, make_file, auth_headers):
    """Test that the x-auth-token header is accepted too."""
    make_file()
    token = auth_headers(user)['Authorization'].removeprefix('Bearer ')

    response = client.get(
        reverse('files:file_list'),
        headers={'x-auth-token': token},
    )

    assert response.status_code == HTTPStatus.OK
    assert len(response.json()) == 1


@pytest.mark.django_db
def test_shared_file_list(
    client,
    user,
    other_user,
    third_user,
    make_file,
    auth_headers,
):
    """Test that collaborators see metadata but no sharing state."""
    shared = make_file(name='shared.txt')
    for invitee, permission in ((other_user, 'edit'), (third_user, 'view')):
        client.post(
            reverse('files:collaborator_list', args=[shared.pk]),
            data={'email': invitee.email, 'permission': permission},
            content_type='application/json',
            headers=auth_headers(user),
        )
    client.post(
        reverse('files:public_toggle', args=[shared.pk]),
        data={'isPublic': True},
        content_type='application/json',
        headers=auth_headers(user),
    )

    response = client.get(
        reverse('files:shared_file_list'),
        headers=auth_headers(other_user),
    )

    assert response.status_code == HTTPStatus.OK
    assert response.json() == [{
        'id': str(shared.pk),
        'originalFilename': 'shared.txt',
        'mimetype': 'application/pdf',
        'fileSize': 1024,
        'uploadDate': shared.uploaded_at.isoformat(),
        'owner': user.pk,
        'ownerEmail': 'owner@example.com',
        'permission': 'edit',
    }]
    assert b'stranger@example.com' not in response.content


@pytest.mark.django_db
def test_upload_flow(client, user, storage, auth_headers):
    """Test issuing an upload URL then finalizing the upload."""
    grant_response = client.post(
        reverse('files:generate_upload_url'),
        data={'filename': 'a.txt', 'filetype': 'text/plain'},
        content_type='application/json',
        headers=auth_headers(user),
    )
    assert grant_response.status_code == HTTPStatus.OK
    grant = grant_response.json()
    assert grant['s3Key'].startswith(f'uploads/{user.pk}/')
    assert grant['uploadUrl']

    response = client.post(
        reverse('files:finalize_upload'),
        data={
            'originalFilename': 'a.txt',
            's3Key': grant['s3Key'],
            'mimetype': 'text/plain',
            'fileSize': 10,
        },
        content_type='application/json',
        headers=auth_headers(user),
    )

    assert response.status_code == HTTPStatus.CREATED
    body = response.json()
    assert body['s3Key'] == grant['s3Key']
    assert body['fileSize'] == 10
    assert File.objects.filter(pk=body['id'], owner=user).exists()


@pytest.mark.django_db
def test_generate_upload_url_without_filename(
    client,
    user,
    storage,
    auth_headers,
):
    """Test that the filename is required."""
    response = client.post(
        reverse('files:generate_upload_url'),
        data={},
        content_type='application/json',
        headers=auth_headers(user),
    )

    assert response.status_code == HTTPStatus.BAD_REQUEST
    assert response.json() == {'msg': 'Filename is required'}


@pytest.mark.django_db
def test_generate_upload_url_invalid_json(client, user, auth_headers):
    """Test that malformed bodies are rejected."""
    response = client.post(
        reverse('files:generate_upload_url'),
        data='{not json',
        content_type='application/json',
        headers=auth_headers(user),
    )

    assert response.status_code == HTTPStatus.BAD_REQUEST


@pytest.mark.django_db
def test_finalize_upload_missing_fields(client, user, auth_headers):
    """Test that incomplete metadata is rejected."""
    response = client.post(
        reverse('files:finalize_upload'),
        data={'originalFilename': 'a.txt'},
        content_type='application/json',
        headers=auth_headers(user),
    )

    assert response.status_code == HTTPStatus.BAD_REQUEST
    assert response.json()['msg'].startswith('Missing required fields')
    assert File.objects.count() == 0


@pytest.mark.django_db
def test_finalize_upload_foreign_key(client, user, other_user, auth_headers):
    """Test that keys outside the caller's prefix are rejected."""
    response = client.post(
        reverse('files:finalize_upload'),
        data={
            'originalFilename': 'a.txt',
            's3Key': f'uploads/{other_user.pk}/1-a.txt',
            'mimetype': 'text/plain',
            'fileSize': 10,
        },
        content_type='application/json',
        headers=auth_headers(user),
    )

    assert response.status_code == HTTPStatus.BAD_REQUEST
    assert File.objects.count() == 0


@pytest.mark.django_db
def test_finalize_upload_filename_too_long(client, user, auth_headers):
    """Test that overlong filenames are a bad request, not a crash."""
    response = client.post(
        reverse('files:finalize_upload'),
        data={
            'originalFilename': 'x' * 300,
            's3Key': f'uploads/{user.pk}/1-x.txt',
            'mimetype': 'text/plain',
            'fileSize': 10,
        },
        content_type='application/json',
        headers=auth_headers(user),
    )

    assert response.status_code == HTTPStatus.BAD_REQUEST
    assert response.json() == {
        'msg': 'original_filename cannot be longer than 255 characters',
    }
    assert File.objects.count() == 0


@pytest.mark.django_db
def test_download_url(client, user, make_file, storage, auth_headers):
    """Test that the owner gets a download URL."""
    file_instance = make_file()

    response = client.get(
        reverse('files:download_url', args=[file_instance.pk]),
        headers=auth_headers(user),
    )

    assert response.status_code == HTTPStatus.OK
    assert file_instance.storage_key in response.json()['downloadUrl']


@pytest.mark.django_db
def test_download_url_forbidden(
    client,
    third_user,
    make_file,
    storage,
    auth_headers,
):
    """Test that strangers cannot download."""
    file_instance = make_file()

    response = client.get(
        reverse('files:download_url', args=[file_instance.pk]),
        headers=auth_headers(third_user),
    )

    assert response.status_code == HTTPStatus.FORBIDDEN
    assert response.json() == {'msg': 'Not authorized'}


@pytest.mark.django_db
def test_download_url_not_found(client, user, storage, auth_headers):
    """Test downloading a missing file."""
    response = client.get(
        reverse('files:download_url', args=[uuid.uuid4()]),
        headers=auth_headers(user),
    )

    assert response.status_code == HTTPStatus.NOT_FOUND
    assert response.json() == {'msg': 'File not found'}


@pytest.mark.django_db
def test_delete_file(client, user, make_file, storage, bucket, auth_headers):
    """Test deleting a file through the API."""
    file_instance = make_file()
    bucket.put_object(Key=file_instance.storage_key, Body=b'data')

    response = client.delete(
        reverse('files:file_detail', args=[file_instance.pk]),
        headers=auth_headers(user),
    )

    assert response.status_code == HTTPStatus.OK
    assert response.json() == {'msg': 'File deleted successfully'}
    assert File.objects.count() == 0
    assert list(bucket.objects.all()) == []


@pytest.mark.django_db
def test_delete_file_forbidden(
    client,
    other_user,
    make_file,
    storage,
    auth_headers,
):
    """Test that non-owners cannot delete."""
    file_instance = make_file()

    response = client.delete(
        reverse('files:file_detail', args=[file_instance.pk]),
        headers=auth_headers(other_user),
    )

    assert response.status_code == HTTPStatus.FORBIDDEN
    assert File.objects.count() == 1


@pytest.mark.django_db
def test_file_detail_rejects_get(client, user, make_file, auth_headers):
    """Test that only DELETE is routed to the file detail."""
    response = client.get(
        reverse('files:file_detail', args=[make_file().pk]),
        headers=auth_headers(user),
    )

    assert response.status_code == HTTPStatus.METHOD_NOT_ALLOWED
