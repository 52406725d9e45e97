"""Tests for authentication HTTP endpoints."""

from http import HTTPStatus

import pytest
from django.contrib.auth import get_user_model
from django.urls import reverse

from server.apps.identity.logic.tokens import issue_token, resolve_token


@pytest.mark.django_db
def test_register(client, password):
    """Test registration returns a working token."""
    response = client.post(
        reverse('identity:register'),
        data={'email': 'bob@example.com', 'password': password, 'name': 'Bob'},
        content_type='application/json',
    )

    assert response.status_code == HTTPStatus.CREATED
    user = resolve_token(response.json()['token'])
    assert user.email == 'bob@example.com'
    assert user.display_name == 'Bob'


@pytest.mark.django_db
def test_register_duplicate(client, user, password):
    """Test that taken emails are a conflict."""
    response = client.post(
        reverse('identity:register'),
        data={'email': user.email, 'password': password},
        content_type='application/json',
    )

    assert response.status_code == HTTPStatus.CONFLICT
    assert response.json() == {'msg': 'User already exists'}


@pytest.mark.django_db
def test_register_weak_password(client):
    """Test that validator messages are returned as a bad request."""
    response = client.post(
        reverse('identity:register'),
        data={'email': 'bob@example.com', 'password': '123'},
        content_type='application/json',
    )

    assert response.status_code == HTTPStatus.BAD_REQUEST
    assert response.json()['msg']
    assert not get_user_model().objects.filter(
        email='bob@example.com',
    ).exists()


@pytest.mark.django_db
def test_login(client, user, password):
    """Test logging in returns a token for the user."""
    response = client.post(
        reverse('identity:login'),
        data={'email': user.email, 'password': password},
        content_type='application/json',
    )

    assert response.status_code == HTTPStatus.OK
    assert resolve_token(response.json()['token']) == user


@pytest.mark.django_db
def test_login_wrong_password(client, user):
    """Test that wrong credentials are unauthorized."""
    response = client.post(
        reverse('identity:login'),
        data={'email': user.email, 'password': 'nope'},
        content_type='application/json',
    )

    assert response.status_code == HTTPStatus.UNAUTHORIZED
    assert response.json() == {'msg': 'Invalid credentials'}


@pytest.mark.django_db
def test_login_requires_post(client):
    """Test that login only accepts POST."""
    response = client.get(reverse('identity:login'))

    assert response.status_code == HTTPStatus.METHOD_NOT_ALLOWED


@pytest.mark.django_db
def test_me(client, user):
    """Test reading the current user's profile."""
    response = client.get(
        reverse('identity:me'),
        headers={'Authorization': f'Bearer {issue_token(user)}'},
    )

    assert response.status_code == HTTPStatus.OK
    body = response.json()
    assert body['id'] == user.pk
    assert body['email'] == 'alice@example.com'
    assert body['name'] == 'Alice'
    assert body['dateJoined']


@pytest.mark.django_db
def test_me_anonymous(client):
    """Test that the profile requires a token."""
    response = client.get(reverse('identity:me'))

    assert response.status_code == HTTPStatus.UNAUTHORIZED
