"""HTTP views for registration, login and the current user."""

from http import HTTPStatus

from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST

from server.apps.core.http import parse_json_body
from server.apps.identity.decorators import token_required
from server.apps.identity.logic.accounts import authenticate_user, register_user
from server.apps.identity.logic.tokens import issue_token


@csrf_exempt
@require_POST
def register(request: HttpRequest) -> JsonResponse:
    """Register a new user and return a token."""
    payload = parse_json_body(request)
    user = register_user(
        payload.get('email'),
        payload.get('password'),
        str(payload.get('name') or payload.get('username') or ''),
    )
    return JsonResponse(
        {'token': issue_token(user)},
        status=HTTPStatus.CREATED,
    )


@csrf_exempt
@require_POST
def login(request: HttpRequest) -> JsonResponse:
    """Authenticate with email and password and return a token."""
    payload = parse_json_body(request)
    user = authenticate_user(payload.get('email'), payload.get('password'))
    return JsonResponse({'token': issue_token(user)})


@require_GET
@token_required
def me(request: HttpRequest) -> JsonResponse:
    """Return the profile of the authenticated user."""
    user = request.user
    return JsonResponse({
        'id': user.pk,
        'email': user.email,
        'name': user.get_display_name(),
        'dateJoined': user.date_joined.isoformat(),
    })
