"""HTTP view for AI summaries."""

from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_POST

from server.apps.core.http import parse_json_body
from server.apps.identity.decorators import token_required
from server.apps.summaries.logic.summarize import summarize_text


@csrf_exempt
@require_POST
@token_required
def summarize(request: HttpRequest) -> JsonResponse:
    """Summarize the posted ``text``."""
    payload = parse_json_body(request)
    summary = summarize_text(payload.get('text'))
    return JsonResponse({
        'summary': summary.text,
        'isFallback': summary.is_fallback,
    })
