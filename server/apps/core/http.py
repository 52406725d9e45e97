"""Small helpers for JSON request and response handling."""

import json
from typing import Any

from django.http import HttpRequest

from server.apps.core.exceptions import BadRequestError


def parse_json_body(request: HttpRequest) -> dict[str, Any]:
    """Decode the request body as a JSON object.

    An empty body is treated as an empty object.

    Args:
        request: Incoming request.

    Returns:
        Decoded JSON object.

    Raises:
        BadRequestError: If the body is not a JSON object.
    """
    if not request.body:
        return {}

    try:
        payload = json.loads(request.body)
    except (ValueError, UnicodeDecodeError) as error:
        raise BadRequestError('Request body must be valid JSON') from error

    if not isinstance(payload, dict):
        raise BadRequestError('Request body must be a JSON object')
    return payload
