"""Text summarization through the Gemini ``generateContent`` API.

Summaries are a convenience: when no API key is configured a clearly
labeled mock is returned, and upstream failures surface as
``ServiceUnavailableError`` without touching any file state.
"""

import dataclasses
import logging
from typing import Any, Final, final

import httpx
from django.conf import settings

from server.apps.core.exceptions import (
    BadRequestError,
    ServiceUnavailableError,
)

logger = logging.getLogger(__name__)

FALLBACK_SUMMARY: Final = (
    'This is a mock summary because the Gemini API key is not configured.'
)

_SYSTEM_INSTRUCTION: Final = (
    'You are a helpful assistant that provides concise summaries '
    'of file content.'
)
_TEMPERATURE: Final = 0.5


@final
@dataclasses.dataclass(frozen=True, slots=True)
class Summary:
    """Generated summary, or the labeled fallback."""

    text: str
    is_fallback: bool


def build_request_payload(text: str) -> dict[str, Any]:
    """Build the ``generateContent`` request body.

    Args:
        text: Text to summarize.

    Returns:
        JSON-ready request body.
    """
    prompt = (
        'Summarize the following text in one or two sentences: '
        f'"{text}"'
    )
    return {
        'systemInstruction': {'parts': [{'text': _SYSTEM_INSTRUCTION}]},
        'contents': [{'role': 'user', 'parts': [{'text': prompt}]}],
        'generationConfig': {'temperature': _TEMPERATURE},
    }


def extract_summary(response_body: dict[str, Any]) -> str:
    """Pull the generated text out of a ``generateContent`` response.

    Args:
        response_body: Decoded JSON response.

    Returns:
        Stripped summary text; empty when the model produced nothing.
    """
    candidates = response_body.get('candidates') or []
    if not candidates:
        return ''
    parts = candidates[0].get('content', {}).get('parts') or []
    return ''.join(part.get('text', '') for part in parts).strip()


def summarize_text(
    text: Any,
    client: httpx.Client | None = None,
) -> Summary:
    """Summarize free text in one or two sentences.

    Args:
        text: Text to summarize.
        client: HTTP client, a short-lived one is created when omitted.

    Returns:
        Summary from the model, or the labeled fallback when no API key
        is configured.

    Raises:
        BadRequestError: If text is missing or blank.
        ServiceUnavailableError: If the API call fails or returns no
            summary.
    """
    if not isinstance(text, str) or not text.strip():
        raise BadRequestError('Request body must include `text` string.')

    api_key = settings.GEMINI_API_KEY
    if not api_key:
        logger.info('Gemini API key not configured, returning mock summary')
        return Summary(text=FALLBACK_SUMMARY, is_fallback=True)

    url = '{base}/models/{model}:generateContent'.format(
        base=settings.GEMINI_API_URL.rstrip('/'),
        model=settings.GEMINI_MODEL,
    )

    owns_client = client is None
    if client is None:
        client = httpx.Client(timeout=settings.GEMINI_TIMEOUT)

    try:
        response = client.post(
            url,
            headers={'x-goog-api-key': api_key},
            json=build_request_payload(text),
        )
        response.raise_for_status()
        summary = extract_summary(response.json())
    except (httpx.HTTPError, ValueError) as error:
        logger.exception('Gemini summarize request failed')
        raise ServiceUnavailableError('Failed to generate summary.') from error
    finally:
        if owns_client:
            client.close()

    if not summary:
        logger.error('Gemini returned an empty summary')
        raise ServiceUnavailableError('Failed to generate summary.')

    logger.info('Generated summary (%d chars)', len(summary))
    return Summary(text=summary, is_fallback=False)
