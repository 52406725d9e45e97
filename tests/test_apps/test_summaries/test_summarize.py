"""Tests for the Gemini summarization client."""

import json

import httpx
import pytest

from server.apps.core.exceptions import (
    BadRequestError,
    ServiceUnavailableError,
)
from server.apps.summaries.logic.summarize import (
    FALLBACK_SUMMARY,
    build_request_payload,
    extract_summary,
    summarize_text,
)


def _gemini_reply(text):
    return {'candidates': [{'content': {'parts': [{'text': text}]}}]}


@pytest.fixture
def gemini_settings(settings):
    """Configure a fake Gemini endpoint."""
    settings.GEMINI_API_KEY = 'test-key'
    settings.GEMINI_MODEL = 'gemini-test'
    settings.GEMINI_API_URL = 'https://gemini.test/v1beta/'
    return settings


def test_summarize_without_key_returns_fallback(settings):
    """Test that a missing key yields the labeled mock summary."""
    settings.GEMINI_API_KEY = ''

    summary = summarize_text('Some long text')

    assert summary.text == FALLBACK_SUMMARY
    assert summary.is_fallback is True


@pytest.mark.parametrize('text', [None, '', '   ', 42])
def test_summarize_requires_text(settings, text):
    """Test that blank or non-string text is rejected."""
    settings.GEMINI_API_KEY = ''

    with pytest.raises(BadRequestError):
        summarize_text(text)


def test_summarize_calls_gemini(gemini_settings):
    """Test the request sent to Gemini and the parsed reply."""
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(200, json=_gemini_reply('  Short summary. '))

    client = httpx.Client(transport=httpx.MockTransport(handler))

    summary = summarize_text('Quarterly numbers went up.', client=client)

    assert summary.text == 'Short summary.'
    assert summary.is_fallback is False
    sent = requests[0]
    assert str(sent.url) == (
        'https://gemini.test/v1beta/models/gemini-test:generateContent'
    )
    assert sent.headers['x-goog-api-key'] == 'test-key'
    body = json.loads(sent.content)
    prompt = body['contents'][0]['parts'][0]['text']
    assert 'Quarterly numbers went up.' in prompt
    assert body['generationConfig'] == {'temperature': 0.5}


def test_summarize_keeps_injected_client_open(gemini_settings):
    """Test that callers own the client they pass in."""
    client = httpx.Client(
        transport=httpx.MockTransport(
            lambda request: httpx.Response(200, json=_gemini_reply('Ok.')),
        ),
    )

    summarize_text('text', client=client)

    assert client.is_closed is False


@pytest.mark.parametrize('reply', [
    httpx.Response(500, json={'error': {'message': 'boom'}}),
    httpx.Response(200, content=b'not json'),
    httpx.Response(200, json={'candidates': []}),
])
def test_summarize_upstream_failures(gemini_settings, reply):
    """Test that upstream failures become a service error."""
    client = httpx.Client(transport=httpx.MockTransport(lambda request: reply))

    with pytest.raises(ServiceUnavailableError, match='Failed to generate'):
        summarize_text('text', client=client)


def test_summarize_network_error(gemini_settings):
    """Test that transport errors become a service error."""

    def handler(request):
        raise httpx.ConnectError('unreachable', request=request)

    client = httpx.Client(transport=httpx.MockTransport(handler))

    with pytest.raises(ServiceUnavailableError):
        summarize_text('text', client=client)


def test_build_request_payload():
    """Test the prompt wraps the text."""
    payload = build_request_payload('hello')

    assert payload['contents'][0]['role'] == 'user'
    assert '"hello"' in payload['contents'][0]['parts'][0]['text']
    assert payload['systemInstruction']['parts'][0]['text']


def test_extract_summary_joins_parts():
    """Test that multi-part replies are concatenated."""
    body = {
        'candidates': [
            {'content': {'parts': [{'text': 'One. '}, {'text': 'Two.'}]}},
        ],
    }

    assert extract_summary(body) == 'One. Two.'
    assert extract_summary({}) == ''
