import json
import time

import httpx
import pytest

from apps.ai_agent.services import AIProviderError, AIProviderRateLimitError, ChatProvider

from .conftest import completion


def make_provider(handler, provider='openai', max_retries=2):
    return ChatProvider(
        provider, 'sk-secret', 'gpt-4o-mini',
        base_url='https://llm.test/v1/',
        transport=httpx.MockTransport(handler),
        max_retries=max_retries,
        backoff=0,
        timeout=5,
    )


class TestChatProvider:

    def test_parses_content_and_usage(self):
        provider = make_provider(lambda request: httpx.Response(200, json=completion('Cześć', 12, 3)))

        result = provider.complete([{'role': 'user', 'content': 'Hej'}])

        assert result.content == 'Cześć'
        assert (result.input_tokens, result.output_tokens, result.total_tokens) == (12, 3, 15)

    def test_request_carries_bearer_key_and_model(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json=completion())

        make_provider(handler).complete([{'role': 'user', 'content': 'Hej'}], temperature=0.2, max_tokens=100)

        request = seen[0]
        assert str(request.url) == 'https://llm.test/v1/chat/completions'
        assert request.headers['Authorization'] == 'Bearer sk-secret'
        body = json.loads(request.content)
        assert body['model'] == 'gpt-4o-mini'
        assert body['max_tokens'] == 100
        assert body['temperature'] == 0.2

    def test_openrouter_sends_attribution_headers(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json=completion())

        make_provider(handler, provider='openrouter').complete([])

        assert 'HTTP-Referer' in seen[0].headers
        assert seen[0].headers['X-Title']

    def test_retries_server_errors_then_succeeds(self):
        statuses = [503, 500, 200]

        def handler(request):
            code = statuses.pop(0)
            return httpx.Response(code, json=completion() if code == 200 else {'error': 'down'})

        result = make_provider(handler).complete([])

        assert result.content == 'Dzień dobry'
        assert statuses == []

    def test_waits_grow_exponentially(self, monkeypatch):
        delays = []
        monkeypatch.setattr(time, 'sleep', delays.append)
        statuses = [503, 502, 200]

        def handler(request):
            return httpx.Response(statuses.pop(0), json=completion())

        provider = ChatProvider(
            'openai', 'sk-secret', 'gpt-4o-mini',
            base_url='https://llm.test/v1',
            transport=httpx.MockTransport(handler),
            max_retries=2,
            backoff=0.5,
            timeout=5,
        )

        provider.complete([])

        assert delays == [0.5, 1.0]

    def test_persistent_rate_limit_raises_429(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(429, json={'error': 'slow down'})

        with pytest.raises(AIProviderRateLimitError) as exc:
            make_provider(handler, max_retries=2).complete([])

        assert exc.value.status_code == 429
        assert len(calls) == 3

    def test_invalid_key_maps_to_bad_gateway(self):
        provider = make_provider(lambda request: httpx.Response(401, json={'error': 'bad key'}))

        with pytest.raises(AIProviderError) as exc:
            provider.complete([])

        assert exc.value.status_code == 502
        assert str(exc.value.detail) == 'Nieprawidłowy klucz API dostawcy AI'

    def test_client_error_is_not_retried(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(400, json={'error': 'bad request'})

        with pytest.raises(AIProviderError) as exc:
            make_provider(handler).complete([])

        assert exc.value.status_code == 502
        assert len(calls) == 1

    def test_transport_errors_are_retried_then_reported(self):
        calls = []

        def handler(request):
            calls.append(request)
            raise httpx.ConnectError('connection refused', request=request)

        with pytest.raises(AIProviderError) as exc:
            make_provider(handler, max_retries=1).complete([])

        assert exc.value.status_code == 502
        assert len(calls) == 2

    def test_malformed_body_is_provider_error(self):
        provider = make_provider(lambda request: httpx.Response(200, json={'choices': []}))

        with pytest.raises(AIProviderError):
            provider.complete([])

    def test_repr_hides_key(self):
        assert 'sk-secret' not in repr(make_provider(lambda request: httpx.Response(200)))
