"""
Chat completion providers.

OpenAI and OpenRouter both expose the OpenAI ``/chat/completions`` API; they
differ only in base URL and a few optional headers. Requests go through httpx
with tenacity retries on 429, 5xx and transport errors (exponential backoff).
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

import httpx
from django.conf import settings
from tenacity import Retrying, retry_if_exception_type, retry_if_result, stop_after_attempt, wait_exponential

from apps.ai_agent.models import AIProvider

from .exceptions import AIProviderError, AIProviderRateLimitError

logger = logging.getLogger(__name__)

RETRY_STATUSES = {429}


def _should_retry(response: httpx.Response) -> bool:
    return response.status_code in RETRY_STATUSES or response.status_code >= 500


@dataclass
class ChatResult:
    content: str
    input_tokens: int = 0
    output_tokens: int = 0
    total_tokens: int = 0


def base_url_for(provider: str) -> str:
    if provider == AIProvider.OPENROUTER:
        return settings.OPENROUTER_BASE_URL
    return settings.OPENAI_BASE_URL


class ChatProvider:
    """
    Minimal OpenAI-compatible chat client.

    Usage:
        provider = ChatProvider('openai', api_key, 'gpt-4o-mini')
        result = provider.complete([{'role': 'user', 'content': 'Cześć'}])
    """

    def __init__(
        self,
        provider: str,
        api_key: str,
        model: str,
        *,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
        backoff: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None
    ):
        self.provider = provider
        self.model = model
        self._api_key = api_key
        self.endpoint = f"{(base_url or base_url_for(provider)).rstrip('/')}/chat/completions"
        self.timeout = timeout if timeout is not None else settings.AI_REQUEST_TIMEOUT
        self.max_retries = max_retries if max_retries is not None else settings.AI_MAX_RETRIES
        self.backoff = backoff if backoff is not None else settings.AI_RETRY_BACKOFF
        self.transport = transport

    def __repr__(self):
        # Never expose the key
        return f"ChatProvider(provider={self.provider!r}, model={self.model!r})"

    def _headers(self) -> Dict[str, str]:
        headers = {
            'Authorization': f'Bearer {self._api_key}',
            'Content-Type': 'application/json',
        }
        if self.provider == AIProvider.OPENROUTER:
            headers['HTTP-Referer'] = settings.FRONTEND_URL
            headers['X-Title'] = 'Biuro Rachunkowe'
        return headers

    def _log_retry(self, retry_state):
        outcome = retry_state.outcome
        if outcome.failed:
            logger.warning(
                'AI provider %s transport error (attempt %d): %s',
                self.provider, retry_state.attempt_number, outcome.exception().__class__.__name__,
            )
        else:
            logger.warning(
                'AI provider %s returned %s (attempt %d)',
                self.provider, outcome.result().status_code, retry_state.attempt_number,
            )

    def _give_up(self, retry_state) -> httpx.Response:
        """Last response once retries run out; a transport failure becomes AIProviderError."""
        outcome = retry_state.outcome
        if outcome.failed:
            raise AIProviderError('Nie można połączyć się z dostawcą AI') from outcome.exception()
        return outcome.result()

    def _post(self, payload: dict) -> httpx.Response:
        retrying = Retrying(
            stop=stop_after_attempt(self.max_retries + 1),
            wait=wait_exponential(multiplier=self.backoff),
            retry=retry_if_exception_type(httpx.TransportError) | retry_if_result(_should_retry),
            before_sleep=self._log_retry,
            retry_error_callback=self._give_up,
        )
        with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
            return retrying(client.post, self.endpoint, json=payload, headers=self._headers())

    def complete(self, messages: List[dict], *, temperature: float = 0.7,
                 max_tokens: Optional[int] = None) -> ChatResult:
        """
        Run a chat completion.

        Raises:
            AIProviderError: Invalid key (502), provider failure (502)
            AIProviderRateLimitError: Provider kept answering 429
        """
        payload = {'model': self.model, 'messages': messages, 'temperature': float(temperature)}
        if max_tokens:
            payload['max_tokens'] = max_tokens

        response = self._post(payload)

        if response.status_code == 401:
            raise AIProviderError('Nieprawidłowy klucz API dostawcy AI')
        if response.status_code == 429:
            raise AIProviderRateLimitError()
        if response.status_code >= 400:
            logger.error('AI provider %s error %s', self.provider, response.status_code)
            raise AIProviderError()

        return self._parse(response)

    def _parse(self, response: httpx.Response) -> ChatResult:
        try:
            data = response.json()
            content = data['choices'][0]['message']['content'] or ''
        except (ValueError, KeyError, IndexError, TypeError):
            raise AIProviderError('Nieprawidłowa odpowiedź dostawcy AI')

        usage = data.get('usage') or {}
        input_tokens = usage.get('prompt_tokens') or 0
        output_tokens = usage.get('completion_tokens') or 0
        return ChatResult(
            content=content,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
            total_tokens=usage.get('total_tokens') or input_tokens + output_tokens,
        )


def get_provider(provider: str, api_key: str, model: str) -> ChatProvider:
    return ChatProvider(provider, api_key, model)
