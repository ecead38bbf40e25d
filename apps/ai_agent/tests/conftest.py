import json

import httpx
import pytest

from apps.ai_agent.models import AIConversation
from apps.ai_agent.services import ChatProvider, create_configuration, providers
from apps.modules.models import AI_AGENT


def completion(content='Dzień dobry', prompt_tokens=10, completion_tokens=5):
    return {
        'id': 'chatcmpl-1',
        'choices': [{'index': 0, 'message': {'role': 'assistant', 'content': content}}],
        'usage': {
            'prompt_tokens': prompt_tokens,
            'completion_tokens': completion_tokens,
            'total_tokens': prompt_tokens + completion_tokens,
        },
    }


@pytest.fixture
def ai_enabled(company, enable_module):
    enable_module(company, AI_AGENT)


@pytest.fixture
def owner_api(auth_client, owner, ai_enabled, system_company):
    return auth_client(owner)


@pytest.fixture
def employee_api(auth_client, employee, grant, ai_enabled, system_company):
    grant(employee, AI_AGENT, ['read', 'write'])
    return auth_client(employee)


@pytest.fixture
def admin_api(auth_client, admin_user):
    return auth_client(admin_user)


@pytest.fixture
def ai_config(admin_user):
    return create_configuration(user=admin_user, data={
        'provider': 'openai',
        'model': 'gpt-4o-mini',
        'api_key': 'sk-test-key',
        'system_prompt': 'Jesteś asystentem biura rachunkowego.',
    })


@pytest.fixture
def conversation(company, employee):
    return AIConversation.objects.create(company=company, created_by=employee, title='Podatki')


@pytest.fixture
def fake_provider(monkeypatch):
    """
    Route provider calls through httpx.MockTransport.

    Returns a dict: set ``response`` to change the reply, read ``requests``
    for the captured request bodies.
    """
    state = {'requests': [], 'headers': [], 'response': httpx.Response(200, json=completion())}

    def handler(request):
        state['requests'].append(json.loads(request.content))
        state['headers'].append(request.headers)
        return state['response']

    def _get_provider(provider, api_key, model):
        return ChatProvider(
            provider, api_key, model,
            transport=httpx.MockTransport(handler),
            max_retries=0,
            backoff=0,
        )

    monkeypatch.setattr(providers, 'get_provider', _get_provider)
    return state
