import datetime

import httpx
import pytest
from django.urls import reverse
from django.utils import timezone
from rest_framework import status

from apps.ai_agent.models import AIConfiguration, AIConversation, AIMessage, MessageRole, TokenLimit, TokenUsage
from apps.common.encryption import decrypt_secret
from apps.notifications.models import Notification

from .conftest import completion


def conversation_url(conversation, action=None):
    if action:
        return reverse(f'ai-agent:conversation-{action}', kwargs={'pk': conversation.id})
    return reverse('ai-agent:conversation-detail', kwargs={'pk': conversation.id})


@pytest.mark.django_db
class TestConfiguration:

    def test_not_configured_returns_null(self, owner_api):
        response = owner_api.get(reverse('ai-agent:config'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data is None

    def test_admin_creates_configuration_without_exposing_key(self, admin_api, system_company):
        response = admin_api.post(reverse('ai-agent:config'), {
            'provider': 'openrouter',
            'model': 'anthropic/claude-3.5-sonnet',
            'api_key': 'sk-or-secret',
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['has_api_key'] is True
        assert 'api_key' not in response.data
        config = AIConfiguration.objects.get()
        assert config.company == system_company
        assert config.api_key != 'sk-or-secret'
        assert decrypt_secret(config.api_key) == 'sk-or-secret'

    def test_second_configuration_conflicts(self, admin_api, ai_config):
        response = admin_api.post(reverse('ai-agent:config'), {
            'provider': 'openai', 'model': 'gpt-4o',
        }, format='json')

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data['error'] == 'Konfiguracja AI już istnieje'

    def test_owner_cannot_write_configuration(self, owner_api):
        response = owner_api.post(reverse('ai-agent:config'), {
            'provider': 'openai', 'model': 'gpt-4o',
        }, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_patch_without_configuration(self, admin_api, system_company):
        response = admin_api.patch(reverse('ai-agent:config'), {'model': 'gpt-4o'}, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_patch_replaces_key_and_keeps_it_when_omitted(self, admin_api, ai_config):
        admin_api.patch(reverse('ai-agent:config'), {'api_key': 'sk-new'}, format='json')
        response = admin_api.patch(reverse('ai-agent:config'), {'temperature': '0.30'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['temperature'] == '0.30'
        ai_config.refresh_from_db()
        assert decrypt_secret(ai_config.api_key) == 'sk-new'

    def test_employee_without_module_access(self, auth_client, employee, ai_enabled, system_company):
        response = auth_client(employee).get(reverse('ai-agent:config'))

        assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.django_db
class TestConversations:

    def test_create_with_default_title(self, employee_api, employee):
        response = employee_api.post(reverse('ai-agent:conversation-list'), {}, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['title'] == 'Nowa rozmowa'
        usage = TokenUsage.objects.get(user=employee)
        assert usage.conversation_count == 1

    def test_list_shows_only_own_conversations(self, employee_api, conversation, company, other_employee):
        AIConversation.objects.create(company=company, created_by=other_employee, title='Cudza')

        response = employee_api.get(reverse('ai-agent:conversation-list'))

        assert response.status_code == status.HTTP_200_OK
        assert [row['title'] for row in response.data['results']] == ['Podatki']

    def test_colleague_conversation_is_forbidden(self, auth_client, other_employee, grant, ai_enabled, conversation):
        grant(other_employee, 'ai-agent', ['read', 'write'])

        response = auth_client(other_employee).get(conversation_url(conversation))

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_other_company_conversation_is_not_found(self, auth_client, other_owner, enable_module,
                                                      other_company, conversation):
        enable_module(other_company, 'ai-agent')

        response = auth_client(other_owner).get(conversation_url(conversation))

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_retrieve_returns_messages_oldest_first(self, employee_api, conversation):
        AIMessage.objects.create(conversation=conversation, role=MessageRole.USER, content='Pierwsza')
        AIMessage.objects.create(conversation=conversation, role=MessageRole.ASSISTANT, content='Druga')

        response = employee_api.get(conversation_url(conversation))

        assert [m['content'] for m in response.data['messages']] == ['Pierwsza', 'Druga']

    def test_delete(self, employee_api, conversation):
        response = employee_api.delete(conversation_url(conversation))

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not AIConversation.objects.filter(id=conversation.id).exists()


@pytest.mark.django_db
class TestSendMessage:

    def test_reply_is_stored_and_usage_tracked(self, employee_api, employee, conversation, ai_config, fake_provider):
        AIMessage.objects.create(conversation=conversation, role=MessageRole.USER, content='Co to VAT?')
        AIMessage.objects.create(conversation=conversation, role=MessageRole.ASSISTANT, content='Podatek.')

        response = employee_api.post(conversation_url(conversation, 'messages'), {'content': 'A CIT?'}, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['role'] == 'assistant'
        assert response.data['content'] == 'Dzień dobry'
        assert response.data['total_tokens'] == 15

        sent = fake_provider['requests'][0]['messages']
        assert sent[0] == {'role': 'system', 'content': 'Jesteś asystentem biura rachunkowego.'}
        assert [m['content'] for m in sent[1:]] == ['Co to VAT?', 'Podatek.', 'A CIT?']
        assert fake_provider['headers'][0]['Authorization'] == 'Bearer sk-test-key'

        conversation.refresh_from_db()
        assert conversation.total_tokens == 15
        assert conversation.message_count == 2
        usage = TokenUsage.objects.get(user=employee)
        assert (usage.total_input_tokens, usage.total_output_tokens, usage.total_tokens) == (10, 5, 15)
        assert usage.message_count == 2

    def test_not_configured(self, employee_api, conversation, fake_provider):
        response = employee_api.post(conversation_url(conversation, 'messages'), {'content': 'Hej'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'AI nie jest skonfigurowane'
        assert fake_provider['requests'] == []

    def test_provider_failure_keeps_user_message(self, employee_api, employee, conversation, ai_config, fake_provider):
        fake_provider['response'] = httpx.Response(401, json={'error': 'invalid key'})

        response = employee_api.post(conversation_url(conversation, 'messages'), {'content': 'Hej'}, format='json')

        assert response.status_code == status.HTTP_502_BAD_GATEWAY
        assert response.data['error'] == 'Nieprawidłowy klucz API dostawcy AI'
        assert list(conversation.messages.values_list('role', flat=True)) == ['user']
        assert not TokenUsage.objects.filter(user=employee).exists()

    def test_user_limit_reached(self, employee_api, employee, company, conversation, ai_config, fake_provider):
        TokenLimit.objects.create(company=company, user=employee, monthly_limit=100)
        TokenUsage.objects.create(user=employee, company=company, date=timezone.now().date(), total_tokens=100)

        response = employee_api.post(conversation_url(conversation, 'messages'), {'content': 'Hej'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'Przekroczono miesięczny limit tokenów'
        assert fake_provider['requests'] == []

    def test_company_limit_reached(self, employee_api, owner, company, conversation, ai_config, fake_provider):
        TokenLimit.objects.create(company=company, monthly_limit=50)
        TokenUsage.objects.create(user=owner, company=company, date=timezone.now().date(), total_tokens=60)

        response = employee_api.post(conversation_url(conversation, 'messages'), {'content': 'Hej'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_crossing_warning_threshold_notifies_user(self, employee_api, employee, company, conversation,
                                                       ai_config, fake_provider):
        TokenLimit.objects.create(company=company, user=employee, monthly_limit=100)
        TokenUsage.objects.create(user=employee, company=company, date=timezone.now().date(), total_tokens=70)

        employee_api.post(conversation_url(conversation, 'messages'), {'content': 'Hej'}, format='json')

        notification = Notification.objects.get(recipient=employee)
        assert notification.title == 'Zbliżasz się do limitu tokenów AI'
        assert notification.data['current_usage'] == 85


@pytest.mark.django_db
class TestUsage:

    @pytest.fixture
    def usage(self, company, owner, employee):
        today = timezone.now().date()
        TokenUsage.objects.create(user=employee, company=company, date=today, total_input_tokens=30,
                                  total_output_tokens=10, total_tokens=40, message_count=4)
        TokenUsage.objects.create(user=employee, company=company, date=today - datetime.timedelta(days=40),
                                  total_tokens=500)
        TokenUsage.objects.create(user=owner, company=company, date=today, total_tokens=7)

    def test_my_usage_respects_days(self, employee_api, usage):
        response = employee_api.get(reverse('ai-agent:usage-me'), {'days': 30})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['totals']['total_tokens'] == 40
        assert len(response.data['daily']) == 1

    def test_company_usage_for_owner(self, owner_api, employee, usage):
        response = owner_api.get(reverse('ai-agent:usage-company'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['totals']['total_tokens'] == 547
        assert response.data['users'][0]['user_id'] == str(employee.id)

    def test_company_usage_forbidden_for_employee(self, employee_api):
        response = employee_api.get(reverse('ai-agent:usage-company'))

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_all_usage_admin_only(self, admin_api, owner_api, company, usage):
        assert owner_api.get(reverse('ai-agent:usage-all')).status_code == status.HTTP_403_FORBIDDEN

        response = admin_api.get(reverse('ai-agent:usage-all'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data[0]['company_name'] == company.name
        assert response.data[0]['total_tokens'] == 547


@pytest.mark.django_db
class TestLimits:

    def test_admin_sets_company_limit_once(self, admin_api, company):
        url = reverse('ai-agent:limit-company', kwargs={'company_id': company.id})

        admin_api.put(url, {'monthly_limit': 1000}, format='json')
        response = admin_api.put(url, {'monthly_limit': 2000, 'warning_threshold_percentage': 90}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['monthly_limit'] == 2000
        assert TokenLimit.objects.filter(company=company, user__isnull=True).count() == 1

    def test_company_limit_for_system_company(self, admin_api, system_company):
        url = reverse('ai-agent:limit-company', kwargs={'company_id': system_company.id})

        response = admin_api.put(url, {'monthly_limit': 1000}, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_owner_cannot_set_company_limit(self, owner_api, company):
        url = reverse('ai-agent:limit-company', kwargs={'company_id': company.id})

        assert owner_api.put(url, {'monthly_limit': 1000}, format='json').status_code == status.HTTP_403_FORBIDDEN

    def test_owner_sets_user_limit(self, owner_api, owner, employee):
        url = reverse('ai-agent:limit-user', kwargs={'user_id': employee.id})

        response = owner_api.put(url, {'monthly_limit': 500}, format='json')

        assert response.status_code == status.HTTP_200_OK
        limit = TokenLimit.objects.get(user=employee)
        assert limit.set_by == owner

    def test_owner_cannot_limit_foreign_user(self, owner_api, other_owner):
        url = reverse('ai-agent:limit-user', kwargs={'user_id': other_owner.id})

        response = owner_api.put(url, {'monthly_limit': 500}, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_invalid_limit(self, owner_api, employee):
        url = reverse('ai-agent:limit-user', kwargs={'user_id': employee.id})

        response = owner_api.put(url, {'monthly_limit': 0}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_my_limits(self, employee_api, employee, company):
        TokenLimit.objects.create(company=company, user=employee, monthly_limit=200, warning_threshold_percentage=50)
        TokenUsage.objects.create(user=employee, company=company, date=timezone.now().date(), total_tokens=101)

        response = employee_api.get(reverse('ai-agent:limits-me'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['company_limit'] is None
        user_limit = response.data['user_limit']
        assert user_limit['current_usage'] == 101
        assert user_limit['usage_percentage'] == 51
        assert user_limit['is_warning'] is True
        assert user_limit['is_exceeded'] is False
