import pytest
from django.core import mail
from django.urls import reverse
from rest_framework import status

from apps.common.encryption import decrypt_secret
from apps.email_config.models import EmailConfiguration
from apps.modules.models import EMAIL_CLIENT


@pytest.mark.django_db
class TestUserScope:
    """Tests for /api/email-config/user/"""

    def test_missing_is_404(self, auth_client, employee):
        response = auth_client(employee).get(reverse('email-config:user-config'))

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_create_encrypts_passwords(self, auth_client, employee, config_payload):
        response = auth_client(employee).post(reverse('email-config:user-config'), config_payload)

        assert response.status_code == status.HTTP_201_CREATED
        assert 'smtp_password' not in response.data
        assert response.data['has_smtp_password'] is True

        config = EmailConfiguration.objects.get(user=employee)
        assert config.smtp_password != 'smtp-secret'
        assert decrypt_secret(config.smtp_password) == 'smtp-secret'

    def test_duplicate_is_409(self, auth_client, employee, config_payload):
        api = auth_client(employee)
        api.post(reverse('email-config:user-config'), config_payload)

        response = api.post(reverse('email-config:user-config'), config_payload)

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_update_keeps_password_when_empty(self, auth_client, employee, config_payload):
        api = auth_client(employee)
        api.post(reverse('email-config:user-config'), config_payload)

        response = api.put(reverse('email-config:user-config'), {'smtp_host': 'smtp2.firma.pl', 'smtp_password': ''})

        assert response.status_code == status.HTTP_200_OK
        config = EmailConfiguration.objects.get(user=employee)
        assert config.smtp_host == 'smtp2.firma.pl'
        assert decrypt_secret(config.smtp_password) == 'smtp-secret'

    def test_delete(self, auth_client, employee, config_payload):
        api = auth_client(employee)
        api.post(reverse('email-config:user-config'), config_payload)

        assert api.delete(reverse('email-config:user-config')).status_code == status.HTTP_204_NO_CONTENT
        assert not EmailConfiguration.objects.filter(user=employee).exists()


@pytest.mark.django_db
class TestCompanyScope:

    def test_owner_creates(self, auth_client, owner, company, config_payload):
        response = auth_client(owner).post(reverse('email-config:company-config'), config_payload)

        assert response.status_code == status.HTTP_201_CREATED
        assert EmailConfiguration.objects.filter(company=company).exists()

    def test_employee_reads_but_cannot_write(self, auth_client, employee, company_config, config_payload):
        api = auth_client(employee)

        assert api.get(reverse('email-config:company-config')).status_code == status.HTTP_200_OK
        response = api.put(reverse('email-config:company-config'), {'smtp_host': 'x'})
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_owner_sends(self, auth_client, owner, company_config):
        response = auth_client(owner).post(reverse('email-config:company-send'), {
            'to': 'klient@example.com',
            'subject': 'Dokumenty',
            'text': 'Prosimy o dokumenty.',
        })

        assert response.status_code == status.HTTP_200_OK
        assert len(mail.outbox) == 1
        assert mail.outbox[0].from_email == 'Biuro Test <biuro@firma.pl>'
        assert mail.outbox[0].to == ['klient@example.com']

    def test_send_requires_body(self, auth_client, owner, company_config):
        response = auth_client(owner).post(reverse('email-config:company-send'), {
            'to': ['klient@example.com'],
            'subject': 'Pusta',
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_employee_send_needs_email_module(self, auth_client, employee, company, company_config,
                                              enable_module, grant):
        api = auth_client(employee)
        payload = {'to': ['klient@example.com'], 'subject': 'Hej', 'text': 'Treść'}

        assert api.post(reverse('email-config:company-send'), payload).status_code == status.HTTP_403_FORBIDDEN

        enable_module(company, EMAIL_CLIENT)
        grant(employee, EMAIL_CLIENT, ['read', 'write'])
        assert api.post(reverse('email-config:company-send'), payload).status_code == status.HTTP_200_OK

    def test_inbox(self, auth_client, owner, company_config, fake_imap):
        response = auth_client(owner).get(reverse('email-config:company-inbox'), {'limit': 5})

        assert response.status_code == status.HTTP_200_OK
        assert [m['subject'] for m in response.data] == ['Faktura 2', 'Faktura 1']
        assert response.data[0]['from'] == 'Jan Klient <jan@example.com>'
        assert response.data[0]['text'].startswith('W zalaczniku faktura.')


@pytest.mark.django_db
class TestSystemAdminScope:

    def test_admin_only(self, auth_client, owner, admin_user, config_payload):
        url = reverse('email-config:system-admin-config')

        assert auth_client(owner).post(url, config_payload).status_code == status.HTTP_403_FORBIDDEN
        assert auth_client(admin_user).post(url, config_payload).status_code == status.HTTP_201_CREATED


@pytest.mark.django_db
class TestConnectionChecks:

    def test_smtp_check(self, auth_client, owner, config_payload):
        payload = {k: v for k, v in config_payload.items() if k.startswith('smtp_')}

        response = auth_client(owner).post(reverse('email-config:test-smtp'), payload)

        assert response.data['success'] is True

    def test_imap_check_bad_password(self, auth_client, owner, config_payload, fake_imap):
        payload = {k: v for k, v in config_payload.items() if k.startswith('imap_')}
        payload['imap_password'] = 'wrong'

        response = auth_client(owner).post(reverse('email-config:test-imap'), payload)

        assert response.data == {
            'success': False,
            'message': 'Błąd uwierzytelniania - sprawdź dane logowania',
        }

    def test_imap_check_throttled(self, auth_client, owner, config_payload, fake_imap):
        client = auth_client(owner)
        payload = {k: v for k, v in config_payload.items() if k.startswith('imap_')}
        for _ in range(5):
            assert client.post(reverse('email-config:test-imap'), payload).status_code == status.HTTP_200_OK

        response = client.post(reverse('email-config:test-imap'), payload)

        assert response.status_code == status.HTTP_429_TOO_MANY_REQUESTS
