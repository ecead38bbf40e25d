import pytest
from django.urls import reverse
from rest_framework import status

from apps.clients.models import ChangeAction, Client, ClientChangeLog, ClientIcon, ClientIconAssignment
from apps.modules.models import CLIENTS
from apps.notifications.models import Notification


@pytest.mark.django_db
class TestClientAccess:
    """Module and tenant checks on /api/modules/clients/"""

    def test_module_disabled(self, auth_client, owner, modules):
        response = auth_client(owner).get(reverse('clients:client-list'))

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_employee_without_grant(self, auth_client, employee, clients_enabled):
        response = auth_client(employee).get(reverse('clients:client-list'))

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_employee_read_only(self, auth_client, employee, clients_enabled, grant):
        grant(employee, CLIENTS, ['read'])
        api = auth_client(employee)

        assert api.get(reverse('clients:client-list')).status_code == status.HTTP_200_OK
        response = api.post(reverse('clients:client-list'), {'name': 'Nowy Klient'})
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_other_company_client_is_404(self, owner_client, foreign_client):
        url = reverse('clients:client-detail', kwargs={'pk': foreign_client.id})
        response = owner_client.get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['error'] == 'Klient nie został znaleziony.'


@pytest.mark.django_db
class TestClientCrud:

    def test_create(self, owner_client, owner, company, other_employee):
        response = owner_client.post(reverse('clients:client-list'), {
            'name': 'Nowak Sp. z o.o.',
            'nip': '5260001234',
            'email': 'kontakt@nowak.pl',
            'employment_type': 'DG',
            'vat_status': 'VAT_MONTHLY',
        })

        assert response.status_code == status.HTTP_201_CREATED
        client = Client.objects.get(id=response.data['id'])
        assert client.company_id == company.id
        assert client.created_by == owner
        assert ClientChangeLog.objects.filter(client=client, action=ChangeAction.CREATE).exists()
        # Colleagues get notified, the author does not
        assert Notification.objects.filter(recipient=other_employee).count() == 1
        assert not Notification.objects.filter(recipient=owner).exists()

    def test_create_invalid_nip(self, owner_client):
        response = owner_client.post(reverse('clients:client-list'), {'name': 'Firma', 'nip': '123'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'nip' in response.data

    def test_create_short_name(self, owner_client):
        response = owner_client.post(reverse('clients:client-list'), {'name': 'A'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_list_filters(self, owner_client, company, client_obj):
        Client.objects.create(company=company, name='Zielony Ogród', vat_status='VAT_QUARTERLY')
        Client.objects.create(company=company, name='Stary Klient', is_active=False)

        response = owner_client.get(reverse('clients:client-list'))
        assert response.data['count'] == 2

        response = owner_client.get(reverse('clients:client-list'), {'vat_status': 'VAT_QUARTERLY'})
        assert [c['name'] for c in response.data['results']] == ['Zielony Ogród']

        response = owner_client.get(reverse('clients:client-list'), {'search': '12345'})
        assert [c['name'] for c in response.data['results']] == ['Kowalski Consulting']

        response = owner_client.get(reverse('clients:client-list'), {'is_active': 'false'})
        assert [c['name'] for c in response.data['results']] == ['Stary Klient']

    def test_update_logs_diff(self, owner_client, client_obj):
        url = reverse('clients:client-detail', kwargs={'pk': client_obj.id})
        response = owner_client.patch(url, {'phone': '600100200'})

        assert response.status_code == status.HTTP_200_OK
        entry = ClientChangeLog.objects.get(client=client_obj, action=ChangeAction.UPDATE)
        assert entry.changes == [{'field': 'phone', 'old': '', 'new': '600100200'}]

    def test_soft_delete_and_restore(self, owner_client, client_obj):
        url = reverse('clients:client-detail', kwargs={'pk': client_obj.id})
        assert owner_client.delete(url).status_code == status.HTTP_204_NO_CONTENT
        client_obj.refresh_from_db()
        assert client_obj.is_active is False

        response = owner_client.post(reverse('clients:client-restore', kwargs={'pk': client_obj.id}))
        assert response.status_code == status.HTTP_200_OK
        client_obj.refresh_from_db()
        assert client_obj.is_active is True

    def test_restore_active_client_is_404(self, owner_client, client_obj):
        response = owner_client.post(reverse('clients:client-restore', kwargs={'pk': client_obj.id}))

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_hard_delete_requires_owner(self, auth_client, employee, client_obj, clients_enabled, grant):
        grant(employee, CLIENTS, ['read', 'write', 'delete'])
        url = reverse('clients:client-hard', kwargs={'pk': client_obj.id})

        assert auth_client(employee).delete(url).status_code == status.HTTP_403_FORBIDDEN
        assert Client.objects.filter(id=client_obj.id).exists()

    def test_hard_delete(self, owner_client, client_obj):
        url = reverse('clients:client-hard', kwargs={'pk': client_obj.id})
        response = owner_client.delete(url)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not Client.objects.filter(id=client_obj.id).exists()

    def test_changelog(self, owner_client, client_obj):
        owner_client.patch(reverse('clients:client-detail', kwargs={'pk': client_obj.id}), {'name': 'Kowalski SA'})
        response = owner_client.get(reverse('clients:client-changelog', kwargs={'pk': client_obj.id}))

        assert response.status_code == status.HTTP_200_OK
        assert response.data[0]['action'] == ChangeAction.UPDATE


@pytest.mark.django_db
class TestClientBulk:

    def test_bulk_delete_skips_foreign(self, owner_client, client_obj, foreign_client):
        response = owner_client.patch(reverse('clients:client-bulk-delete'), {
            'client_ids': [str(client_obj.id), str(foreign_client.id)],
        })

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {'affected': 1, 'requested': 2}
        foreign_client.refresh_from_db()
        assert foreign_client.is_active is True

    def test_bulk_restore(self, owner_client, company):
        client = Client.objects.create(company=company, name='Uśpiony', is_active=False)
        response = owner_client.patch(reverse('clients:client-bulk-restore'), {'client_ids': [str(client.id)]})

        assert response.data['affected'] == 1

    def test_bulk_edit(self, owner_client, client_obj):
        response = owner_client.patch(reverse('clients:client-bulk-edit'), {
            'client_ids': [str(client_obj.id)],
            'changes': {'tax_scheme': 'LUMP_SUM', 'receive_email_copy': True},
        })

        assert response.status_code == status.HTTP_200_OK
        client_obj.refresh_from_db()
        assert client_obj.tax_scheme == 'LUMP_SUM'
        assert client_obj.receive_email_copy is True

    def test_bulk_empty_ids(self, owner_client):
        response = owner_client.patch(reverse('clients:client-bulk-delete'), {'client_ids': []})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_check_duplicates(self, owner_client, client_obj, foreign_client):
        response = owner_client.post(reverse('clients:client-check-duplicates'), {
            'nip': '1234567890',
            'email': 'BIURO@kowalski.pl',
        })

        assert [c['id'] for c in response.data['by_nip']] == [str(client_obj.id)]
        assert len(response.data['by_email']) == 1

        response = owner_client.post(reverse('clients:client-check-duplicates'), {
            'nip': '1234567890',
            'exclude_id': str(client_obj.id),
        })
        assert response.data['by_nip'] == []

    def test_statistics(self, owner_client, company, client_obj):
        Client.objects.create(company=company, name='Nieaktywny', is_active=False, vat_status='NO')
        client_obj.vat_status = 'VAT_MONTHLY'
        client_obj.save()

        response = owner_client.get(reverse('clients:client-statistics'))

        assert response.data['total'] == 2
        assert response.data['active'] == 1
        assert response.data['inactive'] == 1
        assert response.data['by_vat_status']['VAT_MONTHLY'] == 1
        assert response.data['by_vat_status']['NO'] == 0


@pytest.mark.django_db
class TestClientIcons:

    def test_create_icon(self, owner_client):
        response = owner_client.post(reverse('clients:icon-list'), {
            'name': 'Pilne',
            'icon_type': 'emoji',
            'icon_value': '🔥',
        })

        assert response.status_code == status.HTTP_201_CREATED

    def test_create_icon_requires_value(self, owner_client):
        response = owner_client.post(reverse('clients:icon-list'), {'name': 'Pusta', 'icon_type': 'lucide'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_duplicate_icon_name(self, owner_client, icon):
        response = owner_client.post(reverse('clients:icon-list'), {'name': 'vip', 'icon_value': 'crown'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_assign_and_remove(self, owner_client, client_obj, icon):
        url = reverse('clients:client-icons', kwargs={'pk': client_obj.id})
        response = owner_client.post(url, {'icon_id': str(icon.id)})

        assert response.status_code == status.HTTP_201_CREATED
        assert [i['name'] for i in response.data] == ['VIP']

        # Assigning twice keeps one assignment
        owner_client.post(url, {'icon_id': str(icon.id)})
        assert ClientIconAssignment.objects.filter(client=client_obj).count() == 1

        remove_url = reverse('clients:client-remove-icon', kwargs={'pk': client_obj.id, 'icon_id': icon.id})
        assert owner_client.delete(remove_url).status_code == status.HTTP_204_NO_CONTENT
        assert owner_client.delete(remove_url).status_code == status.HTTP_404_NOT_FOUND

    def test_set_icons_replaces(self, owner_client, company, client_obj, icon):
        other = ClientIcon.objects.create(company=company, name='Nowy', icon_value='sparkles')
        url = reverse('clients:client-icons', kwargs={'pk': client_obj.id})
        owner_client.post(url, {'icon_id': str(icon.id)})

        response = owner_client.put(url, {'icon_ids': [str(other.id)]})

        assert [i['name'] for i in response.data] == ['Nowy']

    def test_deactivated_icon_hidden(self, owner_client, client_obj, icon):
        ClientIconAssignment.objects.create(client=client_obj, icon=icon)
        owner_client.delete(reverse('clients:icon-detail', kwargs={'pk': icon.id}))

        response = owner_client.get(reverse('clients:client-icons', kwargs={'pk': client_obj.id}))

        assert response.data == []
