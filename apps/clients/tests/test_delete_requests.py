import pytest
from django.urls import reverse
from rest_framework import status

from apps.clients.models import (
    ChangeAction,
    ClientChangeLog,
    ClientDeleteRequest,
    DeleteRequestStatus,
)
from apps.notifications.models import Notification, NotificationType


def request_url(delete_request, name='delete-request-detail'):
    return reverse(f'clients:{name}', kwargs={'pk': delete_request.id})


@pytest.fixture
def pending_request(company, client_obj, employee):
    return ClientDeleteRequest.objects.create(
        company=company,
        client=client_obj,
        requested_by=employee,
        reason='Klient zakończył działalność',
    )


@pytest.mark.django_db
class TestCreateDeleteRequest:
    """Tests for POST /api/modules/clients/{id}/delete-request/"""

    def test_employee_creates_request(self, staff_client, employee, owner, client_obj):
        url = reverse('clients:client-delete-request', kwargs={'pk': client_obj.id})
        response = staff_client.post(url, {'reason': 'Koniec współpracy'})

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['status'] == DeleteRequestStatus.PENDING
        assert response.data['reason'] == 'Koniec współpracy'
        assert response.data['client_id'] == str(client_obj.id)
        assert response.data['requested_by']['id'] == str(employee.id)
        # Owners are told, the client stays active until approval
        notification = Notification.objects.get(recipient=owner)
        assert notification.type == NotificationType.CLIENT_DELETE_REQUESTED
        client_obj.refresh_from_db()
        assert client_obj.is_active is True

    def test_duplicate_pending_request_is_409(self, staff_client, client_obj, pending_request):
        url = reverse('clients:client-delete-request', kwargs={'pk': client_obj.id})
        response = staff_client.post(url, {'reason': 'Jeszcze raz'})

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data['code'] == 'delete_request_exists'

    def test_unknown_client_is_404(self, staff_client, foreign_client):
        url = reverse('clients:client-delete-request', kwargs={'pk': foreign_client.id})
        response = staff_client.post(url, {})

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['error'] == 'Klient nie został znaleziony.'

    def test_requires_write_permission(self, auth_client, employee, clients_enabled, grant, client_obj):
        grant(employee, 'clients', ['read'])
        url = reverse('clients:client-delete-request', kwargs={'pk': client_obj.id})

        response = auth_client(employee).post(url, {})

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_requires_authentication(self, api_client, client_obj):
        url = reverse('clients:client-delete-request', kwargs={'pk': client_obj.id})

        assert api_client.post(url, {}).status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestListDeleteRequests:

    def test_pending_and_my_requests(self, owner_client, staff_client, pending_request, client_obj, company):
        ClientDeleteRequest.objects.create(
            company=company, client=client_obj, status=DeleteRequestStatus.REJECTED,
        )

        pending = owner_client.get(reverse('clients:delete-request-pending'))
        mine = staff_client.get(reverse('clients:delete-request-my-requests'))
        rejected = owner_client.get(reverse('clients:delete-request-list'), {'status': 'REJECTED'})

        assert [r['id'] for r in pending.data] == [str(pending_request.id)]
        assert [r['id'] for r in mine.data] == [str(pending_request.id)]
        assert [r['status'] for r in rejected.data] == ['REJECTED']

    def test_other_company_request_is_404(self, auth_client, other_owner, other_company, enable_module, pending_request):
        enable_module(other_company, 'clients')

        response = auth_client(other_owner).get(request_url(pending_request))

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['code'] == 'delete_request_not_found'

    def test_module_required(self, auth_client, owner, modules):
        response = auth_client(owner).get(reverse('clients:delete-request-list'))

        assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.django_db
class TestProcessDeleteRequest:

    def test_owner_approves(self, owner_client, owner, employee, pending_request, client_obj):
        response = owner_client.post(request_url(pending_request, 'delete-request-approve'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['deleted_client']['id'] == str(client_obj.id)
        assert response.data['request']['status'] == DeleteRequestStatus.APPROVED
        assert response.data['request']['processed_by']['id'] == str(owner.id)
        assert response.data['request']['processed_at'] is not None
        client_obj.refresh_from_db()
        assert client_obj.is_active is False
        assert ClientChangeLog.objects.filter(client=client_obj, action=ChangeAction.DELETE).exists()
        assert Notification.objects.filter(
            recipient=employee, type=NotificationType.CLIENT_DELETE_APPROVED
        ).exists()
        # The client no longer shows up in normal queries
        detail = owner_client.get(reverse('clients:client-list'))
        assert detail.data['count'] == 0

    def test_employee_cannot_approve(self, staff_client, pending_request, client_obj):
        response = staff_client.post(request_url(pending_request, 'delete-request-approve'))

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data['code'] == 'delete_request_forbidden'
        client_obj.refresh_from_db()
        assert client_obj.is_active is True

    def test_owner_rejects(self, owner_client, employee, pending_request, client_obj):
        response = owner_client.post(
            request_url(pending_request, 'delete-request-reject'),
            {'rejection_reason': 'Klient nadal aktywny'},
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data['status'] == DeleteRequestStatus.REJECTED
        assert response.data['rejection_reason'] == 'Klient nadal aktywny'
        client_obj.refresh_from_db()
        assert client_obj.is_active is True
        assert Notification.objects.filter(
            recipient=employee, type=NotificationType.CLIENT_DELETE_REJECTED
        ).exists()

    def test_processed_request_cannot_change(self, owner_client, pending_request):
        owner_client.post(request_url(pending_request, 'delete-request-reject'), {})

        response = owner_client.post(request_url(pending_request, 'delete-request-approve'))

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['code'] == 'delete_request_processed'

    def test_new_request_allowed_after_rejection(self, owner_client, staff_client, pending_request, client_obj):
        owner_client.post(request_url(pending_request, 'delete-request-reject'), {})
        url = reverse('clients:client-delete-request', kwargs={'pk': client_obj.id})

        response = staff_client.post(url, {'reason': 'Ponownie'})

        assert response.status_code == status.HTTP_201_CREATED


@pytest.mark.django_db
class TestCancelDeleteRequest:

    def test_requester_cancels(self, staff_client, pending_request, client_obj):
        response = staff_client.delete(request_url(pending_request, 'delete-request-cancel'))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['message'] == 'Żądanie usunięcia zostało anulowane'
        assert not ClientDeleteRequest.objects.filter(id=pending_request.id).exists()
        client_obj.refresh_from_db()
        assert client_obj.is_active is True

    def test_other_employee_cannot_cancel(self, auth_client, other_employee, grant, clients_enabled, pending_request):
        grant(other_employee, 'clients', ['read', 'write'])

        response = auth_client(other_employee).delete(request_url(pending_request, 'delete-request-cancel'))

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data['error'] == 'Możesz anulować tylko własne żądania.'

    def test_owner_can_cancel_any(self, owner_client, pending_request):
        response = owner_client.delete(request_url(pending_request, 'delete-request-cancel'))

        assert response.status_code == status.HTTP_200_OK
