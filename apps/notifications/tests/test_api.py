import pytest
from django.urls import reverse
from rest_framework import status

from apps.notifications.models import Notification, NotificationType


@pytest.mark.django_db
class TestNotificationList:
    """Tests for GET /api/notifications/"""

    def test_only_own_and_not_archived(self, auth_client, employee, other_employee, make_notification):
        mine = make_notification(employee)
        make_notification(employee, is_archived=True)
        make_notification(other_employee)

        response = auth_client(employee).get(reverse('notifications:notification-list'))

        assert response.status_code == status.HTTP_200_OK
        assert [n['id'] for n in response.data['results']] == [str(mine.id)]

    def test_filters(self, auth_client, employee, make_notification):
        make_notification(employee, type=NotificationType.CLIENT_CREATED, module_slug='clients')
        make_notification(employee, is_read=True)
        api = auth_client(employee)

        response = api.get(reverse('notifications:notification-list'), {'module_slug': 'clients'})
        assert response.data['count'] == 1

        response = api.get(reverse('notifications:notification-list'), {'is_read': 'true'})
        assert response.data['count'] == 1

        response = api.get(reverse('notifications:notification-list'), {'type': 'unknown'})
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_unread_count(self, auth_client, employee, make_notification):
        make_notification(employee)
        make_notification(employee)
        make_notification(employee, is_read=True)
        make_notification(employee, is_archived=True)

        response = auth_client(employee).get(reverse('notifications:notification-unread-count'))

        assert response.data == {'count': 2}

    def test_archived(self, auth_client, employee, make_notification):
        archived = make_notification(employee, is_archived=True)
        make_notification(employee)

        response = auth_client(employee).get(reverse('notifications:notification-archived'))

        assert [n['id'] for n in response.data['results']] == [str(archived.id)]


@pytest.mark.django_db
class TestNotificationActions:

    def test_other_recipient_is_403(self, auth_client, employee, other_employee, make_notification):
        notification = make_notification(other_employee)
        url = reverse('notifications:notification-detail', kwargs={'pk': notification.id})

        response = auth_client(employee).get(url)

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_other_company_is_404(self, auth_client, employee, other_owner, other_company, make_notification):
        notification = make_notification(other_owner, company=other_company)
        url = reverse('notifications:notification-detail', kwargs={'pk': notification.id})

        assert auth_client(employee).get(url).status_code == status.HTTP_404_NOT_FOUND

    def test_read_and_unread(self, auth_client, employee, make_notification):
        notification = make_notification(employee)
        api = auth_client(employee)

        response = api.patch(reverse('notifications:notification-read', kwargs={'pk': notification.id}))
        assert response.data['is_read'] is True
        assert response.data['read_at'] is not None

        response = api.patch(reverse('notifications:notification-unread', kwargs={'pk': notification.id}))
        assert response.data['is_read'] is False
        assert response.data['read_at'] is None

    def test_mark_all_read(self, auth_client, employee, other_employee, make_notification):
        make_notification(employee)
        make_notification(employee)
        foreign = make_notification(other_employee)

        response = auth_client(employee).post(reverse('notifications:notification-mark-all-read'))

        assert response.data == {'count': 2}
        foreign.refresh_from_db()
        assert foreign.is_read is False

    def test_archive_and_restore(self, auth_client, employee, make_notification):
        notification = make_notification(employee)
        api = auth_client(employee)

        api.patch(reverse('notifications:notification-archive', kwargs={'pk': notification.id}))
        notification.refresh_from_db()
        assert notification.is_archived is True
        assert notification.archived_at is not None

        api.patch(reverse('notifications:notification-restore', kwargs={'pk': notification.id}))
        notification.refresh_from_db()
        assert notification.is_archived is False

    def test_archive_multiple_ignores_foreign(self, auth_client, employee, other_employee, make_notification):
        first = make_notification(employee)
        second = make_notification(employee)
        foreign = make_notification(other_employee)

        response = auth_client(employee).patch(reverse('notifications:notification-archive-multiple'), {
            'ids': [str(first.id), str(second.id), str(foreign.id)],
        })

        assert response.data == {'count': 2}
        foreign.refresh_from_db()
        assert foreign.is_archived is False

    def test_delete(self, auth_client, employee, make_notification):
        notification = make_notification(employee)
        url = reverse('notifications:notification-detail', kwargs={'pk': notification.id})

        assert auth_client(employee).delete(url).status_code == status.HTTP_204_NO_CONTENT
        assert not Notification.objects.filter(id=notification.id).exists()
