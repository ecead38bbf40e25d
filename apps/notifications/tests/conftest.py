import pytest

from apps.notifications.models import Notification, NotificationType


@pytest.fixture
def make_notification(company):
    def _make(recipient, **kwargs):
        defaults = {
            'company': company,
            'type': NotificationType.SYSTEM,
            'title': 'Komunikat',
            'message': 'Treść komunikatu',
        }
        defaults.update(kwargs)
        return Notification.objects.create(recipient=recipient, **defaults)
    return _make
