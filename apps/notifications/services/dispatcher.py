"""
Notification dispatcher.

Rows are written inside the caller's transaction; the websocket push happens
only after commit so clients never see a notification that was rolled back.
"""

import logging
from typing import Iterable, List, Optional
from uuid import UUID

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.db import transaction

from apps.notifications.models import Notification, module_slug_for
from apps.notifications.serializers import NotificationSerializer

from .exceptions import TooManyRecipientsError

logger = logging.getLogger(__name__)

MAX_RECIPIENTS = 100


def user_group(user_id) -> str:
    return f'user_{user_id}'


def company_group(company_id) -> str:
    return f'company_{company_id}'


def push_notifications(notifications: Iterable[Notification]) -> None:
    """Send notifications to the recipients' websocket groups. Failures are logged."""
    layer = get_channel_layer()
    if layer is None:
        return

    for notification in notifications:
        try:
            async_to_sync(layer.group_send)(
                user_group(notification.recipient_id),
                {
                    'type': 'notification.message',
                    'notification': dict(NotificationSerializer(notification).data),
                },
            )
        except Exception:
            logger.exception('Websocket push of notification %s failed', notification.id)


def notify(
    *,
    company_id: UUID,
    recipients: Iterable,
    type: str,
    title: str,
    message: str,
    data: Optional[dict] = None,
    actor=None
) -> List[Notification]:
    """
    Create one notification per recipient and push them after commit.

    Args:
        company_id: Company the notifications belong to
        recipients: Users or user ids; duplicates are ignored
        type: NotificationType value
        actor: User who triggered the event (optional)

    Returns:
        Created notifications

    Raises:
        TooManyRecipientsError: More than MAX_RECIPIENTS recipients
    """
    recipient_ids = list(dict.fromkeys(getattr(r, 'id', r) for r in recipients))
    if not recipient_ids:
        return []
    if len(recipient_ids) > MAX_RECIPIENTS:
        raise TooManyRecipientsError(
            f'Powiadomienie może mieć maksymalnie {MAX_RECIPIENTS} odbiorców.'
        )

    notifications = Notification.objects.bulk_create([
        Notification(
            company_id=company_id,
            recipient_id=recipient_id,
            actor=actor,
            type=type,
            module_slug=module_slug_for(type),
            title=title,
            message=message,
            data=data or {},
        )
        for recipient_id in recipient_ids
    ])

    transaction.on_commit(lambda: push_notifications(notifications))
    logger.info('Notification %s sent to %d recipient(s)', type, len(notifications))
    return notifications
