"""Recipient-side notification operations."""

from typing import Iterable, Optional
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet
from django.utils import timezone

from apps.accounts.models import User
from apps.notifications.models import Notification

from .exceptions import NotificationAccessDeniedError, NotificationNotFoundError


def _inbox(user: User, company_id: UUID) -> QuerySet:
    return Notification.objects.filter(recipient=user, company_id=company_id)


def list_notifications(*, user: User, company_id: UUID, filters: Optional[dict] = None) -> QuerySet:
    """
    Non-archived notifications of the user, newest first.

    Args:
        filters: Optional type, module_slug and is_read
    """
    filters = filters or {}
    qs = _inbox(user, company_id).filter(is_archived=False)

    if filters.get('type'):
        qs = qs.filter(type=filters['type'])
    if filters.get('module_slug'):
        qs = qs.filter(module_slug=filters['module_slug'])
    if filters.get('is_read') is not None:
        qs = qs.filter(is_read=filters['is_read'])

    return qs.select_related('actor').order_by('-created_at')


def list_archived(*, user: User, company_id: UUID) -> QuerySet:
    return _inbox(user, company_id).filter(is_archived=True).select_related('actor').order_by('-archived_at')


def unread_count(*, user: User, company_id: UUID) -> int:
    return _inbox(user, company_id).filter(is_read=False, is_archived=False).count()


def get_notification(*, user: User, company_id: UUID, notification_id: UUID) -> Notification:
    """
    Raises:
        NotificationNotFoundError: Unknown id or other company
        NotificationAccessDeniedError: Notification of another recipient
    """
    try:
        notification = Notification.objects.get(id=notification_id, company_id=company_id)
    except Notification.DoesNotExist:
        raise NotificationNotFoundError()

    if notification.recipient_id != user.id:
        raise NotificationAccessDeniedError()
    return notification


def mark_read(*, user: User, company_id: UUID, notification_id: UUID) -> Notification:
    notification = get_notification(user=user, company_id=company_id, notification_id=notification_id)
    if not notification.is_read:
        notification.is_read = True
        notification.read_at = timezone.now()
        notification.save(update_fields=['is_read', 'read_at'])
    return notification


def mark_unread(*, user: User, company_id: UUID, notification_id: UUID) -> Notification:
    notification = get_notification(user=user, company_id=company_id, notification_id=notification_id)
    notification.is_read = False
    notification.read_at = None
    notification.save(update_fields=['is_read', 'read_at'])
    return notification


def mark_all_read(*, user: User, company_id: UUID) -> int:
    return _inbox(user, company_id).filter(is_read=False).update(is_read=True, read_at=timezone.now())


def archive(*, user: User, company_id: UUID, notification_id: UUID) -> Notification:
    notification = get_notification(user=user, company_id=company_id, notification_id=notification_id)
    notification.is_archived = True
    notification.archived_at = timezone.now()
    notification.save(update_fields=['is_archived', 'archived_at'])
    return notification


def restore(*, user: User, company_id: UUID, notification_id: UUID) -> Notification:
    notification = get_notification(user=user, company_id=company_id, notification_id=notification_id)
    notification.is_archived = False
    notification.archived_at = None
    notification.save(update_fields=['is_archived', 'archived_at'])
    return notification


@transaction.atomic
def archive_many(*, user: User, company_id: UUID, notification_ids: Iterable[UUID]) -> int:
    """Archive the user's notifications among ``notification_ids``; others are ignored."""
    return (
        _inbox(user, company_id)
        .filter(id__in=list(notification_ids), is_archived=False)
        .update(is_archived=True, archived_at=timezone.now())
    )


def delete_notification(*, user: User, company_id: UUID, notification_id: UUID) -> None:
    get_notification(user=user, company_id=company_id, notification_id=notification_id).delete()
