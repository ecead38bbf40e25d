"""Services for notifications."""

from .exceptions import (
    NotificationNotFoundError,
    NotificationAccessDeniedError,
    TooManyRecipientsError,
)
from .dispatcher import (
    MAX_RECIPIENTS,
    company_group,
    notify,
    push_notifications,
    user_group,
)
from .inbox import (
    list_notifications,
    list_archived,
    unread_count,
    get_notification,
    mark_read,
    mark_unread,
    mark_all_read,
    archive,
    restore,
    archive_many,
    delete_notification,
)

__all__ = [
    # Exceptions
    'NotificationNotFoundError',
    'NotificationAccessDeniedError',
    'TooManyRecipientsError',
    # Dispatch
    'MAX_RECIPIENTS',
    'company_group',
    'notify',
    'push_notifications',
    'user_group',
    # Inbox
    'list_notifications',
    'list_archived',
    'unread_count',
    'get_notification',
    'mark_read',
    'mark_unread',
    'mark_all_read',
    'archive',
    'restore',
    'archive_many',
    'delete_notification',
]
