from django.db import models
import uuid


class NotificationType(models.TextChoices):
    CLIENT_CREATED = 'client.created', 'Nowy klient'
    CLIENT_DELETE_REQUESTED = 'client.delete_requested', 'Żądanie usunięcia klienta'
    CLIENT_DELETE_APPROVED = 'client.delete_approved', 'Zatwierdzono usunięcie klienta'
    CLIENT_DELETE_REJECTED = 'client.delete_rejected', 'Odrzucono usunięcie klienta'
    SETTLEMENT_ASSIGNED = 'settlement.assigned', 'Przypisano rozliczenie'
    TIME_ENTRY_SUBMITTED = 'time_entry.submitted', 'Wpis czasu do akceptacji'
    TIME_ENTRY_APPROVED = 'time_entry.approved', 'Wpis czasu zaakceptowany'
    TIME_ENTRY_REJECTED = 'time_entry.rejected', 'Wpis czasu odrzucony'
    SYSTEM = 'system', 'Systemowe'


# Type prefix -> module the notification belongs to
TYPE_PREFIX_MODULES = {
    'client': 'clients',
    'settlement': 'settlements',
    'time_entry': 'time-tracking',
}


def module_slug_for(notification_type: str) -> str:
    prefix = notification_type.split('.', 1)[0]
    return TYPE_PREFIX_MODULES.get(prefix, '')


class Notification(models.Model):
    """In-app notification for one recipient."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    company = models.ForeignKey(
        'companies.Company',
        on_delete=models.CASCADE,
        related_name='notifications'
    )
    recipient = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='notifications'
    )
    actor = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+'
    )

    type = models.CharField(max_length=50, choices=NotificationType.choices)
    module_slug = models.CharField(max_length=100, blank=True)
    title = models.CharField(max_length=255)
    message = models.TextField()
    data = models.JSONField(default=dict, blank=True)

    is_read = models.BooleanField(default=False)
    read_at = models.DateTimeField(null=True, blank=True)
    is_archived = models.BooleanField(default=False)
    archived_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'notifications'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['recipient', 'is_read'], name='notif_recipient_read_idx'),
            models.Index(fields=['recipient', 'is_archived', '-created_at'], name='notif_recipient_arch_idx'),
        ]

    def __str__(self):
        return f"{self.type} -> {self.recipient_id}"
