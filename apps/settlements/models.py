from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
import uuid


class SettlementStatus(models.TextChoices):
    PENDING = 'PENDING', 'Oczekujące'
    IN_PROGRESS = 'IN_PROGRESS', 'W trakcie'
    COMPLETED = 'COMPLETED', 'Rozliczone'


class MonthlySettlement(models.Model):
    """Monthly bookkeeping of one client, optionally assigned to an employee."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    company = models.ForeignKey(
        'companies.Company',
        on_delete=models.CASCADE,
        related_name='settlements'
    )
    client = models.ForeignKey(
        'clients.Client',
        on_delete=models.CASCADE,
        related_name='settlements'
    )

    month = models.PositiveSmallIntegerField(validators=[MinValueValidator(1), MaxValueValidator(12)])
    year = models.PositiveSmallIntegerField(validators=[MinValueValidator(2000), MaxValueValidator(2100)])
    status = models.CharField(
        max_length=20,
        choices=SettlementStatus.choices,
        default=SettlementStatus.PENDING
    )

    # Assignee
    user = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='settlements'
    )
    assigned_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+'
    )

    notes = models.TextField(blank=True)
    invoice_count = models.PositiveIntegerField(default=0)
    documents_date = models.DateField(null=True, blank=True)
    priority = models.SmallIntegerField(default=0)
    deadline = models.DateField(null=True, blank=True)
    documents_complete = models.BooleanField(default=False)
    requires_attention = models.BooleanField(default=False)
    attention_reason = models.CharField(max_length=255, blank=True)

    settled_at = models.DateTimeField(null=True, blank=True)
    settled_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+'
    )

    # [{status, changed_at, changed_by_id, changed_by_email, notes}]
    status_history = models.JSONField(default=list, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'monthly_settlements'
        ordering = ['client__name']
        constraints = [
            models.UniqueConstraint(
                fields=['company', 'client', 'month', 'year'],
                name='unique_settlement_per_client_month',
            ),
        ]
        indexes = [
            models.Index(fields=['company', 'year', 'month'], name='settlements_period_idx'),
            models.Index(fields=['company', 'user'], name='settlements_assignee_idx'),
        ]

    def __str__(self):
        return f"{self.client_id} {self.month:02d}/{self.year}"


class SettlementComment(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    settlement = models.ForeignKey(MonthlySettlement, on_delete=models.CASCADE, related_name='comments')
    user = models.ForeignKey('accounts.User', on_delete=models.SET_NULL, null=True, related_name='+')
    content = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'settlement_comments'
        ordering = ['created_at']

    def __str__(self):
        return f"Comment on {self.settlement_id}"
