from django.db import models
import uuid


SYSTEM_COMPANY_NAME = 'System Admin'


class Company(models.Model):
    """
    Accounting office (tenant).

    Every business record is scoped to one company. ADMIN users belong to the
    single system company.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)

    owner = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='owned_companies'
    )

    is_system_company = models.BooleanField(default=False)
    is_active = models.BooleanField(default=True)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'companies'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['is_system_company'], name='companies_system_idx'),
            models.Index(fields=['is_active'], name='companies_active_idx'),
        ]

    def __str__(self):
        return self.name
