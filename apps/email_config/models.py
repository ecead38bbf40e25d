from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.db.models import Q
import uuid


class EmailConfiguration(models.Model):
    """
    SMTP/IMAP mailbox settings.

    Belongs either to a single user or to a company, never both.
    Passwords are stored encrypted (see apps.common.encryption).
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.OneToOneField(
        'accounts.User',
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='email_configuration'
    )
    company = models.OneToOneField(
        'companies.Company',
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='email_configuration'
    )

    display_name = models.CharField(max_length=255, blank=True)

    smtp_host = models.CharField(max_length=255)
    smtp_port = models.PositiveIntegerField(validators=[MinValueValidator(1), MaxValueValidator(65535)])
    smtp_secure = models.BooleanField(default=True)
    smtp_user = models.CharField(max_length=255)
    smtp_password = models.TextField()

    imap_host = models.CharField(max_length=255)
    imap_port = models.PositiveIntegerField(validators=[MinValueValidator(1), MaxValueValidator(65535)])
    imap_tls = models.BooleanField(default=True)
    imap_user = models.CharField(max_length=255)
    imap_password = models.TextField()

    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'email_configurations'
        constraints = [
            models.CheckConstraint(
                check=(
                    Q(user__isnull=False, company__isnull=True)
                    | Q(user__isnull=True, company__isnull=False)
                ),
                name='email_config_single_owner',
            ),
        ]

    def __str__(self):
        owner = self.user_id or self.company_id
        return f"{self.smtp_user} ({owner})"
