from django.db import models
import uuid


class ModulePermission(models.TextChoices):
    READ = 'read', 'Odczyt'
    WRITE = 'write', 'Zapis'
    DELETE = 'delete', 'Usuwanie'
    MANAGE = 'manage', 'Zarządzanie'


# Slugs of the modules shipped with the system
CLIENTS = 'clients'
TIME_TRACKING = 'time-tracking'
SETTLEMENTS = 'settlements'
AI_AGENT = 'ai-agent'
EMAIL_CLIENT = 'email-client'

DEFAULT_MODULES = [
    (CLIENTS, 'Klienci', 'Kartoteka klientów biura'),
    (TIME_TRACKING, 'Ewidencja czasu', 'Rejestracja czasu pracy'),
    (SETTLEMENTS, 'Rozliczenia', 'Miesięczne rozliczenia klientów'),
    (AI_AGENT, 'Asystent AI', 'Czat z asystentem AI'),
    (EMAIL_CLIENT, 'Poczta', 'Klient poczty email'),
]


class Module(models.Model):
    """Feature area that can be enabled per company."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    slug = models.SlugField(max_length=100, unique=True)
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'modules'
        ordering = ['name']

    def __str__(self):
        return self.slug


class CompanyModuleAccess(models.Model):
    """Module enabled for a company by an administrator."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    company = models.ForeignKey(
        'companies.Company',
        on_delete=models.CASCADE,
        related_name='module_access'
    )
    module = models.ForeignKey(
        Module,
        on_delete=models.CASCADE,
        related_name='company_access'
    )
    is_enabled = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'company_module_access'
        unique_together = [['company', 'module']]

    def __str__(self):
        return f"{self.company_id}:{self.module_id} ({'on' if self.is_enabled else 'off'})"


class UserModulePermission(models.Model):
    """Permissions an owner granted to an employee within a module."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='module_permissions'
    )
    module = models.ForeignKey(
        Module,
        on_delete=models.CASCADE,
        related_name='user_permissions'
    )
    permissions = models.JSONField(default=list)
    granted_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='granted_module_permissions'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'user_module_permissions'
        unique_together = [['user', 'module']]

    def __str__(self):
        return f"{self.user_id}:{self.module_id} {self.permissions}"
