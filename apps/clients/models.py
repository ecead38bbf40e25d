from django.core.validators import MinLengthValidator, RegexValidator
from django.db import models
import uuid


class EmploymentType(models.TextChoices):
    DG = 'DG', 'Działalność gospodarcza'
    DG_ETAT = 'DG_ETAT', 'DG + etat'
    DG_AKCJONARIUSZ = 'DG_AKCJONARIUSZ', 'DG + akcjonariusz'
    DG_HALF_TIME_BELOW_MIN = 'DG_HALF_TIME_BELOW_MIN', 'DG + pół etatu poniżej minimalnej'
    DG_HALF_TIME_ABOVE_MIN = 'DG_HALF_TIME_ABOVE_MIN', 'DG + pół etatu powyżej minimalnej'


class VatStatus(models.TextChoices):
    VAT_MONTHLY = 'VAT_MONTHLY', 'VAT miesięczny'
    VAT_QUARTERLY = 'VAT_QUARTERLY', 'VAT kwartalny'
    NO = 'NO', 'Zwolniony z VAT'
    NO_WATCH_LIMIT = 'NO_WATCH_LIMIT', 'Zwolniony (pilnować limitu)'


class TaxScheme(models.TextChoices):
    PIT_17 = 'PIT_17', 'Podatek liniowy (PIT-17)'
    PIT_19 = 'PIT_19', 'Podatek liniowy (PIT-19)'
    LUMP_SUM = 'LUMP_SUM', 'Ryczałt'
    GENERAL = 'GENERAL', 'Zasady ogólne'


class ZusStatus(models.TextChoices):
    FULL = 'FULL', 'Pełny ZUS'
    PREFERENTIAL = 'PREFERENTIAL', 'Preferencyjny ZUS'
    NONE = 'NONE', 'Brak ZUS'


class AmlGroup(models.TextChoices):
    LOW = 'LOW', 'Niskie ryzyko'
    STANDARD = 'STANDARD', 'Standardowe ryzyko'
    ELEVATED = 'ELEVATED', 'Podwyższone ryzyko'
    HIGH = 'HIGH', 'Wysokie ryzyko'


class ChangeAction(models.TextChoices):
    CREATE = 'CREATE', 'Utworzenie'
    UPDATE = 'UPDATE', 'Aktualizacja'
    DELETE = 'DELETE', 'Usunięcie'
    RESTORE = 'RESTORE', 'Przywrócenie'


class IconType(models.TextChoices):
    LUCIDE = 'lucide', 'Lucide'
    CUSTOM = 'custom', 'Własna'
    EMOJI = 'emoji', 'Emoji'


class EmployeeContractType(models.TextChoices):
    UMOWA_O_PRACE = 'UMOWA_O_PRACE', 'Umowa o pracę'
    UMOWA_ZLECENIE = 'UMOWA_ZLECENIE', 'Umowa zlecenie'
    UMOWA_O_DZIELO = 'UMOWA_O_DZIELO', 'Umowa o dzieło'


class WorkplaceType(models.TextChoices):
    OFFICE = 'OFFICE', 'Biuro'
    REMOTE = 'REMOTE', 'Praca zdalna'
    HYBRID = 'HYBRID', 'Praca hybrydowa'


class DeleteRequestStatus(models.TextChoices):
    PENDING = 'PENDING', 'Oczekuje'
    APPROVED = 'APPROVED', 'Zatwierdzone'
    REJECTED = 'REJECTED', 'Odrzucone'


nip_validator = RegexValidator(r'^\d{10}$', 'NIP musi składać się z 10 cyfr')
pesel_validator = RegexValidator(r'^\d{11}$', 'PESEL musi składać się z 11 cyfr')


class Client(models.Model):
    """Client of the accounting office."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    company = models.ForeignKey(
        'companies.Company',
        on_delete=models.CASCADE,
        related_name='clients'
    )

    # Identity
    name = models.CharField(max_length=255, validators=[MinLengthValidator(2)])
    nip = models.CharField(max_length=10, blank=True, null=True, validators=[nip_validator])
    email = models.EmailField(max_length=255, blank=True)
    phone = models.CharField(max_length=20, blank=True)

    # Dates
    company_start_date = models.DateField(null=True, blank=True)
    cooperation_start_date = models.DateField(null=True, blank=True)
    suspension_date = models.DateField(null=True, blank=True)

    # Notes
    company_specificity = models.TextField(blank=True)
    additional_info = models.TextField(blank=True)

    # Tax profile
    gtu_code = models.CharField(max_length=20, blank=True)
    gtu_codes = models.JSONField(default=list, blank=True)
    aml_group = models.CharField(max_length=20, choices=AmlGroup.choices, blank=True)
    receive_email_copy = models.BooleanField(default=False)
    employment_type = models.CharField(max_length=40, choices=EmploymentType.choices, blank=True)
    vat_status = models.CharField(max_length=20, choices=VatStatus.choices, blank=True)
    tax_scheme = models.CharField(max_length=20, choices=TaxScheme.choices, blank=True)
    zus_status = models.CharField(max_length=20, choices=ZusStatus.choices, blank=True)

    is_active = models.BooleanField(default=True)

    created_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='created_clients'
    )
    updated_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='updated_clients'
    )

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'clients'
        ordering = ['name']
        indexes = [
            models.Index(fields=['company', 'is_active'], name='clients_company_active_idx'),
            models.Index(fields=['company', 'nip'], name='clients_company_nip_idx'),
            models.Index(fields=['name'], name='clients_name_idx'),
        ]

    def __str__(self):
        return self.name


class ClientChangeLog(models.Model):
    """Audit trail of client changes: a list of {field, old, new}."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    client = models.ForeignKey(Client, on_delete=models.CASCADE, related_name='changelog')
    company = models.ForeignKey('companies.Company', on_delete=models.CASCADE, related_name='+')
    action = models.CharField(max_length=10, choices=ChangeAction.choices)
    changes = models.JSONField(default=list, blank=True)
    performed_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+'
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'client_changelog'
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.action} {self.client_id}"


class ClientIcon(models.Model):
    """Badge that can be attached to clients (lucide icon, emoji or uploaded image)."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    company = models.ForeignKey('companies.Company', on_delete=models.CASCADE, related_name='client_icons')
    name = models.CharField(max_length=100)
    color = models.CharField(max_length=20, blank=True)
    icon_type = models.CharField(max_length=10, choices=IconType.choices, default=IconType.LUCIDE)
    icon_value = models.CharField(max_length=100, blank=True)
    file_url = models.URLField(max_length=500, blank=True)
    tooltip = models.CharField(max_length=255, blank=True)
    is_active = models.BooleanField(default=True)
    created_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'client_icons'
        ordering = ['name']

    def __str__(self):
        return self.name


class ClientIconAssignment(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    client = models.ForeignKey(Client, on_delete=models.CASCADE, related_name='icon_assignments')
    icon = models.ForeignKey(ClientIcon, on_delete=models.CASCADE, related_name='assignments')
    is_auto_assigned = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'client_icon_assignments'
        constraints = [
            models.UniqueConstraint(fields=['client', 'icon'], name='unique_client_icon'),
        ]

    def __str__(self):
        return f"{self.client_id} <- {self.icon_id}"


class ClientEmployee(models.Model):
    """
    Person employed by a client, tracked for payroll and ZUS work.

    Amounts are stored in grosze. Which of the contract specific fields
    apply depends on ``contract_type``.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    company = models.ForeignKey('companies.Company', on_delete=models.CASCADE, related_name='+')
    client = models.ForeignKey(Client, on_delete=models.CASCADE, related_name='employees')

    # Personal data
    first_name = models.CharField(max_length=100)
    last_name = models.CharField(max_length=100)
    pesel = models.CharField(max_length=11, blank=True, validators=[pesel_validator])
    email = models.EmailField(max_length=255, blank=True)
    phone = models.CharField(max_length=50, blank=True)

    # Employment
    contract_type = models.CharField(max_length=20, choices=EmployeeContractType.choices)
    position = models.CharField(max_length=255, blank=True)
    start_date = models.DateField()
    end_date = models.DateField(null=True, blank=True)
    gross_salary = models.PositiveIntegerField(null=True, blank=True)

    # Umowa o pracę
    working_hours_per_week = models.DecimalField(max_digits=5, decimal_places=2, null=True, blank=True)
    vacation_days_per_year = models.PositiveSmallIntegerField(null=True, blank=True)
    workplace_type = models.CharField(max_length=10, choices=WorkplaceType.choices, blank=True)

    # Umowa zlecenie
    hourly_rate = models.PositiveIntegerField(null=True, blank=True)
    is_student = models.BooleanField(default=False)
    has_other_insurance = models.BooleanField(default=False)

    # Umowa o dzieło
    project_description = models.TextField(blank=True)
    delivery_date = models.DateField(null=True, blank=True)
    agreed_amount = models.PositiveIntegerField(null=True, blank=True)

    notes = models.TextField(blank=True)
    is_active = models.BooleanField(default=True)

    created_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+'
    )
    updated_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'client_employees'
        ordering = ['last_name', 'first_name']
        indexes = [
            models.Index(fields=['company', 'client'], name='client_employees_client_idx'),
        ]

    def __str__(self):
        return f"{self.first_name} {self.last_name}"


class ClientDeleteRequest(models.Model):
    """Employee request to delete a client, decided by an owner or admin."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    company = models.ForeignKey('companies.Company', on_delete=models.CASCADE, related_name='+')
    client = models.ForeignKey(Client, on_delete=models.CASCADE, related_name='delete_requests')
    requested_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        related_name='client_delete_requests'
    )
    reason = models.TextField(blank=True)
    status = models.CharField(
        max_length=10,
        choices=DeleteRequestStatus.choices,
        default=DeleteRequestStatus.PENDING
    )
    processed_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+'
    )
    processed_at = models.DateTimeField(null=True, blank=True)
    rejection_reason = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'client_delete_requests'
        ordering = ['-created_at']
        constraints = [
            # One open request per client
            models.UniqueConstraint(
                fields=['client'],
                condition=models.Q(status='PENDING'),
                name='unique_pending_delete_request',
            ),
        ]

    def __str__(self):
        return f"{self.client_id} [{self.status}]"
