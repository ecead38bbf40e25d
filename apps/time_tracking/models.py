from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.db.models import Q
import uuid


class TimeEntryStatus(models.TextChoices):
    DRAFT = 'draft', 'Szkic'
    SUBMITTED = 'submitted', 'Przesłany'
    APPROVED = 'approved', 'Zatwierdzony'
    REJECTED = 'rejected', 'Odrzucony'
    BILLED = 'billed', 'Rozliczony'


class TimeRoundingMethod(models.TextChoices):
    NONE = 'none', 'Bez zaokrąglania'
    UP = 'up', 'W górę'
    DOWN = 'down', 'W dół'
    NEAREST = 'nearest', 'Do najbliższej wartości'


class TimeEntry(models.Model):
    """Work time record, either entered manually or measured with the timer."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    company = models.ForeignKey(
        'companies.Company',
        on_delete=models.CASCADE,
        related_name='time_entries'
    )
    user = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='time_entries'
    )
    client = models.ForeignKey(
        'clients.Client',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='time_entries'
    )

    description = models.TextField(blank=True)
    start_time = models.DateTimeField()
    end_time = models.DateTimeField(null=True, blank=True)
    duration_minutes = models.PositiveIntegerField(null=True, blank=True)

    is_running = models.BooleanField(default=False)
    is_billable = models.BooleanField(default=True)
    hourly_rate = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    total_amount = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    currency = models.CharField(max_length=3, default='PLN')

    status = models.CharField(max_length=20, choices=TimeEntryStatus.choices, default=TimeEntryStatus.DRAFT)
    tags = models.JSONField(default=list, blank=True)

    # Approval
    submitted_at = models.DateTimeField(null=True, blank=True)
    approved_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+'
    )
    approved_at = models.DateTimeField(null=True, blank=True)
    rejection_note = models.TextField(blank=True)

    is_locked = models.BooleanField(default=False)
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
        db_table = 'time_entries'
        ordering = ['-start_time']
        indexes = [
            models.Index(fields=['company', 'user', 'start_time'], name='time_entries_user_start_idx'),
            models.Index(fields=['company', 'status'], name='time_entries_status_idx'),
            models.Index(fields=['company', 'client'], name='time_entries_client_idx'),
        ]
        constraints = [
            # At most one running timer per user
            models.UniqueConstraint(
                fields=['user'],
                condition=Q(is_running=True, is_active=True),
                name='time_entries_one_running_per_user',
            ),
        ]

    def __str__(self):
        return f"{self.user_id} {self.start_time:%Y-%m-%d %H:%M} ({self.duration_minutes or 0}m)"


class TimeSettings(models.Model):
    """Time tracking settings of a company (created with defaults on first use)."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    company = models.OneToOneField(
        'companies.Company',
        on_delete=models.CASCADE,
        related_name='time_settings'
    )

    rounding_method = models.CharField(
        max_length=10,
        choices=TimeRoundingMethod.choices,
        default=TimeRoundingMethod.NONE
    )
    rounding_interval_minutes = models.PositiveIntegerField(default=15)
    default_hourly_rate = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    default_currency = models.CharField(max_length=3, default='PLN')

    require_approval = models.BooleanField(default=False)
    allow_overlapping_entries = models.BooleanField(default=True)

    working_hours_per_day = models.PositiveIntegerField(default=8, validators=[MaxValueValidator(24)])
    working_hours_per_week = models.PositiveIntegerField(default=40, validators=[MaxValueValidator(168)])
    week_start_day = models.PositiveSmallIntegerField(
        default=1,
        validators=[MinValueValidator(1), MaxValueValidator(7)]
    )

    allow_timer_mode = models.BooleanField(default=True)
    allow_manual_entry = models.BooleanField(default=True)
    auto_stop_timer_after_minutes = models.PositiveIntegerField(default=0)
    minimum_entry_minutes = models.PositiveIntegerField(default=0)
    maximum_entry_minutes = models.PositiveIntegerField(default=0)
    lock_entries_after_days = models.PositiveIntegerField(default=0)

    enable_daily_reminder = models.BooleanField(default=False)
    daily_reminder_time = models.TimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'time_settings'
        verbose_name_plural = 'time settings'

    def __str__(self):
        return f"Time settings {self.company_id}"
