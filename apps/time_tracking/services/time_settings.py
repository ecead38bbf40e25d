"""Company time tracking settings."""

from uuid import UUID

from django.db import transaction

from apps.time_tracking.models import TimeSettings


def get_settings(*, company_id: UUID) -> TimeSettings:
    """Settings of the company, created with defaults on first use."""
    settings, _ = TimeSettings.objects.get_or_create(company_id=company_id)
    return settings


@transaction.atomic
def update_settings(*, company_id: UUID, data: dict) -> TimeSettings:
    settings = get_settings(company_id=company_id)
    for key, value in data.items():
        setattr(settings, key, value)
    settings.save()
    return settings
