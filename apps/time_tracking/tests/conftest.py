import datetime
from decimal import Decimal

import pytest

from apps.modules.models import TIME_TRACKING
from apps.time_tracking.models import TimeEntry, TimeEntryStatus, TimeSettings


def at(day, hour, minute=0):
    """Aware UTC datetime on a fixed October 2026 day."""
    return datetime.datetime(2026, 10, day, hour, minute, tzinfo=datetime.timezone.utc)


@pytest.fixture
def time_tracking_enabled(company, enable_module):
    enable_module(company, TIME_TRACKING)


@pytest.fixture
def owner_api(auth_client, owner, time_tracking_enabled):
    return auth_client(owner)


@pytest.fixture
def employee_api(auth_client, employee, grant, time_tracking_enabled):
    grant(employee, TIME_TRACKING)
    return auth_client(employee)


@pytest.fixture
def time_settings(company):
    return TimeSettings.objects.create(company=company, default_hourly_rate=Decimal('120.00'))


@pytest.fixture
def make_entry(company):
    """Factory creating a finished entry."""
    def _make(user, start, minutes=60, **kwargs):
        kwargs.setdefault('status', TimeEntryStatus.DRAFT)
        kwargs.setdefault('is_billable', True)
        return TimeEntry.objects.create(
            company=company,
            user=user,
            start_time=start,
            end_time=start + datetime.timedelta(minutes=minutes),
            duration_minutes=minutes,
            **kwargs
        )
    return _make
