"""
Time entry service.

Employees work with their own entries only; owners and admins see every
entry of the company. Durations are rounded with the company settings and
amounts are computed for billable entries only.
"""

import logging
from datetime import timedelta
from typing import Iterable, Optional
from uuid import UUID

from django.db import IntegrityError, transaction
from django.db.models import QuerySet
from django.utils import timezone
from rest_framework.exceptions import PermissionDenied

from apps.accounts.models import User, UserRole
from apps.clients.services import get_client
from apps.companies.tenancy import can_view_all
from apps.notifications.models import NotificationType
from apps.notifications.services import notify
from apps.time_tracking.calculations import (
    calculate_amount,
    calculate_duration,
    effective_hourly_rate,
    format_duration_human,
    ranges_overlap,
    round_duration,
)
from apps.time_tracking.models import TimeEntry, TimeEntryStatus, TimeSettings

from .exceptions import (
    InvalidStatusTransitionError,
    InvalidTimeEntryError,
    TimeEntryLockedError,
    TimeEntryNotEditableError,
    TimeEntryNotFoundError,
    TimeEntryOverlapError,
    TimerAlreadyRunningError,
    TimerNotRunningError,
    TimeTrackingModeError,
)
from .time_settings import get_settings

logger = logging.getLogger(__name__)

EDITABLE_STATUSES = (TimeEntryStatus.DRAFT, TimeEntryStatus.REJECTED)


# =============================================================================
# Helpers
# =============================================================================

def _round(minutes: int, settings: TimeSettings) -> int:
    return round_duration(minutes, settings.rounding_method, settings.rounding_interval_minutes)


def _apply_rate_and_amount(entry: TimeEntry, settings: TimeSettings) -> None:
    entry.hourly_rate = effective_hourly_rate(entry.hourly_rate, settings.default_hourly_rate)
    if entry.is_billable and entry.duration_minutes and entry.hourly_rate is not None:
        entry.total_amount = calculate_amount(entry.duration_minutes, entry.hourly_rate)
    else:
        entry.total_amount = None


def _check_limits(minutes: Optional[int], settings: TimeSettings) -> None:
    if minutes is None:
        return
    if settings.minimum_entry_minutes and minutes < settings.minimum_entry_minutes:
        raise InvalidTimeEntryError(
            f'Minimalny czas wpisu to {format_duration_human(settings.minimum_entry_minutes)}.'
        )
    if settings.maximum_entry_minutes and minutes > settings.maximum_entry_minutes:
        raise InvalidTimeEntryError(
            f'Maksymalny czas wpisu to {format_duration_human(settings.maximum_entry_minutes)}.'
        )


def _check_times(start, end) -> None:
    if end is not None and end < start:
        raise InvalidTimeEntryError('Czas zakończenia nie może być wcześniejszy niż czas rozpoczęcia.')


def _check_overlap(*, user_id, company_id, start, end, exclude_id=None) -> None:
    others = TimeEntry.objects.filter(user_id=user_id, company_id=company_id, is_active=True)
    if exclude_id:
        others = others.exclude(id=exclude_id)

    for other in others.only('start_time', 'end_time'):
        if ranges_overlap(start, end, other.start_time, other.end_time):
            raise TimeEntryOverlapError()


def _check_locked(entry: TimeEntry, settings: TimeSettings, unlocking: bool = False) -> None:
    if entry.is_locked and not unlocking:
        raise TimeEntryLockedError()
    if settings.lock_entries_after_days > 0:
        lock_before = timezone.now() - timedelta(days=settings.lock_entries_after_days)
        if entry.start_time < lock_before:
            raise TimeEntryLockedError()


def _check_can_modify(entry: TimeEntry, user: User, settings: TimeSettings, unlocking: bool = False) -> None:
    _check_locked(entry, settings, unlocking)
    if not can_view_all(user) and entry.status not in EDITABLE_STATUSES:
        raise TimeEntryNotEditableError()


# =============================================================================
# Queries
# =============================================================================

def list_entries(*, user: User, company_id: UUID, filters: Optional[dict] = None) -> QuerySet:
    """
    Entries visible to the user, newest first.

    Args:
        filters: search, status, statuses, client_id, is_billable,
            start_date_from, start_date_to, is_active, user_id (managers only)
    """
    filters = filters or {}
    qs = TimeEntry.objects.filter(company_id=company_id)

    if not can_view_all(user):
        qs = qs.filter(user=user)
    elif filters.get('user_id'):
        qs = qs.filter(user_id=filters['user_id'])

    is_active = filters.get('is_active')
    qs = qs.filter(is_active=True if is_active is None else is_active)

    if filters.get('search'):
        qs = qs.filter(description__icontains=filters['search'])
    if filters.get('statuses'):
        qs = qs.filter(status__in=filters['statuses'])
    elif filters.get('status'):
        qs = qs.filter(status=filters['status'])
    if filters.get('client_id'):
        qs = qs.filter(client_id=filters['client_id'])
    if filters.get('is_billable') is not None:
        qs = qs.filter(is_billable=filters['is_billable'])
    if filters.get('start_date_from'):
        qs = qs.filter(start_time__date__gte=filters['start_date_from'])
    if filters.get('start_date_to'):
        qs = qs.filter(start_time__date__lte=filters['start_date_to'])

    return qs.select_related('user', 'client', 'approved_by').order_by('-start_time')


def get_entry(*, user: User, company_id: UUID, entry_id: UUID) -> TimeEntry:
    """
    Raises:
        TimeEntryNotFoundError: Unknown, deleted, foreign or (for employees) someone else's entry
    """
    qs = TimeEntry.objects.filter(company_id=company_id, is_active=True)
    if not can_view_all(user):
        qs = qs.filter(user=user)
    try:
        return qs.select_related('user', 'client', 'approved_by').get(id=entry_id)
    except TimeEntry.DoesNotExist:
        raise TimeEntryNotFoundError()


# =============================================================================
# Manual entries
# =============================================================================

@transaction.atomic
def create_entry(*, user: User, company_id: UUID, data: dict) -> TimeEntry:
    """
    Create a manual entry for the user.

    Raises:
        TimeTrackingModeError: Manual entries are disabled
        InvalidTimeEntryError: end before start, duration outside limits
        TimeEntryOverlapError: Overlap while overlapping is not allowed
    """
    settings = get_settings(company_id=company_id)
    if not settings.allow_manual_entry:
        raise TimeTrackingModeError('Ręczne dodawanie wpisów czasu jest wyłączone.')

    data = dict(data)
    client_id = data.pop('client_id', None)
    start, end = data['start_time'], data.get('end_time')
    _check_times(start, end)

    duration = data.get('duration_minutes')
    if duration is None and end is not None:
        duration = calculate_duration(start, end)
    if duration is not None:
        duration = _round(duration, settings)
    _check_limits(duration, settings)

    if not settings.allow_overlapping_entries:
        _check_overlap(user_id=user.id, company_id=company_id, start=start, end=end)

    entry = TimeEntry(
        company_id=company_id,
        user=user,
        client=get_client(company_id=company_id, client_id=client_id) if client_id else None,
        created_by=user,
        updated_by=user,
        status=TimeEntryStatus.DRAFT,
        currency=data.pop('currency', None) or settings.default_currency,
        **data
    )
    entry.duration_minutes = duration
    _apply_rate_and_amount(entry, settings)
    entry.save()

    logger.info('Time entry %s created by %s (%sm)', entry.id, user.id, duration)
    return entry


@transaction.atomic
def update_entry(*, user: User, company_id: UUID, entry_id: UUID, data: dict) -> TimeEntry:
    """
    Raises:
        TimeEntryLockedError: Entry locked manually or by lock_entries_after_days
        TimeEntryNotEditableError: Employee editing a submitted/approved entry
    """
    settings = get_settings(company_id=company_id)
    data = dict(data)
    # Only owners and admins lock or unlock entries
    if not can_view_all(user):
        data.pop('is_locked', None)
    unlocking = data.get('is_locked') is False

    entry = get_entry(user=user, company_id=company_id, entry_id=entry_id)
    _check_can_modify(entry, user, settings, unlocking)

    if 'client_id' in data:
        client_id = data.pop('client_id')
        entry.client = get_client(company_id=company_id, client_id=client_id) if client_id else None

    times_changed = 'start_time' in data or 'end_time' in data
    for key, value in data.items():
        setattr(entry, key, value)
    _check_times(entry.start_time, entry.end_time)

    if times_changed and entry.end_time is not None and 'duration_minutes' not in data:
        entry.duration_minutes = _round(calculate_duration(entry.start_time, entry.end_time), settings)
    elif 'duration_minutes' in data and entry.duration_minutes is not None:
        entry.duration_minutes = _round(entry.duration_minutes, settings)
    _check_limits(entry.duration_minutes, settings)

    if times_changed and not settings.allow_overlapping_entries:
        _check_overlap(
            user_id=entry.user_id,
            company_id=company_id,
            start=entry.start_time,
            end=entry.end_time,
            exclude_id=entry.id,
        )

    _apply_rate_and_amount(entry, settings)
    entry.updated_by = user
    entry.save()
    return entry


@transaction.atomic
def delete_entry(*, user: User, company_id: UUID, entry_id: UUID) -> None:
    """Soft delete (is_active=False), same access rules as update."""
    settings = get_settings(company_id=company_id)
    entry = get_entry(user=user, company_id=company_id, entry_id=entry_id)
    _check_can_modify(entry, user, settings)

    entry.is_active = False
    entry.is_running = False
    entry.updated_by = user
    entry.save(update_fields=['is_active', 'is_running', 'updated_by', 'updated_at'])
    logger.info('Time entry %s deleted by %s', entry.id, user.id)


# =============================================================================
# Timer
# =============================================================================

def _running_entries(user: User, company_id: UUID) -> QuerySet:
    return TimeEntry.objects.filter(user=user, company_id=company_id, is_running=True, is_active=True)


def _running_entry(user: User, company_id: UUID) -> TimeEntry:
    entry = _running_entries(user, company_id).select_for_update().first()
    if entry is None:
        raise TimerNotRunningError()
    return entry


def get_active_timer(*, user: User, company_id: UUID) -> Optional[TimeEntry]:
    return _running_entries(user, company_id).select_related('client').first()


@transaction.atomic
def start_timer(*, user: User, company_id: UUID, data: dict) -> TimeEntry:
    """
    Raises:
        TimeTrackingModeError: Timer mode disabled
        TimerAlreadyRunningError: User already has a running timer
    """
    settings = get_settings(company_id=company_id)
    if not settings.allow_timer_mode:
        raise TimeTrackingModeError('Tryb timera jest wyłączony.')

    if _running_entries(user, company_id).exists():
        raise TimerAlreadyRunningError()

    data = dict(data)
    client_id = data.pop('client_id', None)
    client = get_client(company_id=company_id, client_id=client_id) if client_id else None

    try:
        # Savepoint: the partial unique index rejects a concurrent second timer
        with transaction.atomic():
            entry = TimeEntry.objects.create(
                company_id=company_id,
                user=user,
                client=client,
                start_time=timezone.now(),
                is_running=True,
                status=TimeEntryStatus.DRAFT,
                currency=settings.default_currency,
                created_by=user,
                updated_by=user,
                **data
            )
    except IntegrityError:
        raise TimerAlreadyRunningError()

    logger.info('Timer started for user %s (entry %s)', user.id, entry.id)
    return entry


@transaction.atomic
def stop_timer(*, user: User, company_id: UUID, description: str = '') -> TimeEntry:
    """
    Stop the running timer, round the duration and compute the amount.

    Raises:
        TimerNotRunningError: No running timer
    """
    settings = get_settings(company_id=company_id)
    entry = _running_entry(user, company_id)

    end = timezone.now()
    if settings.auto_stop_timer_after_minutes:
        end = min(end, entry.start_time + timedelta(minutes=settings.auto_stop_timer_after_minutes))

    entry.end_time = end
    entry.duration_minutes = _round(calculate_duration(entry.start_time, end), settings)
    entry.is_running = False
    if description:
        entry.description = f'{entry.description} {description}' if entry.description else description

    _apply_rate_and_amount(entry, settings)
    entry.updated_by = user
    entry.save()

    logger.info('Timer stopped for user %s (entry %s, %sm)', user.id, entry.id, entry.duration_minutes)
    return entry


@transaction.atomic
def update_timer(*, user: User, company_id: UUID, data: dict) -> TimeEntry:
    entry = _running_entry(user, company_id)
    data = dict(data)
    if 'client_id' in data:
        client_id = data.pop('client_id')
        entry.client = get_client(company_id=company_id, client_id=client_id) if client_id else None
    for key, value in data.items():
        setattr(entry, key, value)
    entry.updated_by = user
    entry.save()
    return entry


@transaction.atomic
def discard_timer(*, user: User, company_id: UUID) -> None:
    entry = _running_entry(user, company_id)
    entry.delete()
    logger.info('Timer discarded for user %s', user.id)


# =============================================================================
# Approval workflow
# =============================================================================

def _owners(company_id: UUID, exclude: User):
    return list(
        User.objects
        .filter(company_id=company_id, role=UserRole.COMPANY_OWNER, is_active=True)
        .exclude(id=exclude.id)
    )


def _notify_author(entry: TimeEntry, reviewer: User, type: str, title: str, message: str) -> None:
    if entry.user_id == reviewer.id:
        return
    notify(
        company_id=entry.company_id,
        recipients=[entry.user_id],
        type=type,
        title=title,
        message=message,
        data={'time_entry_id': str(entry.id)},
        actor=reviewer,
    )


@transaction.atomic
def submit_entry(*, user: User, company_id: UUID, entry_id: UUID) -> TimeEntry:
    """
    Send an entry for approval (draft/rejected -> submitted).

    Raises:
        PermissionDenied: Caller is not the author
        InvalidStatusTransitionError: Entry is not draft/rejected or still running
    """
    entry = get_entry(user=user, company_id=company_id, entry_id=entry_id)
    if entry.user_id != user.id:
        raise PermissionDenied('Tylko autor może przesłać wpis do akceptacji.')
    if entry.status not in EDITABLE_STATUSES or entry.is_running:
        raise InvalidStatusTransitionError()

    entry.status = TimeEntryStatus.SUBMITTED
    entry.submitted_at = timezone.now()
    entry.save(update_fields=['status', 'submitted_at', 'updated_at'])

    notify(
        company_id=company_id,
        recipients=_owners(company_id, exclude=user),
        type=NotificationType.TIME_ENTRY_SUBMITTED,
        title='Wpis czasu do akceptacji',
        message=(
            f'{user.get_full_name()} przesłał(a) wpis czasu '
            f'({format_duration_human(entry.duration_minutes)}) do akceptacji'
        ),
        data={'time_entry_id': str(entry.id)},
        actor=user,
    )
    return entry


@transaction.atomic
def approve_entry(*, user: User, company_id: UUID, entry_id: UUID) -> TimeEntry:
    entry = get_entry(user=user, company_id=company_id, entry_id=entry_id)
    if entry.status != TimeEntryStatus.SUBMITTED:
        raise InvalidStatusTransitionError()

    entry.status = TimeEntryStatus.APPROVED
    entry.approved_by = user
    entry.approved_at = timezone.now()
    entry.rejection_note = ''
    entry.save(update_fields=['status', 'approved_by', 'approved_at', 'rejection_note', 'updated_at'])

    _notify_author(
        entry, user,
        NotificationType.TIME_ENTRY_APPROVED,
        'Wpis czasu zaakceptowany',
        f'Twój wpis czasu z dnia {entry.start_time:%Y-%m-%d} został zaakceptowany',
    )
    logger.info('Time entry %s approved by %s', entry.id, user.id)
    return entry


@transaction.atomic
def reject_entry(*, user: User, company_id: UUID, entry_id: UUID, rejection_note: str) -> TimeEntry:
    entry = get_entry(user=user, company_id=company_id, entry_id=entry_id)
    if entry.status != TimeEntryStatus.SUBMITTED:
        raise InvalidStatusTransitionError()

    entry.status = TimeEntryStatus.REJECTED
    entry.rejection_note = rejection_note
    entry.approved_by = user
    entry.approved_at = timezone.now()
    entry.save(update_fields=['status', 'approved_by', 'approved_at', 'rejection_note', 'updated_at'])

    _notify_author(
        entry, user,
        NotificationType.TIME_ENTRY_REJECTED,
        'Wpis czasu odrzucony',
        f'Twój wpis czasu z dnia {entry.start_time:%Y-%m-%d} został odrzucony: {rejection_note}',
    )
    logger.info('Time entry %s rejected by %s', entry.id, user.id)
    return entry


def _submitted(company_id: UUID, entry_ids: Iterable[UUID]) -> QuerySet:
    return TimeEntry.objects.filter(
        company_id=company_id,
        id__in=list(entry_ids),
        status=TimeEntryStatus.SUBMITTED,
        is_active=True,
    )


@transaction.atomic
def bulk_approve(*, user: User, company_id: UUID, entry_ids: Iterable[UUID]) -> dict:
    approved = _submitted(company_id, entry_ids).update(
        status=TimeEntryStatus.APPROVED,
        approved_by=user,
        approved_at=timezone.now(),
        rejection_note='',
    )
    logger.info('Bulk approve of %d time entries by %s', approved, user.id)
    return {'approved': approved}


@transaction.atomic
def bulk_reject(*, user: User, company_id: UUID, entry_ids: Iterable[UUID], rejection_note: str = '') -> dict:
    rejected = _submitted(company_id, entry_ids).update(
        status=TimeEntryStatus.REJECTED,
        approved_by=user,
        approved_at=timezone.now(),
        rejection_note=rejection_note,
    )
    logger.info('Bulk reject of %d time entries by %s', rejected, user.id)
    return {'rejected': rejected}
