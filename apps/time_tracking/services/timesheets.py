"""
Timesheets and reports.

Only active, stopped entries are counted. Employees always get their own
entries; owners and admins get the whole company unless they pass user_id.
"""

import csv
import datetime
import io
from collections import OrderedDict
from decimal import Decimal
from typing import Iterable, Optional
from uuid import UUID

from django.db.models import QuerySet

from apps.accounts.models import User
from apps.clients.services import get_client
from apps.clients.services.csv_io import sanitize_cell
from apps.companies.tenancy import can_view_all
from apps.time_tracking.calculations import day_bounds, format_duration, week_bounds
from apps.time_tracking.models import TimeEntry

from .time_settings import get_settings

NO_CLIENT_KEY = 'no-client'
NO_CLIENT_LABEL = 'Bez klienta'

GROUP_BY_DAY = 'day'
GROUP_BY_CLIENT = 'client'
GROUP_BY_USER = 'user'

EXPORT_HEADERS = [
    'Data', 'Pracownik', 'Klient', 'Opis', 'Czas', 'Minuty',
    'Rozliczalny', 'Stawka', 'Kwota', 'Waluta', 'Status',
]


def summarize(entries: Iterable[TimeEntry]) -> dict:
    total = billable = 0
    amount = Decimal('0.00')
    count = 0
    for entry in entries:
        minutes = entry.duration_minutes or 0
        total += minutes
        count += 1
        if entry.is_billable:
            billable += minutes
            amount += entry.total_amount or Decimal('0')
    return {
        'total_minutes': total,
        'billable_minutes': billable,
        'non_billable_minutes': total - billable,
        'total_amount': str(amount.quantize(Decimal('0.01'))),
        'entries_count': count,
    }


def _counted_entries(company_id: UUID) -> QuerySet:
    return (
        TimeEntry.objects
        .filter(company_id=company_id, is_active=True, is_running=False)
        .select_related('user', 'client')
        .order_by('start_time')
    )


def _timesheet_user_id(user: User, user_id: Optional[UUID]):
    if user_id and can_view_all(user):
        return user_id
    return user.id


def _range(first: datetime.date, last: datetime.date):
    return day_bounds(first)[0], day_bounds(last)[1]


def daily_timesheet(*, user: User, company_id: UUID, date: datetime.date, user_id=None) -> dict:
    start, end = day_bounds(date)
    entries = list(
        _counted_entries(company_id).filter(
            user_id=_timesheet_user_id(user, user_id),
            start_time__gte=start,
            start_time__lt=end,
        )
    )
    return {'date': date, 'entries': entries, 'summary': summarize(entries)}


def weekly_timesheet(*, user: User, company_id: UUID, date: datetime.date, user_id=None) -> dict:
    settings = get_settings(company_id=company_id)
    first, last = week_bounds(date, settings.week_start_day)
    start, end = _range(first, last)
    entries = list(
        _counted_entries(company_id).filter(
            user_id=_timesheet_user_id(user, user_id),
            start_time__gte=start,
            start_time__lt=end,
        )
    )

    days = []
    for offset in range(7):
        day = first + datetime.timedelta(days=offset)
        day_entries = [e for e in entries if e.start_time.date() == day]
        days.append({'date': day, 'entries': day_entries, 'summary': summarize(day_entries)})

    return {
        'week_start': first,
        'week_end': last,
        'days': days,
        'summary': summarize(entries),
    }


def report_entries(*, user: User, company_id: UUID, filters: Optional[dict] = None) -> QuerySet:
    """
    Entries a report covers.

    Args:
        filters: start_date, end_date (inclusive dates), user_id, client_id, is_billable
    """
    filters = filters or {}
    qs = _counted_entries(company_id)

    if not can_view_all(user):
        qs = qs.filter(user=user)
    elif filters.get('user_id'):
        qs = qs.filter(user_id=filters['user_id'])

    if filters.get('start_date'):
        qs = qs.filter(start_time__gte=day_bounds(filters['start_date'])[0])
    if filters.get('end_date'):
        qs = qs.filter(start_time__lt=day_bounds(filters['end_date'])[1])
    if filters.get('client_id'):
        qs = qs.filter(client_id=filters['client_id'])
    if filters.get('is_billable') is not None:
        qs = qs.filter(is_billable=filters['is_billable'])
    return qs


def _group_key(entry: TimeEntry, group_by: str):
    if group_by == GROUP_BY_CLIENT:
        if entry.client_id is None:
            return NO_CLIENT_KEY, NO_CLIENT_LABEL
        return str(entry.client_id), entry.client.name
    if group_by == GROUP_BY_USER:
        return str(entry.user_id), entry.user.get_full_name() or entry.user.email
    day = entry.start_time.date().isoformat()
    return day, day


def summary_report(*, user: User, company_id: UUID, filters: Optional[dict] = None,
                   group_by: str = GROUP_BY_DAY) -> dict:
    filters = filters or {}
    entries = list(report_entries(user=user, company_id=company_id, filters=filters))

    grouped = OrderedDict()
    for entry in entries:
        key, label = _group_key(entry, group_by)
        grouped.setdefault(key, (label, []))[1].append(entry)

    groups = [
        {'key': key, 'label': label, 'summary': summarize(items)}
        for key, (label, items) in grouped.items()
    ]
    if group_by != GROUP_BY_DAY:
        groups.sort(key=lambda group: group['label'].lower())

    return {
        'start_date': filters.get('start_date'),
        'end_date': filters.get('end_date'),
        'group_by': group_by,
        'summary': summarize(entries),
        'groups': groups,
    }


def client_report(*, user: User, company_id: UUID, client_id: UUID, filters: Optional[dict] = None) -> dict:
    client = get_client(company_id=company_id, client_id=client_id)
    filters = dict(filters or {}, client_id=client.id)
    entries = list(report_entries(user=user, company_id=company_id, filters=filters))
    return {
        'client_id': client.id,
        'client_name': client.name,
        'start_date': filters.get('start_date'),
        'end_date': filters.get('end_date'),
        'summary': summarize(entries),
    }


def export_report(*, user: User, company_id: UUID, filters: Optional[dict] = None) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow(EXPORT_HEADERS)
    for entry in report_entries(user=user, company_id=company_id, filters=filters):
        writer.writerow([
            entry.start_time.date().isoformat(),
            sanitize_cell(entry.user.get_full_name() or entry.user.email),
            sanitize_cell(entry.client.name if entry.client_id else NO_CLIENT_LABEL),
            sanitize_cell(entry.description),
            format_duration(entry.duration_minutes),
            entry.duration_minutes or 0,
            'tak' if entry.is_billable else 'nie',
            entry.hourly_rate if entry.hourly_rate is not None else '',
            entry.total_amount if entry.total_amount is not None else '',
            entry.currency,
            entry.status,
        ])
    return buffer.getvalue()
