"""Settlement counters for the dashboard and team view."""

from typing import Optional
from uuid import UUID

from django.db.models import Count, Q

from apps.accounts.models import User
from apps.common.utils import half_up_percent
from apps.companies.tenancy import can_view_all
from apps.settlements.models import MonthlySettlement, SettlementStatus


def _status_counts() -> dict:
    return {
        'total': Count('id'),
        'pending': Count('id', filter=Q(status=SettlementStatus.PENDING)),
        'in_progress': Count('id', filter=Q(status=SettlementStatus.IN_PROGRESS)),
        'completed': Count('id', filter=Q(status=SettlementStatus.COMPLETED)),
    }


def _period(qs, month: Optional[int], year: Optional[int]):
    if month:
        qs = qs.filter(month=month)
    if year:
        qs = qs.filter(year=year)
    return qs


def get_overview(*, user: User, company_id: UUID, month: int, year: int) -> dict:
    """Status counters of one month in a single aggregate query."""
    qs = MonthlySettlement.objects.filter(company_id=company_id, month=month, year=year)
    if not can_view_all(user):
        qs = qs.filter(user=user)

    stats = qs.aggregate(
        **_status_counts(),
        unassigned=Count('id', filter=Q(user__isnull=True)),
        requires_attention=Count('id', filter=Q(requires_attention=True)),
    )
    stats['completion_rate'] = half_up_percent(stats['completed'], stats['total'])
    return stats


def get_employee_stats(*, company_id: UUID, month: Optional[int] = None, year: Optional[int] = None) -> list:
    """One row per active company user, busiest first."""
    settlement_filter = Q(settlements__company_id=company_id)
    if month:
        settlement_filter &= Q(settlements__month=month)
    if year:
        settlement_filter &= Q(settlements__year=year)

    def count(status=None):
        condition = settlement_filter
        if status:
            condition &= Q(settlements__status=status)
        return Count('settlements', filter=condition)

    users = (
        User.objects
        .filter(company_id=company_id, is_active=True)
        .annotate(
            total=count(),
            pending=count(SettlementStatus.PENDING),
            in_progress=count(SettlementStatus.IN_PROGRESS),
            completed=count(SettlementStatus.COMPLETED),
        )
        .order_by('-total', 'last_name', 'first_name')
    )

    return [
        {
            'user_id': u.id,
            'email': u.email,
            'first_name': u.first_name,
            'last_name': u.last_name,
            'total': u.total,
            'pending': u.pending,
            'in_progress': u.in_progress,
            'completed': u.completed,
            'completion_rate': half_up_percent(u.completed, u.total),
        }
        for u in users
    ]


def get_my_stats(*, user: User, company_id: UUID, month: Optional[int] = None, year: Optional[int] = None) -> dict:
    qs = _period(MonthlySettlement.objects.filter(company_id=company_id, user=user), month, year)
    stats = qs.aggregate(**_status_counts())
    stats['completion_rate'] = half_up_percent(stats['completed'], stats['total'])
    return stats
