"""
Monthly settlements.

Employees work with the settlements assigned to them; owners and admins
see and assign every settlement of the company.
"""

import logging
from typing import Iterable, Optional
from uuid import UUID

from django.db import transaction
from django.db.models import Q, QuerySet
from django.utils import timezone

from apps.accounts.models import User
from apps.clients.models import Client
from apps.companies.tenancy import can_view_all
from apps.notifications.models import NotificationType
from apps.notifications.services import notify
from apps.settlements.models import MonthlySettlement, SettlementStatus

from .exceptions import (
    AssigneeNotFoundError,
    SettlementAccessDeniedError,
    SettlementNotFoundError,
)

logger = logging.getLogger(__name__)

INITIAL_NOTE = 'Automatyczne utworzenie rozliczenia'

SORT_FIELDS = {
    'client_name': 'client__name',
    'status': 'status',
    'deadline': 'deadline',
    'priority': 'priority',
    'created_at': 'created_at',
}


def history_entry(status: str, user: Optional[User], notes: str = '') -> dict:
    return {
        'status': status,
        'changed_at': timezone.now().isoformat(),
        'changed_by_id': str(user.id) if user else None,
        'changed_by_email': user.email if user else None,
        'notes': notes or '',
    }


def _apply_status(settlement: MonthlySettlement, status: str, user: User, notes: str = '') -> None:
    previous = settlement.status
    settlement.status = status

    if status == SettlementStatus.COMPLETED:
        if previous != SettlementStatus.COMPLETED:
            settlement.settled_at = timezone.now()
            settlement.settled_by = user
    else:
        settlement.settled_at = None
        settlement.settled_by = None

    settlement.status_history = list(settlement.status_history or []) + [history_entry(status, user, notes)]


def _check_access(settlement: MonthlySettlement, user: User) -> None:
    if not can_view_all(user) and settlement.user_id != user.id:
        raise SettlementAccessDeniedError()


def _company_settlements(company_id: UUID) -> QuerySet:
    return (
        MonthlySettlement.objects
        .filter(company_id=company_id)
        .select_related('client', 'user', 'assigned_by', 'settled_by')
    )


def _get_assignee(company_id: UUID, user_id: UUID) -> User:
    try:
        return User.objects.get(id=user_id, company_id=company_id, is_active=True)
    except User.DoesNotExist:
        raise AssigneeNotFoundError()


# =============================================================================
# Queries
# =============================================================================

def list_settlements(*, user: User, company_id: UUID, filters: dict) -> QuerySet:
    """
    Settlements of one month.

    Args:
        filters: month, year (required), status, tax_scheme, requires_attention,
            search, unassigned, assignee_id, sort_by, sort_order
    """
    qs = _company_settlements(company_id).filter(month=filters['month'], year=filters['year'])

    if not can_view_all(user):
        qs = qs.filter(user=user)
    elif filters.get('unassigned'):
        qs = qs.filter(user__isnull=True)
    elif filters.get('assignee_id'):
        qs = qs.filter(user_id=filters['assignee_id'])

    if filters.get('status'):
        qs = qs.filter(status=filters['status'])
    if filters.get('tax_scheme'):
        qs = qs.filter(client__tax_scheme=filters['tax_scheme'])
    if filters.get('requires_attention') is not None:
        qs = qs.filter(requires_attention=filters['requires_attention'])
    if filters.get('search'):
        search = filters['search']
        qs = qs.filter(Q(client__name__icontains=search) | Q(client__nip__icontains=search))

    field = SORT_FIELDS.get(filters.get('sort_by') or 'client_name', 'client__name')
    if filters.get('sort_order') == 'desc':
        field = f'-{field}'
    return qs.order_by(field, 'id')


def get_settlement(*, user: User, company_id: UUID, settlement_id: UUID) -> MonthlySettlement:
    """
    Raises:
        SettlementNotFoundError: Not in the company
        SettlementAccessDeniedError: Employee and not the assignee
    """
    try:
        settlement = _company_settlements(company_id).get(id=settlement_id)
    except MonthlySettlement.DoesNotExist:
        raise SettlementNotFoundError()
    _check_access(settlement, user)
    return settlement


# =============================================================================
# Mutations
# =============================================================================

@transaction.atomic
def initialize_month(*, user: User, company_id: UUID, month: int, year: int) -> dict:
    """
    Create PENDING settlements for active clients that have none for the month.

    Returns:
        {created, skipped}; skipped counts settlements that already existed
    """
    existing = set(
        MonthlySettlement.objects
        .filter(company_id=company_id, month=month, year=year)
        .values_list('client_id', flat=True)
    )
    clients = Client.objects.filter(company_id=company_id, is_active=True).exclude(id__in=existing)

    created = MonthlySettlement.objects.bulk_create([
        MonthlySettlement(
            company_id=company_id,
            client=client,
            month=month,
            year=year,
            status=SettlementStatus.PENDING,
            status_history=[history_entry(SettlementStatus.PENDING, user, INITIAL_NOTE)],
        )
        for client in clients
    ])

    logger.info('Initialized %d settlements for %02d/%d in company %s', len(created), month, year, company_id)
    return {'created': len(created), 'skipped': len(existing)}


@transaction.atomic
def update_status(*, user: User, company_id: UUID, settlement_id: UUID, status: str, notes: str = '') -> MonthlySettlement:
    settlement = get_settlement(user=user, company_id=company_id, settlement_id=settlement_id)
    _apply_status(settlement, status, user, notes)
    settlement.save()
    return settlement


@transaction.atomic
def update_settlement(*, user: User, company_id: UUID, settlement_id: UUID, data: dict) -> MonthlySettlement:
    settlement = get_settlement(user=user, company_id=company_id, settlement_id=settlement_id)

    data = dict(data)
    status = data.pop('status', None)
    for key, value in data.items():
        setattr(settlement, key, value)
    if status:
        _apply_status(settlement, status, user, data.get('notes', ''))

    settlement.save()
    return settlement


def _notify_assignee(assignee: User, actor: User, company_id: UUID, title: str, message: str, data: dict) -> None:
    if assignee.id == actor.id:
        return
    notify(
        company_id=company_id,
        recipients=[assignee],
        type=NotificationType.SETTLEMENT_ASSIGNED,
        title=title,
        message=message,
        data=data,
        actor=actor,
    )


@transaction.atomic
def assign_settlement(*, user: User, company_id: UUID, settlement_id: UUID,
                      user_id: Optional[UUID]) -> MonthlySettlement:
    """
    Assign (or with user_id=None unassign) a settlement.

    Raises:
        AssigneeNotFoundError: Assignee is not an active user of the company
    """
    settlement = get_settlement(user=user, company_id=company_id, settlement_id=settlement_id)
    assignee = _get_assignee(company_id, user_id) if user_id else None

    settlement.user = assignee
    settlement.assigned_by = user if assignee else None
    settlement.save(update_fields=['user', 'assigned_by', 'updated_at'])

    if assignee:
        _notify_assignee(
            assignee, user, company_id,
            title='Przypisano rozliczenie',
            message=(
                f'Przypisano Ci rozliczenie klienta {settlement.client.name} '
                f'za {settlement.month:02d}/{settlement.year}'
            ),
            data={'settlement_id': str(settlement.id)},
        )
    logger.info('Settlement %s assigned to %s by %s', settlement.id, user_id, user.id)
    return settlement


@transaction.atomic
def bulk_assign(*, user: User, company_id: UUID, settlement_ids: Iterable[UUID], user_id: UUID) -> dict:
    settlement_ids = list(settlement_ids)
    assignee = _get_assignee(company_id, user_id)

    assigned = MonthlySettlement.objects.filter(company_id=company_id, id__in=settlement_ids).update(
        user=assignee,
        assigned_by=user,
        updated_at=timezone.now(),
    )

    if assigned:
        _notify_assignee(
            assignee, user, company_id,
            title='Przypisano rozliczenia',
            message=f'Przypisano Ci {assigned} rozliczeń',
            data={'count': assigned},
        )
    logger.info('Bulk assigned %d/%d settlements to %s', assigned, len(settlement_ids), assignee.id)
    return {'assigned': assigned, 'requested': len(settlement_ids)}
