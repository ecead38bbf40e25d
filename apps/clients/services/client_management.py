"""
Client management service.

All operations are scoped to the effective company of the caller. Every change
is written to the client changelog.
"""

import datetime
import logging
from typing import Iterable, List, Optional
from uuid import UUID

from django.db import transaction
from django.db.models import Q, QuerySet

from apps.accounts.models import User
from apps.clients.models import ChangeAction, Client, ClientChangeLog
from apps.notifications.models import NotificationType
from apps.notifications.services import notify

from .exceptions import ClientNotFoundError

logger = logging.getLogger(__name__)

# Fields compared when building the changelog diff
TRACKED_FIELDS = [
    'name', 'nip', 'email', 'phone',
    'company_start_date', 'cooperation_start_date', 'suspension_date',
    'company_specificity', 'additional_info',
    'gtu_code', 'gtu_codes', 'aml_group', 'receive_email_copy',
    'employment_type', 'vat_status', 'tax_scheme', 'zus_status',
    'is_active',
]

# Fields that may be changed for many clients at once
BULK_EDITABLE_FIELDS = [
    'employment_type', 'vat_status', 'tax_scheme', 'zus_status',
    'aml_group', 'receive_email_copy', 'gtu_code',
]


def _jsonable(value):
    if isinstance(value, (datetime.date, datetime.datetime)):
        return value.isoformat()
    return value


def snapshot(client: Client) -> dict:
    return {field: _jsonable(getattr(client, field)) for field in TRACKED_FIELDS}


def diff_snapshots(before: dict, after: dict) -> List[dict]:
    return [
        {'field': field, 'old': before.get(field), 'new': after.get(field)}
        for field in TRACKED_FIELDS
        if before.get(field) != after.get(field)
    ]


def log_change(*, client: Client, action: str, user: Optional[User], changes: Optional[list] = None):
    return ClientChangeLog.objects.create(
        client=client,
        company_id=client.company_id,
        action=action,
        changes=changes or [],
        performed_by=user,
    )


# =============================================================================
# Queries
# =============================================================================

def filter_clients(*, company_id: UUID, filters: Optional[dict] = None) -> QuerySet:
    """
    Company clients matching the filters.

    Args:
        company_id: Effective company
        filters: Validated query parameters (search, enum filters, gtu_code,
            receive_email_copy, is_active)
    """
    filters = filters or {}
    qs = Client.objects.filter(company_id=company_id)

    is_active = filters.get('is_active')
    qs = qs.filter(is_active=True if is_active is None else is_active)

    search = filters.get('search')
    if search:
        qs = qs.filter(
            Q(name__icontains=search) | Q(nip__icontains=search) | Q(email__icontains=search)
        )

    for field in ('employment_type', 'vat_status', 'tax_scheme', 'zus_status', 'aml_group', 'gtu_code'):
        value = filters.get(field)
        if value:
            qs = qs.filter(**{field: value})

    receive_email_copy = filters.get('receive_email_copy')
    if receive_email_copy is not None:
        qs = qs.filter(receive_email_copy=receive_email_copy)

    return qs.select_related('created_by', 'updated_by').order_by('name')


def get_client(*, company_id: UUID, client_id: UUID) -> Client:
    """
    Raises:
        ClientNotFoundError: Unknown client or client of another company
    """
    try:
        return Client.objects.get(id=client_id, company_id=company_id)
    except Client.DoesNotExist:
        raise ClientNotFoundError()


def get_changelog(*, company_id: UUID, client_id: UUID) -> QuerySet:
    client = get_client(company_id=company_id, client_id=client_id)
    return client.changelog.select_related('performed_by').order_by('-created_at')


def check_duplicates(
    *,
    company_id: UUID,
    nip: Optional[str] = None,
    email: Optional[str] = None,
    exclude_id: Optional[UUID] = None
) -> dict:
    """Clients of the company sharing the NIP or the email."""
    base = Client.objects.filter(company_id=company_id)
    if exclude_id:
        base = base.exclude(id=exclude_id)

    return {
        'by_nip': list(base.filter(nip=nip)) if nip else [],
        'by_email': list(base.filter(email__iexact=email)) if email else [],
    }


# =============================================================================
# Commands
# =============================================================================

def _notify_client_created(client: Client, actor: User) -> None:
    recipients = (
        User.objects
        .filter(company_id=client.company_id, is_active=True)
        .exclude(id=actor.id)
    )
    notify(
        company_id=client.company_id,
        recipients=list(recipients),
        type=NotificationType.CLIENT_CREATED,
        title='Nowy klient',
        message=f'{actor.get_full_name()} dodał(a) klienta {client.name}',
        data={'client_id': str(client.id)},
        actor=actor,
    )


@transaction.atomic
def create_client(*, user: User, company_id: UUID, data: dict) -> Client:
    client = Client.objects.create(
        company_id=company_id,
        created_by=user,
        updated_by=user,
        **data
    )
    log_change(client=client, action=ChangeAction.CREATE, user=user, changes=diff_snapshots({}, snapshot(client)))
    _notify_client_created(client, user)

    logger.info('Client %s created in company %s', client.id, company_id)
    return client


@transaction.atomic
def update_client(*, user: User, company_id: UUID, client_id: UUID, data: dict) -> Client:
    client = get_client(company_id=company_id, client_id=client_id)
    before = snapshot(client)

    for key, value in data.items():
        setattr(client, key, value)
    client.updated_by = user
    client.save()

    changes = diff_snapshots(before, snapshot(client))
    if changes:
        log_change(client=client, action=ChangeAction.UPDATE, user=user, changes=changes)
    return client


def _set_active(user: User, client: Client, is_active: bool, action: str) -> None:
    client.is_active = is_active
    client.updated_by = user
    client.save(update_fields=['is_active', 'updated_by', 'updated_at'])
    log_change(
        client=client,
        action=action,
        user=user,
        changes=[{'field': 'is_active', 'old': not is_active, 'new': is_active}],
    )


@transaction.atomic
def soft_delete_client(*, user: User, company_id: UUID, client_id: UUID) -> None:
    client = get_client(company_id=company_id, client_id=client_id)
    _set_active(user, client, False, ChangeAction.DELETE)
    logger.info('Client %s deactivated by %s', client.id, user.id)


@transaction.atomic
def hard_delete_client(*, user: User, company_id: UUID, client_id: UUID) -> None:
    client = get_client(company_id=company_id, client_id=client_id)
    logger.warning('Client %s (%s) permanently deleted by %s', client.id, client.name, user.id)
    client.delete()


@transaction.atomic
def restore_client(*, user: User, company_id: UUID, client_id: UUID) -> Client:
    """
    Raises:
        ClientNotFoundError: Client does not exist or is not deleted
    """
    client = get_client(company_id=company_id, client_id=client_id)
    if client.is_active:
        raise ClientNotFoundError('Klient nie został znaleziony lub nie jest usunięty.')
    _set_active(user, client, True, ChangeAction.RESTORE)
    return client


@transaction.atomic
def bulk_set_active(*, user: User, company_id: UUID, client_ids: Iterable[UUID], is_active: bool) -> dict:
    """Soft delete or restore many clients. Clients of other companies are skipped."""
    client_ids = list(client_ids)
    clients = Client.objects.select_for_update().filter(
        company_id=company_id, id__in=client_ids, is_active=not is_active
    )
    action = ChangeAction.RESTORE if is_active else ChangeAction.DELETE

    affected = 0
    for client in clients:
        _set_active(user, client, is_active, action)
        affected += 1

    logger.info('Bulk %s of %d/%d clients by %s', action, affected, len(client_ids), user.id)
    return {'affected': affected, 'requested': len(client_ids)}


@transaction.atomic
def bulk_edit(*, user: User, company_id: UUID, client_ids: Iterable[UUID], changes: dict) -> dict:
    client_ids = list(client_ids)
    changes = {k: v for k, v in changes.items() if k in BULK_EDITABLE_FIELDS}

    affected = 0
    for client in Client.objects.select_for_update().filter(company_id=company_id, id__in=client_ids):
        before = snapshot(client)
        for key, value in changes.items():
            setattr(client, key, value)
        client.updated_by = user
        client.save()
        diff = diff_snapshots(before, snapshot(client))
        if diff:
            log_change(client=client, action=ChangeAction.UPDATE, user=user, changes=diff)
        affected += 1

    return {'affected': affected, 'requested': len(client_ids)}
