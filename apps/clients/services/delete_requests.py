"""
Client delete requests.

Employees ask for a client to be deleted instead of deleting it themselves.
A company owner (or an admin) approves the request, which soft deletes the
client, or rejects it. The requester may cancel a pending request.
"""

import logging
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet
from django.utils import timezone

from apps.accounts.models import User, UserRole
from apps.clients.models import Client, ClientDeleteRequest, DeleteRequestStatus
from apps.notifications.models import NotificationType
from apps.notifications.services import notify

from .client_management import soft_delete_client
from .exceptions import (
    ClientNotFoundError,
    DeleteRequestExistsError,
    DeleteRequestNotFoundError,
    DeleteRequestPermissionError,
    DeleteRequestProcessedError,
)

logger = logging.getLogger(__name__)


def _requests(company_id: UUID) -> QuerySet:
    return (
        ClientDeleteRequest.objects
        .filter(company_id=company_id)
        .select_related('client', 'requested_by', 'processed_by')
        .order_by('-created_at')
    )


def list_requests(*, company_id: UUID, status: Optional[str] = None) -> QuerySet:
    qs = _requests(company_id)
    if status:
        qs = qs.filter(status=status)
    return qs


def list_my_requests(*, user: User, company_id: UUID) -> QuerySet:
    return _requests(company_id).filter(requested_by=user)


def get_request(*, company_id: UUID, request_id: UUID) -> ClientDeleteRequest:
    try:
        return _requests(company_id).get(id=request_id)
    except ClientDeleteRequest.DoesNotExist:
        raise DeleteRequestNotFoundError()


def _check_reviewer(user: User) -> None:
    if user.role == UserRole.EMPLOYEE:
        raise DeleteRequestPermissionError()


def _check_pending(delete_request: ClientDeleteRequest) -> None:
    if delete_request.status != DeleteRequestStatus.PENDING:
        raise DeleteRequestProcessedError()


@transaction.atomic
def create_request(*, user: User, company_id: UUID, client_id: UUID, reason: str = '') -> ClientDeleteRequest:
    """
    Raises:
        ClientNotFoundError: Unknown or already deleted client
        DeleteRequestExistsError: The client already has a pending request
    """
    client = (
        Client.objects
        .select_for_update()
        .filter(id=client_id, company_id=company_id, is_active=True)
        .first()
    )
    if client is None:
        raise ClientNotFoundError()

    if client.delete_requests.filter(status=DeleteRequestStatus.PENDING).exists():
        raise DeleteRequestExistsError()

    delete_request = ClientDeleteRequest.objects.create(
        company_id=company_id,
        client=client,
        requested_by=user,
        reason=reason,
    )

    owners = (
        User.objects
        .filter(company_id=company_id, role=UserRole.COMPANY_OWNER, is_active=True)
        .exclude(id=user.id)
    )
    notify(
        company_id=company_id,
        recipients=list(owners),
        type=NotificationType.CLIENT_DELETE_REQUESTED,
        title='Żądanie usunięcia klienta',
        message=f'{user.get_full_name()} prosi o usunięcie klienta {client.name}',
        data={'client_id': str(client.id), 'request_id': str(delete_request.id)},
        actor=user,
    )

    logger.info('Delete request %s for client %s created by %s', delete_request.id, client.id, user.id)
    return delete_request


def _notify_requester(delete_request: ClientDeleteRequest, reviewer: User, type: str, title: str) -> None:
    if delete_request.requested_by_id is None or delete_request.requested_by_id == reviewer.id:
        return
    notify(
        company_id=delete_request.company_id,
        recipients=[delete_request.requested_by_id],
        type=type,
        title=title,
        message=f'Klient: {delete_request.client.name}',
        data={'client_id': str(delete_request.client_id), 'request_id': str(delete_request.id)},
        actor=reviewer,
    )


@transaction.atomic
def approve_request(*, user: User, company_id: UUID, request_id: UUID) -> ClientDeleteRequest:
    """
    Approve the request and soft delete its client in one transaction.

    Raises:
        DeleteRequestPermissionError: Caller is an employee
        DeleteRequestNotFoundError: Unknown request
        DeleteRequestProcessedError: Request is no longer pending
    """
    _check_reviewer(user)
    delete_request = get_request(company_id=company_id, request_id=request_id)
    _check_pending(delete_request)

    client = delete_request.client
    if client.is_active:
        soft_delete_client(user=user, company_id=company_id, client_id=client.id)

    delete_request.status = DeleteRequestStatus.APPROVED
    delete_request.processed_by = user
    delete_request.processed_at = timezone.now()
    delete_request.save(update_fields=['status', 'processed_by', 'processed_at', 'updated_at'])

    _notify_requester(delete_request, user, NotificationType.CLIENT_DELETE_APPROVED, 'Zatwierdzono usunięcie klienta')
    logger.info('Delete request %s approved by %s; client %s deactivated', delete_request.id, user.id, client.id)
    return delete_request


@transaction.atomic
def reject_request(
    *,
    user: User,
    company_id: UUID,
    request_id: UUID,
    rejection_reason: str = ''
) -> ClientDeleteRequest:
    """
    Raises:
        DeleteRequestPermissionError: Caller is an employee
        DeleteRequestNotFoundError: Unknown request
        DeleteRequestProcessedError: Request is no longer pending
    """
    _check_reviewer(user)
    delete_request = get_request(company_id=company_id, request_id=request_id)
    _check_pending(delete_request)

    delete_request.status = DeleteRequestStatus.REJECTED
    delete_request.processed_by = user
    delete_request.processed_at = timezone.now()
    delete_request.rejection_reason = rejection_reason
    delete_request.save(update_fields=['status', 'processed_by', 'processed_at', 'rejection_reason', 'updated_at'])

    _notify_requester(delete_request, user, NotificationType.CLIENT_DELETE_REJECTED, 'Odrzucono usunięcie klienta')
    return delete_request


@transaction.atomic
def cancel_request(*, user: User, company_id: UUID, request_id: UUID) -> None:
    """
    Delete a pending request. Employees may only cancel their own.

    Raises:
        DeleteRequestPermissionError: Employee cancelling someone else's request
        DeleteRequestProcessedError: Request is no longer pending
    """
    delete_request = get_request(company_id=company_id, request_id=request_id)
    if user.role == UserRole.EMPLOYEE and delete_request.requested_by_id != user.id:
        raise DeleteRequestPermissionError('Możesz anulować tylko własne żądania.')
    _check_pending(delete_request)

    delete_request.delete()
    logger.info('Delete request %s cancelled by %s', request_id, user.id)
