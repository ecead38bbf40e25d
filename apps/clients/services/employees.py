"""Employees of a client (payroll contacts), scoped to the caller's company."""

import logging
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.db.models import Q, QuerySet

from apps.accounts.models import User
from apps.clients.models import ClientEmployee

from .client_management import get_client
from .exceptions import EmployeeNotFoundError

logger = logging.getLogger(__name__)


def list_employees(*, company_id: UUID, client_id: UUID, filters: Optional[dict] = None) -> QuerySet:
    """
    Employees of the client, active and inactive unless ``is_active`` is given.

    Raises:
        ClientNotFoundError: Unknown client or client of another company
    """
    client = get_client(company_id=company_id, client_id=client_id)
    filters = filters or {}
    qs = ClientEmployee.objects.filter(company_id=company_id, client=client)

    search = filters.get('search')
    if search:
        qs = qs.filter(
            Q(first_name__icontains=search)
            | Q(last_name__icontains=search)
            | Q(email__icontains=search)
            | Q(pesel__icontains=search)
        )

    if filters.get('contract_type'):
        qs = qs.filter(contract_type=filters['contract_type'])

    is_active = filters.get('is_active')
    if is_active is not None:
        qs = qs.filter(is_active=is_active)

    return qs.select_related('created_by', 'updated_by').order_by('last_name', 'first_name')


def get_employee(*, company_id: UUID, client_id: UUID, employee_id: UUID) -> ClientEmployee:
    get_client(company_id=company_id, client_id=client_id)
    try:
        return ClientEmployee.objects.get(id=employee_id, client_id=client_id, company_id=company_id)
    except ClientEmployee.DoesNotExist:
        raise EmployeeNotFoundError()


@transaction.atomic
def create_employee(*, user: User, company_id: UUID, client_id: UUID, data: dict) -> ClientEmployee:
    client = get_client(company_id=company_id, client_id=client_id)
    employee = ClientEmployee.objects.create(
        company_id=company_id,
        client=client,
        created_by=user,
        **data
    )
    logger.info('Employee %s added to client %s by %s', employee.id, client.id, user.id)
    return employee


@transaction.atomic
def update_employee(
    *,
    user: User,
    company_id: UUID,
    client_id: UUID,
    employee_id: UUID,
    data: dict
) -> ClientEmployee:
    """Apply the given fields. ``None`` clears a nullable field."""
    employee = get_employee(company_id=company_id, client_id=client_id, employee_id=employee_id)
    for key, value in data.items():
        setattr(employee, key, value)
    employee.updated_by = user
    employee.save()
    return employee


@transaction.atomic
def deactivate_employee(*, user: User, company_id: UUID, client_id: UUID, employee_id: UUID) -> None:
    employee = get_employee(company_id=company_id, client_id=client_id, employee_id=employee_id)
    employee.is_active = False
    employee.updated_by = user
    employee.save(update_fields=['is_active', 'updated_by', 'updated_at'])
    logger.info('Employee %s of client %s deactivated by %s', employee.id, client_id, user.id)


@transaction.atomic
def restore_employee(*, user: User, company_id: UUID, client_id: UUID, employee_id: UUID) -> ClientEmployee:
    """
    Raises:
        EmployeeNotFoundError: Employee does not exist or is not deleted
    """
    employee = get_employee(company_id=company_id, client_id=client_id, employee_id=employee_id)
    if employee.is_active:
        raise EmployeeNotFoundError('Pracownik nie został znaleziony lub nie jest usunięty.')
    employee.is_active = True
    employee.updated_by = user
    employee.save(update_fields=['is_active', 'updated_by', 'updated_at'])
    return employee
