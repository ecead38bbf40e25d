"""
Employee management for company owners.

Employees always belong to the owner's company. New employees receive a
welcome email and the owner a notification, both sent best-effort after commit
through the company's email configuration.
"""

import logging
from uuid import UUID

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import QuerySet

from apps.accounts.models import UserRole
from apps.email_config.services import send_company_email

from .exceptions import EmailAlreadyExistsError, EmployeeNotFoundError

User = get_user_model()
logger = logging.getLogger(__name__)


def list_employees(*, company_id: UUID) -> QuerySet:
    return User.objects.filter(company_id=company_id, role=UserRole.EMPLOYEE).order_by('-created_at')


def get_employee(*, company_id: UUID, employee_id: UUID) -> User:
    """
    Raises:
        EmployeeNotFoundError: Not an employee of the company
    """
    try:
        return User.objects.get(id=employee_id, company_id=company_id, role=UserRole.EMPLOYEE)
    except User.DoesNotExist:
        raise EmployeeNotFoundError()


def _notify_new_employee(employee_id: UUID, owner_id: UUID) -> None:
    employee = User.objects.select_related('company').filter(id=employee_id).first()
    owner = User.objects.filter(id=owner_id).first()
    if employee is None or employee.company_id is None:
        return

    company = employee.company
    send_company_email(
        company_id=company.id,
        to=[employee.email],
        subject=f'Witamy w {company.name}',
        text=(
            f'Dzień dobry {employee.first_name},\n\n'
            f'utworzono dla Ciebie konto w systemie biura {company.name}.\n'
            f'Zaloguj się adresem {employee.email}: {settings.FRONTEND_URL}/login\n'
        ),
    )
    if owner is not None:
        send_company_email(
            company_id=company.id,
            to=[owner.email],
            subject='Dodano nowego pracownika',
            text=f'Pracownik {employee.get_full_name()} ({employee.email}) został dodany do firmy.',
        )


@transaction.atomic
def create_employee(
    *,
    owner: User,
    email: str,
    password: str,
    first_name: str,
    last_name: str
) -> User:
    """
    Create an EMPLOYEE in the owner's company.

    Raises:
        EmailAlreadyExistsError: Email already taken
    """
    email = User.objects.normalize_email(email)
    if User.objects.filter(email__iexact=email).exists():
        raise EmailAlreadyExistsError()

    employee = User.objects.create_user(
        email=email,
        password=password,
        first_name=first_name,
        last_name=last_name,
        role=UserRole.EMPLOYEE,
        company_id=owner.company_id,
    )
    logger.info('Owner %s created employee %s', owner.id, employee.id)

    transaction.on_commit(lambda: _notify_new_employee(employee.id, owner.id))
    return employee


@transaction.atomic
def update_employee(*, company_id: UUID, employee_id: UUID, **fields) -> User:
    employee = get_employee(company_id=company_id, employee_id=employee_id)

    email = fields.pop('email', None)
    if email is not None:
        email = User.objects.normalize_email(email)
        if User.objects.filter(email__iexact=email).exclude(id=employee.id).exists():
            raise EmailAlreadyExistsError()
        employee.email = email

    password = fields.pop('password', None)
    if password:
        employee.set_password(password)

    for key, value in fields.items():
        setattr(employee, key, value)

    employee.save()
    return employee


@transaction.atomic
def deactivate_employee(*, company_id: UUID, employee_id: UUID) -> None:
    employee = get_employee(company_id=company_id, employee_id=employee_id)
    employee.is_active = False
    employee.save(update_fields=['is_active', 'updated_at'])
    logger.info('Employee %s deactivated', employee.id)
