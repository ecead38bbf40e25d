"""
User and company administration (ADMIN role).

Deleting never removes rows: users and companies are deactivated.
"""

import logging
from typing import Optional
from uuid import UUID

from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import QuerySet

from apps.accounts.models import UserRole
from apps.companies.models import Company
from apps.companies.tenancy import get_system_company

from .exceptions import (
    CompanyNotFoundError,
    CompanyRequiredError,
    EmailAlreadyExistsError,
    InvalidOwnerError,
    SystemCompanyProtectedError,
    UserNotFoundError,
)

User = get_user_model()
logger = logging.getLogger(__name__)


# =============================================================================
# Users
# =============================================================================

def list_users() -> QuerySet:
    return User.objects.select_related('company').order_by('-created_at')


def get_user(*, user_id: UUID) -> User:
    try:
        return User.objects.select_related('company').get(id=user_id)
    except User.DoesNotExist:
        raise UserNotFoundError()


def _ensure_email_free(email: str, exclude_id: Optional[UUID] = None) -> None:
    qs = User.objects.filter(email__iexact=email)
    if exclude_id:
        qs = qs.exclude(id=exclude_id)
    if qs.exists():
        raise EmailAlreadyExistsError()


def _resolve_company(role: str, company_id: Optional[UUID]) -> Company:
    if role == UserRole.ADMIN:
        return get_system_company()
    if not company_id:
        raise CompanyRequiredError()
    try:
        return Company.objects.get(id=company_id)
    except Company.DoesNotExist:
        raise CompanyNotFoundError()


@transaction.atomic
def create_user(
    *,
    email: str,
    password: str,
    first_name: str,
    last_name: str,
    role: str,
    company_id: Optional[UUID] = None
) -> User:
    """
    Create a user of any role.

    ADMIN users are always placed in the system company.

    Raises:
        EmailAlreadyExistsError: Email already taken
        CompanyRequiredError: Owner/employee without company_id
        CompanyNotFoundError: company_id does not exist
    """
    email = User.objects.normalize_email(email)
    _ensure_email_free(email)
    company = _resolve_company(role, company_id)

    user = User.objects.create_user(
        email=email,
        password=password,
        first_name=first_name,
        last_name=last_name,
        role=role,
        company=company,
    )
    logger.info('Admin created user %s with role %s', user.id, role)
    return user


@transaction.atomic
def update_user(*, user_id: UUID, **fields) -> User:
    """
    Update user fields. ``password`` is re-hashed, promotion to ADMIN moves the
    user to the system company.
    """
    user = get_user(user_id=user_id)

    email = fields.pop('email', None)
    if email is not None:
        email = User.objects.normalize_email(email)
        _ensure_email_free(email, exclude_id=user.id)
        user.email = email

    password = fields.pop('password', None)
    if password:
        user.set_password(password)

    company_id = fields.pop('company_id', None)
    if company_id is not None:
        try:
            user.company = Company.objects.get(id=company_id)
        except Company.DoesNotExist:
            raise CompanyNotFoundError()

    for key, value in fields.items():
        setattr(user, key, value)

    if user.role == UserRole.ADMIN:
        user.company = get_system_company()

    user.save()
    return user


@transaction.atomic
def set_user_active(*, user_id: UUID, is_active: bool) -> User:
    user = get_user(user_id=user_id)
    user.is_active = is_active
    user.save(update_fields=['is_active', 'updated_at'])
    logger.info('User %s active=%s', user.id, is_active)
    return user


def list_available_owners() -> QuerySet:
    return User.objects.filter(role=UserRole.COMPANY_OWNER, is_active=True).order_by('email')


# =============================================================================
# Companies
# =============================================================================

def list_companies() -> QuerySet:
    return (
        Company.objects
        .filter(is_system_company=False)
        .select_related('owner')
        .order_by('-created_at')
    )


def get_company(*, company_id: UUID) -> Company:
    try:
        return Company.objects.select_related('owner').get(id=company_id)
    except Company.DoesNotExist:
        raise CompanyNotFoundError()


def _get_owner(owner_id: UUID) -> User:
    try:
        owner = User.objects.get(id=owner_id)
    except User.DoesNotExist:
        raise UserNotFoundError('Właściciel nie został znaleziony.')
    if owner.role != UserRole.COMPANY_OWNER:
        raise InvalidOwnerError()
    return owner


@transaction.atomic
def create_company(*, name: str, owner_id: UUID) -> Company:
    """
    Create a company and attach its owner to it.

    Raises:
        UserNotFoundError: Owner does not exist
        InvalidOwnerError: Owner is not a COMPANY_OWNER
    """
    owner = _get_owner(owner_id)
    company = Company.objects.create(name=name, owner=owner)

    owner.company = company
    owner.save(update_fields=['company', 'updated_at'])

    logger.info('Company %s created with owner %s', company.id, owner.id)
    return company


@transaction.atomic
def update_company(
    *,
    company_id: UUID,
    name: Optional[str] = None,
    owner_id: Optional[UUID] = None,
    is_active: Optional[bool] = None
) -> Company:
    company = get_company(company_id=company_id)

    if name is not None:
        company.name = name
    if is_active is not None:
        company.is_active = is_active
    if owner_id is not None:
        owner = _get_owner(owner_id)
        company.owner = owner
        owner.company = company
        owner.save(update_fields=['company', 'updated_at'])

    company.save()
    return company


@transaction.atomic
def deactivate_company(*, company_id: UUID) -> Company:
    """
    Raises:
        SystemCompanyProtectedError: For the system company
    """
    company = get_company(company_id=company_id)
    if company.is_system_company:
        raise SystemCompanyProtectedError()

    company.is_active = False
    company.save(update_fields=['is_active', 'updated_at'])
    logger.info('Company %s deactivated', company.id)
    return company


def list_company_employees(*, company_id: UUID) -> QuerySet:
    get_company(company_id=company_id)
    return User.objects.filter(company_id=company_id, role=UserRole.EMPLOYEE).order_by('-created_at')
