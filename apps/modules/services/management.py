"""
Module catalogue and permission management.

Admins manage the catalogue and which companies have which modules.
Owners grant module permissions to their employees.
"""

import logging
from typing import List, Optional
from uuid import UUID

from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import QuerySet

from apps.accounts.models import UserRole
from apps.companies.models import Company
from apps.companies.services import CompanyNotFoundError, EmployeeNotFoundError
from apps.modules.models import CompanyModuleAccess, Module, UserModulePermission

from .access import can_access_module
from .exceptions import (
    ModuleAlreadyExistsError,
    ModuleNotEnabledError,
    ModuleNotFoundError,
    PermissionNotFoundError,
)

User = get_user_model()
logger = logging.getLogger(__name__)


# =============================================================================
# Module catalogue
# =============================================================================

def get_module(*, slug: str, user=None) -> Module:
    """
    Return a module by slug. When ``user`` is given it must have access to it.

    Raises:
        ModuleNotFoundError: Unknown or inaccessible module
    """
    module = Module.objects.filter(slug=slug).first()
    if module is None or (user is not None and not can_access_module(user, slug)):
        raise ModuleNotFoundError()
    return module


@transaction.atomic
def create_module(*, slug: str, name: str, description: str = '') -> Module:
    if Module.objects.filter(slug=slug).exists():
        raise ModuleAlreadyExistsError()
    module = Module.objects.create(slug=slug, name=name, description=description)
    logger.info('Module %s created', slug)
    return module


@transaction.atomic
def update_module(*, slug: str, **fields) -> Module:
    module = get_module(slug=slug)
    new_slug = fields.get('slug')
    if new_slug and new_slug != slug and Module.objects.filter(slug=new_slug).exists():
        raise ModuleAlreadyExistsError()
    for key, value in fields.items():
        setattr(module, key, value)
    module.save()
    return module


@transaction.atomic
def deactivate_module(*, slug: str) -> None:
    module = get_module(slug=slug)
    module.is_active = False
    module.save(update_fields=['is_active'])
    logger.info('Module %s deactivated', slug)


# =============================================================================
# Company access (admin)
# =============================================================================

def _get_company(company_id: UUID) -> Company:
    try:
        return Company.objects.get(id=company_id)
    except Company.DoesNotExist:
        raise CompanyNotFoundError()


def list_company_modules(*, company_id: UUID) -> QuerySet:
    _get_company(company_id)
    return (
        CompanyModuleAccess.objects
        .filter(company_id=company_id)
        .select_related('module')
        .order_by('module__name')
    )


@transaction.atomic
def grant_company_module(*, company_id: UUID, slug: str) -> CompanyModuleAccess:
    """Enable a module for a company (idempotent)."""
    company = _get_company(company_id)
    module = get_module(slug=slug)

    access, _ = CompanyModuleAccess.objects.update_or_create(
        company=company,
        module=module,
        defaults={'is_enabled': True},
    )
    logger.info('Module %s enabled for company %s', slug, company.id)
    return access


@transaction.atomic
def revoke_company_module(*, company_id: UUID, slug: str) -> None:
    module = get_module(slug=slug)
    updated = CompanyModuleAccess.objects.filter(
        company_id=company_id, module=module
    ).update(is_enabled=False)
    if not updated:
        raise PermissionNotFoundError()
    logger.info('Module %s disabled for company %s', slug, company_id)


# =============================================================================
# Employee permissions (owner)
# =============================================================================

def _get_employee(owner, employee_id: UUID):
    try:
        return User.objects.get(id=employee_id, company_id=owner.company_id, role=UserRole.EMPLOYEE)
    except User.DoesNotExist:
        raise EmployeeNotFoundError()


def _get_company_module(owner, slug: str) -> Module:
    module = get_module(slug=slug)
    enabled = CompanyModuleAccess.objects.filter(
        company_id=owner.company_id, module=module, is_enabled=True
    ).exists()
    if not enabled or not module.is_active:
        raise ModuleNotEnabledError()
    return module


def list_employee_permissions(*, owner, employee_id: UUID) -> QuerySet:
    """Permissions of the employee, limited to modules enabled for the company."""
    employee = _get_employee(owner, employee_id)
    return (
        UserModulePermission.objects
        .filter(
            user=employee,
            module__company_access__company_id=owner.company_id,
            module__company_access__is_enabled=True,
        )
        .select_related('module')
        .distinct()
    )


@transaction.atomic
def grant_employee_permissions(
    *,
    owner,
    employee_id: UUID,
    slug: str,
    permissions: List[str]
) -> UserModulePermission:
    """
    Grant (or replace) an employee's permissions in a module.

    Raises:
        EmployeeNotFoundError: Employee not in the owner's company
        ModuleNotEnabledError: Company does not have the module
    """
    employee = _get_employee(owner, employee_id)
    module = _get_company_module(owner, slug)

    grant, _ = UserModulePermission.objects.update_or_create(
        user=employee,
        module=module,
        defaults={'permissions': sorted(set(permissions)), 'granted_by': owner},
    )
    logger.info('Owner %s granted %s on %s to %s', owner.id, grant.permissions, slug, employee.id)
    return grant


@transaction.atomic
def update_employee_permissions(
    *,
    owner,
    employee_id: UUID,
    slug: str,
    permissions: List[str]
) -> UserModulePermission:
    """
    Raises:
        PermissionNotFoundError: The employee has no grant for the module yet
    """
    employee = _get_employee(owner, employee_id)
    module = _get_company_module(owner, slug)

    grant: Optional[UserModulePermission] = (
        UserModulePermission.objects
        .select_for_update()
        .filter(user=employee, module=module)
        .first()
    )
    if grant is None:
        raise PermissionNotFoundError()

    grant.permissions = sorted(set(permissions))
    grant.granted_by = owner
    grant.save(update_fields=['permissions', 'granted_by', 'updated_at'])
    return grant


@transaction.atomic
def revoke_employee_permissions(*, owner, employee_id: UUID, slug: str) -> None:
    employee = _get_employee(owner, employee_id)
    module = get_module(slug=slug)
    deleted, _ = UserModulePermission.objects.filter(user=employee, module=module).delete()
    if not deleted:
        raise PermissionNotFoundError()
    logger.info('Owner %s revoked %s from %s', owner.id, slug, employee.id)
