"""
Module access rules.

ADMIN          - every module, every permission
COMPANY_OWNER  - modules enabled for the company, every permission
EMPLOYEE       - modules enabled for the company AND explicitly granted,
                 limited to the granted permissions
"""

from django.db.models import QuerySet

from apps.accounts.models import UserRole
from apps.modules.models import CompanyModuleAccess, Module, UserModulePermission


def _company_has_module(company_id, module) -> bool:
    if not company_id:
        return False
    return CompanyModuleAccess.objects.filter(
        company_id=company_id, module=module, is_enabled=True
    ).exists()


def _active_module(slug: str):
    return Module.objects.filter(slug=slug, is_active=True).first()


def can_access_module(user, slug: str) -> bool:
    """True if the user may open the module at all."""
    if user.role == UserRole.ADMIN:
        return True

    module = _active_module(slug)
    if module is None or not _company_has_module(user.company_id, module):
        return False

    if user.role == UserRole.COMPANY_OWNER:
        return True

    return UserModulePermission.objects.filter(user=user, module=module).exists()


def has_module_permission(user, slug: str, permission: str) -> bool:
    """True if the user holds ``permission`` (read/write/delete/manage) in the module."""
    if user.role == UserRole.ADMIN:
        return True

    module = _active_module(slug)
    if module is None or not _company_has_module(user.company_id, module):
        return False

    if user.role == UserRole.COMPANY_OWNER:
        return True

    grant = UserModulePermission.objects.filter(user=user, module=module).first()
    return grant is not None and permission in (grant.permissions or [])


def get_available_modules(user) -> QuerySet:
    """Modules the user can see in the navigation."""
    if user.role == UserRole.ADMIN:
        return Module.objects.all().order_by('name')

    modules = Module.objects.filter(
        is_active=True,
        company_access__company_id=user.company_id,
        company_access__is_enabled=True,
    )
    if user.role == UserRole.EMPLOYEE:
        modules = modules.filter(user_permissions__user=user)
    return modules.distinct().order_by('name')
