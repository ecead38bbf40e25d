"""
Tenant resolution.

Every business query is filtered by the *effective company*: the system
company for administrators, the user's own company for everybody else.
"""

from rest_framework.exceptions import PermissionDenied

from apps.accounts.models import UserRole
from apps.common.exceptions import ServiceMisconfiguredError

from .models import Company


def get_system_company() -> Company:
    """
    Return the system company ADMIN users belong to.

    Raises:
        ServiceMisconfiguredError: If the system company was never created
    """
    company = Company.objects.filter(is_system_company=True).first()
    if company is None:
        raise ServiceMisconfiguredError('Brak firmy systemowej. Uruchom migracje.')
    return company


def get_effective_company_id(user):
    """
    Company id used to scope queries for the user.

    Raises:
        PermissionDenied: If a non-admin user has no company
    """
    if user.role == UserRole.ADMIN:
        return get_system_company().id
    if not user.company_id:
        raise PermissionDenied('Użytkownik nie jest przypisany do firmy')
    return user.company_id


def can_view_all(user) -> bool:
    """Owners and admins see all company records."""
    return user.role in (UserRole.COMPANY_OWNER, UserRole.ADMIN)
