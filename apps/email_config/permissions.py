from rest_framework.permissions import BasePermission

from apps.accounts.models import UserRole
from apps.modules.models import EMAIL_CLIENT
from apps.modules.services.access import has_module_permission

from .services import SCOPE_COMPANY, SCOPE_SYSTEM

# Mailbox actions employees may use with the email-client module
EMPLOYEE_MAILBOX_ACTIONS = {'send': 'write', 'inbox': 'read'}


class EmailScopePermission(BasePermission):
    """
    Permission: Access to the configuration scope of the view.

    user          - any authenticated user
    company       - owner; employees may read the configuration and use the
                    mailbox when granted the email-client module
    system-admin  - ADMIN only
    """

    message = 'Brak uprawnień do konfiguracji email.'

    def has_permission(self, request, view):
        user = request.user
        if not (user and user.is_authenticated):
            return False

        scope = getattr(view, 'scope', None)
        if scope == SCOPE_SYSTEM:
            return user.role == UserRole.ADMIN
        if scope != SCOPE_COMPANY:
            return True

        if user.role == UserRole.COMPANY_OWNER:
            return True
        if user.role != UserRole.EMPLOYEE:
            return False
        if view.action == 'retrieve':
            return True
        needed = EMPLOYEE_MAILBOX_ACTIONS.get(view.action)
        return needed is not None and has_module_permission(user, EMAIL_CLIENT, needed)
