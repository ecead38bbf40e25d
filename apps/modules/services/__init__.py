"""Services for modules and RBAC."""

from .exceptions import (
    ModuleNotFoundError,
    ModuleAlreadyExistsError,
    ModuleNotEnabledError,
    PermissionNotFoundError,
    ModuleAccessDeniedError,
)
from .access import can_access_module, has_module_permission, get_available_modules
from .management import (
    get_module,
    create_module,
    update_module,
    deactivate_module,
    list_company_modules,
    grant_company_module,
    revoke_company_module,
    list_employee_permissions,
    grant_employee_permissions,
    update_employee_permissions,
    revoke_employee_permissions,
)

__all__ = [
    # Exceptions
    'ModuleNotFoundError',
    'ModuleAlreadyExistsError',
    'ModuleNotEnabledError',
    'PermissionNotFoundError',
    'ModuleAccessDeniedError',
    # Access rules
    'can_access_module',
    'has_module_permission',
    'get_available_modules',
    # Management
    'get_module',
    'create_module',
    'update_module',
    'deactivate_module',
    'list_company_modules',
    'grant_company_module',
    'revoke_company_module',
    'list_employee_permissions',
    'grant_employee_permissions',
    'update_employee_permissions',
    'revoke_employee_permissions',
]
