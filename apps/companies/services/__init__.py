"""Services for company administration."""

from .exceptions import (
    UserNotFoundError,
    EmployeeNotFoundError,
    CompanyNotFoundError,
    EmailAlreadyExistsError,
    CompanyRequiredError,
    InvalidOwnerError,
    SystemCompanyProtectedError,
)
from .admin_management import (
    list_users,
    get_user,
    create_user,
    update_user,
    set_user_active,
    list_available_owners,
    list_companies,
    get_company,
    create_company,
    update_company,
    deactivate_company,
    list_company_employees,
)
from .employee_management import (
    list_employees,
    get_employee,
    create_employee,
    update_employee,
    deactivate_employee,
)

__all__ = [
    # Exceptions
    'UserNotFoundError',
    'EmployeeNotFoundError',
    'CompanyNotFoundError',
    'EmailAlreadyExistsError',
    'CompanyRequiredError',
    'InvalidOwnerError',
    'SystemCompanyProtectedError',
    # Admin
    'list_users',
    'get_user',
    'create_user',
    'update_user',
    'set_user_active',
    'list_available_owners',
    'list_companies',
    'get_company',
    'create_company',
    'update_company',
    'deactivate_company',
    'list_company_employees',
    # Owner
    'list_employees',
    'get_employee',
    'create_employee',
    'update_employee',
    'deactivate_employee',
]
