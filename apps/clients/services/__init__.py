"""Services for the clients module."""

from .exceptions import (
    ClientNotFoundError,
    IconNotFoundError,
    DuplicateIconNameError,
    InvalidIconError,
    CsvImportError,
    EmployeeNotFoundError,
    DeleteRequestNotFoundError,
    DeleteRequestExistsError,
    DeleteRequestProcessedError,
    DeleteRequestPermissionError,
)
from .client_management import (
    filter_clients,
    get_client,
    get_changelog,
    check_duplicates,
    create_client,
    update_client,
    soft_delete_client,
    hard_delete_client,
    restore_client,
    bulk_set_active,
    bulk_edit,
)
from .statistics import get_statistics
from .csv_io import export_clients, import_template, import_clients
from .icons import (
    list_icons,
    get_icon,
    create_icon,
    update_icon,
    deactivate_icon,
    get_client_icons,
    assign_icon,
    unassign_icon,
    set_client_icons,
)
from .employees import (
    list_employees,
    get_employee,
    create_employee,
    update_employee,
    deactivate_employee,
    restore_employee,
)
from .delete_requests import (
    list_requests,
    list_my_requests,
    get_request,
    create_request,
    approve_request,
    reject_request,
    cancel_request,
)

__all__ = [
    # Exceptions
    'ClientNotFoundError',
    'IconNotFoundError',
    'DuplicateIconNameError',
    'InvalidIconError',
    'CsvImportError',
    'EmployeeNotFoundError',
    'DeleteRequestNotFoundError',
    'DeleteRequestExistsError',
    'DeleteRequestProcessedError',
    'DeleteRequestPermissionError',
    # Clients
    'filter_clients',
    'get_client',
    'get_changelog',
    'check_duplicates',
    'create_client',
    'update_client',
    'soft_delete_client',
    'hard_delete_client',
    'restore_client',
    'bulk_set_active',
    'bulk_edit',
    'get_statistics',
    # CSV
    'export_clients',
    'import_template',
    'import_clients',
    # Icons
    'list_icons',
    'get_icon',
    'create_icon',
    'update_icon',
    'deactivate_icon',
    'get_client_icons',
    'assign_icon',
    'unassign_icon',
    'set_client_icons',
    # Employees
    'list_employees',
    'get_employee',
    'create_employee',
    'update_employee',
    'deactivate_employee',
    'restore_employee',
    # Delete requests
    'list_requests',
    'list_my_requests',
    'get_request',
    'create_request',
    'approve_request',
    'reject_request',
    'cancel_request',
]
