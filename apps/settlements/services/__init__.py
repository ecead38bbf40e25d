"""Services for monthly settlements."""

from .exceptions import (
    SettlementNotFoundError,
    SettlementAccessDeniedError,
    AssigneeNotFoundError,
)
from .settlement_management import (
    history_entry,
    list_settlements,
    get_settlement,
    initialize_month,
    update_status,
    update_settlement,
    assign_settlement,
    bulk_assign,
)
from .statistics import get_overview, get_employee_stats, get_my_stats
from .comments import list_comments, add_comment

__all__ = [
    # Exceptions
    'SettlementNotFoundError',
    'SettlementAccessDeniedError',
    'AssigneeNotFoundError',
    # Settlements
    'history_entry',
    'list_settlements',
    'get_settlement',
    'initialize_month',
    'update_status',
    'update_settlement',
    'assign_settlement',
    'bulk_assign',
    # Statistics
    'get_overview',
    'get_employee_stats',
    'get_my_stats',
    # Comments
    'list_comments',
    'add_comment',
]
