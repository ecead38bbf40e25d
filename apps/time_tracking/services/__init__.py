"""Services for time tracking."""

from .exceptions import (
    TimeEntryNotFoundError,
    TimeEntryOverlapError,
    TimeEntryLockedError,
    TimeEntryNotEditableError,
    InvalidStatusTransitionError,
    TimerAlreadyRunningError,
    TimerNotRunningError,
    TimeTrackingModeError,
    InvalidTimeEntryError,
)
from .time_settings import get_settings, update_settings
from .entries import (
    list_entries,
    get_entry,
    create_entry,
    update_entry,
    delete_entry,
    get_active_timer,
    start_timer,
    stop_timer,
    update_timer,
    discard_timer,
    submit_entry,
    approve_entry,
    reject_entry,
    bulk_approve,
    bulk_reject,
)
from .timesheets import (
    summarize,
    daily_timesheet,
    weekly_timesheet,
    report_entries,
    summary_report,
    client_report,
    export_report,
)

__all__ = [
    # Exceptions
    'TimeEntryNotFoundError',
    'TimeEntryOverlapError',
    'TimeEntryLockedError',
    'TimeEntryNotEditableError',
    'InvalidStatusTransitionError',
    'TimerAlreadyRunningError',
    'TimerNotRunningError',
    'TimeTrackingModeError',
    'InvalidTimeEntryError',
    # Settings
    'get_settings',
    'update_settings',
    # Entries
    'list_entries',
    'get_entry',
    'create_entry',
    'update_entry',
    'delete_entry',
    # Timer
    'get_active_timer',
    'start_timer',
    'stop_timer',
    'update_timer',
    'discard_timer',
    # Workflow
    'submit_entry',
    'approve_entry',
    'reject_entry',
    'bulk_approve',
    'bulk_reject',
    # Reports
    'summarize',
    'daily_timesheet',
    'weekly_timesheet',
    'report_entries',
    'summary_report',
    'client_report',
    'export_report',
]
