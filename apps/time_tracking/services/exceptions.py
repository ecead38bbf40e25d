"""Domain exceptions for time tracking."""
from rest_framework.exceptions import APIException


class TimeEntryNotFoundError(APIException):
    status_code = 404
    default_detail = 'Wpis czasu nie został znaleziony.'
    default_code = 'time_entry_not_found'


class TimeEntryOverlapError(APIException):
    status_code = 409
    default_detail = 'Wpis czasu nakłada się z istniejącym wpisem'
    default_code = 'time_entry_overlap'


class TimeEntryLockedError(APIException):
    status_code = 403
    default_detail = 'Wpis czasu jest zablokowany do edycji'
    default_code = 'time_entry_locked'


class TimeEntryNotEditableError(APIException):
    status_code = 403
    default_detail = 'Można edytować tylko wpisy w statusie szkic lub odrzucony.'
    default_code = 'time_entry_not_editable'


class InvalidStatusTransitionError(APIException):
    status_code = 400
    default_detail = 'Nieprawidłowa zmiana statusu wpisu czasu'
    default_code = 'invalid_status_transition'


class TimerAlreadyRunningError(APIException):
    status_code = 409
    default_detail = 'Timer jest już uruchomiony'
    default_code = 'timer_already_running'


class TimerNotRunningError(APIException):
    status_code = 404
    default_detail = 'Brak uruchomionego timera'
    default_code = 'timer_not_running'


class TimeTrackingModeError(APIException):
    status_code = 400
    default_detail = 'Ten sposób rejestracji czasu jest wyłączony.'
    default_code = 'time_tracking_mode_disabled'


class InvalidTimeEntryError(APIException):
    status_code = 400
    default_detail = 'Nieprawidłowe dane wpisu czasu.'
    default_code = 'invalid_time_entry'
