"""Domain exceptions for notifications."""
from rest_framework.exceptions import APIException


class NotificationNotFoundError(APIException):
    status_code = 404
    default_detail = 'Powiadomienie nie zostało znalezione.'
    default_code = 'notification_not_found'


class NotificationAccessDeniedError(APIException):
    status_code = 403
    default_detail = 'Brak dostępu do tego powiadomienia.'
    default_code = 'notification_access_denied'


class TooManyRecipientsError(APIException):
    status_code = 400
    default_detail = 'Zbyt wielu odbiorców powiadomienia.'
    default_code = 'too_many_recipients'
