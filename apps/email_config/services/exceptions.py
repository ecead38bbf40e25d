"""Domain exceptions for email configuration."""
from rest_framework.exceptions import APIException


class EmailConfigNotFoundError(APIException):
    status_code = 404
    default_detail = 'Konfiguracja email nie została znaleziona.'
    default_code = 'email_config_not_found'


class EmailConfigExistsError(APIException):
    status_code = 409
    default_detail = 'Konfiguracja email już istnieje.'
    default_code = 'email_config_exists'


class EmailDeliveryError(APIException):
    status_code = 400
    default_detail = 'Nie udało się wysłać wiadomości.'
    default_code = 'email_delivery_failed'


class MailboxError(APIException):
    status_code = 400
    default_detail = 'Nie udało się pobrać wiadomości.'
    default_code = 'mailbox_error'
