"""Domain exceptions for settlements."""
from rest_framework.exceptions import APIException


class SettlementNotFoundError(APIException):
    status_code = 404
    default_detail = 'Rozliczenie nie zostało znalezione'
    default_code = 'settlement_not_found'


class SettlementAccessDeniedError(APIException):
    status_code = 403
    default_detail = 'Brak dostępu do rozliczenia'
    default_code = 'settlement_access_denied'


class AssigneeNotFoundError(APIException):
    status_code = 404
    default_detail = 'Użytkownik nie został znaleziony'
    default_code = 'assignee_not_found'
