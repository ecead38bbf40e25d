"""
Domain exceptions for company and user administration.

Raised from services and rendered by the global API exception handler.
"""
from rest_framework.exceptions import APIException


class UserNotFoundError(APIException):
    status_code = 404
    default_detail = 'Użytkownik nie został znaleziony.'
    default_code = 'user_not_found'


class EmployeeNotFoundError(APIException):
    status_code = 404
    default_detail = 'Pracownik nie został znaleziony.'
    default_code = 'employee_not_found'


class CompanyNotFoundError(APIException):
    status_code = 404
    default_detail = 'Firma nie została znaleziona.'
    default_code = 'company_not_found'


class EmailAlreadyExistsError(APIException):
    status_code = 409
    default_detail = 'Użytkownik o tym adresie email już istnieje.'
    default_code = 'email_exists'


class CompanyRequiredError(APIException):
    status_code = 400
    default_detail = 'Firma jest wymagana dla właściciela i pracownika.'
    default_code = 'company_required'


class InvalidOwnerError(APIException):
    status_code = 400
    default_detail = 'Wybrany użytkownik nie ma roli właściciela firmy.'
    default_code = 'invalid_owner'


class SystemCompanyProtectedError(APIException):
    status_code = 400
    default_detail = 'Nie można usunąć firmy systemowej.'
    default_code = 'system_company_protected'
