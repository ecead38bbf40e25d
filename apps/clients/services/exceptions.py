"""Domain exceptions for the clients module."""
from rest_framework.exceptions import APIException


class ClientNotFoundError(APIException):
    status_code = 404
    default_detail = 'Klient nie został znaleziony.'
    default_code = 'client_not_found'


class IconNotFoundError(APIException):
    status_code = 404
    default_detail = 'Ikona nie została znaleziona.'
    default_code = 'icon_not_found'


class DuplicateIconNameError(APIException):
    status_code = 400
    default_detail = 'Ikona o tej nazwie już istnieje.'
    default_code = 'duplicate_icon_name'


class InvalidIconError(APIException):
    status_code = 400
    default_detail = 'Wartość ikony jest wymagana dla tego typu ikony.'
    default_code = 'invalid_icon'


class CsvImportError(APIException):
    status_code = 400
    default_detail = 'Nieprawidłowy plik CSV.'
    default_code = 'csv_import_error'


class EmployeeNotFoundError(APIException):
    status_code = 404
    default_detail = 'Pracownik nie został znaleziony.'
    default_code = 'employee_not_found'


class DeleteRequestNotFoundError(APIException):
    status_code = 404
    default_detail = 'Żądanie usunięcia nie zostało znalezione.'
    default_code = 'delete_request_not_found'


class DeleteRequestExistsError(APIException):
    status_code = 409
    default_detail = 'Dla tego klienta istnieje już oczekujące żądanie usunięcia.'
    default_code = 'delete_request_exists'


class DeleteRequestProcessedError(APIException):
    status_code = 400
    default_detail = 'Żądanie usunięcia zostało już rozpatrzone.'
    default_code = 'delete_request_processed'


class DeleteRequestPermissionError(APIException):
    status_code = 403
    default_detail = 'Tylko właściciel firmy lub administrator może rozpatrywać żądania usunięcia.'
    default_code = 'delete_request_forbidden'
