"""Domain exceptions for modules and permissions."""
from rest_framework.exceptions import APIException


class ModuleNotFoundError(APIException):
    status_code = 404
    default_detail = 'Moduł nie został znaleziony.'
    default_code = 'module_not_found'


class ModuleAlreadyExistsError(APIException):
    status_code = 409
    default_detail = 'Moduł o tym identyfikatorze już istnieje.'
    default_code = 'module_exists'


class ModuleNotEnabledError(APIException):
    status_code = 403
    default_detail = 'Firma nie ma dostępu do tego modułu.'
    default_code = 'module_not_enabled'


class PermissionNotFoundError(APIException):
    status_code = 404
    default_detail = 'Uprawnienia nie zostały znalezione.'
    default_code = 'permission_not_found'


class ModuleAccessDeniedError(APIException):
    status_code = 403
    default_detail = 'Brak uprawnień do modułu.'
    default_code = 'module_access_denied'
