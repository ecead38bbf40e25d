"""
Project-wide DRF exception handling.

Domain errors are APIException subclasses with Polish messages. This handler
flattens them into ``{"error", "code", "status"}`` while keeping field level
validation errors untouched.
"""

import logging

from django.conf import settings
from rest_framework import status
from rest_framework.exceptions import APIException, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class ServiceMisconfiguredError(APIException):
    """Server side configuration is missing (e.g. no system company)."""
    status_code = 500
    default_detail = 'Błąd konfiguracji serwera.'
    default_code = 'service_misconfigured'


def api_exception_handler(exc, context):
    """Render API errors in a single JSON shape."""
    response = exception_handler(exc, context)

    if response is None:
        if settings.DEBUG:
            return None
        view = context.get('view')
        logger.exception(
            'Unhandled error in %s', view.__class__.__name__ if view else 'unknown view',
            exc_info=exc,
        )
        return Response(
            {'error': 'Wewnętrzny błąd serwera', 'status': status.HTTP_500_INTERNAL_SERVER_ERROR},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    if isinstance(exc, ValidationError):
        return response

    if response.status_code >= 500:
        logger.error('Server error %s: %s', response.status_code, exc)

    data = response.data
    detail = data.get('detail', data) if isinstance(data, dict) else data
    response.data = {
        'error': str(detail),
        'code': getattr(detail, 'code', None) or getattr(exc, 'default_code', 'error'),
        'status': response.status_code,
    }
    return response
