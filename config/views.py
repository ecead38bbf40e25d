from django.db import DatabaseError, connection
from django.http import JsonResponse


def health_check(request):
    """Liveness check; also checks the database connection."""
    try:
        with connection.cursor() as cursor:
            cursor.execute('SELECT 1')
    except DatabaseError:
        return JsonResponse({'status': 'error', 'database': 'unavailable'}, status=503)
    return JsonResponse({'status': 'ok'})


def error_404(request, exception):
    """Custom 404 handler."""
    return JsonResponse({
        'error': 'Nie znaleziono',
        'code': 'not_found',
        'status': 404
    }, status=404)


def error_500(request):
    """Custom 500 handler."""
    return JsonResponse({
        'error': 'Wewnętrzny błąd serwera',
        'code': 'server_error',
        'status': 500
    }, status=500)
