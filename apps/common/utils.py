"""Small helpers shared between apps."""

from decimal import Decimal, ROUND_HALF_UP

from django.http import HttpResponse


def half_up_percent(part, total) -> int:
    """
    Percentage of ``part`` in ``total`` rounded half up to an integer.

    Returns 0 when total is 0.
    """
    if not total:
        return 0
    value = Decimal(part) * 100 / Decimal(total)
    return int(value.quantize(Decimal('1'), rounding=ROUND_HALF_UP))


def parse_bool(value):
    """Interpret query string booleans ('true', '1', 'yes'). None stays None."""
    if value is None or value == '':
        return None
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ('true', '1', 'yes', 'on')


# Router lookup for UUID primary keys, so non-UUID paths fall through to 404
UUID_PATTERN = r'[0-9a-fA-F-]{36}'


def csv_response(content: str, filename: str) -> HttpResponse:
    # BOM so spreadsheets pick up UTF-8
    response = HttpResponse('\ufeff' + content, content_type='text/csv; charset=utf-8')
    response['Content-Disposition'] = f'attachment; filename="{filename}"'
    return response
