"""Client statistics for the dashboard."""

from datetime import timedelta
from uuid import UUID

from django.db.models import Count
from django.utils import timezone

from apps.clients.models import Client, EmploymentType, TaxScheme, VatStatus, ZusStatus


def _count_by(qs, field: str, choices) -> dict:
    counts = {value: 0 for value in choices.values}
    for row in qs.exclude(**{field: ''}).values(field).annotate(total=Count('id')):
        counts[row[field]] = row['total']
    return counts


def get_statistics(*, company_id: UUID) -> dict:
    """
    Client counters of the company.

    Breakdowns cover active clients only and list every enum value (0 when unused).
    """
    clients = Client.objects.filter(company_id=company_id)
    active = clients.filter(is_active=True)

    now = timezone.now()
    month_start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)

    total = clients.count()
    active_count = active.count()

    return {
        'total': total,
        'active': active_count,
        'inactive': total - active_count,
        'by_employment_type': _count_by(active, 'employment_type', EmploymentType),
        'by_vat_status': _count_by(active, 'vat_status', VatStatus),
        'by_tax_scheme': _count_by(active, 'tax_scheme', TaxScheme),
        'by_zus_status': _count_by(active, 'zus_status', ZusStatus),
        'added_this_month': clients.filter(created_at__gte=month_start).count(),
        'added_last_30_days': clients.filter(created_at__gte=now - timedelta(days=30)).count(),
    }
