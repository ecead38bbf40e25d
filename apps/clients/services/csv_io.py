"""
CSV export and import of clients.

Columns use the camelCase names the frontend works with. Exported values that
a spreadsheet would treat as formulas are prefixed with a quote.
"""

import csv
import io
import logging
import re
from uuid import UUID

from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.validators import validate_email
from django.db import transaction
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.clients.models import (
    ChangeAction,
    Client,
    EmploymentType,
    TaxScheme,
    VatStatus,
    ZusStatus,
)

from .client_management import diff_snapshots, snapshot, log_change
from .exceptions import CsvImportError

logger = logging.getLogger(__name__)

# CSV header -> model field
COLUMNS = [
    ('name', 'name'),
    ('nip', 'nip'),
    ('email', 'email'),
    ('phone', 'phone'),
    ('employmentType', 'employment_type'),
    ('vatStatus', 'vat_status'),
    ('taxScheme', 'tax_scheme'),
    ('zusStatus', 'zus_status'),
    ('companySpecificity', 'company_specificity'),
    ('additionalInfo', 'additional_info'),
]
EXPORT_HEADERS = [header for header, _ in COLUMNS] + ['isActive']
IMPORT_HEADERS = [header for header, _ in COLUMNS]

ENUM_COLUMNS = {
    'employmentType': EmploymentType,
    'vatStatus': VatStatus,
    'taxScheme': TaxScheme,
    'zusStatus': ZusStatus,
}

FORMULA_PREFIXES = ('=', '+', '-', '@', '\t', '\r')


def sanitize_cell(value) -> str:
    """Neutralise spreadsheet formula injection."""
    text = '' if value is None else str(value)
    if text.startswith(FORMULA_PREFIXES):
        return "'" + text
    return text


def export_clients(clients: QuerySet) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow(EXPORT_HEADERS)
    for client in clients:
        row = [sanitize_cell(getattr(client, field)) for _, field in COLUMNS]
        row.append('true' if client.is_active else 'false')
        writer.writerow(row)
    return buffer.getvalue()


def import_template() -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow(IMPORT_HEADERS)
    writer.writerow([
        'Przykładowa Firma Sp. z o.o.',
        '1234567890',
        'kontakt@przyklad.pl',
        '+48 123 456 789',
        EmploymentType.DG,
        VatStatus.VAT_MONTHLY,
        TaxScheme.PIT_19,
        ZusStatus.FULL,
        'Handel hurtowy',
        'Dokumenty do 5. dnia miesiąca',
    ])
    return buffer.getvalue()


def _read_rows(content: str):
    content = content.lstrip('\ufeff')
    lines = [line for line in content.splitlines() if line.strip()]
    if len(lines) < 2:
        raise CsvImportError('Plik CSV musi zawierać nagłówki i co najmniej jeden wiersz danych')

    delimiter = ';' if lines[0].count(';') > lines[0].count(',') else ','
    rows = list(csv.reader(lines, delimiter=delimiter))
    headers = [h.strip() for h in rows[0]]
    if 'name' not in headers:
        raise CsvImportError('Brak wymaganego nagłówka: name')
    return headers, rows[1:]


def _validate_row(index: int, headers: list, row: list):
    """Return (field values, errors) for one data row. ``index`` is the 1-based file line."""
    errors = []
    if len(row) != len(headers):
        return None, [{'row': index, 'field': '', 'message': 'Nieprawidłowa liczba kolumn'}]

    raw = {header: value.strip() for header, value in zip(headers, row)}
    field_map = dict(COLUMNS)
    data = {}

    name = raw.get('name', '')
    if len(name) < 2:
        errors.append({'row': index, 'field': 'name', 'message': 'Nazwa jest wymagana i musi mieć minimum 2 znaki'})

    nip = re.sub(r'[\s-]', '', raw.get('nip', ''))
    if nip and not re.fullmatch(r'\d{10}', nip):
        errors.append({'row': index, 'field': 'nip', 'message': 'NIP musi składać się z 10 cyfr'})

    email = raw.get('email', '')
    if email:
        try:
            validate_email(email)
        except DjangoValidationError:
            errors.append({'row': index, 'field': 'email', 'message': 'Nieprawidłowy adres email'})

    for header, choices in ENUM_COLUMNS.items():
        value = raw.get(header, '')
        if value and value not in choices.values:
            errors.append({'row': index, 'field': header, 'message': f'Nieprawidłowa wartość: {value}'})

    for header, value in raw.items():
        if header in field_map:
            data[field_map[header]] = value
    data['nip'] = nip or None
    data['name'] = name

    reported = {error['field'] for error in errors}
    header_for = {field: header for header, field in COLUMNS}
    try:
        Client(**data).full_clean(exclude=['company'], validate_unique=False)
    except DjangoValidationError as exc:
        for field, messages in exc.message_dict.items():
            header = header_for.get(field, field)
            if header not in reported:
                errors.append({'row': index, 'field': header, 'message': messages[0]})
    return data, errors


def import_clients(*, user: User, company_id: UUID, content: str) -> dict:
    """
    Import clients from CSV text.

    Rows are validated first; if any row is invalid nothing is written.
    Clients are matched by NIP within the company: matches are updated
    from the non-blank cells, everything else is created.

    Returns:
        {'imported': int, 'updated': int, 'errors': [{'row', 'field', 'message'}]}

    Raises:
        CsvImportError: Missing data rows or missing required header
    """
    headers, rows = _read_rows(content)

    parsed, errors = [], []
    for offset, row in enumerate(rows, start=2):
        data, row_errors = _validate_row(offset, headers, row)
        errors.extend(row_errors)
        if data is not None and not row_errors:
            parsed.append(data)

    if errors:
        return {'imported': 0, 'updated': 0, 'errors': errors}

    imported = updated = 0
    with transaction.atomic():
        for data in parsed:
            existing = None
            if data.get('nip'):
                existing = Client.objects.filter(company_id=company_id, nip=data['nip']).first()

            if existing is not None:
                before = snapshot(existing)
                for key, value in data.items():
                    # Blank cells keep what the client already has
                    if value in ('', None):
                        continue
                    setattr(existing, key, value)
                existing.updated_by = user
                existing.save()
                log_change(client=existing, action=ChangeAction.UPDATE, user=user,
                           changes=diff_snapshots(before, snapshot(existing)))
                updated += 1
            else:
                client = Client.objects.create(company_id=company_id, created_by=user, updated_by=user, **data)
                log_change(client=client, action=ChangeAction.CREATE, user=user,
                           changes=diff_snapshots({}, snapshot(client)))
                imported += 1

    logger.info('CSV import in company %s: %d created, %d updated', company_id, imported, updated)
    return {'imported': imported, 'updated': updated, 'errors': []}
