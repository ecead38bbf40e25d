import pytest

from apps.clients.models import Client, TaxScheme
from apps.modules.models import SETTLEMENTS
from apps.settlements.models import MonthlySettlement


@pytest.fixture
def settlements_enabled(company, enable_module):
    enable_module(company, SETTLEMENTS)


@pytest.fixture
def owner_api(auth_client, owner, settlements_enabled):
    return auth_client(owner)


@pytest.fixture
def employee_api(auth_client, employee, grant, settlements_enabled):
    grant(employee, SETTLEMENTS, ['read', 'write'])
    return auth_client(employee)


@pytest.fixture
def clients(company):
    return [
        Client.objects.create(company=company, name='Alfa', nip='1111111111', tax_scheme=TaxScheme.LUMP_SUM),
        Client.objects.create(company=company, name='Beta', nip='2222222222', tax_scheme=TaxScheme.GENERAL),
        Client.objects.create(company=company, name='Gamma', nip='3333333333', tax_scheme=TaxScheme.GENERAL),
    ]


@pytest.fixture
def make_settlement(company):
    def _make(client, month=10, year=2026, **kwargs):
        return MonthlySettlement.objects.create(company=company, client=client, month=month, year=year, **kwargs)
    return _make
