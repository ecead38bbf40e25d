import datetime

import pytest

from apps.clients.models import Client, ClientEmployee, ClientIcon, EmployeeContractType, IconType
from apps.modules.models import CLIENTS


@pytest.fixture
def clients_enabled(company, enable_module):
    enable_module(company, CLIENTS)


@pytest.fixture
def owner_client(auth_client, owner, clients_enabled):
    return auth_client(owner)


@pytest.fixture
def client_obj(company, owner):
    return Client.objects.create(
        company=company,
        name='Kowalski Consulting',
        nip='1234567890',
        email='biuro@kowalski.pl',
        created_by=owner,
    )


@pytest.fixture
def foreign_client(other_company):
    return Client.objects.create(company=other_company, name='Obcy Klient', nip='9999999999')


@pytest.fixture
def icon(company, owner):
    return ClientIcon.objects.create(
        company=company,
        name='VIP',
        icon_type=IconType.LUCIDE,
        icon_value='star',
        created_by=owner,
    )


@pytest.fixture
def staff_client(auth_client, employee, clients_enabled, grant):
    """Employee with read and write (but no delete) on clients."""
    grant(employee, CLIENTS, ['read', 'write'])
    return auth_client(employee)


@pytest.fixture
def client_employee(company, client_obj, owner):
    return ClientEmployee.objects.create(
        company=company,
        client=client_obj,
        first_name='Anna',
        last_name='Zielińska',
        pesel='90010112345',
        contract_type=EmployeeContractType.UMOWA_O_PRACE,
        start_date=datetime.date(2024, 1, 1),
        gross_salary=850000,
        created_by=owner,
    )
