from io import StringIO

import pytest
from django.core.management import call_command

from apps.accounts.models import User, UserRole
from apps.clients.models import Client
from apps.companies.models import Company
from apps.modules.models import CompanyModuleAccess, UserModulePermission


@pytest.mark.django_db
class TestCreateSampleData:

    def test_creates_demo_data(self):
        out = StringIO()

        call_command('create_sample_data', stdout=out)

        company = Company.objects.get(name='Biuro Rachunkowe Demo')
        assert company.owner.role == UserRole.COMPANY_OWNER
        assert User.objects.get(role=UserRole.ADMIN).company.is_system_company
        assert CompanyModuleAccess.objects.filter(company=company, is_enabled=True).count() == 5
        employee = User.objects.get(role=UserRole.EMPLOYEE)
        assert UserModulePermission.objects.filter(user=employee).count() == 4
        assert Client.objects.filter(company=company).count() == 3
        assert 'Demo data ready.' in out.getvalue()

    def test_is_idempotent(self):
        call_command('create_sample_data', stdout=StringIO())
        call_command('create_sample_data', stdout=StringIO())

        assert User.objects.count() == 3
        assert Company.objects.filter(is_system_company=False).count() == 1
        assert Client.objects.count() == 3

    def test_no_clients_option(self):
        call_command('create_sample_data', '--no-clients', stdout=StringIO())

        assert not Client.objects.exists()
