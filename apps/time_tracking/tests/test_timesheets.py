import datetime
from decimal import Decimal

import pytest
from django.urls import reverse
from rest_framework import status

from apps.clients.models import Client
from apps.time_tracking import services
from apps.time_tracking.models import TimeSettings

from .conftest import at


@pytest.fixture
def acme(company):
    return Client.objects.create(company=company, name='Acme')


@pytest.mark.django_db
class TestSummaries:

    def test_summarize(self, employee, make_entry):
        entries = [
            make_entry(employee, at(5, 9), minutes=60, total_amount=Decimal('100.00')),
            make_entry(employee, at(5, 11), minutes=30, is_billable=False),
        ]

        assert services.summarize(entries) == {
            'total_minutes': 90,
            'billable_minutes': 60,
            'non_billable_minutes': 30,
            'total_amount': '100.00',
            'entries_count': 2,
        }

    def test_empty_summary(self):
        assert services.summarize([])['total_amount'] == '0.00'

    def test_running_and_deleted_entries_are_skipped(self, employee, company, make_entry):
        make_entry(employee, at(5, 9))
        make_entry(employee, at(5, 11), is_active=False)
        make_entry(employee, at(5, 13), is_running=True)

        result = services.daily_timesheet(user=employee, company_id=company.id, date=datetime.date(2026, 10, 5))

        assert result['summary']['entries_count'] == 1


@pytest.mark.django_db
class TestTimesheets:

    def test_daily(self, employee, company, make_entry):
        make_entry(employee, at(5, 9), minutes=45)
        make_entry(employee, at(6, 9), minutes=60)

        result = services.daily_timesheet(user=employee, company_id=company.id, date=datetime.date(2026, 10, 5))

        assert [e.duration_minutes for e in result['entries']] == [45]
        assert result['summary']['total_minutes'] == 45

    def test_employee_cannot_read_colleague_timesheet(self, employee, other_employee, company, make_entry):
        make_entry(other_employee, at(5, 9))

        result = services.daily_timesheet(
            user=employee, company_id=company.id, date=datetime.date(2026, 10, 5), user_id=other_employee.id
        )

        assert result['entries'] == []

    def test_owner_reads_employee_timesheet(self, owner, employee, company, make_entry):
        make_entry(employee, at(5, 9))

        result = services.daily_timesheet(
            user=owner, company_id=company.id, date=datetime.date(2026, 10, 5), user_id=employee.id
        )

        assert len(result['entries']) == 1

    def test_weekly_uses_week_start_day(self, employee, company, make_entry):
        TimeSettings.objects.create(company=company, week_start_day=7)
        make_entry(employee, at(4, 9), minutes=30)   # Sunday
        make_entry(employee, at(10, 9), minutes=60)  # Saturday
        make_entry(employee, at(11, 9), minutes=90)  # next Sunday

        result = services.weekly_timesheet(user=employee, company_id=company.id, date=datetime.date(2026, 10, 8))

        assert result['week_start'] == datetime.date(2026, 10, 4)
        assert result['week_end'] == datetime.date(2026, 10, 10)
        assert len(result['days']) == 7
        assert result['days'][0]['summary']['total_minutes'] == 30
        assert result['days'][6]['summary']['total_minutes'] == 60
        assert result['summary']['total_minutes'] == 90


@pytest.mark.django_db
class TestReports:

    def test_group_by_client(self, owner, employee, company, acme, make_entry):
        make_entry(employee, at(5, 9), minutes=60, client=acme, total_amount=Decimal('120.00'))
        make_entry(employee, at(6, 9), minutes=30)

        result = services.summary_report(user=owner, company_id=company.id, group_by='client')

        labels = {group['label']: group for group in result['groups']}
        assert labels['Acme']['key'] == str(acme.id)
        assert labels['Acme']['summary']['total_amount'] == '120.00'
        assert labels['Bez klienta']['key'] == 'no-client'
        assert result['summary']['total_minutes'] == 90

    def test_group_by_day_in_date_range(self, owner, employee, company, make_entry):
        make_entry(employee, at(4, 9))
        make_entry(employee, at(5, 9))
        make_entry(employee, at(5, 23, 30))
        make_entry(employee, at(7, 9))

        result = services.summary_report(
            user=owner,
            company_id=company.id,
            filters={'start_date': datetime.date(2026, 10, 5), 'end_date': datetime.date(2026, 10, 6)},
        )

        assert [(g['key'], g['summary']['entries_count']) for g in result['groups']] == [('2026-10-05', 2)]

    def test_group_by_user(self, owner, employee, other_employee, company, make_entry):
        make_entry(employee, at(5, 9))
        make_entry(other_employee, at(5, 9))

        result = services.summary_report(user=owner, company_id=company.id, group_by='user')

        assert {g['label'] for g in result['groups']} == {'Ewa Employee', 'Piotr Second'}

    def test_employee_report_is_own_only(self, employee, other_employee, company, make_entry):
        make_entry(employee, at(5, 9))
        make_entry(other_employee, at(5, 9))

        result = services.summary_report(user=employee, company_id=company.id, group_by='user')

        assert len(result['groups']) == 1


@pytest.mark.django_db
class TestReportApi:

    def test_summary_endpoint(self, owner_api, employee, acme, make_entry):
        make_entry(employee, at(5, 9), client=acme)

        response = owner_api.get(reverse('time-tracking:report-summary'), {
            'start_date': '2026-10-01',
            'end_date': '2026-10-31',
            'group_by': 'client',
        })

        assert response.status_code == status.HTTP_200_OK
        assert response.data['groups'][0]['label'] == 'Acme'
        assert response.data['summary']['entries_count'] == 1

    def test_invalid_range(self, owner_api):
        response = owner_api.get(reverse('time-tracking:report-summary'), {
            'start_date': '2026-10-31',
            'end_date': '2026-10-01',
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_client_report(self, owner_api, employee, acme, make_entry):
        make_entry(employee, at(5, 9), minutes=120, client=acme)
        make_entry(employee, at(5, 12), minutes=60)

        response = owner_api.get(reverse('time-tracking:report-client', kwargs={'client_id': acme.id}))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['client_name'] == 'Acme'
        assert response.data['summary']['total_minutes'] == 120

    def test_daily_endpoint(self, employee_api, employee, make_entry):
        make_entry(employee, at(5, 9), minutes=45)

        response = employee_api.get(reverse('time-tracking:timesheet-daily'), {'date': '2026-10-05'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['date'] == '2026-10-05'
        assert len(response.data['entries']) == 1

    def test_weekly_endpoint(self, employee_api):
        response = employee_api.get(reverse('time-tracking:timesheet-weekly'), {'date': '2026-10-08'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['week_start'] == '2026-10-05'
        assert len(response.data['days']) == 7

    def test_export_csv(self, owner_api, employee, make_entry):
        make_entry(employee, at(5, 9), minutes=90, description='=SUM(A1)')

        response = owner_api.get(reverse('time-tracking:report-export'))

        assert response.status_code == status.HTTP_200_OK
        assert response['Content-Type'].startswith('text/csv')
        content = response.content.decode('utf-8-sig')
        lines = content.strip().splitlines()
        assert lines[0].startswith('Data,Pracownik,Klient')
        assert "'=SUM(A1)" in lines[1]
        assert '01:30' in lines[1]
        assert 'Bez klienta' in lines[1]
