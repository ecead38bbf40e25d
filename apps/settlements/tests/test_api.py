import pytest
from django.urls import reverse
from rest_framework import status

from apps.clients.models import Client
from apps.notifications.models import Notification, NotificationType
from apps.settlements.models import MonthlySettlement, SettlementComment, SettlementStatus

PERIOD = {'month': 10, 'year': 2026}


def detail_url(settlement, action=None):
    name = f'settlements:settlement-{action}' if action else 'settlements:settlement-detail'
    return reverse(name, kwargs={'pk': settlement.id})


@pytest.mark.django_db
class TestInitialize:

    def test_creates_missing_settlements(self, owner_api, owner, company, clients, make_settlement):
        make_settlement(clients[0])
        Client.objects.create(company=company, name='Nieaktywny', is_active=False)

        response = owner_api.post(reverse('settlements:settlement-initialize'), PERIOD)

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data == {'created': 2, 'skipped': 1}
        created = MonthlySettlement.objects.get(client=clients[1], **PERIOD)
        assert created.status == SettlementStatus.PENDING
        assert created.status_history[0]['notes'] == 'Automatyczne utworzenie rozliczenia'
        assert created.status_history[0]['changed_by_email'] == owner.email

    def test_is_idempotent(self, owner_api, clients):
        url = reverse('settlements:settlement-initialize')
        owner_api.post(url, PERIOD)

        response = owner_api.post(url, PERIOD)

        assert response.data == {'created': 0, 'skipped': 3}

    def test_employee_cannot_initialize(self, employee_api, clients):
        response = employee_api.post(reverse('settlements:settlement-initialize'), PERIOD)

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_invalid_month(self, owner_api):
        response = owner_api.post(reverse('settlements:settlement-initialize'), {'month': 13, 'year': 2026})

        assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.django_db
class TestList:

    def test_month_and_year_required(self, owner_api):
        response = owner_api.get(reverse('settlements:settlement-list'))

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_employee_sees_assigned_only(self, employee_api, employee, clients, make_settlement):
        mine = make_settlement(clients[0], user=employee)
        make_settlement(clients[1])

        response = employee_api.get(reverse('settlements:settlement-list'), PERIOD)

        assert response.data['count'] == 1
        assert response.data['results'][0]['id'] == str(mine.id)

    def test_owner_filters(self, owner_api, employee, clients, make_settlement):
        make_settlement(clients[0], user=employee)
        make_settlement(clients[1], requires_attention=True)
        make_settlement(clients[2], status=SettlementStatus.COMPLETED)
        make_settlement(clients[2], month=9)
        url = reverse('settlements:settlement-list')

        assert owner_api.get(url, PERIOD).data['count'] == 3
        assert owner_api.get(url, {**PERIOD, 'unassigned': 'true'}).data['count'] == 2
        assert owner_api.get(url, {**PERIOD, 'assignee_id': str(employee.id)}).data['count'] == 1
        assert owner_api.get(url, {**PERIOD, 'status': 'COMPLETED'}).data['count'] == 1
        assert owner_api.get(url, {**PERIOD, 'tax_scheme': 'GENERAL'}).data['count'] == 2
        assert owner_api.get(url, {**PERIOD, 'requires_attention': 'true'}).data['count'] == 1
        assert owner_api.get(url, {**PERIOD, 'search': '3333'}).data['count'] == 1

    def test_sorting(self, owner_api, clients, make_settlement):
        make_settlement(clients[0], priority=1)
        make_settlement(clients[1], priority=5)
        make_settlement(clients[2], priority=3)
        url = reverse('settlements:settlement-list')

        default = owner_api.get(url, PERIOD).data['results']
        by_priority = owner_api.get(url, {**PERIOD, 'sort_by': 'priority', 'sort_order': 'desc'}).data['results']

        assert [s['client']['name'] for s in default] == ['Alfa', 'Beta', 'Gamma']
        assert [s['priority'] for s in by_priority] == [5, 3, 1]


@pytest.mark.django_db
class TestRetrieveAndStatus:

    def test_other_company_is_404(self, owner_api, other_company):
        foreign_client = Client.objects.create(company=other_company, name='Obcy')
        foreign = MonthlySettlement.objects.create(company=other_company, client=foreign_client, **PERIOD)

        response = owner_api.get(detail_url(foreign))

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['error'] == 'Rozliczenie nie zostało znalezione'

    def test_employee_not_assigned_is_403(self, employee_api, clients, make_settlement):
        settlement = make_settlement(clients[0])

        response = employee_api.get(detail_url(settlement))

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data['error'] == 'Brak dostępu do rozliczenia'

    def test_complete_sets_settled_info(self, employee_api, employee, clients, make_settlement):
        settlement = make_settlement(clients[0], user=employee)

        response = employee_api.patch(detail_url(settlement, 'update-status'), {
            'status': 'COMPLETED',
            'notes': 'Wszystko zaksięgowane',
        })

        assert response.status_code == status.HTTP_200_OK
        settlement.refresh_from_db()
        assert settlement.settled_by == employee
        assert settlement.settled_at is not None
        assert settlement.status_history[-1]['status'] == 'COMPLETED'
        assert settlement.status_history[-1]['notes'] == 'Wszystko zaksięgowane'

    def test_reopening_clears_settled_info(self, owner_api, owner, clients, make_settlement):
        settlement = make_settlement(clients[0])
        owner_api.patch(detail_url(settlement, 'update-status'), {'status': 'COMPLETED'})

        owner_api.patch(detail_url(settlement, 'update-status'), {'status': 'IN_PROGRESS'})

        settlement.refresh_from_db()
        assert settlement.settled_at is None
        assert settlement.settled_by is None
        assert [h['status'] for h in settlement.status_history] == ['COMPLETED', 'IN_PROGRESS']

    def test_update_fields_with_status(self, owner_api, clients, make_settlement):
        settlement = make_settlement(clients[0])

        response = owner_api.patch(detail_url(settlement), {
            'invoice_count': 12,
            'requires_attention': True,
            'attention_reason': 'Brak wyciągu',
            'status': 'IN_PROGRESS',
        })

        assert response.status_code == status.HTTP_200_OK
        assert response.data['invoice_count'] == 12
        assert response.data['status'] == 'IN_PROGRESS'
        assert len(response.data['status_history']) == 1


@pytest.mark.django_db
class TestAssignment:

    def test_assign_notifies(self, owner_api, owner, employee, clients, make_settlement):
        settlement = make_settlement(clients[0])

        response = owner_api.patch(detail_url(settlement, 'assign'), {'user_id': str(employee.id)})

        assert response.status_code == status.HTTP_200_OK
        settlement.refresh_from_db()
        assert settlement.user == employee
        assert settlement.assigned_by == owner
        notification = Notification.objects.get(recipient=employee)
        assert notification.type == NotificationType.SETTLEMENT_ASSIGNED

    def test_unassign(self, owner_api, employee, clients, make_settlement):
        settlement = make_settlement(clients[0], user=employee)

        owner_api.patch(detail_url(settlement, 'assign'), {'user_id': None})

        settlement.refresh_from_db()
        assert settlement.user is None

    def test_assignee_from_other_company(self, owner_api, other_owner, clients, make_settlement):
        settlement = make_settlement(clients[0])

        response = owner_api.patch(detail_url(settlement, 'assign'), {'user_id': str(other_owner.id)})

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['error'] == 'Użytkownik nie został znaleziony'

    def test_bulk_assign_skips_foreign(self, owner_api, employee, other_company, clients, make_settlement):
        own = [make_settlement(c) for c in clients[:2]]
        foreign_client = Client.objects.create(company=other_company, name='Obcy')
        foreign = MonthlySettlement.objects.create(company=other_company, client=foreign_client, **PERIOD)

        response = owner_api.post(reverse('settlements:settlement-bulk-assign'), {
            'settlement_ids': [str(s.id) for s in own] + [str(foreign.id)],
            'user_id': str(employee.id),
        })

        assert response.data == {'assigned': 2, 'requested': 3}
        foreign.refresh_from_db()
        assert foreign.user is None

    def test_employee_cannot_assign(self, employee_api, employee, clients, make_settlement):
        settlement = make_settlement(clients[0], user=employee)

        response = employee_api.patch(detail_url(settlement, 'assign'), {'user_id': str(employee.id)})

        assert response.status_code == status.HTTP_403_FORBIDDEN


@pytest.mark.django_db
class TestComments:

    def test_add_and_list(self, employee_api, employee, clients, make_settlement):
        settlement = make_settlement(clients[0], user=employee)
        url = detail_url(settlement, 'comments')

        first = employee_api.post(url, {'content': 'Brakuje faktur kosztowych'})
        employee_api.post(url, {'content': 'Klient doesłał dokumenty'})
        listed = employee_api.get(url)

        assert first.status_code == status.HTTP_201_CREATED
        assert [c['content'] for c in listed.data] == ['Brakuje faktur kosztowych', 'Klient doesłał dokumenty']

    def test_comments_follow_settlement_access(self, employee_api, clients, make_settlement):
        settlement = make_settlement(clients[0])

        response = employee_api.post(detail_url(settlement, 'comments'), {'content': 'x'})

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert not SettlementComment.objects.exists()

    def test_read_only_employee_cannot_comment(self, auth_client, employee, grant, settlements_enabled,
                                               clients, make_settlement):
        grant(employee, 'settlements', ['read'])
        settlement = make_settlement(clients[0], user=employee)

        response = auth_client(employee).post(detail_url(settlement, 'comments'), {'content': 'x'})

        assert response.status_code == status.HTTP_403_FORBIDDEN
