import pytest
from django.urls import reverse
from rest_framework import status

from apps.modules.models import CLIENTS, SETTLEMENTS, CompanyModuleAccess, Module, UserModulePermission


@pytest.mark.django_db
class TestModuleCatalog:
    """Tests for /api/modules/ and /api/modules/catalog/{slug}/"""

    def test_list_for_owner(self, auth_client, owner, company, enable_module):
        enable_module(company, CLIENTS)
        response = auth_client(owner).get(reverse('modules:module-list'))

        assert response.status_code == status.HTTP_200_OK
        assert [m['slug'] for m in response.data] == [CLIENTS]

    def test_admin_sees_all(self, auth_client, admin_user, modules):
        response = auth_client(admin_user).get(reverse('modules:module-list'))

        assert len(response.data) == len(modules)

    def test_create_duplicate_slug(self, auth_client, admin_user, modules):
        response = auth_client(admin_user).post(reverse('modules:module-list'), {
            'slug': CLIENTS,
            'name': 'Klienci 2',
        })

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_create_requires_admin(self, auth_client, owner, modules):
        response = auth_client(owner).post(reverse('modules:module-list'), {'slug': 'new', 'name': 'New'})

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_create_module(self, auth_client, admin_user, modules):
        response = auth_client(admin_user).post(reverse('modules:module-list'), {
            'slug': 'offers',
            'name': 'Oferty',
        })

        assert response.status_code == status.HTTP_201_CREATED
        assert Module.objects.filter(slug='offers').exists()

    def test_detail_inaccessible_is_404(self, auth_client, owner, modules):
        url = reverse('modules:module-detail', kwargs={'slug': CLIENTS})
        response = auth_client(owner).get(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_delete_deactivates(self, auth_client, admin_user, modules):
        url = reverse('modules:module-detail', kwargs={'slug': CLIENTS})
        response = auth_client(admin_user).delete(url)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert Module.objects.get(slug=CLIENTS).is_active is False


@pytest.mark.django_db
class TestCompanyAccess:
    """Tests for /api/modules/company-access/{company_id}/"""

    def test_grant_and_revoke(self, auth_client, admin_user, company, modules):
        client = auth_client(admin_user)
        url = reverse('modules:company-modules', kwargs={'company_id': company.id})

        response = client.post(url, {'module_slug': CLIENTS})
        assert response.status_code == status.HTTP_201_CREATED

        response = client.get(url)
        assert [a['module']['slug'] for a in response.data] == [CLIENTS]

        revoke_url = reverse('modules:company-module-revoke', kwargs={'company_id': company.id, 'slug': CLIENTS})
        response = client.delete(revoke_url)
        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert CompanyModuleAccess.objects.get(company=company).is_enabled is False

    def test_unknown_company(self, auth_client, admin_user, modules):
        url = reverse('modules:company-modules', kwargs={'company_id': '00000000-0000-0000-0000-000000000000'})
        response = auth_client(admin_user).post(url, {'module_slug': CLIENTS})

        assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.django_db
class TestEmployeePermissions:
    """Tests for /api/modules/employee-permissions/{employee_id}/"""

    def test_owner_grants_permissions(self, auth_client, owner, employee, company, enable_module):
        enable_module(company, CLIENTS)
        url = reverse('modules:employee-permissions', kwargs={'employee_id': employee.id})

        response = auth_client(owner).post(url, {'module_slug': CLIENTS, 'permissions': ['read', 'write']})

        assert response.status_code == status.HTTP_201_CREATED
        grant = UserModulePermission.objects.get(user=employee)
        assert grant.permissions == ['read', 'write']
        assert grant.granted_by == owner

    def test_module_not_enabled_for_company(self, auth_client, owner, employee, modules):
        url = reverse('modules:employee-permissions', kwargs={'employee_id': employee.id})
        response = auth_client(owner).post(url, {'module_slug': SETTLEMENTS, 'permissions': ['read']})

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_foreign_employee(self, auth_client, other_owner, employee, other_company, enable_module):
        enable_module(other_company, CLIENTS)
        url = reverse('modules:employee-permissions', kwargs={'employee_id': employee.id})
        response = auth_client(other_owner).post(url, {'module_slug': CLIENTS, 'permissions': ['read']})

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_update_missing_grant(self, auth_client, owner, employee, company, enable_module):
        enable_module(company, CLIENTS)
        url = reverse('modules:employee-permissions', kwargs={'employee_id': employee.id})
        response = auth_client(owner).patch(url, {'module_slug': CLIENTS, 'permissions': ['read']})

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_invalid_permission_name(self, auth_client, owner, employee, company, enable_module):
        enable_module(company, CLIENTS)
        url = reverse('modules:employee-permissions', kwargs={'employee_id': employee.id})
        response = auth_client(owner).post(url, {'module_slug': CLIENTS, 'permissions': ['everything']})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_revoke(self, auth_client, owner, employee, company, enable_module, grant):
        enable_module(company, CLIENTS)
        grant(employee, CLIENTS, ['read'])
        url = reverse('modules:employee-permission-revoke', kwargs={'employee_id': employee.id, 'slug': CLIENTS})

        response = auth_client(owner).delete(url)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not UserModulePermission.objects.filter(user=employee).exists()

    def test_employee_cannot_grant(self, auth_client, employee, other_employee, company, enable_module):
        enable_module(company, CLIENTS)
        url = reverse('modules:employee-permissions', kwargs={'employee_id': other_employee.id})
        response = auth_client(employee).post(url, {'module_slug': CLIENTS, 'permissions': ['read']})

        assert response.status_code == status.HTTP_403_FORBIDDEN
