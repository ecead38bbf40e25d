"""Fixtures shared by every app's tests."""

import pytest
from django.core.cache import cache
from rest_framework.test import APIClient

from apps.accounts.models import User, UserRole
from apps.accounts.tokens import RefreshToken
from apps.companies.models import Company, SYSTEM_COMPANY_NAME
from apps.modules.models import CompanyModuleAccess, DEFAULT_MODULES, Module, UserModulePermission


PASSWORD = 'TestPass123!'


@pytest.fixture(autouse=True)
def clear_throttle_history():
    """Throttle counters live in the cache; start every test with a clean one."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def auth_client():
    """Factory returning an API client authenticated as the given user."""
    def _make(user):
        client = APIClient()
        refresh = RefreshToken.for_user(user)
        client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
        return client
    return _make


@pytest.fixture
def system_company(db):
    """The system company ADMIN users belong to (normally created by a data migration)."""
    company, _ = Company.objects.get_or_create(
        is_system_company=True,
        defaults={'name': SYSTEM_COMPANY_NAME},
    )
    return company


@pytest.fixture
def modules(db):
    """Create the default module catalogue."""
    return {
        slug: Module.objects.get_or_create(slug=slug, defaults={'name': name, 'description': description})[0]
        for slug, name, description in DEFAULT_MODULES
    }


@pytest.fixture
def company(db):
    return Company.objects.create(name='Biuro Rachunkowe Test')


@pytest.fixture
def other_company(db):
    return Company.objects.create(name='Inne Biuro')


@pytest.fixture
def admin_user(system_company):
    return User.objects.create_user(
        email='admin@example.com',
        password=PASSWORD,
        first_name='Anna',
        last_name='Admin',
        role=UserRole.ADMIN,
        company=system_company,
    )


@pytest.fixture
def owner(company):
    user = User.objects.create_user(
        email='owner@example.com',
        password=PASSWORD,
        first_name='Olga',
        last_name='Owner',
        role=UserRole.COMPANY_OWNER,
        company=company,
    )
    company.owner = user
    company.save(update_fields=['owner'])
    return user


@pytest.fixture
def employee(company):
    return User.objects.create_user(
        email='employee@example.com',
        password=PASSWORD,
        first_name='Ewa',
        last_name='Employee',
        role=UserRole.EMPLOYEE,
        company=company,
    )


@pytest.fixture
def other_employee(company):
    return User.objects.create_user(
        email='employee2@example.com',
        password=PASSWORD,
        first_name='Piotr',
        last_name='Second',
        role=UserRole.EMPLOYEE,
        company=company,
    )


@pytest.fixture
def other_owner(other_company):
    user = User.objects.create_user(
        email='other-owner@example.com',
        password=PASSWORD,
        first_name='Olek',
        last_name='Other',
        role=UserRole.COMPANY_OWNER,
        company=other_company,
    )
    other_company.owner = user
    other_company.save(update_fields=['owner'])
    return user


@pytest.fixture
def enable_module(modules):
    """Factory enabling a module for a company."""
    def _enable(company, slug):
        return CompanyModuleAccess.objects.update_or_create(
            company=company, module=modules[slug], defaults={'is_enabled': True}
        )[0]
    return _enable


@pytest.fixture
def grant(modules):
    """Factory granting module permissions to a user."""
    def _grant(user, slug, permissions=('read', 'write', 'delete')):
        return UserModulePermission.objects.update_or_create(
            user=user, module=modules[slug], defaults={'permissions': list(permissions)}
        )[0]
    return _grant
