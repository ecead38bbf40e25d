import pytest

from apps.accounts.models import User, UserRole


@pytest.fixture
def user(company):
    """Create and return an active employee."""
    return User.objects.create_user(
        email='testuser@example.com',
        password='TestPass123!',
        first_name='Test',
        last_name='User',
        role=UserRole.EMPLOYEE,
        company=company,
    )


@pytest.fixture
def user_inactive(company):
    """Create and return an inactive user."""
    return User.objects.create_user(
        email='inactive@example.com',
        password='TestPass123!',
        first_name='Inactive',
        last_name='User',
        role=UserRole.EMPLOYEE,
        company=company,
        is_active=False,
    )


@pytest.fixture
def authenticated_client(auth_client, user):
    """Return an API client authenticated as ``user``."""
    return auth_client(user)
