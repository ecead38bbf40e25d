from unittest.mock import Mock

from apps.accounts.models import UserRole
from apps.accounts.permissions import IsAdmin, IsCompanyOwner, IsOwnerOrAdmin


def _request(role, authenticated=True):
    request = Mock()
    request.user = Mock(role=role, is_authenticated=authenticated)
    return request


class TestRolePermissions:
    """Tests for role based permission classes"""

    def test_is_admin(self):
        assert IsAdmin().has_permission(_request(UserRole.ADMIN), Mock())
        assert not IsAdmin().has_permission(_request(UserRole.COMPANY_OWNER), Mock())

    def test_is_company_owner(self):
        assert IsCompanyOwner().has_permission(_request(UserRole.COMPANY_OWNER), Mock())
        assert not IsCompanyOwner().has_permission(_request(UserRole.EMPLOYEE), Mock())

    def test_owner_or_admin(self):
        permission = IsOwnerOrAdmin()
        assert permission.has_permission(_request(UserRole.ADMIN), Mock())
        assert permission.has_permission(_request(UserRole.COMPANY_OWNER), Mock())
        assert not permission.has_permission(_request(UserRole.EMPLOYEE), Mock())

    def test_anonymous_denied(self):
        assert not IsOwnerOrAdmin().has_permission(_request(None, authenticated=False), Mock())
