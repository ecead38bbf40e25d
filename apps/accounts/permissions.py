"""
Role based permission classes.

Usage:
    @permission_classes([IsAuthenticated, IsAdmin])
"""
from rest_framework.permissions import BasePermission

from .models import UserRole


class IsAdmin(BasePermission):
    """Permission: User must have the ADMIN role."""

    message = 'Wymagana rola administratora.'

    def has_permission(self, request, view):
        return bool(request.user and request.user.is_authenticated and request.user.role == UserRole.ADMIN)


class IsCompanyOwner(BasePermission):
    """Permission: User must own a company."""

    message = 'Wymagana rola właściciela firmy.'

    def has_permission(self, request, view):
        return bool(
            request.user and request.user.is_authenticated
            and request.user.role == UserRole.COMPANY_OWNER
        )


class IsOwnerOrAdmin(BasePermission):
    """Permission: Company owner or administrator (roles that see all company data)."""

    message = 'Brak uprawnień do wykonania tej operacji.'

    def has_permission(self, request, view):
        return bool(
            request.user and request.user.is_authenticated
            and request.user.role in (UserRole.COMPANY_OWNER, UserRole.ADMIN)
        )
