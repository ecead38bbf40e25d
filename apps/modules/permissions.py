"""
Module permission class.

Views declare the module they belong to and, optionally, which permission an
action requires:

    class SettlementViewSet(viewsets.GenericViewSet):
        module_slug = 'settlements'
        module_permissions = {'assign': 'manage'}

Without an explicit mapping, safe methods need ``read``, DELETE needs
``delete`` and everything else ``write``.
"""
from rest_framework.permissions import SAFE_METHODS, BasePermission

from .models import ModulePermission
from .services.access import has_module_permission


def required_permission(request, view) -> str:
    mapping = getattr(view, 'module_permissions', None) or {}
    action = getattr(view, 'action', None)
    if action in mapping:
        return mapping[action]
    if request.method in SAFE_METHODS:
        return ModulePermission.READ
    if request.method == 'DELETE':
        return ModulePermission.DELETE
    return ModulePermission.WRITE


class HasModulePermission(BasePermission):
    """Permission: User holds the permission the action requires in view.module_slug."""

    message = 'Brak uprawnień do modułu.'

    def has_permission(self, request, view):
        if not (request.user and request.user.is_authenticated):
            return False
        slug = getattr(view, 'module_slug', None)
        if slug is None:
            return True
        return has_module_permission(request.user, slug, required_permission(request, view))


def module_permission(slug: str, permission: str = None):
    """
    Build a permission class for function based views.

    Usage:
        @permission_classes([IsAuthenticated, module_permission('time-tracking', 'manage')])
    """

    class _ModulePermission(HasModulePermission):
        def has_permission(self, request, view):
            if not (request.user and request.user.is_authenticated):
                return False
            needed = permission or required_permission(request, view)
            return has_module_permission(request.user, slug, needed)

    _ModulePermission.__name__ = f'HasModulePermission[{slug}]'
    return _ModulePermission
