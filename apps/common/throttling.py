"""
Per-endpoint request throttling.

ScopedRateThrottle is enabled globally and only limits views that name a
``throttle_scope``. Rates are set in REST_FRAMEWORK['DEFAULT_THROTTLE_RATES'].
"""


def throttle_scope(scope):
    """Give an ``@api_view`` function view a throttle scope. Apply above ``@api_view``."""
    def decorator(view):
        view.cls.throttle_scope = scope
        return view
    return decorator


class ActionThrottleMixin:
    """
    Throttle scope per viewset action.

    Usage:
        class AdminUserViewSet(ActionThrottleMixin, viewsets.ViewSet):
            throttle_scopes = {'create': 'admin_user_create'}
    """

    throttle_scopes = {}

    @property
    def throttle_scope(self):
        return self.throttle_scopes.get(getattr(self, 'action', None))
