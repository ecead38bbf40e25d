"""
URL configuration for config project.

Module routes are mounted under /api/modules/<slug>/ before the module
catalogue itself, so the catalogue's own paths never shadow them.
"""
from django.contrib import admin
from django.urls import path, include
from django.conf import settings
from django.conf.urls.static import static
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

from config.views import health_check

urlpatterns = [
    # Health check
    path('api/health/', health_check, name='health-check'),

    # Admin
    path('admin/', admin.site.urls),

    # API Documentation
    path('api/schema/', SpectacularAPIView.as_view(), name='api-schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='api-schema'), name='api-docs'),

    # Authentication
    path('api/auth/', include('apps.accounts.urls')),

    # Administration and company management
    path('api/admin/', include('apps.companies.urls_admin')),
    path('api/company/', include('apps.companies.urls')),

    # Business modules
    path('api/modules/clients/', include('apps.clients.urls')),
    path('api/modules/time-tracking/', include('apps.time_tracking.urls')),
    path('api/modules/settlements/', include('apps.settlements.urls')),
    path('api/modules/ai-agent/', include('apps.ai_agent.urls')),
    path('api/modules/', include('apps.modules.urls')),

    # Email configuration and notifications
    path('api/email-config/', include('apps.email_config.urls')),
    path('api/notifications/', include('apps.notifications.urls')),
]

# Static files (development only)
if settings.DEBUG:
    urlpatterns += static(settings.STATIC_URL, document_root=settings.STATIC_ROOT)


# Custom error handlers
handler404 = 'config.views.error_404'
handler500 = 'config.views.error_500'
