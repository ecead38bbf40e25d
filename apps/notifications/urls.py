from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

app_name = 'notifications'

router = SimpleRouter()
router.register(r'', views.NotificationViewSet, basename='notification')

urlpatterns = [
    # GET    /api/notifications/                    - List (type, module_slug, is_read)
    # GET    /api/notifications/archived/           - Archived
    # GET    /api/notifications/unread-count/       - {count}
    # POST   /api/notifications/mark-all-read/      - {count}
    # PATCH  /api/notifications/archive-multiple/   - Archive {ids}
    # GET    /api/notifications/{id}/               - Details
    # DELETE /api/notifications/{id}/               - Delete
    # PATCH  /api/notifications/{id}/read/          - Mark read
    # PATCH  /api/notifications/{id}/unread/        - Mark unread
    # PATCH  /api/notifications/{id}/archive/       - Archive
    # PATCH  /api/notifications/{id}/restore/       - Restore from archive
    path('', include(router.urls)),
]
