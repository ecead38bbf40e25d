from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

app_name = 'settlements'

router = SimpleRouter()
router.register(r'', views.SettlementViewSet, basename='settlement')

urlpatterns = [
    # GET   /api/modules/settlements/?month=&year=           - List settlements of a month
    # GET   /api/modules/settlements/{id}/                   - Settlement details
    # PATCH /api/modules/settlements/{id}/                   - Update bookkeeping fields
    # PATCH /api/modules/settlements/{id}/status/            - Change status
    # PATCH /api/modules/settlements/{id}/assign/            - Assign employee (manage)
    # GET|POST /api/modules/settlements/{id}/comments/       - Comments
    # POST  /api/modules/settlements/initialize/             - Create settlements for a month (manage)
    # POST  /api/modules/settlements/bulk-assign/            - Assign many (manage)
    # GET   /api/modules/settlements/stats/overview/         - Month counters
    # GET   /api/modules/settlements/stats/employees/        - Per employee counters (owner/admin)
    # GET   /api/modules/settlements/stats/my/               - Own counters
    path('', include(router.urls)),
]
