from django.urls import path, include
from rest_framework.routers import SimpleRouter

from apps.common.utils import UUID_PATTERN

from . import views

app_name = 'clients'

# Prefixed routes must be registered before the client routes (empty prefix)
router = SimpleRouter()
router.register(r'icons', views.ClientIconViewSet, basename='icon')
router.register(r'delete-requests', views.ClientDeleteRequestViewSet, basename='delete-request')
router.register(
    rf'(?P<client_pk>{UUID_PATTERN})/employees', views.ClientEmployeeViewSet, basename='employee'
)
router.register(r'', views.ClientViewSet, basename='client')

urlpatterns = [
    # GET    /api/modules/clients/                       - List clients (filters, pagination)
    # POST   /api/modules/clients/                       - Create client
    # GET    /api/modules/clients/{id}/                  - Client details
    # PATCH  /api/modules/clients/{id}/                  - Update client
    # DELETE /api/modules/clients/{id}/                  - Soft delete
    # DELETE /api/modules/clients/{id}/hard/             - Permanent delete (owner/admin)
    # POST   /api/modules/clients/{id}/restore/          - Restore
    # POST   /api/modules/clients/{id}/delete-request/   - Ask an owner to delete the client
    # GET    /api/modules/clients/{id}/changelog/        - Change history
    # GET|POST|PUT /api/modules/clients/{id}/icons/      - Client icons
    # DELETE /api/modules/clients/{id}/icons/{icon_id}/  - Remove icon from client
    # PATCH  /api/modules/clients/bulk/delete/           - Bulk soft delete
    # PATCH  /api/modules/clients/bulk/restore/          - Bulk restore
    # PATCH  /api/modules/clients/bulk/edit/             - Bulk edit
    # POST   /api/modules/clients/check-duplicates/      - NIP/email duplicates
    # GET    /api/modules/clients/statistics/            - Counters
    # GET    /api/modules/clients/export/                - CSV export
    # GET    /api/modules/clients/import/template/       - CSV template
    # POST   /api/modules/clients/import/                - CSV import
    # /api/modules/clients/icons/...                     - Icon catalogue CRUD
    #
    # GET    /api/modules/clients/delete-requests/                    - All requests (?status=)
    # GET    /api/modules/clients/delete-requests/pending/            - Pending requests
    # GET    /api/modules/clients/delete-requests/my-requests/        - Caller's requests
    # GET    /api/modules/clients/delete-requests/{id}/               - Request details
    # POST   /api/modules/clients/delete-requests/{id}/approve/       - Approve, soft deletes the client
    # POST   /api/modules/clients/delete-requests/{id}/reject/        - Reject
    # DELETE /api/modules/clients/delete-requests/{id}/cancel/        - Cancel a pending request
    #
    # GET    /api/modules/clients/{id}/employees/                     - Client employees
    # POST   /api/modules/clients/{id}/employees/                     - Add employee
    # GET    /api/modules/clients/{id}/employees/{employee_id}/       - Employee details
    # PATCH  /api/modules/clients/{id}/employees/{employee_id}/       - Update employee
    # DELETE /api/modules/clients/{id}/employees/{employee_id}/       - Deactivate employee
    # POST   /api/modules/clients/{id}/employees/{employee_id}/restore/ - Restore employee
    path('', include(router.urls)),
]
