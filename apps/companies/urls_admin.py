from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'admin-panel'

router = DefaultRouter()
router.register(r'users', views.AdminUserViewSet, basename='user')
router.register(r'companies', views.AdminCompanyViewSet, basename='company')

urlpatterns = [
    # GET    /api/admin/users/                    - List users
    # POST   /api/admin/users/                    - Create user
    # GET    /api/admin/users/{id}/               - User details
    # PATCH  /api/admin/users/{id}/               - Update user
    # DELETE /api/admin/users/{id}/               - Deactivate user
    # PATCH  /api/admin/users/{id}/activate/      - Set is_active
    # GET    /api/admin/companies/                - List companies
    # POST   /api/admin/companies/                - Create company
    # GET    /api/admin/companies/{id}/employees/ - Company employees
    path('available-owners/', views.available_owners, name='available-owners'),
    path('', include(router.urls)),
]
