from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'company'

router = DefaultRouter()
router.register(r'employees', views.EmployeeViewSet, basename='employee')

urlpatterns = [
    # GET    /api/company/employees/         - List employees
    # POST   /api/company/employees/         - Create employee (owner)
    # GET    /api/company/employees/{id}/    - Employee details
    # PATCH  /api/company/employees/{id}/    - Update employee (owner)
    # DELETE /api/company/employees/{id}/    - Deactivate employee (owner)
    path('', include(router.urls)),
]
