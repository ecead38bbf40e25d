from django.urls import path
from . import views

app_name = 'modules'

urlpatterns = [
    # GET    /api/modules/                                   - Modules available to user
    # POST   /api/modules/                                   - Create module (admin)
    path('', views.module_list, name='module-list'),
    path('catalog/<slug:slug>/', views.module_detail, name='module-detail'),

    # Company access (admin)
    path('company-access/<uuid:company_id>/', views.company_modules, name='company-modules'),
    path(
        'company-access/<uuid:company_id>/<slug:slug>/',
        views.revoke_company_module,
        name='company-module-revoke',
    ),

    # Employee permissions (owner)
    path('employee-permissions/<uuid:employee_id>/', views.employee_permissions, name='employee-permissions'),
    path(
        'employee-permissions/<uuid:employee_id>/<slug:slug>/',
        views.revoke_employee_permissions,
        name='employee-permission-revoke',
    ),
]
