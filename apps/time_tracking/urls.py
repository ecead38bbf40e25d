from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

app_name = 'time-tracking'

router = SimpleRouter()
router.register(r'entries', views.TimeEntryViewSet, basename='entry')

urlpatterns = [
    # GET    /api/modules/time-tracking/entries/                 - List entries (filters, pagination)
    # POST   /api/modules/time-tracking/entries/                 - Manual entry
    # GET    /api/modules/time-tracking/entries/{id}/            - Entry details
    # PATCH  /api/modules/time-tracking/entries/{id}/            - Update entry
    # DELETE /api/modules/time-tracking/entries/{id}/            - Soft delete
    # POST   /api/modules/time-tracking/entries/{id}/submit/     - Send for approval
    # POST   /api/modules/time-tracking/entries/{id}/approve/    - Approve (owner/admin)
    # POST   /api/modules/time-tracking/entries/{id}/reject/     - Reject (owner/admin)
    # POST   /api/modules/time-tracking/entries/bulk-approve/    - Approve many
    # POST   /api/modules/time-tracking/entries/bulk-reject/     - Reject many
    # POST   /api/modules/time-tracking/entries/timer/start/     - Start timer
    # POST   /api/modules/time-tracking/entries/timer/stop/      - Stop timer
    # GET    /api/modules/time-tracking/entries/timer/active/    - Running timer or null
    # PATCH  /api/modules/time-tracking/entries/timer/           - Update running timer
    # DELETE /api/modules/time-tracking/entries/timer/           - Discard running timer
    path('', include(router.urls)),

    # GET|PATCH /api/modules/time-tracking/settings/
    path('settings/', views.time_settings, name='settings'),

    # Timesheets
    path('timesheet/daily/', views.daily_timesheet, name='timesheet-daily'),
    path('timesheet/weekly/', views.weekly_timesheet, name='timesheet-weekly'),

    # Reports
    path('reports/summary/', views.summary_report, name='report-summary'),
    path('reports/by-client/<uuid:client_id>/', views.client_report, name='report-client'),
    path('reports/export/', views.export_report, name='report-export'),
]
