from django.contrib import admin

from .models import TimeEntry, TimeSettings


@admin.register(TimeEntry)
class TimeEntryAdmin(admin.ModelAdmin):
    list_display = ['user', 'client', 'start_time', 'duration_minutes', 'is_billable', 'status', 'is_running', 'is_active']
    list_filter = ['status', 'is_billable', 'is_running', 'is_locked', 'is_active']
    search_fields = ['description', 'user__email', 'client__name']
    raw_id_fields = ['company', 'user', 'client', 'approved_by', 'created_by', 'updated_by']
    readonly_fields = ['created_at', 'updated_at']
    date_hierarchy = 'start_time'


@admin.register(TimeSettings)
class TimeSettingsAdmin(admin.ModelAdmin):
    list_display = ['company', 'rounding_method', 'rounding_interval_minutes', 'default_hourly_rate', 'allow_timer_mode']
    raw_id_fields = ['company']
