"""
Serializers for time tracking.

Input Serializers:
    TimeEntryCreateSerializer, TimeEntryUpdateSerializer - manual entries
    TimerStartSerializer, TimerStopSerializer, TimerUpdateSerializer - timer
    TimeEntryQuerySerializer, ReportQuerySerializer - filters

Response Serializers:
    TimeEntrySerializer, TimeSettingsSerializer, timesheet and report shapes
"""

from rest_framework import serializers

from apps.clients.models import Client
from apps.clients.serializers import UserRefSerializer

from .models import TimeEntry, TimeEntryStatus, TimeSettings
from .services.timesheets import GROUP_BY_CLIENT, GROUP_BY_DAY, GROUP_BY_USER


class ClientRefSerializer(serializers.ModelSerializer):
    class Meta:
        model = Client
        fields = ['id', 'name', 'nip']
        read_only_fields = fields


class TimeEntrySerializer(serializers.ModelSerializer):
    user = UserRefSerializer(read_only=True)
    client = ClientRefSerializer(read_only=True)
    approved_by = UserRefSerializer(read_only=True)

    class Meta:
        model = TimeEntry
        fields = [
            'id', 'user', 'client', 'description',
            'start_time', 'end_time', 'duration_minutes',
            'is_running', 'is_billable', 'hourly_rate', 'total_amount', 'currency',
            'status', 'tags',
            'submitted_at', 'approved_by', 'approved_at', 'rejection_note',
            'is_locked', 'is_active', 'created_at', 'updated_at',
        ]
        read_only_fields = fields


class TimeEntryWriteSerializer(serializers.Serializer):
    client_id = serializers.UUIDField(required=False, allow_null=True)
    description = serializers.CharField(required=False, allow_blank=True)
    start_time = serializers.DateTimeField()
    end_time = serializers.DateTimeField(required=False, allow_null=True)
    duration_minutes = serializers.IntegerField(required=False, allow_null=True, min_value=0)
    is_billable = serializers.BooleanField(required=False)
    hourly_rate = serializers.DecimalField(
        max_digits=10, decimal_places=2, required=False, allow_null=True, min_value=0
    )
    currency = serializers.CharField(max_length=3, required=False)
    tags = serializers.ListField(child=serializers.CharField(max_length=50), required=False)


class TimeEntryCreateSerializer(TimeEntryWriteSerializer):
    pass


class TimeEntryUpdateSerializer(TimeEntryWriteSerializer):
    start_time = serializers.DateTimeField(required=False)
    is_locked = serializers.BooleanField(required=False)


class TimeEntryQuerySerializer(serializers.Serializer):
    search = serializers.CharField(required=False)
    status = serializers.ChoiceField(choices=TimeEntryStatus.choices, required=False)
    statuses = serializers.CharField(required=False, help_text='Comma separated statuses')
    client_id = serializers.UUIDField(required=False)
    user_id = serializers.UUIDField(required=False)
    is_billable = serializers.BooleanField(required=False, allow_null=True, default=None)
    is_active = serializers.BooleanField(required=False, allow_null=True, default=None)
    start_date_from = serializers.DateField(required=False)
    start_date_to = serializers.DateField(required=False)

    def validate_statuses(self, value):
        statuses = [s.strip() for s in value.split(',') if s.strip()]
        unknown = set(statuses) - set(TimeEntryStatus.values)
        if unknown:
            raise serializers.ValidationError(f"Nieznany status: {', '.join(sorted(unknown))}")
        return statuses


class TimerStartSerializer(serializers.Serializer):
    client_id = serializers.UUIDField(required=False, allow_null=True)
    description = serializers.CharField(required=False, allow_blank=True)
    is_billable = serializers.BooleanField(required=False)
    hourly_rate = serializers.DecimalField(
        max_digits=10, decimal_places=2, required=False, allow_null=True, min_value=0
    )
    tags = serializers.ListField(child=serializers.CharField(max_length=50), required=False)


class TimerUpdateSerializer(serializers.Serializer):
    client_id = serializers.UUIDField(required=False, allow_null=True)
    description = serializers.CharField(required=False, allow_blank=True)
    is_billable = serializers.BooleanField(required=False)
    tags = serializers.ListField(child=serializers.CharField(max_length=50), required=False)


class TimerStopSerializer(serializers.Serializer):
    description = serializers.CharField(required=False, allow_blank=True, default='')


class RejectSerializer(serializers.Serializer):
    rejection_note = serializers.CharField()


class BulkEntriesSerializer(serializers.Serializer):
    entry_ids = serializers.ListField(child=serializers.UUIDField(), min_length=1, max_length=500)
    rejection_note = serializers.CharField(required=False, allow_blank=True, default='')


class TimeSettingsSerializer(serializers.ModelSerializer):
    class Meta:
        model = TimeSettings
        fields = [
            'rounding_method', 'rounding_interval_minutes',
            'default_hourly_rate', 'default_currency',
            'require_approval', 'allow_overlapping_entries',
            'working_hours_per_day', 'working_hours_per_week', 'week_start_day',
            'allow_timer_mode', 'allow_manual_entry', 'auto_stop_timer_after_minutes',
            'minimum_entry_minutes', 'maximum_entry_minutes', 'lock_entries_after_days',
            'enable_daily_reminder', 'daily_reminder_time',
            'updated_at',
        ]
        read_only_fields = ['updated_at']
        extra_kwargs = {
            'rounding_interval_minutes': {'min_value': 1, 'max_value': 240},
        }


# =============================================================================
# Timesheets and reports
# =============================================================================

class SummarySerializer(serializers.Serializer):
    total_minutes = serializers.IntegerField()
    billable_minutes = serializers.IntegerField()
    non_billable_minutes = serializers.IntegerField()
    total_amount = serializers.CharField()
    entries_count = serializers.IntegerField()


class TimesheetQuerySerializer(serializers.Serializer):
    date = serializers.DateField(required=False)
    user_id = serializers.UUIDField(required=False)


class DailyTimesheetSerializer(serializers.Serializer):
    date = serializers.DateField()
    entries = TimeEntrySerializer(many=True)
    summary = SummarySerializer()


class WeeklyTimesheetSerializer(serializers.Serializer):
    week_start = serializers.DateField()
    week_end = serializers.DateField()
    days = DailyTimesheetSerializer(many=True)
    summary = SummarySerializer()


class ReportQuerySerializer(serializers.Serializer):
    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)
    group_by = serializers.ChoiceField(
        choices=[GROUP_BY_DAY, GROUP_BY_CLIENT, GROUP_BY_USER],
        required=False,
        default=GROUP_BY_DAY,
    )
    user_id = serializers.UUIDField(required=False)
    client_id = serializers.UUIDField(required=False)
    is_billable = serializers.BooleanField(required=False, allow_null=True, default=None)

    def validate(self, attrs):
        start, end = attrs.get('start_date'), attrs.get('end_date')
        if start and end and end < start:
            raise serializers.ValidationError({'end_date': 'Data końcowa nie może być wcześniejsza niż początkowa.'})
        return attrs


class ReportGroupSerializer(serializers.Serializer):
    key = serializers.CharField()
    label = serializers.CharField()
    summary = SummarySerializer()


class SummaryReportSerializer(serializers.Serializer):
    start_date = serializers.DateField(allow_null=True)
    end_date = serializers.DateField(allow_null=True)
    group_by = serializers.CharField()
    summary = SummarySerializer()
    groups = ReportGroupSerializer(many=True)


class ClientReportSerializer(serializers.Serializer):
    client_id = serializers.UUIDField()
    client_name = serializers.CharField()
    start_date = serializers.DateField(allow_null=True)
    end_date = serializers.DateField(allow_null=True)
    summary = SummarySerializer()
