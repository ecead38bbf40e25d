"""
Time tracking views.

Every endpoint requires the ``time-tracking`` module. Approving and
rejecting entries and changing settings is reserved for owners and admins.
"""

from django.utils import timezone
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from apps.accounts.permissions import IsOwnerOrAdmin
from apps.common.utils import UUID_PATTERN, csv_response
from apps.companies.tenancy import can_view_all, get_effective_company_id
from apps.modules.models import TIME_TRACKING
from apps.modules.permissions import HasModulePermission, module_permission

from .serializers import (
    BulkEntriesSerializer,
    ClientReportSerializer,
    DailyTimesheetSerializer,
    RejectSerializer,
    ReportQuerySerializer,
    SummaryReportSerializer,
    TimeEntryCreateSerializer,
    TimeEntryQuerySerializer,
    TimeEntrySerializer,
    TimeEntryUpdateSerializer,
    TimerStartSerializer,
    TimerStopSerializer,
    TimerUpdateSerializer,
    TimeSettingsSerializer,
    TimesheetQuerySerializer,
    WeeklyTimesheetSerializer,
)
from . import services

MANAGER_ACTIONS = ('approve', 'reject', 'bulk_approve', 'bulk_reject')


@extend_schema(tags=['time-tracking'])
class TimeEntryViewSet(viewsets.GenericViewSet):
    """
    Time entries.

    list: Entries of the caller (owners and admins: the whole company)
    create: Manual entry
    retrieve: Entry details
    partial_update / update: Update entry
    destroy: Soft delete
    """

    serializer_class = TimeEntrySerializer
    permission_classes = [IsAuthenticated, HasModulePermission]
    lookup_value_regex = UUID_PATTERN
    module_slug = TIME_TRACKING
    module_permissions = {
        'submit': 'write',
        'timer': 'write',
        'timer_start': 'write',
        'timer_stop': 'write',
        'bulk_approve': 'write',
        'bulk_reject': 'write',
    }

    def get_permissions(self):
        if self.action in MANAGER_ACTIONS:
            return [IsAuthenticated(), IsOwnerOrAdmin(), HasModulePermission()]
        return super().get_permissions()

    def _scope(self):
        return {'user': self.request.user, 'company_id': get_effective_company_id(self.request.user)}

    @extend_schema(parameters=[TimeEntryQuerySerializer])
    def list(self, request):
        query = TimeEntryQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        qs = services.list_entries(filters=query.validated_data, **self._scope())

        page = self.paginate_queryset(qs)
        if page is not None:
            return self.get_paginated_response(TimeEntrySerializer(page, many=True).data)
        return Response(TimeEntrySerializer(qs, many=True).data)

    def retrieve(self, request, pk=None):
        return Response(TimeEntrySerializer(services.get_entry(entry_id=pk, **self._scope())).data)

    @extend_schema(request=TimeEntryCreateSerializer, responses={201: TimeEntrySerializer})
    def create(self, request):
        serializer = TimeEntryCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        entry = services.create_entry(data=serializer.validated_data, **self._scope())
        return Response(TimeEntrySerializer(entry).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=TimeEntryUpdateSerializer, responses={200: TimeEntrySerializer})
    def partial_update(self, request, pk=None):
        serializer = TimeEntryUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        entry = services.update_entry(entry_id=pk, data=serializer.validated_data, **self._scope())
        return Response(TimeEntrySerializer(entry).data)

    @extend_schema(request=TimeEntryUpdateSerializer, responses={200: TimeEntrySerializer})
    def update(self, request, pk=None):
        return self.partial_update(request, pk)

    def destroy(self, request, pk=None):
        services.delete_entry(entry_id=pk, **self._scope())
        return Response(status=status.HTTP_204_NO_CONTENT)

    # -------------------------------------------------------------------------
    # Workflow
    # -------------------------------------------------------------------------

    @extend_schema(request=None, responses={200: TimeEntrySerializer})
    @action(detail=True, methods=['post'])
    def submit(self, request, pk=None):
        return Response(TimeEntrySerializer(services.submit_entry(entry_id=pk, **self._scope())).data)

    @extend_schema(request=None, responses={200: TimeEntrySerializer})
    @action(detail=True, methods=['post'])
    def approve(self, request, pk=None):
        return Response(TimeEntrySerializer(services.approve_entry(entry_id=pk, **self._scope())).data)

    @extend_schema(request=RejectSerializer, responses={200: TimeEntrySerializer})
    @action(detail=True, methods=['post'])
    def reject(self, request, pk=None):
        serializer = RejectSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        entry = services.reject_entry(entry_id=pk, **serializer.validated_data, **self._scope())
        return Response(TimeEntrySerializer(entry).data)

    @extend_schema(request=BulkEntriesSerializer)
    @action(detail=False, methods=['post'], url_path='bulk-approve')
    def bulk_approve(self, request):
        serializer = BulkEntriesSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = services.bulk_approve(entry_ids=serializer.validated_data['entry_ids'], **self._scope())
        return Response(result)

    @extend_schema(request=BulkEntriesSerializer)
    @action(detail=False, methods=['post'], url_path='bulk-reject')
    def bulk_reject(self, request):
        serializer = BulkEntriesSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = services.bulk_reject(**serializer.validated_data, **self._scope())
        return Response(result)

    # -------------------------------------------------------------------------
    # Timer
    # -------------------------------------------------------------------------

    @extend_schema(request=TimerStartSerializer, responses={201: TimeEntrySerializer})
    @action(detail=False, methods=['post'], url_path='timer/start')
    def timer_start(self, request):
        serializer = TimerStartSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        entry = services.start_timer(data=serializer.validated_data, **self._scope())
        return Response(TimeEntrySerializer(entry).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=TimerStopSerializer, responses={200: TimeEntrySerializer})
    @action(detail=False, methods=['post'], url_path='timer/stop')
    def timer_stop(self, request):
        serializer = TimerStopSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        entry = services.stop_timer(**serializer.validated_data, **self._scope())
        return Response(TimeEntrySerializer(entry).data)

    @extend_schema(responses={200: TimeEntrySerializer})
    @action(detail=False, methods=['get'], url_path='timer/active')
    def timer_active(self, request):
        entry = services.get_active_timer(**self._scope())
        return Response(TimeEntrySerializer(entry).data if entry else None)

    @extend_schema(request=TimerUpdateSerializer, responses={200: TimeEntrySerializer})
    @action(detail=False, methods=['patch', 'delete'])
    def timer(self, request):
        if request.method == 'DELETE':
            services.discard_timer(**self._scope())
            return Response(status=status.HTTP_204_NO_CONTENT)

        serializer = TimerUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        entry = services.update_timer(data=serializer.validated_data, **self._scope())
        return Response(TimeEntrySerializer(entry).data)


# =============================================================================
# Settings
# =============================================================================

@extend_schema(
    methods=['PATCH'],
    request=TimeSettingsSerializer,
    responses={200: TimeSettingsSerializer},
    tags=['time-tracking'],
)
@extend_schema(methods=['GET'], responses={200: TimeSettingsSerializer}, tags=['time-tracking'])
@api_view(['GET', 'PATCH'])
@permission_classes([IsAuthenticated, module_permission(TIME_TRACKING, 'read')])
def time_settings(request):
    """Company time tracking settings. Only owners and admins may change them."""
    company_id = get_effective_company_id(request.user)

    if request.method == 'GET':
        return Response(TimeSettingsSerializer(services.get_settings(company_id=company_id)).data)

    if not can_view_all(request.user):
        raise PermissionDenied(IsOwnerOrAdmin.message)
    serializer = TimeSettingsSerializer(data=request.data, partial=True)
    serializer.is_valid(raise_exception=True)
    settings = services.update_settings(company_id=company_id, data=serializer.validated_data)
    return Response(TimeSettingsSerializer(settings).data)


# =============================================================================
# Timesheets and reports
# =============================================================================

def _timesheet_params(request):
    query = TimesheetQuerySerializer(data=request.query_params)
    query.is_valid(raise_exception=True)
    return {
        'user': request.user,
        'company_id': get_effective_company_id(request.user),
        'date': query.validated_data.get('date') or timezone.now().date(),
        'user_id': query.validated_data.get('user_id'),
    }


def _report_filters(request):
    query = ReportQuerySerializer(data=request.query_params)
    query.is_valid(raise_exception=True)
    return dict(query.validated_data)


@extend_schema(parameters=[TimesheetQuerySerializer], responses={200: DailyTimesheetSerializer}, tags=['time-tracking'])
@api_view(['GET'])
@permission_classes([IsAuthenticated, module_permission(TIME_TRACKING, 'read')])
def daily_timesheet(request):
    """Entries and summary of one day (defaults to today)."""
    result = services.daily_timesheet(**_timesheet_params(request))
    return Response(DailyTimesheetSerializer(result).data)


@extend_schema(parameters=[TimesheetQuerySerializer], responses={200: WeeklyTimesheetSerializer}, tags=['time-tracking'])
@api_view(['GET'])
@permission_classes([IsAuthenticated, module_permission(TIME_TRACKING, 'read')])
def weekly_timesheet(request):
    """Seven days starting on the company's week start day."""
    result = services.weekly_timesheet(**_timesheet_params(request))
    return Response(WeeklyTimesheetSerializer(result).data)


@extend_schema(parameters=[ReportQuerySerializer], responses={200: SummaryReportSerializer}, tags=['time-tracking'])
@api_view(['GET'])
@permission_classes([IsAuthenticated, module_permission(TIME_TRACKING, 'read')])
def summary_report(request):
    filters = _report_filters(request)
    group_by = filters.pop('group_by')
    result = services.summary_report(
        user=request.user,
        company_id=get_effective_company_id(request.user),
        filters=filters,
        group_by=group_by,
    )
    return Response(SummaryReportSerializer(result).data)


@extend_schema(parameters=[ReportQuerySerializer], responses={200: ClientReportSerializer}, tags=['time-tracking'])
@api_view(['GET'])
@permission_classes([IsAuthenticated, module_permission(TIME_TRACKING, 'read')])
def client_report(request, client_id):
    filters = _report_filters(request)
    filters.pop('group_by', None)
    filters.pop('client_id', None)
    result = services.client_report(
        user=request.user,
        company_id=get_effective_company_id(request.user),
        client_id=client_id,
        filters=filters,
    )
    return Response(ClientReportSerializer(result).data)


@extend_schema(
    parameters=[ReportQuerySerializer],
    responses={200: OpenApiResponse(description='CSV file')},
    tags=['time-tracking'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated, module_permission(TIME_TRACKING, 'read')])
def export_report(request):
    filters = _report_filters(request)
    filters.pop('group_by', None)
    content = services.export_report(
        user=request.user,
        company_id=get_effective_company_id(request.user),
        filters=filters,
    )
    return csv_response(content, f"czas-pracy-{timezone.now():%Y-%m-%d}.csv")
