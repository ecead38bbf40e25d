"""
Settlement views.

Every endpoint requires the ``settlements`` module. Initializing a month and
assigning settlements needs the ``manage`` permission and the owner or admin
role.
"""

from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from apps.accounts.permissions import IsOwnerOrAdmin
from apps.common.utils import UUID_PATTERN
from apps.companies.tenancy import get_effective_company_id
from apps.modules.models import SETTLEMENTS, ModulePermission
from apps.modules.permissions import HasModulePermission

from .serializers import (
    AssignSerializer,
    BulkAssignResultSerializer,
    BulkAssignSerializer,
    CommentCreateSerializer,
    EmployeeStatsSerializer,
    InitializeResultSerializer,
    MonthlySettlementSerializer,
    OptionalPeriodSerializer,
    OverviewSerializer,
    PeriodSerializer,
    SettlementCommentSerializer,
    SettlementQuerySerializer,
    SettlementUpdateSerializer,
    StatusCountsSerializer,
    StatusUpdateSerializer,
)
from . import services

MANAGER_ACTIONS = ('initialize', 'assign', 'bulk_assign', 'employee_stats')


@extend_schema(tags=['settlements'])
class SettlementViewSet(viewsets.GenericViewSet):
    """
    Monthly settlements of the company's clients.

    list: Settlements of ?month=&year= (employees: assigned to them)
    retrieve: Settlement details
    partial_update: Update bookkeeping fields (optional status)
    """

    serializer_class = MonthlySettlementSerializer
    permission_classes = [IsAuthenticated, HasModulePermission]
    lookup_value_regex = UUID_PATTERN
    module_slug = SETTLEMENTS
    module_permissions = {
        'initialize': ModulePermission.MANAGE,
        'assign': ModulePermission.MANAGE,
        'bulk_assign': ModulePermission.MANAGE,
        'employee_stats': ModulePermission.READ,
        'overview': ModulePermission.READ,
        'my_stats': ModulePermission.READ,
    }

    def get_permissions(self):
        if self.action in MANAGER_ACTIONS:
            return [IsAuthenticated(), IsOwnerOrAdmin(), HasModulePermission()]
        return super().get_permissions()

    def _scope(self):
        return {'user': self.request.user, 'company_id': get_effective_company_id(self.request.user)}

    @extend_schema(parameters=[SettlementQuerySerializer])
    def list(self, request):
        query = SettlementQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        qs = services.list_settlements(filters=query.validated_data, **self._scope())

        page = self.paginate_queryset(qs)
        if page is not None:
            return self.get_paginated_response(MonthlySettlementSerializer(page, many=True).data)
        return Response(MonthlySettlementSerializer(qs, many=True).data)

    def retrieve(self, request, pk=None):
        settlement = services.get_settlement(settlement_id=pk, **self._scope())
        return Response(MonthlySettlementSerializer(settlement).data)

    @extend_schema(request=SettlementUpdateSerializer, responses={200: MonthlySettlementSerializer})
    def partial_update(self, request, pk=None):
        serializer = SettlementUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        settlement = services.update_settlement(settlement_id=pk, data=serializer.validated_data, **self._scope())
        return Response(MonthlySettlementSerializer(settlement).data)

    @extend_schema(request=StatusUpdateSerializer, responses={200: MonthlySettlementSerializer})
    @action(detail=True, methods=['patch'], url_path='status')
    def update_status(self, request, pk=None):
        serializer = StatusUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        settlement = services.update_status(settlement_id=pk, **serializer.validated_data, **self._scope())
        return Response(MonthlySettlementSerializer(settlement).data)

    @extend_schema(request=PeriodSerializer, responses={201: InitializeResultSerializer})
    @action(detail=False, methods=['post'])
    def initialize(self, request):
        serializer = PeriodSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = services.initialize_month(**serializer.validated_data, **self._scope())
        return Response(result, status=status.HTTP_201_CREATED)

    @extend_schema(request=AssignSerializer, responses={200: MonthlySettlementSerializer})
    @action(detail=True, methods=['patch'])
    def assign(self, request, pk=None):
        serializer = AssignSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        settlement = services.assign_settlement(settlement_id=pk, **serializer.validated_data, **self._scope())
        return Response(MonthlySettlementSerializer(settlement).data)

    @extend_schema(request=BulkAssignSerializer, responses={200: BulkAssignResultSerializer})
    @action(detail=False, methods=['post'], url_path='bulk-assign')
    def bulk_assign(self, request):
        serializer = BulkAssignSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        return Response(services.bulk_assign(**serializer.validated_data, **self._scope()))

    # -------------------------------------------------------------------------
    # Comments
    # -------------------------------------------------------------------------

    @extend_schema(
        methods=['POST'],
        request=CommentCreateSerializer,
        responses={201: SettlementCommentSerializer},
    )
    @extend_schema(methods=['GET'], responses={200: SettlementCommentSerializer(many=True)})
    @action(detail=True, methods=['get', 'post'])
    def comments(self, request, pk=None):
        if request.method == 'GET':
            comments = services.list_comments(settlement_id=pk, **self._scope())
            return Response(SettlementCommentSerializer(comments, many=True).data)

        serializer = CommentCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        comment = services.add_comment(settlement_id=pk, **serializer.validated_data, **self._scope())
        return Response(SettlementCommentSerializer(comment).data, status=status.HTTP_201_CREATED)

    # -------------------------------------------------------------------------
    # Statistics
    # -------------------------------------------------------------------------

    @extend_schema(parameters=[PeriodSerializer], responses={200: OverviewSerializer})
    @action(detail=False, methods=['get'], url_path='stats/overview')
    def overview(self, request):
        query = PeriodSerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        return Response(services.get_overview(**query.validated_data, **self._scope()))

    @extend_schema(parameters=[OptionalPeriodSerializer], responses={200: EmployeeStatsSerializer(many=True)})
    @action(detail=False, methods=['get'], url_path='stats/employees')
    def employee_stats(self, request):
        query = OptionalPeriodSerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        company_id = get_effective_company_id(request.user)
        rows = services.get_employee_stats(company_id=company_id, **query.validated_data)
        return Response(EmployeeStatsSerializer(rows, many=True).data)

    @extend_schema(parameters=[OptionalPeriodSerializer], responses={200: StatusCountsSerializer})
    @action(detail=False, methods=['get'], url_path='stats/my')
    def my_stats(self, request):
        query = OptionalPeriodSerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        return Response(services.get_my_stats(**query.validated_data, **self._scope()))
