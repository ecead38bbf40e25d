"""
Serializers for settlements.

Input Serializers:
    SettlementQuerySerializer, PeriodSerializer - filters
    StatusUpdateSerializer, SettlementUpdateSerializer - changes
    AssignSerializer, BulkAssignSerializer - assignment
    CommentCreateSerializer

Response Serializers:
    MonthlySettlementSerializer, SettlementCommentSerializer, statistics
"""

from rest_framework import serializers

from apps.clients.models import Client, TaxScheme
from apps.clients.serializers import UserRefSerializer

from .models import MonthlySettlement, SettlementComment, SettlementStatus
from .services.settlement_management import SORT_FIELDS


class SettlementClientSerializer(serializers.ModelSerializer):
    class Meta:
        model = Client
        fields = ['id', 'name', 'nip', 'email', 'tax_scheme', 'vat_status', 'zus_status']
        read_only_fields = fields


class MonthlySettlementSerializer(serializers.ModelSerializer):
    client = SettlementClientSerializer(read_only=True)
    user = UserRefSerializer(read_only=True)
    assigned_by = UserRefSerializer(read_only=True)
    settled_by = UserRefSerializer(read_only=True)

    class Meta:
        model = MonthlySettlement
        fields = [
            'id', 'client', 'month', 'year', 'status',
            'user', 'assigned_by',
            'notes', 'invoice_count', 'documents_date', 'priority', 'deadline',
            'documents_complete', 'requires_attention', 'attention_reason',
            'settled_at', 'settled_by', 'status_history',
            'created_at', 'updated_at',
        ]
        read_only_fields = fields


class PeriodSerializer(serializers.Serializer):
    month = serializers.IntegerField(min_value=1, max_value=12)
    year = serializers.IntegerField(min_value=2000, max_value=2100)


class OptionalPeriodSerializer(serializers.Serializer):
    month = serializers.IntegerField(min_value=1, max_value=12, required=False)
    year = serializers.IntegerField(min_value=2000, max_value=2100, required=False)


class SettlementQuerySerializer(PeriodSerializer):
    status = serializers.ChoiceField(choices=SettlementStatus.choices, required=False)
    tax_scheme = serializers.ChoiceField(choices=TaxScheme.choices, required=False)
    requires_attention = serializers.BooleanField(required=False, allow_null=True, default=None)
    search = serializers.CharField(required=False)
    unassigned = serializers.BooleanField(required=False, allow_null=True, default=None)
    assignee_id = serializers.UUIDField(required=False)
    sort_by = serializers.ChoiceField(choices=list(SORT_FIELDS), required=False, default='client_name')
    sort_order = serializers.ChoiceField(choices=['asc', 'desc'], required=False, default='asc')


class StatusUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=SettlementStatus.choices)
    notes = serializers.CharField(required=False, allow_blank=True, default='')


class SettlementUpdateSerializer(serializers.Serializer):
    notes = serializers.CharField(required=False, allow_blank=True)
    invoice_count = serializers.IntegerField(required=False, min_value=0)
    documents_date = serializers.DateField(required=False, allow_null=True)
    priority = serializers.IntegerField(required=False, min_value=0, max_value=10)
    deadline = serializers.DateField(required=False, allow_null=True)
    documents_complete = serializers.BooleanField(required=False)
    requires_attention = serializers.BooleanField(required=False)
    attention_reason = serializers.CharField(required=False, allow_blank=True, max_length=255)
    status = serializers.ChoiceField(choices=SettlementStatus.choices, required=False)


class AssignSerializer(serializers.Serializer):
    user_id = serializers.UUIDField(allow_null=True)


class BulkAssignSerializer(serializers.Serializer):
    settlement_ids = serializers.ListField(child=serializers.UUIDField(), min_length=1, max_length=500)
    user_id = serializers.UUIDField()


class InitializeResultSerializer(serializers.Serializer):
    created = serializers.IntegerField()
    skipped = serializers.IntegerField()


class BulkAssignResultSerializer(serializers.Serializer):
    assigned = serializers.IntegerField()
    requested = serializers.IntegerField()


class SettlementCommentSerializer(serializers.ModelSerializer):
    user = UserRefSerializer(read_only=True)

    class Meta:
        model = SettlementComment
        fields = ['id', 'user', 'content', 'created_at']
        read_only_fields = ['id', 'user', 'created_at']


class CommentCreateSerializer(serializers.Serializer):
    content = serializers.CharField(max_length=5000)


# =============================================================================
# Statistics
# =============================================================================

class StatusCountsSerializer(serializers.Serializer):
    total = serializers.IntegerField()
    pending = serializers.IntegerField()
    in_progress = serializers.IntegerField()
    completed = serializers.IntegerField()
    completion_rate = serializers.IntegerField()


class OverviewSerializer(StatusCountsSerializer):
    unassigned = serializers.IntegerField()
    requires_attention = serializers.IntegerField()


class EmployeeStatsSerializer(StatusCountsSerializer):
    user_id = serializers.UUIDField()
    email = serializers.EmailField()
    first_name = serializers.CharField()
    last_name = serializers.CharField()
