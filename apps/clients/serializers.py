"""
Serializers for the clients module.

Input Serializers:
    ClientQuerySerializer - list/export filters
    ClientBulkSerializer, ClientBulkEditSerializer - bulk operations
    DuplicateCheckSerializer - duplicate lookup
    CsvImportSerializer - file upload or raw CSV text
    ClientEmployeeQuerySerializer - employee list filters
    DeleteRequestCreateSerializer, DeleteRequestRejectSerializer - delete request workflow

Response Serializers:
    ClientSerializer, ClientChangeLogSerializer, ClientIconSerializer
    ClientEmployeeSerializer, ClientDeleteRequestSerializer
"""

from rest_framework import serializers

from apps.accounts.models import User

from .models import (
    AmlGroup,
    Client,
    ClientChangeLog,
    ClientIcon,
    ClientDeleteRequest,
    ClientEmployee,
    DeleteRequestStatus,
    EmployeeContractType,
    EmploymentType,
    TaxScheme,
    VatStatus,
    ZusStatus,
)


class UserRefSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ['id', 'email', 'first_name', 'last_name']
        read_only_fields = fields


class ClientIconSerializer(serializers.ModelSerializer):
    class Meta:
        model = ClientIcon
        fields = [
            'id', 'name', 'color', 'icon_type', 'icon_value', 'file_url', 'tooltip',
            'is_active', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'is_active', 'created_at', 'updated_at']


class ClientSerializer(serializers.ModelSerializer):
    """Client payload. Also used to validate create/update input."""

    company_id = serializers.UUIDField(read_only=True)
    created_by = UserRefSerializer(read_only=True)
    updated_by = UserRefSerializer(read_only=True)
    icons = serializers.SerializerMethodField()
    gtu_codes = serializers.ListField(child=serializers.CharField(max_length=20), required=False)

    class Meta:
        model = Client
        fields = [
            'id', 'company_id',
            'name', 'nip', 'email', 'phone',
            'company_start_date', 'cooperation_start_date', 'suspension_date',
            'company_specificity', 'additional_info',
            'gtu_code', 'gtu_codes', 'aml_group', 'receive_email_copy',
            'employment_type', 'vat_status', 'tax_scheme', 'zus_status',
            'is_active', 'icons',
            'created_by', 'updated_by', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'is_active', 'created_at', 'updated_at']
        extra_kwargs = {
            'name': {'min_length': 2},
            'nip': {'allow_blank': True},
        }

    def get_icons(self, obj):
        assignments = obj.icon_assignments.all()
        return [
            ClientIconSerializer(a.icon).data
            for a in assignments
            if a.icon.is_active
        ]

    def validate_nip(self, value):
        return value or None


class ClientQuerySerializer(serializers.Serializer):
    """Validate list/export query parameters."""

    search = serializers.CharField(required=False, allow_blank=True)
    employment_type = serializers.ChoiceField(choices=EmploymentType.choices, required=False)
    vat_status = serializers.ChoiceField(choices=VatStatus.choices, required=False)
    tax_scheme = serializers.ChoiceField(choices=TaxScheme.choices, required=False)
    zus_status = serializers.ChoiceField(choices=ZusStatus.choices, required=False)
    aml_group = serializers.ChoiceField(choices=AmlGroup.choices, required=False)
    gtu_code = serializers.CharField(required=False, allow_blank=True)
    receive_email_copy = serializers.BooleanField(required=False, allow_null=True)
    is_active = serializers.BooleanField(required=False, allow_null=True)


class ClientBulkSerializer(serializers.Serializer):
    client_ids = serializers.ListField(child=serializers.UUIDField(), allow_empty=False, max_length=500)


class ClientBulkChangesSerializer(serializers.Serializer):
    employment_type = serializers.ChoiceField(choices=EmploymentType.choices, required=False)
    vat_status = serializers.ChoiceField(choices=VatStatus.choices, required=False)
    tax_scheme = serializers.ChoiceField(choices=TaxScheme.choices, required=False)
    zus_status = serializers.ChoiceField(choices=ZusStatus.choices, required=False)
    aml_group = serializers.ChoiceField(choices=AmlGroup.choices, required=False)
    receive_email_copy = serializers.BooleanField(required=False)
    gtu_code = serializers.CharField(max_length=20, required=False, allow_blank=True)


class ClientBulkEditSerializer(ClientBulkSerializer):
    changes = ClientBulkChangesSerializer()


class BulkResultSerializer(serializers.Serializer):
    affected = serializers.IntegerField()
    requested = serializers.IntegerField()


class DuplicateCheckSerializer(serializers.Serializer):
    nip = serializers.CharField(required=False, allow_blank=True)
    email = serializers.EmailField(required=False, allow_blank=True)
    exclude_id = serializers.UUIDField(required=False, allow_null=True)


class ClientBriefSerializer(serializers.ModelSerializer):
    class Meta:
        model = Client
        fields = ['id', 'name', 'nip', 'email', 'is_active']
        read_only_fields = fields


class DuplicateResultSerializer(serializers.Serializer):
    by_nip = ClientBriefSerializer(many=True)
    by_email = ClientBriefSerializer(many=True)


class ClientChangeLogSerializer(serializers.ModelSerializer):
    performed_by = UserRefSerializer(read_only=True)

    class Meta:
        model = ClientChangeLog
        fields = ['id', 'action', 'changes', 'performed_by', 'created_at']
        read_only_fields = fields


class CsvImportSerializer(serializers.Serializer):
    file = serializers.FileField(required=False)
    content = serializers.CharField(required=False, trim_whitespace=False)

    def validate(self, attrs):
        if not attrs.get('file') and not attrs.get('content'):
            raise serializers.ValidationError('Prześlij plik CSV lub jego zawartość.')
        return attrs


class ImportErrorSerializer(serializers.Serializer):
    row = serializers.IntegerField()
    field = serializers.CharField()
    message = serializers.CharField()


class ImportResultSerializer(serializers.Serializer):
    imported = serializers.IntegerField()
    updated = serializers.IntegerField()
    errors = ImportErrorSerializer(many=True)


class AssignIconSerializer(serializers.Serializer):
    icon_id = serializers.UUIDField()


class SetIconsSerializer(serializers.Serializer):
    icon_ids = serializers.ListField(child=serializers.UUIDField(), allow_empty=True)


# =============================================================================
# Employees
# =============================================================================

def format_pln(grosze):
    """8500050 -> '85000,50 zł'"""
    if grosze is None:
        return None
    return f'{grosze / 100:.2f}'.replace('.', ',') + ' zł'


class ClientEmployeeSerializer(serializers.ModelSerializer):
    """Employee payload. Also used to validate create/update input; amounts are in grosze."""

    client_id = serializers.UUIDField(read_only=True)
    created_by = UserRefSerializer(read_only=True)
    updated_by = UserRefSerializer(read_only=True)
    gross_salary_pln = serializers.SerializerMethodField()
    hourly_rate_pln = serializers.SerializerMethodField()
    agreed_amount_pln = serializers.SerializerMethodField()

    class Meta:
        model = ClientEmployee
        fields = [
            'id', 'client_id',
            'first_name', 'last_name', 'pesel', 'email', 'phone',
            'contract_type', 'position', 'start_date', 'end_date',
            'gross_salary', 'gross_salary_pln',
            'working_hours_per_week', 'vacation_days_per_year', 'workplace_type',
            'hourly_rate', 'hourly_rate_pln', 'is_student', 'has_other_insurance',
            'project_description', 'delivery_date', 'agreed_amount', 'agreed_amount_pln',
            'notes', 'is_active',
            'created_by', 'updated_by', 'created_at', 'updated_at',
        ]
        read_only_fields = ['id', 'is_active', 'created_at', 'updated_at']
        extra_kwargs = {
            'working_hours_per_week': {'min_value': 0, 'max_value': 168},
            'vacation_days_per_year': {'max_value': 365},
        }

    def get_gross_salary_pln(self, obj):
        return format_pln(obj.gross_salary)

    def get_hourly_rate_pln(self, obj):
        return format_pln(obj.hourly_rate)

    def get_agreed_amount_pln(self, obj):
        return format_pln(obj.agreed_amount)

    def validate(self, attrs):
        start = attrs.get('start_date', getattr(self.instance, 'start_date', None))
        end = attrs.get('end_date')
        if start and end and end < start:
            raise serializers.ValidationError({'end_date': 'Data zakończenia nie może być wcześniejsza niż data rozpoczęcia.'})
        return attrs


class ClientEmployeeQuerySerializer(serializers.Serializer):
    search = serializers.CharField(required=False, allow_blank=True)
    contract_type = serializers.ChoiceField(choices=EmployeeContractType.choices, required=False)
    is_active = serializers.BooleanField(required=False, allow_null=True, default=None)


# =============================================================================
# Delete requests
# =============================================================================

class ClientDeleteRequestSerializer(serializers.ModelSerializer):
    client = ClientBriefSerializer(read_only=True)
    client_id = serializers.UUIDField(read_only=True)
    requested_by = UserRefSerializer(read_only=True)
    processed_by = UserRefSerializer(read_only=True)

    class Meta:
        model = ClientDeleteRequest
        fields = [
            'id', 'client_id', 'client', 'reason', 'status',
            'requested_by', 'processed_by', 'processed_at', 'rejection_reason',
            'created_at', 'updated_at',
        ]
        read_only_fields = fields


class DeleteRequestCreateSerializer(serializers.Serializer):
    reason = serializers.CharField(required=False, allow_blank=True, max_length=2000, default='')


class DeleteRequestRejectSerializer(serializers.Serializer):
    rejection_reason = serializers.CharField(required=False, allow_blank=True, max_length=2000, default='')


class DeleteRequestQuerySerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=DeleteRequestStatus.choices, required=False)


class DeleteRequestApprovedSerializer(serializers.Serializer):
    message = serializers.CharField()
    deleted_client = ClientBriefSerializer()
    request = ClientDeleteRequestSerializer()
