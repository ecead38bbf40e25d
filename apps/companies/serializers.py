from django.contrib.auth.password_validation import validate_password
from rest_framework import serializers

from apps.accounts.models import UserRole
from apps.accounts.serializers import UserDetailSerializer

from .models import Company


class CompanySerializer(serializers.ModelSerializer):
    owner = UserDetailSerializer(read_only=True)
    employee_count = serializers.SerializerMethodField()

    class Meta:
        model = Company
        fields = [
            'id',
            'name',
            'owner',
            'is_system_company',
            'is_active',
            'employee_count',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def get_employee_count(self, obj):
        return obj.users.filter(role=UserRole.EMPLOYEE, is_active=True).count()


class CompanyCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    owner_id = serializers.UUIDField()


class CompanyUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255, required=False)
    owner_id = serializers.UUIDField(required=False)
    is_active = serializers.BooleanField(required=False)


class AdminUserCreateSerializer(serializers.Serializer):
    email = serializers.EmailField(max_length=255)
    password = serializers.CharField(write_only=True, validators=[validate_password])
    first_name = serializers.CharField(max_length=100)
    last_name = serializers.CharField(max_length=100)
    role = serializers.ChoiceField(choices=UserRole.choices)
    company_id = serializers.UUIDField(required=False, allow_null=True)


class AdminUserUpdateSerializer(serializers.Serializer):
    email = serializers.EmailField(max_length=255, required=False)
    password = serializers.CharField(write_only=True, required=False, validators=[validate_password])
    first_name = serializers.CharField(max_length=100, required=False)
    last_name = serializers.CharField(max_length=100, required=False)
    role = serializers.ChoiceField(choices=UserRole.choices, required=False)
    company_id = serializers.UUIDField(required=False)
    is_active = serializers.BooleanField(required=False)


class SetActiveSerializer(serializers.Serializer):
    is_active = serializers.BooleanField()


class EmployeeCreateSerializer(serializers.Serializer):
    email = serializers.EmailField(max_length=255)
    password = serializers.CharField(write_only=True, validators=[validate_password])
    first_name = serializers.CharField(max_length=100)
    last_name = serializers.CharField(max_length=100)


class EmployeeUpdateSerializer(serializers.Serializer):
    email = serializers.EmailField(max_length=255, required=False)
    password = serializers.CharField(write_only=True, required=False, validators=[validate_password])
    first_name = serializers.CharField(max_length=100, required=False)
    last_name = serializers.CharField(max_length=100, required=False)
    is_active = serializers.BooleanField(required=False)
