from rest_framework import serializers

from .models import CompanyModuleAccess, Module, ModulePermission, UserModulePermission


class ModuleSerializer(serializers.ModelSerializer):
    class Meta:
        model = Module
        fields = ['id', 'slug', 'name', 'description', 'is_active', 'created_at']
        read_only_fields = ['id', 'created_at']
        # Duplicate slugs are reported as 409 by the service
        extra_kwargs = {'slug': {'validators': []}}


class ModuleUpdateSerializer(serializers.Serializer):
    slug = serializers.SlugField(max_length=100, required=False)
    name = serializers.CharField(max_length=255, required=False)
    description = serializers.CharField(required=False, allow_blank=True)
    is_active = serializers.BooleanField(required=False)


class CompanyModuleAccessSerializer(serializers.ModelSerializer):
    module = ModuleSerializer(read_only=True)

    class Meta:
        model = CompanyModuleAccess
        fields = ['id', 'company_id', 'module', 'is_enabled', 'created_at']
        read_only_fields = fields


class GrantCompanyModuleSerializer(serializers.Serializer):
    module_slug = serializers.SlugField()


class UserModulePermissionSerializer(serializers.ModelSerializer):
    module = ModuleSerializer(read_only=True)
    user_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = UserModulePermission
        fields = ['id', 'user_id', 'module', 'permissions', 'created_at', 'updated_at']
        read_only_fields = fields


class EmployeePermissionSerializer(serializers.Serializer):
    module_slug = serializers.SlugField()
    permissions = serializers.ListField(
        child=serializers.ChoiceField(choices=ModulePermission.choices),
        allow_empty=False,
    )
