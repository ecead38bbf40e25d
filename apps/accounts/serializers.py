from rest_framework import serializers
from django.contrib.auth.password_validation import validate_password

from .models import User, UserRole


class UserSerializer(serializers.ModelSerializer):
    """User payload returned with tokens and by /me."""

    company_id = serializers.UUIDField(read_only=True, allow_null=True)

    class Meta:
        model = User
        fields = [
            'id',
            'email',
            'first_name',
            'last_name',
            'role',
            'company_id',
        ]
        read_only_fields = fields


class UserDetailSerializer(serializers.ModelSerializer):
    """Full user record for admin and owner listings."""

    company_id = serializers.UUIDField(read_only=True, allow_null=True)
    company_name = serializers.CharField(source='company.name', read_only=True, default=None)

    class Meta:
        model = User
        fields = [
            'id',
            'email',
            'first_name',
            'last_name',
            'role',
            'company_id',
            'company_name',
            'is_active',
            'created_at',
            'updated_at',
            'last_login',
        ]
        read_only_fields = fields


class UserRegistrationSerializer(serializers.Serializer):
    """Serializer for user registration."""

    email = serializers.EmailField(max_length=255)
    password = serializers.CharField(
        write_only=True,
        validators=[validate_password],
        style={'input_type': 'password'}
    )
    first_name = serializers.CharField(max_length=100)
    last_name = serializers.CharField(max_length=100)
    role = serializers.ChoiceField(
        choices=[UserRole.COMPANY_OWNER, UserRole.EMPLOYEE],
        default=UserRole.EMPLOYEE
    )
    company_id = serializers.UUIDField(required=False, allow_null=True)


class UserLoginSerializer(serializers.Serializer):
    """Serializer for user login."""

    email = serializers.EmailField(required=True)
    password = serializers.CharField(
        required=True,
        write_only=True,
        style={'input_type': 'password'}
    )


class RefreshTokenSerializer(serializers.Serializer):
    refresh_token = serializers.CharField()


class ChangePasswordSerializer(serializers.Serializer):
    """Serializer for password change of the current user."""

    current_password = serializers.CharField(style={'input_type': 'password'})
    new_password = serializers.CharField(
        validators=[validate_password],
        style={'input_type': 'password'}
    )


class AuthResponseSerializer(serializers.Serializer):
    access_token = serializers.CharField()
    refresh_token = serializers.CharField()
    user = UserSerializer()


class MessageResponseSerializer(serializers.Serializer):
    message = serializers.CharField()


class ErrorResponseSerializer(serializers.Serializer):
    error = serializers.CharField()
