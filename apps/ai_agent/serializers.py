"""
Serializers for the AI assistant.

The stored API key is never returned; responses expose ``has_api_key``.
"""

from rest_framework import serializers

from .models import AIConfiguration, AIConversation, AIMessage, AIProvider, TokenLimit


class AIConfigurationSerializer(serializers.ModelSerializer):
    has_api_key = serializers.SerializerMethodField()

    class Meta:
        model = AIConfiguration
        fields = [
            'id', 'provider', 'model', 'system_prompt', 'temperature', 'max_tokens',
            'has_api_key', 'created_at', 'updated_at',
        ]
        read_only_fields = fields

    def get_has_api_key(self, obj) -> bool:
        return bool(obj.api_key)


class AIConfigurationWriteSerializer(serializers.Serializer):
    provider = serializers.ChoiceField(choices=AIProvider.choices)
    model = serializers.CharField(max_length=100)
    api_key = serializers.CharField(write_only=True, allow_blank=True, required=False)
    system_prompt = serializers.CharField(allow_blank=True, required=False)
    temperature = serializers.DecimalField(max_digits=3, decimal_places=2, min_value=0, max_value=2, required=False)
    max_tokens = serializers.IntegerField(min_value=1, max_value=128000, required=False)


class AIMessageSerializer(serializers.ModelSerializer):
    class Meta:
        model = AIMessage
        fields = ['id', 'role', 'content', 'input_tokens', 'output_tokens', 'total_tokens', 'created_at']
        read_only_fields = fields


class AIConversationSerializer(serializers.ModelSerializer):
    class Meta:
        model = AIConversation
        fields = ['id', 'title', 'total_tokens', 'message_count', 'created_at', 'updated_at']
        read_only_fields = ['id', 'total_tokens', 'message_count', 'created_at', 'updated_at']
        extra_kwargs = {'title': {'required': False, 'allow_blank': True}}


class AIConversationDetailSerializer(AIConversationSerializer):
    messages = serializers.SerializerMethodField()

    class Meta(AIConversationSerializer.Meta):
        fields = AIConversationSerializer.Meta.fields + ['messages']

    def get_messages(self, obj):
        return AIMessageSerializer(obj.messages.order_by('created_at'), many=True).data


class SendMessageSerializer(serializers.Serializer):
    content = serializers.CharField(max_length=20000)


# =============================================================================
# Usage and limits
# =============================================================================

class UsageQuerySerializer(serializers.Serializer):
    days = serializers.IntegerField(min_value=1, max_value=365, required=False, default=30)


class UsageTotalsSerializer(serializers.Serializer):
    total_input_tokens = serializers.IntegerField()
    total_output_tokens = serializers.IntegerField()
    total_tokens = serializers.IntegerField()
    conversation_count = serializers.IntegerField()
    message_count = serializers.IntegerField()


class DailyUsageSerializer(UsageTotalsSerializer):
    date = serializers.DateField()


class MyUsageSerializer(serializers.Serializer):
    days = serializers.IntegerField()
    totals = UsageTotalsSerializer()
    daily = DailyUsageSerializer(many=True)


class UserUsageSerializer(UsageTotalsSerializer):
    user_id = serializers.UUIDField()
    email = serializers.EmailField()
    first_name = serializers.CharField()
    last_name = serializers.CharField()


class CompanyUsageSerializer(serializers.Serializer):
    totals = UsageTotalsSerializer()
    users = UserUsageSerializer(many=True)


class CompanyUsageRowSerializer(UsageTotalsSerializer):
    company_id = serializers.UUIDField()
    company_name = serializers.CharField()


class TokenLimitWriteSerializer(serializers.ModelSerializer):
    class Meta:
        model = TokenLimit
        fields = ['monthly_limit', 'warning_threshold_percentage', 'notify_on_warning', 'notify_on_exceeded']
        extra_kwargs = {'monthly_limit': {'min_value': 1}}


class TokenLimitSerializer(serializers.ModelSerializer):
    company_id = serializers.UUIDField(read_only=True)
    user_id = serializers.UUIDField(read_only=True, allow_null=True)

    class Meta:
        model = TokenLimit
        fields = [
            'id', 'company_id', 'user_id', 'monthly_limit', 'warning_threshold_percentage',
            'notify_on_warning', 'notify_on_exceeded', 'updated_at',
        ]
        read_only_fields = fields


class LimitStatusSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    monthly_limit = serializers.IntegerField()
    warning_threshold_percentage = serializers.IntegerField()
    notify_on_warning = serializers.BooleanField()
    notify_on_exceeded = serializers.BooleanField()
    current_usage = serializers.IntegerField()
    usage_percentage = serializers.IntegerField()
    is_exceeded = serializers.BooleanField()
    is_warning = serializers.BooleanField()


class MyLimitsSerializer(serializers.Serializer):
    user_limit = LimitStatusSerializer(allow_null=True)
    company_limit = LimitStatusSerializer(allow_null=True)
