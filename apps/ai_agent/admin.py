from django.contrib import admin

from .models import AIConfiguration, AIConversation, AIMessage, TokenLimit, TokenUsage


@admin.register(AIConfiguration)
class AIConfigurationAdmin(admin.ModelAdmin):
    list_display = ['provider', 'model', 'temperature', 'max_tokens', 'updated_at']
    exclude = ['api_key']
    raw_id_fields = ['company', 'created_by', 'updated_by']


class AIMessageInline(admin.TabularInline):
    model = AIMessage
    extra = 0
    fields = ['role', 'content', 'total_tokens', 'created_at']
    readonly_fields = fields


@admin.register(AIConversation)
class AIConversationAdmin(admin.ModelAdmin):
    list_display = ['title', 'created_by', 'company', 'message_count', 'total_tokens', 'created_at']
    search_fields = ['title', 'created_by__email']
    raw_id_fields = ['company', 'created_by']
    inlines = [AIMessageInline]


@admin.register(TokenUsage)
class TokenUsageAdmin(admin.ModelAdmin):
    list_display = ['user', 'company', 'date', 'total_tokens', 'message_count']
    list_filter = ['date']
    raw_id_fields = ['user', 'company']


@admin.register(TokenLimit)
class TokenLimitAdmin(admin.ModelAdmin):
    list_display = ['company', 'user', 'monthly_limit', 'warning_threshold_percentage']
    raw_id_fields = ['company', 'user', 'set_by']
