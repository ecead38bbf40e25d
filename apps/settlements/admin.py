from django.contrib import admin

from .models import MonthlySettlement, SettlementComment


class SettlementCommentInline(admin.TabularInline):
    model = SettlementComment
    extra = 0
    raw_id_fields = ['user']
    readonly_fields = ['created_at']


@admin.register(MonthlySettlement)
class MonthlySettlementAdmin(admin.ModelAdmin):
    list_display = ['client', 'month', 'year', 'status', 'user', 'requires_attention', 'settled_at']
    list_filter = ['status', 'year', 'month', 'requires_attention', 'documents_complete']
    search_fields = ['client__name', 'client__nip']
    raw_id_fields = ['company', 'client', 'user', 'assigned_by', 'settled_by']
    readonly_fields = ['status_history', 'created_at', 'updated_at']
    inlines = [SettlementCommentInline]
