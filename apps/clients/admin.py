from django.contrib import admin

from .models import (
    Client,
    ClientChangeLog,
    ClientDeleteRequest,
    ClientEmployee,
    ClientIcon,
    ClientIconAssignment,
)


class ClientIconAssignmentInline(admin.TabularInline):
    model = ClientIconAssignment
    extra = 0
    raw_id_fields = ['icon']


@admin.register(Client)
class ClientAdmin(admin.ModelAdmin):
    list_display = ['name', 'nip', 'company', 'employment_type', 'vat_status', 'is_active', 'created_at']
    list_filter = ['is_active', 'employment_type', 'vat_status', 'tax_scheme', 'zus_status']
    search_fields = ['name', 'nip', 'email']
    raw_id_fields = ['company', 'created_by', 'updated_by']
    readonly_fields = ['created_at', 'updated_at']
    inlines = [ClientIconAssignmentInline]


@admin.register(ClientChangeLog)
class ClientChangeLogAdmin(admin.ModelAdmin):
    list_display = ['client', 'action', 'performed_by', 'created_at']
    list_filter = ['action']
    raw_id_fields = ['client', 'company', 'performed_by']
    readonly_fields = ['changes', 'created_at']


@admin.register(ClientIcon)
class ClientIconAdmin(admin.ModelAdmin):
    list_display = ['name', 'company', 'icon_type', 'icon_value', 'is_active']
    list_filter = ['icon_type', 'is_active']
    search_fields = ['name']
    raw_id_fields = ['company', 'created_by']


@admin.register(ClientEmployee)
class ClientEmployeeAdmin(admin.ModelAdmin):
    list_display = ['last_name', 'first_name', 'client', 'contract_type', 'start_date', 'is_active']
    list_filter = ['contract_type', 'is_active']
    search_fields = ['first_name', 'last_name', 'pesel', 'email']
    raw_id_fields = ['company', 'client', 'created_by', 'updated_by']


@admin.register(ClientDeleteRequest)
class ClientDeleteRequestAdmin(admin.ModelAdmin):
    list_display = ['client', 'status', 'requested_by', 'processed_by', 'created_at']
    list_filter = ['status']
    raw_id_fields = ['company', 'client', 'requested_by', 'processed_by']
    readonly_fields = ['created_at', 'updated_at']
