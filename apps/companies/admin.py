from django.contrib import admin

from .models import Company


@admin.register(Company)
class CompanyAdmin(admin.ModelAdmin):
    list_display = ['name', 'owner', 'is_system_company', 'is_active', 'created_at']
    list_filter = ['is_active', 'is_system_company']
    search_fields = ['name', 'owner__email']
    readonly_fields = ['created_at', 'updated_at']
    raw_id_fields = ['owner']
