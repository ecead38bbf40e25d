from django.contrib import admin

from .models import CompanyModuleAccess, Module, UserModulePermission


@admin.register(Module)
class ModuleAdmin(admin.ModelAdmin):
    list_display = ['slug', 'name', 'is_active', 'created_at']
    list_filter = ['is_active']
    search_fields = ['slug', 'name']


@admin.register(CompanyModuleAccess)
class CompanyModuleAccessAdmin(admin.ModelAdmin):
    list_display = ['company', 'module', 'is_enabled', 'created_at']
    list_filter = ['is_enabled', 'module']
    raw_id_fields = ['company']


@admin.register(UserModulePermission)
class UserModulePermissionAdmin(admin.ModelAdmin):
    list_display = ['user', 'module', 'permissions', 'granted_by', 'updated_at']
    list_filter = ['module']
    raw_id_fields = ['user', 'granted_by']
