# ==========================================
# apps/accounts/admin.py
# ==========================================

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.html import format_html

from .models import User, UserRole


ROLE_COLORS = {
    UserRole.ADMIN: '#B85C5C',
    UserRole.COMPANY_OWNER: '#A47449',
    UserRole.EMPLOYEE: '#6B8E5E',
}


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """
    Admin interface for office users.

    Provides:
    - User listing with role and company
    - Filtering by role, company and status
    - Bulk activation/deactivation
    """

    list_display = [
        'email',
        'first_name',
        'last_name',
        'role_badge',
        'company',
        'is_active_badge',
        'created_at',
        'last_login',
    ]

    list_filter = [
        'role',
        'is_active',
        'is_staff',
        'company',
    ]

    search_fields = [
        'email',
        'first_name',
        'last_name',
    ]

    ordering = ['-created_at']
    date_hierarchy = 'created_at'

    fieldsets = (
        ('Basic Information', {
            'fields': ('email', 'first_name', 'last_name', 'password')
        }),
        ('Organisation', {
            'fields': ('role', 'company'),
        }),
        ('Permissions', {
            'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions'),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at', 'last_login'),
            'classes': ('collapse',),
        }),
    )

    add_fieldsets = (
        ('Create User', {
            'classes': ('wide',),
            'fields': ('email', 'first_name', 'last_name', 'role', 'company', 'password1', 'password2'),
        }),
    )

    readonly_fields = [
        'created_at',
        'updated_at',
        'last_login',
    ]

    filter_horizontal = ['groups', 'user_permissions']

    def role_badge(self, obj):
        """Display role as colored badge."""
        return format_html(
            '<span style="background: {}; color: white; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            ROLE_COLORS.get(obj.role, '#ccc'),
            obj.get_role_display(),
        )
    role_badge.short_description = 'Role'
    role_badge.admin_order_field = 'role'

    def is_active_badge(self, obj):
        """Display active status as colored badge."""
        if obj.is_active:
            return format_html(
                '<span style="background: #6B8E5E; color: white; padding: 3px 8px; '
                'border-radius: 10px; font-size: 11px;">Active</span>'
            )
        return format_html(
            '<span style="background: #B85C5C; color: white; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">Inactive</span>'
        )
    is_active_badge.short_description = 'Status'
    is_active_badge.admin_order_field = 'is_active'

    actions = [
        'activate_users',
        'deactivate_users',
    ]

    @admin.action(description='Activate selected users')
    def activate_users(self, request, queryset):
        count = queryset.update(is_active=True)
        self.message_user(request, f'Activated {count} user(s).')

    @admin.action(description='Deactivate selected users')
    def deactivate_users(self, request, queryset):
        """Deactivate selected users (excludes superusers)."""
        safe_queryset = queryset.filter(is_superuser=False)
        count = safe_queryset.update(is_active=False)
        skipped = queryset.count() - count
        msg = f'Deactivated {count} user(s).'
        if skipped:
            msg += f' Skipped {skipped} superuser(s).'
        self.message_user(request, msg)

    def get_queryset(self, request):
        return super().get_queryset(request).select_related('company')
