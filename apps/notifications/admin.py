from django.contrib import admin

from .models import Notification


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ['title', 'type', 'recipient', 'company', 'is_read', 'is_archived', 'created_at']
    list_filter = ['type', 'is_read', 'is_archived']
    search_fields = ['title', 'message', 'recipient__email']
    raw_id_fields = ['company', 'recipient', 'actor']
    readonly_fields = ['created_at', 'read_at', 'archived_at']
