from django.contrib import admin

from .models import EmailConfiguration


@admin.register(EmailConfiguration)
class EmailConfigurationAdmin(admin.ModelAdmin):
    list_display = ['smtp_user', 'user', 'company', 'smtp_host', 'imap_host', 'is_active', 'updated_at']
    list_filter = ['is_active', 'smtp_secure', 'imap_tls']
    search_fields = ['smtp_user', 'imap_user', 'display_name']
    raw_id_fields = ['user', 'company']
    exclude = ['smtp_password', 'imap_password']
