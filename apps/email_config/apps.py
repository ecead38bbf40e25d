from django.apps import AppConfig


class EmailConfigConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.email_config'
    verbose_name = 'Konfiguracja email'
