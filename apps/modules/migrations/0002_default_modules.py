# Generated manually: modules shipped with the system

from django.db import migrations

DEFAULT_MODULES = [
    ('clients', 'Klienci', 'Kartoteka klientów biura'),
    ('time-tracking', 'Ewidencja czasu', 'Rejestracja czasu pracy'),
    ('settlements', 'Rozliczenia', 'Miesięczne rozliczenia klientów'),
    ('ai-agent', 'Asystent AI', 'Czat z asystentem AI'),
    ('email-client', 'Poczta', 'Klient poczty email'),
]


def create_modules(apps, schema_editor):
    Module = apps.get_model('modules', 'Module')
    for slug, name, description in DEFAULT_MODULES:
        Module.objects.get_or_create(slug=slug, defaults={'name': name, 'description': description})


def remove_modules(apps, schema_editor):
    Module = apps.get_model('modules', 'Module')
    Module.objects.filter(slug__in=[slug for slug, _, _ in DEFAULT_MODULES]).delete()


class Migration(migrations.Migration):

    dependencies = [
        ('modules', '0001_initial'),
    ]

    operations = [
        migrations.RunPython(create_modules, remove_modules),
    ]
