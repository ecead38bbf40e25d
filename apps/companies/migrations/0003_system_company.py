# Generated manually: the system company ADMIN users belong to

from django.db import migrations


def create_system_company(apps, schema_editor):
    Company = apps.get_model('companies', 'Company')
    if not Company.objects.filter(is_system_company=True).exists():
        Company.objects.create(name='System Admin', is_system_company=True)


def remove_system_company(apps, schema_editor):
    Company = apps.get_model('companies', 'Company')
    Company.objects.filter(is_system_company=True).delete()


class Migration(migrations.Migration):

    dependencies = [
        ('companies', '0002_company_owner'),
    ]

    operations = [
        migrations.RunPython(create_system_company, remove_system_company),
    ]
