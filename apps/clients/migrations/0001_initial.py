# Generated manually for clients app

import uuid
import django.core.validators
from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('companies', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Client',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=255, validators=[django.core.validators.MinLengthValidator(2)])),
                ('nip', models.CharField(blank=True, max_length=10, null=True, validators=[django.core.validators.RegexValidator('^\\d{10}$', 'NIP musi składać się z 10 cyfr')])),
                ('email', models.EmailField(blank=True, max_length=255)),
                ('phone', models.CharField(blank=True, max_length=20)),
                ('company_start_date', models.DateField(blank=True, null=True)),
                ('cooperation_start_date', models.DateField(blank=True, null=True)),
                ('suspension_date', models.DateField(blank=True, null=True)),
                ('company_specificity', models.TextField(blank=True)),
                ('additional_info', models.TextField(blank=True)),
                ('gtu_code', models.CharField(blank=True, max_length=20)),
                ('gtu_codes', models.JSONField(blank=True, default=list)),
                ('aml_group', models.CharField(blank=True, choices=[('LOW', 'Niskie ryzyko'), ('STANDARD', 'Standardowe ryzyko'), ('ELEVATED', 'Podwyższone ryzyko'), ('HIGH', 'Wysokie ryzyko')], max_length=20)),
                ('receive_email_copy', models.BooleanField(default=False)),
                ('employment_type', models.CharField(blank=True, choices=[('DG', 'Działalność gospodarcza'), ('DG_ETAT', 'DG + etat'), ('DG_AKCJONARIUSZ', 'DG + akcjonariusz'), ('DG_HALF_TIME_BELOW_MIN', 'DG + pół etatu poniżej minimalnej'), ('DG_HALF_TIME_ABOVE_MIN', 'DG + pół etatu powyżej minimalnej')], max_length=40)),
                ('vat_status', models.CharField(blank=True, choices=[('VAT_MONTHLY', 'VAT miesięczny'), ('VAT_QUARTERLY', 'VAT kwartalny'), ('NO', 'Zwolniony z VAT'), ('NO_WATCH_LIMIT', 'Zwolniony (pilnować limitu)')], max_length=20)),
                ('tax_scheme', models.CharField(blank=True, choices=[('PIT_17', 'Podatek liniowy (PIT-17)'), ('PIT_19', 'Podatek liniowy (PIT-19)'), ('LUMP_SUM', 'Ryczałt'), ('GENERAL', 'Zasady ogólne')], max_length=20)),
                ('zus_status', models.CharField(blank=True, choices=[('FULL', 'Pełny ZUS'), ('PREFERENTIAL', 'Preferencyjny ZUS'), ('NONE', 'Brak ZUS')], max_length=20)),
                ('is_active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('company', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='clients', to='companies.company')),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='created_clients', to=settings.AUTH_USER_MODEL)),
                ('updated_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='updated_clients', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'clients',
                'ordering': ['name'],
                'indexes': [
                    models.Index(fields=['company', 'is_active'], name='clients_company_active_idx'),
                    models.Index(fields=['company', 'nip'], name='clients_company_nip_idx'),
                    models.Index(fields=['name'], name='clients_name_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='ClientChangeLog',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('action', models.CharField(choices=[('CREATE', 'Utworzenie'), ('UPDATE', 'Aktualizacja'), ('DELETE', 'Usunięcie'), ('RESTORE', 'Przywrócenie')], max_length=10)),
                ('changes', models.JSONField(blank=True, default=list)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('client', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='changelog', to='clients.client')),
                ('company', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='+', to='companies.company')),
                ('performed_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'client_changelog',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='ClientIcon',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=100)),
                ('color', models.CharField(blank=True, max_length=20)),
                ('icon_type', models.CharField(choices=[('lucide', 'Lucide'), ('custom', 'Własna'), ('emoji', 'Emoji')], default='lucide', max_length=10)),
                ('icon_value', models.CharField(blank=True, max_length=100)),
                ('file_url', models.URLField(blank=True, max_length=500)),
                ('tooltip', models.CharField(blank=True, max_length=255)),
                ('is_active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('company', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='client_icons', to='companies.company')),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'client_icons',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='ClientIconAssignment',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('is_auto_assigned', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('client', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='icon_assignments', to='clients.client')),
                ('icon', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='assignments', to='clients.clienticon')),
            ],
            options={
                'db_table': 'client_icon_assignments',
                'constraints': [
                    models.UniqueConstraint(fields=('client', 'icon'), name='unique_client_icon'),
                ],
            },
        ),
    ]
