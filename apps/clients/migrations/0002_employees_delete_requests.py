# Generated manually for clients app

import uuid
import django.core.validators
from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    dependencies = [
        ('companies', '0001_initial'),
        ('clients', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='ClientEmployee',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('first_name', models.CharField(max_length=100)),
                ('last_name', models.CharField(max_length=100)),
                ('pesel', models.CharField(blank=True, max_length=11, validators=[django.core.validators.RegexValidator('^\\d{11}$', 'PESEL musi składać się z 11 cyfr')])),
                ('email', models.EmailField(blank=True, max_length=255)),
                ('phone', models.CharField(blank=True, max_length=50)),
                ('contract_type', models.CharField(choices=[('UMOWA_O_PRACE', 'Umowa o pracę'), ('UMOWA_ZLECENIE', 'Umowa zlecenie'), ('UMOWA_O_DZIELO', 'Umowa o dzieło')], max_length=20)),
                ('position', models.CharField(blank=True, max_length=255)),
                ('start_date', models.DateField()),
                ('end_date', models.DateField(blank=True, null=True)),
                ('gross_salary', models.PositiveIntegerField(blank=True, null=True)),
                ('working_hours_per_week', models.DecimalField(blank=True, decimal_places=2, max_digits=5, null=True)),
                ('vacation_days_per_year', models.PositiveSmallIntegerField(blank=True, null=True)),
                ('workplace_type', models.CharField(blank=True, choices=[('OFFICE', 'Biuro'), ('REMOTE', 'Praca zdalna'), ('HYBRID', 'Praca hybrydowa')], max_length=10)),
                ('hourly_rate', models.PositiveIntegerField(blank=True, null=True)),
                ('is_student', models.BooleanField(default=False)),
                ('has_other_insurance', models.BooleanField(default=False)),
                ('project_description', models.TextField(blank=True)),
                ('delivery_date', models.DateField(blank=True, null=True)),
                ('agreed_amount', models.PositiveIntegerField(blank=True, null=True)),
                ('notes', models.TextField(blank=True)),
                ('is_active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('client', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='employees', to='clients.client')),
                ('company', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='+', to='companies.company')),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
                ('updated_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'client_employees',
                'ordering': ['last_name', 'first_name'],
                'indexes': [
                    models.Index(fields=['company', 'client'], name='client_employees_client_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='ClientDeleteRequest',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('reason', models.TextField(blank=True)),
                ('status', models.CharField(choices=[('PENDING', 'Oczekuje'), ('APPROVED', 'Zatwierdzone'), ('REJECTED', 'Odrzucone')], default='PENDING', max_length=10)),
                ('processed_at', models.DateTimeField(blank=True, null=True)),
                ('rejection_reason', models.TextField(blank=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('client', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='delete_requests', to='clients.client')),
                ('company', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='+', to='companies.company')),
                ('processed_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
                ('requested_by', models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='client_delete_requests', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'client_delete_requests',
                'ordering': ['-created_at'],
                'constraints': [
                    models.UniqueConstraint(condition=models.Q(status='PENDING'), fields=('client',), name='unique_pending_delete_request'),
                ],
            },
        ),
    ]
