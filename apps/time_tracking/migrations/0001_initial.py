# Generated manually for time_tracking app

import uuid
import django.core.validators
from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('companies', '0001_initial'),
        ('clients', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='TimeEntry',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('description', models.TextField(blank=True)),
                ('start_time', models.DateTimeField()),
                ('end_time', models.DateTimeField(blank=True, null=True)),
                ('duration_minutes', models.PositiveIntegerField(blank=True, null=True)),
                ('is_running', models.BooleanField(default=False)),
                ('is_billable', models.BooleanField(default=True)),
                ('hourly_rate', models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ('total_amount', models.DecimalField(blank=True, decimal_places=2, max_digits=12, null=True)),
                ('currency', models.CharField(default='PLN', max_length=3)),
                ('status', models.CharField(choices=[('draft', 'Szkic'), ('submitted', 'Przesłany'), ('approved', 'Zatwierdzony'), ('rejected', 'Odrzucony'), ('billed', 'Rozliczony')], default='draft', max_length=20)),
                ('tags', models.JSONField(blank=True, default=list)),
                ('submitted_at', models.DateTimeField(blank=True, null=True)),
                ('approved_at', models.DateTimeField(blank=True, null=True)),
                ('rejection_note', models.TextField(blank=True)),
                ('is_locked', models.BooleanField(default=False)),
                ('is_active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('company', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='time_entries', to='companies.company')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='time_entries', to=settings.AUTH_USER_MODEL)),
                ('client', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='time_entries', to='clients.client')),
                ('approved_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
                ('updated_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'time_entries',
                'ordering': ['-start_time'],
                'indexes': [
                    models.Index(fields=['company', 'user', 'start_time'], name='time_entries_user_start_idx'),
                    models.Index(fields=['company', 'status'], name='time_entries_status_idx'),
                    models.Index(fields=['company', 'client'], name='time_entries_client_idx'),
                ],
                'constraints': [
                    models.UniqueConstraint(condition=models.Q(('is_active', True), ('is_running', True)), fields=('user',), name='time_entries_one_running_per_user'),
                ],
            },
        ),
        migrations.CreateModel(
            name='TimeSettings',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('rounding_method', models.CharField(choices=[('none', 'Bez zaokrąglania'), ('up', 'W górę'), ('down', 'W dół'), ('nearest', 'Do najbliższej wartości')], default='none', max_length=10)),
                ('rounding_interval_minutes', models.PositiveIntegerField(default=15)),
                ('default_hourly_rate', models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ('default_currency', models.CharField(default='PLN', max_length=3)),
                ('require_approval', models.BooleanField(default=False)),
                ('allow_overlapping_entries', models.BooleanField(default=True)),
                ('working_hours_per_day', models.PositiveIntegerField(default=8, validators=[django.core.validators.MaxValueValidator(24)])),
                ('working_hours_per_week', models.PositiveIntegerField(default=40, validators=[django.core.validators.MaxValueValidator(168)])),
                ('week_start_day', models.PositiveSmallIntegerField(default=1, validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(7)])),
                ('allow_timer_mode', models.BooleanField(default=True)),
                ('allow_manual_entry', models.BooleanField(default=True)),
                ('auto_stop_timer_after_minutes', models.PositiveIntegerField(default=0)),
                ('minimum_entry_minutes', models.PositiveIntegerField(default=0)),
                ('maximum_entry_minutes', models.PositiveIntegerField(default=0)),
                ('lock_entries_after_days', models.PositiveIntegerField(default=0)),
                ('enable_daily_reminder', models.BooleanField(default=False)),
                ('daily_reminder_time', models.TimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('company', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='time_settings', to='companies.company')),
            ],
            options={
                'db_table': 'time_settings',
                'verbose_name_plural': 'time settings',
            },
        ),
    ]
