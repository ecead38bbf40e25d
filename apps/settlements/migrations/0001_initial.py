# Generated manually for settlements app

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
            name='MonthlySettlement',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('month', models.PositiveSmallIntegerField(validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(12)])),
                ('year', models.PositiveSmallIntegerField(validators=[django.core.validators.MinValueValidator(2000), django.core.validators.MaxValueValidator(2100)])),
                ('status', models.CharField(choices=[('PENDING', 'Oczekujące'), ('IN_PROGRESS', 'W trakcie'), ('COMPLETED', 'Rozliczone')], default='PENDING', max_length=20)),
                ('notes', models.TextField(blank=True)),
                ('invoice_count', models.PositiveIntegerField(default=0)),
                ('documents_date', models.DateField(blank=True, null=True)),
                ('priority', models.SmallIntegerField(default=0)),
                ('deadline', models.DateField(blank=True, null=True)),
                ('documents_complete', models.BooleanField(default=False)),
                ('requires_attention', models.BooleanField(default=False)),
                ('attention_reason', models.CharField(blank=True, max_length=255)),
                ('settled_at', models.DateTimeField(blank=True, null=True)),
                ('status_history', models.JSONField(blank=True, default=list)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('company', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='settlements', to='companies.company')),
                ('client', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='settlements', to='clients.client')),
                ('user', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='settlements', to=settings.AUTH_USER_MODEL)),
                ('assigned_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
                ('settled_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'monthly_settlements',
                'ordering': ['client__name'],
                'indexes': [
                    models.Index(fields=['company', 'year', 'month'], name='settlements_period_idx'),
                    models.Index(fields=['company', 'user'], name='settlements_assignee_idx'),
                ],
                'constraints': [
                    models.UniqueConstraint(fields=('company', 'client', 'month', 'year'), name='unique_settlement_per_client_month'),
                ],
            },
        ),
        migrations.CreateModel(
            name='SettlementComment',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('content', models.TextField()),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('settlement', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='comments', to='settlements.monthlysettlement')),
                ('user', models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'settlement_comments',
                'ordering': ['created_at'],
            },
        ),
    ]
