# Generated manually for email_config app

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
            name='EmailConfiguration',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('display_name', models.CharField(blank=True, max_length=255)),
                ('smtp_host', models.CharField(max_length=255)),
                ('smtp_port', models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(65535)])),
                ('smtp_secure', models.BooleanField(default=True)),
                ('smtp_user', models.CharField(max_length=255)),
                ('smtp_password', models.TextField()),
                ('imap_host', models.CharField(max_length=255)),
                ('imap_port', models.PositiveIntegerField(validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(65535)])),
                ('imap_tls', models.BooleanField(default=True)),
                ('imap_user', models.CharField(max_length=255)),
                ('imap_password', models.TextField()),
                ('is_active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('company', models.OneToOneField(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name='email_configuration', to='companies.company')),
                ('user', models.OneToOneField(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name='email_configuration', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'email_configurations',
            },
        ),
        migrations.AddConstraint(
            model_name='emailconfiguration',
            constraint=models.CheckConstraint(check=models.Q(models.Q(('company__isnull', True), ('user__isnull', False)), models.Q(('company__isnull', False), ('user__isnull', True)), _connector='OR'), name='email_config_single_owner'),
        ),
    ]
