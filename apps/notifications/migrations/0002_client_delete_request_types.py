# Generated manually for notifications app

from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ('notifications', '0001_initial'),
    ]

    operations = [
        migrations.AlterField(
            model_name='notification',
            name='type',
            field=models.CharField(choices=[('client.created', 'Nowy klient'), ('client.delete_requested', 'Żądanie usunięcia klienta'), ('client.delete_approved', 'Zatwierdzono usunięcie klienta'), ('client.delete_rejected', 'Odrzucono usunięcie klienta'), ('settlement.assigned', 'Przypisano rozliczenie'), ('time_entry.submitted', 'Wpis czasu do akceptacji'), ('time_entry.approved', 'Wpis czasu zaakceptowany'), ('time_entry.rejected', 'Wpis czasu odrzucony'), ('system', 'Systemowe')], max_length=50),
        ),
    ]
