from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Booking',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('guest_name', models.CharField(max_length=255)),
                ('unit_id', models.CharField(max_length=64)),
                ('check_in_date', models.DateField()),
                ('check_out_date', models.DateField()),
                ('number_of_nights', models.PositiveIntegerField()),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'ordering': ['id'],
                'indexes': [
                    models.Index(fields=['unit_id', 'check_in_date', 'check_out_date'], name='booking_unit_dates_idx'),
                    models.Index(fields=['guest_name', 'unit_id'], name='booking_guest_unit_idx'),
                ],
                'constraints': [
                    models.CheckConstraint(condition=models.Q(('check_out_date__gt', models.F('check_in_date'))), name='booking_checkout_after_checkin'),
                    models.CheckConstraint(condition=models.Q(('number_of_nights__gte', 1)), name='booking_nights_positive'),
                ],
            },
        ),
        migrations.CreateModel(
            name='UnitLock',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('unit_id', models.CharField(max_length=64, unique=True)),
            ],
        ),
    ]
