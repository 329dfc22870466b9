import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Business',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('business_name', models.CharField(help_text='Display name of the business', max_length=100)),
                ('start_date', models.DateTimeField(blank=True, null=True)),
                ('logo_url', models.CharField(blank=True, max_length=500)),
                ('business_contact', models.CharField(blank=True, max_length=50)),
                ('country', models.CharField(max_length=100)),
                ('city', models.CharField(max_length=100)),
                ('state', models.CharField(max_length=100)),
                ('zip_code', models.CharField(max_length=20)),
                ('landmark', models.CharField(max_length=255)),
                ('currency', models.CharField(default='USD', max_length=10)),
                ('timezone', models.CharField(default='Asia/Kolkata', max_length=64)),
                ('website', models.CharField(blank=True, max_length=255)),
                ('alternate_contact', models.CharField(blank=True, max_length=50)),
                ('tax1_name', models.CharField(blank=True, max_length=100)),
                ('tax1_number', models.CharField(blank=True, max_length=100)),
                ('tax2_name', models.CharField(blank=True, max_length=100)),
                ('tax2_number', models.CharField(blank=True, max_length=100)),
                ('financial_year_start', models.CharField(default='January', max_length=20)),
                ('stock_accounting_method', models.CharField(default='FIFO (First In First Out)', max_length=50)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Business',
                'verbose_name_plural': 'Businesses',
                'db_table': 'businesses',
                'ordering': ['business_name'],
            },
        ),
        migrations.CreateModel(
            name='BusinessLocation',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=255)),
                ('location_id', models.CharField(help_text='Human readable identifier, e.g. LOC-12-001', max_length=50, unique=True)),
                ('city', models.CharField(max_length=100)),
                ('state', models.CharField(blank=True, max_length=100)),
                ('zip_code', models.CharField(blank=True, max_length=20)),
                ('country', models.CharField(max_length=100)),
                ('landmark', models.CharField(blank=True, max_length=255)),
                ('is_active', models.BooleanField(default=True)),
                ('is_default', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('business', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='locations', to='tenant.business')),
            ],
            options={
                'db_table': 'business_locations',
                'ordering': ['-is_default', 'name'],
                'indexes': [models.Index(fields=['business', 'is_active'], name='business_lo_busines_7c1e2a_idx')],
            },
        ),
    ]
