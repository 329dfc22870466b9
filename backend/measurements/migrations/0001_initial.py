import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('tenant', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Unit',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(help_text="Full name of the unit, e.g., 'Kilogram'", max_length=50)),
                ('short_name', models.CharField(help_text="Symbol of the unit, e.g., 'kg'", max_length=10)),
                ('unit_group', models.CharField(choices=[('MASS', 'Mass (Weight)'), ('LENGTH', 'Length'), ('VOLUME', 'Volume'), ('AREA', 'Area'), ('COUNT', 'Count/Quantity'), ('TIME', 'Time'), ('OTHER', 'Other')], default='OTHER', max_length=10)),
                ('is_base_unit', models.BooleanField(default=False)),
                ('allow_decimal', models.BooleanField(default=False, help_text='Whether quantities in this unit may be fractional')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('business', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='units', to='tenant.business')),
            ],
            options={
                'verbose_name': 'Unit',
                'verbose_name_plural': 'Units',
                'db_table': 'units',
                'ordering': ['unit_group', 'name'],
                'indexes': [models.Index(fields=['business', 'unit_group'], name='units_busines_3d8f0b_idx')],
                'constraints': [
                    models.UniqueConstraint(fields=('business', 'name'), name='unique_unit_name_per_business'),
                    models.UniqueConstraint(fields=('business', 'short_name'), name='unique_unit_short_name_per_business'),
                ],
            },
        ),
        migrations.CreateModel(
            name='UnitConversion',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('factor', models.DecimalField(decimal_places=12, help_text='Multiply the from_unit quantity by this to get to_unit quantity', max_digits=24)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('business', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='unit_conversions', to='tenant.business')),
                ('from_unit', models.ForeignKey(help_text='The source unit', on_delete=django.db.models.deletion.CASCADE, related_name='conversions_from', to='measurements.unit')),
                ('to_unit', models.ForeignKey(help_text='The target unit', on_delete=django.db.models.deletion.CASCADE, related_name='conversions_to', to='measurements.unit')),
            ],
            options={
                'verbose_name': 'Unit Conversion',
                'verbose_name_plural': 'Unit Conversions',
                'db_table': 'unit_conversions',
                'indexes': [models.Index(fields=['business', 'from_unit'], name='unit_conver_busines_5e7a21_idx')],
                'constraints': [
                    models.UniqueConstraint(fields=('business', 'from_unit', 'to_unit'), name='unique_conversion_per_business'),
                ],
            },
        ),
    ]
