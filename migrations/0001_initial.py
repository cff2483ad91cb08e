"""
Initial migration for Scrapman models.
"""

from decimal import Decimal
import uuid

import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):
    """Create Scrapman models: reference data, ledgers, Inventory."""

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Company',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=200, verbose_name='Nume')),
                ('cui', models.CharField(blank=True, default='', help_text='Cod unic de inregistrare', max_length=20, verbose_name='CUI')),
                ('is_active', models.BooleanField(default=True, verbose_name='Activa')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Firma',
                'verbose_name_plural': 'Firme',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='Material',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=100, verbose_name='Denumire')),
                ('category', models.CharField(blank=True, choices=[('feros', 'Feros'), ('neferos', 'Neferos'), ('deee', 'DEEE'), ('altele', 'Altele')], max_length=20, null=True, verbose_name='Categorie')),
                ('unit', models.CharField(default='kg', max_length=10, verbose_name='Unitate')),
                ('is_active', models.BooleanField(default=True, verbose_name='Activ')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'verbose_name': 'Material',
                'verbose_name_plural': 'Materiale',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='Contract',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('contract_number', models.CharField(max_length=50, verbose_name='Numar contract')),
                ('status', models.CharField(default='active', max_length=20, verbose_name='Status')),
                ('start_date', models.DateField(blank=True, null=True, verbose_name='Data inceput')),
                ('end_date', models.DateField(blank=True, null=True, verbose_name='Data sfarsit')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('company', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='contracts', to='scrapman.company', verbose_name='Firma')),
            ],
            options={
                'verbose_name': 'Contract',
                'verbose_name_plural': 'Contracte',
                'ordering': ['contract_number'],
            },
        ),
        migrations.CreateModel(
            name='Acquisition',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('date', models.DateField(default=django.utils.timezone.localdate, verbose_name='Data')),
                ('location_type', models.CharField(choices=[('curte', 'Curte'), ('contract', 'Contract'), ('deee', 'DEEE')], default='curte', max_length=20, verbose_name='Locatie')),
                ('receipt_number', models.CharField(blank=True, default='', max_length=50, verbose_name='Numar bon')),
                ('total_amount', models.DecimalField(decimal_places=2, default=Decimal('0'), max_digits=14, verbose_name='Total')),
                ('notes', models.TextField(blank=True, default='', verbose_name='Observatii')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('company', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='acquisitions', to='scrapman.company', verbose_name='Firma')),
                ('contract', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='acquisitions', to='scrapman.contract', verbose_name='Contract')),
            ],
            options={
                'verbose_name': 'Achizitie',
                'verbose_name_plural': 'Achizitii',
                'ordering': ['-date', '-created_at'],
                'indexes': [models.Index(fields=['company', 'date'], name='scrapman_ac_company_5f1a2b_idx')],
            },
        ),
        migrations.CreateModel(
            name='AcquisitionItem',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('quantity', models.DecimalField(decimal_places=3, max_digits=12, verbose_name='Cantitate bruta')),
                ('impurities_percent', models.DecimalField(decimal_places=2, default=Decimal('0'), max_digits=5, verbose_name='Impuritati (%)')),
                ('final_quantity', models.DecimalField(decimal_places=3, help_text='Cantitatea intrata in stoc, dupa scaderea impuritatilor', max_digits=12, verbose_name='Cantitate finala')),
                ('price_per_kg', models.DecimalField(decimal_places=4, default=Decimal('0'), max_digits=12, verbose_name='Pret/kg')),
                ('acquisition', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='items', to='scrapman.acquisition', verbose_name='Achizitie')),
                ('material', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='+', to='scrapman.material', verbose_name='Material')),
            ],
            options={
                'verbose_name': 'Linie achizitie',
                'verbose_name_plural': 'Linii achizitie',
            },
        ),
        migrations.CreateModel(
            name='Sale',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('date', models.DateField(default=django.utils.timezone.localdate, verbose_name='Data')),
                ('attribution_type', models.CharField(blank=True, choices=[('curte', 'Curte'), ('contract', 'Contract')], max_length=20, null=True, verbose_name='Atribuire')),
                ('attribution_id', models.UUIDField(blank=True, null=True, verbose_name='ID atribuire')),
                ('status', models.CharField(default='pending', max_length=20, verbose_name='Status')),
                ('total_amount', models.DecimalField(decimal_places=2, default=Decimal('0'), max_digits=14, verbose_name='Total')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('company', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='sales', to='scrapman.company', verbose_name='Firma')),
            ],
            options={
                'verbose_name': 'Vanzare',
                'verbose_name_plural': 'Vanzari',
                'ordering': ['-date', '-created_at'],
                'indexes': [models.Index(fields=['company', 'date'], name='scrapman_sa_company_8c3d4e_idx')],
            },
        ),
        migrations.CreateModel(
            name='SaleItem',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('quantity', models.DecimalField(decimal_places=3, max_digits=12, verbose_name='Cantitate bruta')),
                ('impurities_percent', models.DecimalField(decimal_places=2, default=Decimal('0'), max_digits=5, verbose_name='Impuritati (%)')),
                ('final_quantity', models.DecimalField(decimal_places=3, max_digits=12, verbose_name='Cantitate finala')),
                ('price_per_kg_ron', models.DecimalField(decimal_places=4, default=Decimal('0'), max_digits=12, verbose_name='Pret/kg (RON)')),
                ('sale', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='items', to='scrapman.sale', verbose_name='Vanzare')),
                ('material', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='+', to='scrapman.material', verbose_name='Material')),
            ],
            options={
                'verbose_name': 'Linie vanzare',
                'verbose_name_plural': 'Linii vanzare',
            },
        ),
        migrations.CreateModel(
            name='Dismantling',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('date', models.DateField(default=django.utils.timezone.localdate, verbose_name='Data')),
                ('location_type', models.CharField(choices=[('curte', 'Curte'), ('contract', 'Contract'), ('deee', 'DEEE')], default='curte', max_length=20, verbose_name='Locatie')),
                ('source_quantity', models.DecimalField(decimal_places=3, max_digits=12, verbose_name='Cantitate sursa')),
                ('notes', models.TextField(blank=True, default='', verbose_name='Observatii')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('company', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='dismantlings', to='scrapman.company', verbose_name='Firma')),
                ('contract', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='dismantlings', to='scrapman.contract', verbose_name='Contract')),
                ('source_material', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='+', to='scrapman.material', verbose_name='Material sursa')),
            ],
            options={
                'verbose_name': 'Dezmembrare',
                'verbose_name_plural': 'Dezmembrari',
                'ordering': ['-date', '-created_at'],
            },
        ),
        migrations.CreateModel(
            name='DismantlingOutput',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('quantity', models.DecimalField(decimal_places=3, max_digits=12, verbose_name='Cantitate')),
                ('notes', models.TextField(blank=True, default='', verbose_name='Observatii')),
                ('dismantling', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='outputs', to='scrapman.dismantling', verbose_name='Dezmembrare')),
                ('material', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='+', to='scrapman.material', verbose_name='Material')),
            ],
            options={
                'verbose_name': 'Material rezultat',
                'verbose_name_plural': 'Materiale rezultate',
            },
        ),
        migrations.CreateModel(
            name='Inventory',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('location_type', models.CharField(choices=[('curte', 'Curte'), ('contract', 'Contract'), ('deee', 'DEEE')], default='curte', max_length=20, verbose_name='Locatie')),
                ('quantity', models.DecimalField(decimal_places=3, default=Decimal('0'), max_digits=14, verbose_name='Cantitate (kg)')),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('company', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='inventory', to='scrapman.company', verbose_name='Firma')),
                ('material', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='inventory', to='scrapman.material', verbose_name='Material')),
                ('contract', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='inventory', to='scrapman.contract', verbose_name='Contract')),
            ],
            options={
                'verbose_name': 'Stoc',
                'verbose_name_plural': 'Stocuri',
                'indexes': [models.Index(fields=['company', 'material'], name='scrapman_in_company_2b7e9f_idx')],
                'constraints': [
                    models.UniqueConstraint(condition=models.Q(('contract__isnull', False)), fields=('company', 'material', 'location_type', 'contract'), name='unique_inventory_contract_key'),
                    models.UniqueConstraint(condition=models.Q(('contract__isnull', True)), fields=('company', 'material', 'location_type'), name='unique_inventory_key'),
                ],
            },
        ),
    ]
