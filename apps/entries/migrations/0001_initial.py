# Generated manually for the entries app

import uuid
from decimal import Decimal
from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import migrations, models
import django.db.models.deletion


CATEGORY_CHOICES = [
    ('beer', 'Beer'),
    ('water', 'Water'),
    ('meat', 'Meat'),
    ('bread', 'Bread'),
    ('dairy', 'Dairy'),
    ('fruits_veg', 'Fruits & vegetables'),
    ('other', 'Other'),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='UserEntry',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('category', models.CharField(choices=CATEGORY_CHOICES, max_length=20)),
                ('product_name', models.CharField(max_length=200)),
                ('product_key', models.CharField(db_index=True, editable=False, max_length=200)),
                ('package_size', models.CharField(blank=True, max_length=100)),
                ('store', models.CharField(blank=True, max_length=200)),
                ('price', models.DecimalField(decimal_places=2, max_digits=10, validators=[MinValueValidator(Decimal('0.01'))])),
                ('date', models.DateField()),
                ('note', models.TextField(blank=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('global_entry_id', models.UUIDField(blank=True, null=True)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='entries', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'user_entries',
                'verbose_name_plural': 'user entries',
                'indexes': [
                    models.Index(fields=['user', 'date'], name='user_entries_user_date_idx'),
                    models.Index(fields=['user', 'category'], name='user_entries_user_cat_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='GlobalEntry',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('category', models.CharField(choices=CATEGORY_CHOICES, max_length=20)),
                ('product_name', models.CharField(max_length=200)),
                ('product_key', models.CharField(db_index=True, editable=False, max_length=200)),
                ('package_size', models.CharField(blank=True, max_length=100)),
                ('store', models.CharField(blank=True, max_length=200)),
                ('price', models.DecimalField(decimal_places=2, max_digits=10, validators=[MinValueValidator(Decimal('0.01'))])),
                ('date', models.DateField()),
                ('note', models.TextField(blank=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('user_entry_id', models.UUIDField()),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='global_entries', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'global_entries',
                'verbose_name_plural': 'global entries',
                'indexes': [
                    models.Index(fields=['date'], name='global_entries_date_idx'),
                    models.Index(fields=['category'], name='global_entries_cat_idx'),
                ],
            },
        ),
    ]
