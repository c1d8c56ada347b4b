import uuid
from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


CATEGORY_CHOICES = [
    ('Boissons', 'Drinks'),
    ('Nourriture', 'Food'),
    ('Desserts', 'Desserts'),
    ('Snacks', 'Snacks'),
    ('Décorations', 'Decorations'),
    ('Ustensiles', 'Utensils'),
    ('Autres', 'Other'),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Party',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=255)),
                ('date', models.DateTimeField()),
                ('location', models.CharField(max_length=255)),
                ('description', models.TextField(blank=True, default='')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('creator', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='created_parties', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'parties',
                'ordering': ['date'],
                'indexes': [
                    models.Index(fields=['date'], name='idx_parties_date'),
                    models.Index(fields=['creator'], name='idx_parties_creator_id'),
                ],
            },
        ),
        migrations.CreateModel(
            name='PartyParticipant',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('party', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='participations', to='parties.party')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='participations', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'party_participants',
                'ordering': ['created_at'],
                'constraints': [
                    models.UniqueConstraint(fields=('party', 'user'), name='unique_party_participant'),
                ],
            },
        ),
        migrations.CreateModel(
            name='PartyItem',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=255)),
                ('quantity', models.PositiveIntegerField()),
                ('category', models.CharField(blank=True, choices=CATEGORY_CHOICES, max_length=50, null=True)),
                ('description', models.CharField(blank=True, default='', max_length=500)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('party', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='items', to='parties.party')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='party_items', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'party_items',
                'ordering': ['created_at'],
                'indexes': [
                    models.Index(fields=['party'], name='idx_party_items_party_id'),
                    models.Index(fields=['user'], name='idx_party_items_user_id'),
                ],
                'constraints': [
                    models.CheckConstraint(condition=models.Q(('quantity__gt', 0)), name='positive_quantity'),
                    models.CheckConstraint(
                        condition=models.Q(('category__isnull', True), ('category__in', [value for value, _ in CATEGORY_CHOICES]), _connector='OR'),
                        name='valid_category',
                    ),
                ],
            },
        ),
    ]
