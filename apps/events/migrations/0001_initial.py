# Generated manually for the circle-split events app

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('circles', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Event',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=200)),
                ('total_amount', models.PositiveIntegerField(validators=[MinValueValidator(1)])),
                ('split_amount', models.PositiveIntegerField()),
                ('status', models.CharField(choices=[('selecting', 'Selecting participants'), ('confirmed', 'Confirmed'), ('completed', 'Completed')], default='confirmed', max_length=20)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('completed_at', models.DateTimeField(blank=True, null=True)),
                ('circle', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='events', to='circles.circle')),
                ('organizer', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='organized_events', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'events',
                'ordering': ['-created_at', '-id'],
                'indexes': [
                    models.Index(fields=['organizer', 'status'], name='events_organiz_5b1f0e_idx'),
                    models.Index(fields=['circle', 'created_at'], name='events_circle__7d2c44_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Participant',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('position', models.PositiveIntegerField(default=0)),
                ('reported', models.BooleanField(default=False)),
                ('reported_at', models.DateTimeField(blank=True, null=True)),
                ('approved', models.BooleanField(default=False)),
                ('approved_at', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('event', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='participants', to='events.event')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='participations', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'event_participants',
                'ordering': ['event', 'position'],
                'indexes': [
                    models.Index(fields=['user', 'reported'], name='event_parti_user_id_2e6a91_idx'),
                    models.Index(fields=['event', 'approved'], name='event_parti_event_i_c83f17_idx'),
                ],
                'unique_together': {('event', 'user')},
            },
        ),
    ]
