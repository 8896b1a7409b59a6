# Generated manually for the circle-split circles app

from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('accounts', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Circle',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=200)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('created_by', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='created_circles', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'circles',
                'ordering': ['name', 'id'],
                'indexes': [
                    models.Index(fields=['name'], name='circles_name_1d0c6e_idx'),
                    models.Index(fields=['created_by', 'created_at'], name='circles_created_8f2b3a_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='CircleMembership',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('status', models.CharField(choices=[('active', 'Active'), ('left', 'Left'), ('removed', 'Removed')], default='active', max_length=20)),
                ('joined_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('left_at', models.DateTimeField(blank=True, null=True)),
                ('circle', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='memberships', to='circles.circle')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='circle_memberships', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'circle_memberships',
                'ordering': ['joined_at'],
                'indexes': [
                    models.Index(fields=['circle', 'status'], name='circle_memb_circle__4a7e21_idx'),
                    models.Index(fields=['user', 'status', 'joined_at'], name='circle_memb_user_id_93c5d0_idx'),
                ],
                'unique_together': {('user', 'circle')},
            },
        ),
    ]
