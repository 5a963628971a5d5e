import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ('organization', '0001_initial'),
        ('locations', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Task',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('title', models.CharField(max_length=300)),
                ('description', models.TextField(blank=True, null=True)),
                ('status', models.CharField(choices=[('inbox', 'Inbox'), ('next_action', 'Next Action'), ('waiting_for', 'Waiting For'), ('scheduled', 'Scheduled'), ('completed', 'Completed')], default='inbox', max_length=20)),
                ('priority', models.CharField(choices=[('low', 'Low'), ('medium', 'Medium'), ('high', 'High'), ('urgent', 'Urgent')], default='medium', max_length=10)),
                ('due_date', models.BigIntegerField(blank=True, null=True)),
                ('scheduled_date', models.BigIntegerField(blank=True, null=True)),
                ('completion_date', models.BigIntegerField(blank=True, null=True)),
                ('estimated_time', models.PositiveIntegerField(blank=True, help_text='Estimated effort in minutes', null=True)),
                ('tags', models.JSONField(blank=True, default=list)),
                ('context', models.ForeignKey(blank=True, db_constraint=False, null=True, on_delete=django.db.models.deletion.DO_NOTHING, related_name='tasks', to='organization.context')),
                ('location', models.ForeignKey(blank=True, db_constraint=False, null=True, on_delete=django.db.models.deletion.DO_NOTHING, related_name='tasks', to='locations.location')),
                ('project', models.ForeignKey(blank=True, db_constraint=False, null=True, on_delete=django.db.models.deletion.DO_NOTHING, related_name='tasks', to='organization.project')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='+', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'tasks',
                'ordering': ['-created_at', '-id'],
                'abstract': False,
                'indexes': [
                    models.Index(fields=['user', 'status'], name='idx_task_user_status'),
                    models.Index(fields=['user', 'project'], name='idx_task_user_project'),
                    models.Index(fields=['user', 'due_date'], name='idx_task_user_due_date'),
                ],
            },
        ),
    ]
