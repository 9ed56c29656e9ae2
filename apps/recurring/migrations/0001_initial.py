import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ('tasks', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='TaskTemplate',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(max_length=255)),
                ('description', models.TextField(blank=True)),
                ('category', models.CharField(blank=True, max_length=100)),
                ('priority', models.CharField(choices=[('low', 'Low'), ('medium', 'Medium'), ('high', 'High'), ('critical', 'Critical')], default='medium', max_length=10)),
                ('recurrence_type', models.CharField(choices=[('none', 'None'), ('daily', 'Daily'), ('weekly', 'Weekly'), ('monthly', 'Monthly')], db_index=True, max_length=10)),
                ('day_of_week', models.PositiveSmallIntegerField(blank=True, help_text='Weekly only: 1=Monday ... 7=Sunday', null=True, validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(7)])),
                ('day_of_month', models.PositiveSmallIntegerField(blank=True, help_text='Monthly only: 1-31 (skipped in months without that day)', null=True, validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(31)])),
                ('days_to_complete', models.PositiveSmallIntegerField(default=1, help_text='Generated task is due this many calendar days after generation', validators=[django.core.validators.MinValueValidator(1)])),
                ('schedule_time', models.TimeField(blank=True, help_text='Preferred time of day (informational)', null=True)),
                ('cron_expression', models.CharField(blank=True, help_text='Advanced schedule (informational)', max_length=100)),
                ('is_active', models.BooleanField(db_index=True, default=True)),
                ('last_generated', models.DateTimeField(blank=True, help_text='When the last task was generated from this template', null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('user', models.ForeignKey(help_text='User who receives the generated tasks', on_delete=django.db.models.deletion.CASCADE, related_name='task_templates', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'task template',
                'verbose_name_plural': 'task templates',
                'ordering': ['id'],
                'indexes': [
                    models.Index(fields=['is_active', 'recurrence_type'], name='template_active_kind_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='GenerationRecord',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('generation_date', models.DateField(db_index=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('task', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to='tasks.task')),
                ('template', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='generations', to='recurring.tasktemplate')),
            ],
            options={
                'verbose_name': 'generation record',
                'verbose_name_plural': 'generation records',
                'ordering': ['-generation_date', 'template_id'],
                'constraints': [
                    models.UniqueConstraint(fields=('template', 'generation_date'), name='unique_template_generation_date'),
                ],
            },
        ),
    ]
