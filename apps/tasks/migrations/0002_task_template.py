import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ('tasks', '0001_initial'),
        ('recurring', '0001_initial'),
    ]

    operations = [
        migrations.AddField(
            model_name='task',
            name='template',
            field=models.ForeignKey(blank=True, help_text='Template this task was generated from (lineage only)', null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='tasks', to='recurring.tasktemplate'),
        ),
    ]
