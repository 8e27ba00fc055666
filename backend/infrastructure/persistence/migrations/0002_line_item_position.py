from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ('persistence', '0001_initial'),
    ]

    operations = [
        migrations.AddField(
            model_name='serviceorderitemmodel',
            name='position',
            field=models.PositiveIntegerField(default=0, verbose_name='Position'),
        ),
        migrations.AddField(
            model_name='partorderitemmodel',
            name='position',
            field=models.PositiveIntegerField(default=0, verbose_name='Position'),
        ),
        migrations.AlterModelOptions(
            name='serviceorderitemmodel',
            options={
                'ordering': ['position', 'created_at'],
                'verbose_name': 'Service order item',
                'verbose_name_plural': 'Service order items',
            },
        ),
        migrations.AlterModelOptions(
            name='partorderitemmodel',
            options={
                'ordering': ['position', 'created_at'],
                'verbose_name': 'Part order item',
                'verbose_name_plural': 'Part order items',
            },
        ),
    ]
