import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='File',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('original_filename', models.CharField(help_text='Filename as uploaded by the user', max_length=255)),
                ('storage_key', models.CharField(help_text='Object key in storage: uploads/{user_id}/{ts}-{name}', max_length=1024, unique=True)),
                ('mime_type', models.CharField(help_text='Content type reported by the client', max_length=255)),
                ('size_bytes', models.BigIntegerField(help_text='File size in bytes')),
                ('uploaded_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('is_public', models.BooleanField(default=False, help_text='Anyone with the share link can download')),
                ('share_token', models.CharField(blank=True, default=None, help_text='Generated on first publish, kept when unpublished', max_length=64, null=True, unique=True)),
                ('owner', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='files', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'File',
                'verbose_name_plural': 'Files',
                'ordering': ['-uploaded_at'],
                'indexes': [models.Index(fields=['owner', '-uploaded_at'], name='files_owner_recent_idx')],
            },
        ),
        migrations.CreateModel(
            name='Collaborator',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('email', models.EmailField(max_length=254)),
                ('permission', models.CharField(choices=[('view', 'Can view'), ('edit', 'Can edit')], default='view', max_length=8)),
                ('added_at', models.DateTimeField(auto_now_add=True)),
                ('file', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='collaborators', to='files.file')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='collaborations', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Collaborator',
                'verbose_name_plural': 'Collaborators',
                'ordering': ['id'],
                'constraints': [models.UniqueConstraint(fields=('file', 'user'), name='collaborators_file_user_unique')],
            },
        ),
    ]
