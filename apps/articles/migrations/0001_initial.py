# Initial articles schema

from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone
import uuid


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('media', '0001_initial'),
        ('taxonomy', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Article',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, help_text='Unique identifier (UUID)', primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now, editable=False, help_text='Timestamp when record was created', verbose_name='Created At')),
                ('updated_at', models.DateTimeField(auto_now=True, help_text='Timestamp when record was last updated', verbose_name='Updated At')),
                ('title', models.CharField(blank=True, max_length=500, verbose_name='Title')),
                ('slug', models.CharField(blank=True, help_text='URL-safe identifier: lowercase letters, numbers and hyphens', max_length=255, null=True, unique=True, verbose_name='Slug')),
                ('lang', models.CharField(default='en', max_length=10, verbose_name='Language')),
                ('excerpt', models.TextField(blank=True, verbose_name='Short Excerpt')),
                ('content', models.TextField(blank=True, verbose_name='Full Content (HTML/Text)')),
                ('content_v2', models.JSONField(blank=True, help_text='Rich text document', null=True, verbose_name='Content')),
                ('content_blocks', models.JSONField(blank=True, default=list, help_text='Introduction and editorial note blocks', verbose_name='Content Blocks')),
                ('recipe_blocks', models.JSONField(blank=True, default=list, verbose_name='Recipe Blocks')),
                ('image_blocks', models.JSONField(blank=True, default=list, verbose_name='Image Galleries')),
                ('date', models.DateField(blank=True, db_index=True, null=True, verbose_name='Publication Date')),
                ('modified', models.DateTimeField(blank=True, null=True, verbose_name='Last Modified')),
                ('link', models.URLField(blank=True, max_length=1000, verbose_name='Original Link')),
                ('featured_image', models.JSONField(blank=True, default=dict, verbose_name='Featured Image (legacy)')),
                ('ready_for_publication', models.BooleanField(db_index=True, default=False, help_text='Enforces the publication checklist on save', verbose_name='Ready for Publication')),
                ('author', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='articles', to='taxonomy.author', verbose_name='Author')),
                ('categories', models.ManyToManyField(blank=True, related_name='articles', to='taxonomy.category', verbose_name='Categories')),
                ('featured_media', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='featured_in_articles', to='media.media', verbose_name='Featured Media')),
                ('seo_image', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='seo_for_articles', to='media.media', verbose_name='SEO Image')),
                ('tags', models.ManyToManyField(blank=True, related_name='articles', to='taxonomy.tag', verbose_name='Tags')),
            ],
            options={
                'db_table': 'articles',
                'ordering': ['-date', '-created_at'],
            },
        ),
    ]
