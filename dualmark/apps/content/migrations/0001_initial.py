import django.db.models.deletion
import simple_history.models
from django.conf import settings
from django.db import migrations, models

ITEM_TYPE_CHOICES = [
    ("post", "Post"),
    ("page", "Page"),
    ("attachment", "Attachment"),
    ("autosave", "Autosave"),
]


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("contenttypes", "0002_remove_content_type_name"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="ContentItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("item_type", models.CharField(choices=ITEM_TYPE_CHOICES, db_index=True, default="post", max_length=20)),
                ("title", models.CharField(blank=True, max_length=200)),
                (
                    "name",
                    models.CharField(
                        blank=True,
                        help_text='URL name; autosaves are named "<parent id>-autosave-v1"',
                        max_length=200,
                    ),
                ),
                ("rendered_content", models.TextField(blank=True)),
                ("source_content", models.TextField(blank=True)),
                (
                    "parent",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="children",
                        to="content.contentitem",
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at", "-id"],
                "indexes": [models.Index(fields=["updated_at"], name="contentitem_updated_idx")],
            },
        ),
        migrations.CreateModel(
            name="Comment",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("author_name", models.CharField(blank=True, max_length=200)),
                ("content", models.TextField()),
                (
                    "item",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="comments",
                        to="content.contentitem",
                    ),
                ),
            ],
            options={
                "ordering": ["created_at", "id"],
            },
        ),
        migrations.CreateModel(
            name="ContentMeta",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("object_id", models.PositiveBigIntegerField()),
                ("key", models.CharField(max_length=255)),
                ("value", models.TextField(blank=True)),
                (
                    "content_type",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        to="contenttypes.contenttype",
                    ),
                ),
            ],
            options={
                "verbose_name_plural": "content meta",
                "constraints": [
                    models.UniqueConstraint(
                        fields=("content_type", "object_id", "key"),
                        name="contentmeta_unique_target_key",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="HistoricalContentItem",
            fields=[
                ("id", models.BigIntegerField(auto_created=True, blank=True, db_index=True, verbose_name="ID")),
                ("created_at", models.DateTimeField(blank=True, editable=False)),
                ("updated_at", models.DateTimeField(blank=True, editable=False)),
                ("item_type", models.CharField(choices=ITEM_TYPE_CHOICES, db_index=True, default="post", max_length=20)),
                ("title", models.CharField(blank=True, max_length=200)),
                (
                    "name",
                    models.CharField(
                        blank=True,
                        help_text='URL name; autosaves are named "<parent id>-autosave-v1"',
                        max_length=200,
                    ),
                ),
                ("rendered_content", models.TextField(blank=True)),
                ("source_content", models.TextField(blank=True)),
                ("history_id", models.AutoField(primary_key=True, serialize=False)),
                ("history_date", models.DateTimeField(db_index=True)),
                ("history_change_reason", models.CharField(max_length=100, null=True)),
                (
                    "history_type",
                    models.CharField(
                        choices=[("+", "Created"), ("~", "Changed"), ("-", "Deleted")],
                        max_length=1,
                    ),
                ),
                (
                    "history_user",
                    models.ForeignKey(
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "parent",
                    models.ForeignKey(
                        blank=True,
                        db_constraint=False,
                        null=True,
                        on_delete=django.db.models.deletion.DO_NOTHING,
                        related_name="+",
                        to="content.contentitem",
                    ),
                ),
            ],
            options={
                "verbose_name": "historical content item",
                "verbose_name_plural": "historical content items",
                "ordering": ("-history_date", "-history_id"),
                "get_latest_by": ("history_date", "history_id"),
            },
            bases=(simple_history.models.HistoricalChanges, models.Model),
        ),
    ]
