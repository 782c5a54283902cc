"""Content storage models."""

from __future__ import annotations

from django.contrib.contenttypes.fields import GenericForeignKey
from django.contrib.contenttypes.models import ContentType
from django.db import models
from simple_history.models import HistoricalRecords

from dualmark.apps.core.models import TimeStampedMixin

from .filters import content_save_pre


class ContentItemQuerySet(models.QuerySet):
    """Custom queryset for ContentItem."""

    def autosaves_of(self, item: ContentItem):
        return self.filter(item_type=ContentItem.ItemType.AUTOSAVE, parent=item)


class ContentItem(TimeStampedMixin):
    """An article, page or other addressable unit of authored content.

    ``rendered_content`` is what gets displayed. ``source_content`` holds the
    text the author edits when that differs from the rendered form. Every
    save records a revision in ``history``.
    """

    class ItemType(models.TextChoices):
        POST = "post", "Post"
        PAGE = "page", "Page"
        ATTACHMENT = "attachment", "Attachment"
        AUTOSAVE = "autosave", "Autosave"

    item_type = models.CharField(
        max_length=20, choices=ItemType.choices, default=ItemType.POST, db_index=True
    )
    title = models.CharField(max_length=200, blank=True)
    name = models.CharField(
        max_length=200,
        blank=True,
        help_text='URL name; autosaves are named "<parent id>-autosave-v1"',
    )
    parent = models.ForeignKey(
        "self",
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="children",
    )
    rendered_content = models.TextField(blank=True)
    source_content = models.TextField(blank=True)

    objects = ContentItemQuerySet.as_manager()
    history = HistoricalRecords()

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["updated_at"], name="contentitem_updated_idx"),
        ]

    def __str__(self) -> str:
        return self.title or f"{self.get_item_type_display()} #{self.pk}"

    def save(self, *args, **kwargs):
        """Run the save-time content filters, then write the row."""
        self.rendered_content = content_save_pre.apply(self.rendered_content)
        super().save(*args, **kwargs)


class Comment(TimeStampedMixin):
    """A reader comment on a content item."""

    item = models.ForeignKey(ContentItem, on_delete=models.CASCADE, related_name="comments")
    author_name = models.CharField(max_length=200, blank=True)
    content = models.TextField()

    class Meta:
        ordering = ["created_at", "id"]

    def __str__(self) -> str:
        return f"Comment by {self.author_name or 'anonymous'} on {self.item}"


class ContentMeta(models.Model):
    """Key/value metadata attached to a content item or one of its revisions."""

    content_type = models.ForeignKey(ContentType, on_delete=models.CASCADE)
    object_id = models.PositiveBigIntegerField()
    target = GenericForeignKey("content_type", "object_id")
    key = models.CharField(max_length=255)
    value = models.TextField(blank=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["content_type", "object_id", "key"],
                name="contentmeta_unique_target_key",
            ),
        ]
        verbose_name_plural = "content meta"

    def __str__(self) -> str:
        return f"{self.key}={self.value!r} on {self.content_type.model} #{self.object_id}"
