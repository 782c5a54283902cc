"""Write paths for content items beyond a plain ``save()``."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from django.db import transaction

from .filters import comment_content_pre
from .models import Comment, ContentItem
from .signals import revision_restored

logger = logging.getLogger(__name__)

HistoricalContentItem = ContentItem.history.model


def autosave_name(item: ContentItem) -> str:
    return f"{item.pk}-autosave-v1"


@contextmanager
def without_revision(item: ContentItem) -> Iterator[ContentItem]:
    """Save ``item`` inside the block without recording a revision."""
    item.skip_history_when_saving = True  # type: ignore[attr-defined]
    try:
        yield item
    finally:
        del item.skip_history_when_saving  # type: ignore[attr-defined]


def quick_edit(item: ContentItem, **changes) -> ContentItem:
    """Save title/name style changes from a list-screen quick edit.

    Quick edits never carry content; the stored content fields are written
    back as they are.
    """
    for field_name, value in changes.items():
        setattr(item, field_name, value)
    item._inline_edit = True  # type: ignore[attr-defined]
    try:
        item.save()
    finally:
        del item._inline_edit  # type: ignore[attr-defined]
    return item


def save_autosave(item: ContentItem, rendered_content: str) -> ContentItem:
    """Create or update the preview autosave attached to ``item``."""
    autosave = ContentItem.objects.autosaves_of(item).first()
    if autosave is None:
        autosave = ContentItem(
            item_type=ContentItem.ItemType.AUTOSAVE,
            parent=item,
            name=autosave_name(item),
            title=item.title,
        )
    autosave.rendered_content = rendered_content
    autosave.save()
    return autosave


def latest_revision(item: ContentItem):
    """Most recently recorded revision of ``item``, or None."""
    return item.history.order_by("-history_id").first()


def restore_revision(item: ContentItem, revision) -> ContentItem:
    """Write a revision's fields back onto its item.

    ``revision`` is a historical record of ``item`` or its ``history_id``.
    The restore itself is an ordinary save and records a new revision;
    ``revision_restored`` is sent once it has been written.
    """
    if not isinstance(revision, HistoricalContentItem):
        revision = item.history.get(history_id=revision)
    if revision.id != item.pk:
        raise ValueError(f"Revision {revision.history_id} does not belong to item {item.pk}")

    with transaction.atomic():
        item.title = revision.title
        item.name = revision.name
        item.rendered_content = revision.rendered_content
        item.source_content = revision.source_content
        item.save()
        revision_restored.send(sender=ContentItem, item=item, revision=revision)

    logger.info(
        "content_revision_restored",
        extra={"item_id": item.pk, "revision_id": revision.history_id},
    )
    item.refresh_from_db()
    return item


def post_comment(item: ContentItem, content: str, author_name: str = "") -> Comment:
    """Store a new comment after running it through the comment filters."""
    return Comment.objects.create(
        item=item,
        author_name=author_name,
        content=comment_content_pre.apply(content),
    )
