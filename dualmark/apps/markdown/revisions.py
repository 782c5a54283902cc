"""Restoring a Markdown revision.

The host restore copies the revision's stored HTML into the item's rendered
field, which the write path would then treat as Markdown. For flagged
revisions the Markdown source is written back through the normal write path
instead, and the revision recorded by the restore is patched to carry the
resulting source.
"""

from __future__ import annotations

import logging

from dualmark.apps.content.models import ContentItem
from dualmark.apps.content.services import latest_revision, without_revision

from . import registry

logger = logging.getLogger(__name__)


def restore_markdown_revision(item: ContentItem, revision) -> bool:
    """Re-save ``item`` from a flagged revision's Markdown. Returns whether it acted."""
    if not registry.is_posting_enabled() or not registry.is_markdown(revision):
        return False

    item.rendered_content = revision.source_content
    with without_revision(item):
        item.save()
    fix_latest_revision(item)

    logger.info(
        "markdown_revision_restored",
        extra={"item_id": item.pk, "revision_id": revision.history_id},
    )
    return True


def fix_latest_revision(item: ContentItem) -> None:
    """Give the newest revision of ``item`` the item's current Markdown source."""
    revision = latest_revision(item)
    if revision is None:
        return
    type(revision).objects.filter(pk=revision.pk).update(source_content=item.source_content)
