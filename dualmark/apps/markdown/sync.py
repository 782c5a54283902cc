"""Keeps an item's Markdown source and rendered HTML in step.

On every write of a supported item while posting is enabled, the incoming
``rendered_content`` is treated as Markdown: it is copied to
``source_content`` and replaced by its HTML. Items written this way are
flagged once the write commits. On the way back out, editors of flagged
items are given the Markdown instead of the HTML.

The flag is committed in two phases because a new item has no id when its
fields are computed: ``prepare_write`` queues the item on a ``PendingFlags``
carried by the instance being saved, ``commit_flags`` drains it after the
row exists.
"""

from __future__ import annotations

import hashlib
import logging
import re
from dataclasses import dataclass

from dualmark.apps.content.filters import content_save_pre, rendered_html_pre
from dualmark.apps.content.models import ContentItem

from . import registry
from .pipeline import (
    MarkdownTransformer,
    TransformContext,
    codeblock_restore,
    escape_lists,
    untransformed_content,
)

logger = logging.getLogger(__name__)

PENDING_ATTR = "_markdown_pending"
INLINE_EDIT_ATTR = "_inline_edit"

_ESCAPED_QUOTE_LINE_RE = re.compile(r"^&gt; ", re.MULTILINE)


class PendingFlags:
    """Items that become flagged once the current write commits.

    Entries are keyed by id, or by exact stored content for items that have
    no id yet.
    """

    def __init__(self):
        self._ids: set[int] = set()
        self._contents: list[str] = []

    def __bool__(self) -> bool:
        return bool(self._ids or self._contents)

    def queue(self, item_id: int | None = None, content: str | None = None) -> None:
        if item_id is not None:
            self._ids.add(item_id)
        elif content is not None:
            self._contents.append(content)

    def claim(self, item_id: int | None, content: str | None = None) -> bool:
        """Remove and report whether ``item_id`` or ``content`` was queued."""
        claimed = False
        if content is not None and content in self._contents:
            self._contents.remove(content)
            claimed = True
        if item_id is not None and item_id in self._ids:
            self._ids.discard(item_id)
            claimed = True
        return claimed


@dataclass(frozen=True)
class EditableView:
    """An item's content fields laid out for editing.

    ``rendered_content`` holds the Markdown and ``source_content`` the stored
    HTML. Views are never saved.
    """

    item_id: int | None
    rendered_content: str
    source_content: str


def swap_for_editing(item) -> EditableView:
    """Build the editing view of a stored item, snapshot or revision."""
    markdown = codeblock_restore(item.source_content)
    markdown = _ESCAPED_QUOTE_LINE_RE.sub("> ", markdown)
    return EditableView(
        item_id=item.id,
        rendered_content=markdown,
        source_content=item.rendered_content,
    )


def is_autosave(item: ContentItem) -> bool:
    return bool(item.parent_id) and item.name.startswith(f"{item.parent_id}-autosave")


def comment_namespace(content: str) -> str:
    return "c-" + hashlib.md5(content.encode()).hexdigest()[:8]  # noqa: S324 - not security


def escape_lists_when_posting(text: str) -> str:
    """Escape list markers in content that will be read as Markdown."""
    if not registry.is_posting_enabled():
        return text
    return escape_lists(text)


class MarkdownSync:
    """Decides what gets written where for content items and comments."""

    def __init__(self, transformer: MarkdownTransformer):
        self.transformer = transformer

    # -- writes ------------------------------------------------------------

    def prepare_write(self, item: ContentItem) -> None:
        """Rewrite the content fields of ``item`` just before its row is saved."""
        item.__dict__[PENDING_ATTR] = PendingFlags()

        if not registry.is_posting_enabled() or not registry.supports_type(item.item_type):
            self._prepare_unsupported_write(item)
            return

        if is_autosave(item):
            self._convert(item, namespace=item.parent_id)
        elif not getattr(item, INLINE_EDIT_ATTR, False):
            self._convert(item, namespace=item.pk)

        pending = item.__dict__[PENDING_ATTR]
        if item.pk is not None:
            pending.queue(item_id=item.pk)
        else:
            pending.queue(content=item.rendered_content)

    def _convert(self, item: ContentItem, namespace) -> None:
        item.source_content = untransformed_content.apply(item.rendered_content)
        html = self.transformer.transform(item.rendered_content, TransformContext(id=namespace))
        # The save-time filters already ran on the Markdown; run them on the HTML too
        item.rendered_content = rendered_html_pre.apply(content_save_pre.apply(html))

    def _prepare_unsupported_write(self, item: ContentItem) -> None:
        if item.source_content and registry.is_markdown(item.pk):
            item.source_content = ""
            logger.info(
                "markdown_source_cleared",
                extra={"item_id": item.pk, "item_type": item.item_type},
            )
        # Code blocks were encoded on save before we knew Markdown was off
        item.rendered_content = codeblock_restore(item.rendered_content)

    def commit_flags(self, item: ContentItem) -> bool:
        """Flag ``item`` if its just-committed write queued it."""
        pending = item.__dict__.pop(PENDING_ATTR, None)
        if not pending or not pending.claim(item.pk, item.rendered_content):
            return False
        return registry.set_markdown(item.pk)

    def queue_revision(self, item: ContentItem, revision) -> None:
        """Queue a revision row for flagging when its item is (or is becoming) Markdown."""
        if not registry.is_posting_enabled() or not registry.supports_type(
            registry.REVISION_TYPE
        ):
            return
        item_pending = getattr(item, PENDING_ATTR, None)
        if registry.is_markdown(item.pk) or item_pending:
            pending = PendingFlags()
            pending.queue(content=revision.rendered_content)
            revision.__dict__[PENDING_ATTR] = pending

    def commit_revision_flag(self, revision) -> bool:
        pending = revision.__dict__.pop(PENDING_ATTR, None)
        if not pending or not pending.claim(revision.pk, revision.rendered_content):
            return False
        return registry.set_markdown(revision)

    def transform_comment(self, content: str) -> str:
        """Render a comment body when Markdown comments are on."""
        if not registry.is_commenting_enabled():
            return content
        return self.transformer.transform(content, TransformContext(id=comment_namespace(content)))

    # -- reads -------------------------------------------------------------

    def edit_view(self, content: str, item_id: int) -> str:
        """Rendered field for the editor: the Markdown, for flagged items."""
        if registry.is_posting_enabled() and registry.is_markdown(item_id):
            item = ContentItem.objects.filter(pk=item_id).first()
            if item is not None and item.source_content:
                return swap_for_editing(item).rendered_content
        return content

    def edit_view_filtered(self, content: str, item_id: int) -> str:
        """Source field for the editor; blank once posting is switched off."""
        if not registry.is_posting_enabled() and registry.is_markdown(item_id):
            item = ContentItem.objects.filter(pk=item_id).first()
            if item is not None and item.source_content:
                return ""
        return content

    # -- previews ----------------------------------------------------------

    def preview_post(self, text: str) -> str:
        if registry.is_posting_enabled():
            text = self.transformer.transform(text)
        return text

    def preview_comment(self, text: str) -> str:
        if registry.is_commenting_enabled():
            text = self.transformer.transform(text)
        return text
