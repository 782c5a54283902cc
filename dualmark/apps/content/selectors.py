"""Read paths for content items: cached snapshots, listings, editor fields."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from . import cache
from .filters import edit_content, edit_content_filtered, parse_query, query_results
from .models import ContentItem


@dataclass(frozen=True)
class ItemSnapshot:
    """Immutable copy of a content item as served to readers."""

    id: int
    item_type: str
    title: str
    name: str
    parent_id: int | None
    rendered_content: str
    source_content: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_item(cls, item: ContentItem) -> ItemSnapshot:
        return cls(
            id=item.pk,
            item_type=item.item_type,
            title=item.title,
            name=item.name,
            parent_id=item.parent_id,
            rendered_content=item.rendered_content,
            source_content=item.source_content,
            created_at=item.created_at,
            updated_at=item.updated_at,
        )


def get_item(item_id: int) -> ItemSnapshot | None:
    """Return the item through the object cache, loading it on a miss."""
    snapshot = cache.cache_get(item_id)
    if snapshot is not None:
        return snapshot

    item = ContentItem.objects.filter(pk=item_id).first()
    if item is None:
        return None
    snapshot = ItemSnapshot.from_item(item)
    cache.cache_add(item_id, snapshot)
    return snapshot


def get_item_for_editing(item_id: int) -> ItemSnapshot | None:
    """Return the item with both content fields passed through the editor filters."""
    snapshot = get_item(item_id)
    if snapshot is None:
        return None
    return dataclasses.replace(
        snapshot,
        rendered_content=edit_content.apply(snapshot.rendered_content, item_id),
        source_content=edit_content_filtered.apply(snapshot.source_content, item_id),
    )


@dataclass
class ItemQuery:
    """A listing query over content items.

    With ``suppress_filters`` on (the default), results skip the
    ``query_results`` extension point. ``session`` is the remote session the
    query runs for, if any.
    """

    item_types: tuple[str, ...] = (ContentItem.ItemType.POST,)
    limit: int | None = 10
    suppress_filters: bool = True
    session: Any = None


def run_query(query: ItemQuery) -> list[ItemSnapshot]:
    """Run a listing query straight against the database (no object cache)."""
    query = parse_query.apply(query)

    items = ContentItem.objects.filter(item_type__in=query.item_types).order_by(
        "-created_at", "-id"
    )
    if query.limit is not None:
        items = items[: query.limit]
    snapshots = [ItemSnapshot.from_item(item) for item in items]

    if not query.suppress_filters:
        snapshots = query_results.apply(snapshots, query)
    return snapshots
