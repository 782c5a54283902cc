"""Serving Markdown to remote editing clients.

Remote clients read items straight from storage, so they would be handed
the HTML of a Markdown item. For the length of one remote session the
primer puts swapped snapshots (Markdown in the rendered field) into the
object cache ahead of the read, and evicts them again when the session
ends. Listing methods bypass the cache, so for those the primer swaps the
query results instead.
"""

from __future__ import annotations

import dataclasses
import logging
import xmlrpc.client
from xml.parsers.expat import ExpatError

from dualmark.apps.content import cache
from dualmark.apps.content.models import ContentItem
from dualmark.apps.content.selectors import ItemQuery, ItemSnapshot

from . import registry
from .sync import swap_for_editing

logger = logging.getLogger(__name__)

SESSION_STATE_KEY = "markdown.cache_primer"

# Methods that load the item before the call is announced, with the
# position of the item id in their parameters
EARLY_METHODS = {
    "metaWeblog.getPost": 0,
    "wp.getPage": 1,
}
# Methods primed when the call is announced
CALL_METHODS = {
    "wp.getPost": 3,
}
LISTING_METHODS = frozenset({"metaWeblog.getRecentPosts", "wp.getPosts", "wp.getPages"})


def _param_item_id(params, position: int) -> int | None:
    try:
        return int(params[position])
    except (IndexError, TypeError, ValueError):
        return None


class CachePrimer:
    """Per-session record of what has been primed."""

    def __init__(self):
        self.primed_ids: list[int] = []
        self.filter_listings = False

    @classmethod
    def for_session(cls, session) -> CachePrimer:
        primer = session.state.get(SESSION_STATE_KEY)
        if primer is None:
            primer = session.state[SESSION_STATE_KEY] = cls()
        return primer

    def prime(self, item_id: int | None) -> bool:
        """Cache the swapped snapshot of a Markdown item. Returns whether it did."""
        if item_id is None or not cache.is_persistent():
            return False
        if not registry.is_markdown(item_id):
            return False
        item = ContentItem.objects.filter(pk=item_id).first()
        if item is None or not item.source_content:
            return False

        cache.cache_delete(item_id)
        cache.cache_set(item_id, _swapped_snapshot(ItemSnapshot.from_item(item)))
        if item_id not in self.primed_ids:
            self.primed_ids.append(item_id)
        logger.debug("markdown_cache_primed", extra={"item_id": item_id})
        return True

    def prime_from_payload(self, raw_payload: bytes | str) -> bool:
        """Prime the item named by an early method, read from the raw request."""
        if isinstance(raw_payload, str):
            raw_payload = raw_payload.encode()
        try:
            params, method = xmlrpc.client.loads(raw_payload)
        except (ExpatError, xmlrpc.client.Error, ValueError, IndexError, TypeError) as exc:
            logger.debug("markdown_payload_unparsed", extra={"error": str(exc)})
            return False
        if method not in EARLY_METHODS:
            return False
        return self.prime(_param_item_id(params, EARLY_METHODS[method]))

    def on_call(self, method: str, params) -> None:
        if method in CALL_METHODS:
            self.prime(_param_item_id(params, CALL_METHODS[method]))
        elif method in LISTING_METHODS:
            self.filter_listings = True

    def release(self) -> int:
        """Evict everything primed so far. Returns how many ids were evicted."""
        released = len(self.primed_ids)
        for item_id in self.primed_ids:
            cache.cache_delete(item_id)
        self.primed_ids = []
        return released


def _swapped_snapshot(snapshot: ItemSnapshot) -> ItemSnapshot:
    view = swap_for_editing(snapshot)
    return dataclasses.replace(
        snapshot,
        rendered_content=view.rendered_content,
        source_content=view.source_content,
    )


def _primer_for_query(query: ItemQuery) -> CachePrimer | None:
    if query.session is None:
        return None
    primer = query.session.state.get(SESSION_STATE_KEY)
    if primer is None or not primer.filter_listings:
        return None
    return primer


def make_filterable(query: ItemQuery) -> ItemQuery:
    """Let listing queries of a remote session reach ``query_results``."""
    if _primer_for_query(query) is not None:
        query.suppress_filters = False
    return query


def swap_listing(snapshots: list[ItemSnapshot], query: ItemQuery) -> list[ItemSnapshot]:
    """Swap Markdown items in a remote session's listing."""
    if _primer_for_query(query) is None:
        return snapshots
    return [
        _swapped_snapshot(snapshot)
        if snapshot.source_content and registry.is_markdown(snapshot.id)
        else snapshot
        for snapshot in snapshots
    ]
