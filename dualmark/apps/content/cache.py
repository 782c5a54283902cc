"""Object cache for content snapshots, keyed by (object id, bucket)."""

from __future__ import annotations

from typing import Any

from django.core.cache import cache, caches
from django.core.cache.backends.dummy import DummyCache

ITEMS_BUCKET = "items"


def cache_key(object_id: int, bucket: str = ITEMS_BUCKET) -> str:
    return f"{bucket}:{object_id}"


def cache_get(object_id: int, bucket: str = ITEMS_BUCKET) -> Any:
    return cache.get(cache_key(object_id, bucket))


def cache_add(object_id: int, value: Any, bucket: str = ITEMS_BUCKET) -> bool:
    """Store ``value`` unless the key is already present."""
    return cache.add(cache_key(object_id, bucket), value)


def cache_set(object_id: int, value: Any, bucket: str = ITEMS_BUCKET) -> None:
    cache.set(cache_key(object_id, bucket), value)


def cache_delete(object_id: int, bucket: str = ITEMS_BUCKET) -> bool:
    return bool(cache.delete(cache_key(object_id, bucket)))


def is_persistent() -> bool:
    """Whether cached values outlive the current request."""
    return not isinstance(caches["default"], DummyCache)
