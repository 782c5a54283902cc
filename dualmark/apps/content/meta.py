"""Metadata store: one text value per (model, object id, key)."""

from __future__ import annotations

from django.contrib.contenttypes.models import ContentType
from django.db import models

from .models import ContentMeta


def get_meta(model: type[models.Model], object_id: int | None, key: str) -> str | None:
    """Return the stored value, or None when unset."""
    if object_id is None:
        return None
    content_type = ContentType.objects.get_for_model(model)
    return (
        ContentMeta.objects.filter(content_type=content_type, object_id=object_id, key=key)
        .values_list("value", flat=True)
        .first()
    )


def update_meta(model: type[models.Model], object_id: int, key: str, value: str) -> ContentMeta:
    content_type = ContentType.objects.get_for_model(model)
    meta, _ = ContentMeta.objects.update_or_create(
        content_type=content_type,
        object_id=object_id,
        key=key,
        defaults={"value": value},
    )
    return meta
