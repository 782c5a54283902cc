"""Where Markdown applies: scope toggles, per-type support, per-item flag.

Scope toggles are constance settings read on every call, so a change in the
admin is seen by the very next request. The per-item flag is ``ContentMeta``
keyed ``_is_markdown`` and works for both items and their revision rows.
"""

from __future__ import annotations

import logging

from constance import config
from django.db import DatabaseError, models, transaction

from dualmark.apps.content.meta import get_meta, update_meta
from dualmark.apps.content.models import ContentItem

logger = logging.getLogger(__name__)

IS_MARKDOWN_META = "_is_markdown"
POSTS_SETTING = "MARKDOWN_POSTS_ENABLED"
COMMENTS_SETTING = "MARKDOWN_COMMENTS_ENABLED"

REVISION_TYPE = "revision"

_supported_types: set[str] = {
    ContentItem.ItemType.POST,
    ContentItem.ItemType.PAGE,
    ContentItem.ItemType.AUTOSAVE,
    REVISION_TYPE,
}


def is_posting_enabled() -> bool:
    return bool(getattr(config, POSTS_SETTING, False))


def is_commenting_enabled() -> bool:
    return bool(getattr(config, COMMENTS_SETTING, False))


def set_posting_enabled(value) -> None:
    setattr(config, POSTS_SETTING, bool(value))


def set_commenting_enabled(value) -> None:
    setattr(config, COMMENTS_SETTING, bool(value))


def supports_type(item_type: str) -> bool:
    return item_type in _supported_types


def add_type_support(item_type: str) -> None:
    _supported_types.add(item_type)


def remove_type_support(item_type: str) -> None:
    _supported_types.discard(item_type)


def _flag_target(item: int | models.Model | None) -> tuple[type[models.Model], int | None]:
    """Resolve an item id or model instance to (model class, primary key).

    Bare ids refer to content items; revisions are passed as historical records.
    """
    if isinstance(item, models.Model):
        return type(item), item.pk
    return ContentItem, item


def is_markdown(item: int | models.Model | None) -> bool:
    """Whether ``item`` (id or instance) is flagged as Markdown."""
    model, pk = _flag_target(item)
    if pk is None:
        return False
    return get_meta(model, pk, IS_MARKDOWN_META) == "1"


def set_markdown(item: int | models.Model) -> bool:
    """Flag ``item`` as Markdown. Returns False if the flag could not be stored."""
    model, pk = _flag_target(item)
    if pk is None:
        return False
    try:
        with transaction.atomic():
            update_meta(model, pk, IS_MARKDOWN_META, "1")
    except DatabaseError:
        logger.warning(
            "markdown_flag_write_failed",
            extra={"model": model._meta.label, "object_id": pk},
            exc_info=True,
        )
        return False
    logger.debug("markdown_flag_set", extra={"model": model._meta.label, "object_id": pk})
    return True
