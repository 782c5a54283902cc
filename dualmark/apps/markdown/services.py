"""Public entry points of the Markdown engine for other apps and templates."""

from __future__ import annotations

from django.apps import apps

from .pipeline import MarkdownTransformer, TransformContext
from .registry import (  # noqa: F401 - re-exported
    is_commenting_enabled,
    is_markdown,
    is_posting_enabled,
    set_commenting_enabled,
    set_posting_enabled,
)
from .sync import MarkdownSync


def get_sync() -> MarkdownSync:
    return apps.get_app_config("markdown").sync


def get_transformer() -> MarkdownTransformer:
    return get_sync().transformer


def transform(text: str, context: TransformContext | None = None) -> str:
    """Convert Markdown to HTML, regardless of the scope toggles."""
    return get_transformer().transform(text, context)


def preview_post(text: str) -> str:
    """Render post text for preview; unchanged while Markdown posts are off."""
    return get_sync().preview_post(text)


def preview_comment(text: str) -> str:
    """Render comment text for preview; unchanged while Markdown comments are off."""
    return get_sync().preview_comment(text)
