"""Markdown rendering and HTML sanitizing collaborators.

``MarkdownItRenderer`` is the renderer handed to the transform pipeline;
``sanitize_html`` cleans generated HTML and comment bodies before they are stored.
"""

from __future__ import annotations

from typing import Any, Protocol

import nh3
from markdown_it import MarkdownIt
from mdit_py_plugins.footnote import footnote_plugin

# Allowed HTML tags for stored content
ALLOWED_TAGS = {
    "p",
    "br",
    "strong",
    "em",
    "s",
    "del",
    "sup",
    "sub",
    "ul",
    "ol",
    "li",
    "code",
    "pre",
    "blockquote",
    "a",
    "h1",
    "h2",
    "h3",
    "h4",
    "h5",
    "h6",
    "img",
    "hr",
    "table",
    "thead",
    "tbody",
    "tr",
    "th",
    "td",
    "section",
    "figure",
    "figcaption",
}

# Allowed attributes per tag. Footnote markup needs id/class on a, li, sup, ol.
ALLOWED_ATTRIBUTES = {
    "a": {"href", "title", "id", "class"},
    "img": {"src", "alt", "title"},
    "code": {"class"},
    "pre": {"class"},
    "sup": {"class", "id"},
    "li": {"id", "class"},
    "ol": {"class", "start"},
    "hr": {"class"},
    "section": {"class"},
    "th": {"style"},
    "td": {"style"},
}


class Renderer(Protocol):
    """Anything that turns Markdown into HTML.

    ``namespace`` scopes footnote anchors so footnotes from different items
    never share an id. An empty namespace means no scoping.
    """

    def render(self, text: str, namespace: str = "") -> str: ...


def _footnote_anchor_name(self, tokens, idx, options, env) -> str:
    """Footnote anchor suffix: ``1`` or ``-<namespace>-1``."""
    number = str(tokens[idx].meta["id"] + 1)
    namespace = env.get("namespace") or ""
    return f"-{namespace}-{number}" if namespace else number


def build_markdown_it() -> MarkdownIt:
    """CommonMark parser with tables, strikethrough, linkify and footnotes.

    - linkify: auto-link bare URLs during parsing (won't touch code or links)
    - typographer + smartquotes/replacements: smart quotes, dashes, ellipsis
    - footnotes: ``[^1]`` references with anchors scoped by render namespace
    """
    md = (
        MarkdownIt("commonmark", {"linkify": True, "typographer": True})
        .enable(["linkify", "replacements", "smartquotes", "table", "strikethrough"])
        .use(footnote_plugin)
    )
    md.add_render_rule("footnote_anchor_name", _footnote_anchor_name)
    return md


class MarkdownItRenderer:
    """Default ``Renderer`` backed by markdown-it-py."""

    def __init__(self, md: MarkdownIt | None = None):
        self._md = md or build_markdown_it()

    def render(self, text: str, namespace: str = "") -> str:
        env: dict[str, Any] = {"namespace": namespace} if namespace else {}
        return self._md.render(text, env)


def sanitize_html(html: str) -> str:
    """Strip disallowed tags and attributes from content about to be stored.

    HTML comments are kept: block-editor content marks its structure with
    them and must come through the save path intact.
    """
    if not html:
        return ""
    return nh3.clean(
        html,
        tags=ALLOWED_TAGS,
        attributes=ALLOWED_ATTRIBUTES,
        strip_comments=False,
    )
