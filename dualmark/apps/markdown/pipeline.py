"""Markdown to HTML transform pipeline.

``MarkdownTransformer.transform`` runs a fixed sequence of clean-up steps
around a pluggable renderer. Other apps customise it through three
extension points:

- ``transform_pre(text, context)``: before any clean-up.
- ``transform_post(html, context)``: after rendering.
- ``untransformed_content(text)``: the Markdown about to be stored as source.
"""

from __future__ import annotations

import html
import re
from dataclasses import dataclass

from dualmark.apps.core.hooks import ExtensionPoint
from dualmark.apps.core.markdown import Renderer

transform_pre = ExtensionPoint("transform_pre")
transform_post = ExtensionPoint("transform_post")
untransformed_content = ExtensionPoint("untransformed_content")

# Content saved by the block editor; it is already structured HTML
STRUCTURED_BLOCK_MARKER = "<!-- wp:"

# Fenced code: opening fence, optional info string, body, matching closing fence
_CODEBLOCK_RE = re.compile(r"^([`~]{3})([^`\n]+)?\n([^`~]+)(\1)", re.MULTILINE)
# Paragraph wrapping added by rich-text editors
_EDITOR_PARAGRAPH_RE = re.compile(r"<p>(.*?)</p>(\n|$)", re.MULTILINE | re.DOTALL)
_ESCAPED_BLOCKQUOTE_RE = re.compile(r"^&gt;", re.MULTILINE)
# Footnote ids/hrefs use ':' after fn/fnref, which the sanitizer rejects
_FOOTNOTE_ID_RE = re.compile(r'((id|href)="#?fn(ref)?):')
_LIST_MARKER_RE = re.compile(r"^(?:\*|&((?:amp;)*)#42;) ", re.MULTILINE)
_ESCAPED_LIST_MARKER_RE = re.compile(r"^&((?:amp;)*)#42; ", re.MULTILINE)
_SLASHED_CHAR_RE = re.compile(r"\\(.?)", re.DOTALL)
_SLASHABLE_CHAR_RE = re.compile(r"(['\"\\\x00])")


@dataclass(frozen=True)
class TransformContext:
    """Per-call transform options.

    id: namespace for footnote anchors; falsy means no namespace.
    unslash: input is backslash-escaped and output should be too.
    decode_code_blocks: fenced code was entity-encoded by ``codeblock_preserve``.
    """

    id: str | int | None = None
    unslash: bool = False
    decode_code_blocks: bool = True


def has_blocks(text: str) -> bool:
    return STRUCTURED_BLOCK_MARKER in (text or "")


def _preserve_match(match: re.Match) -> str:
    return f"{match[1]}{match[2] or ''}\n{html.escape(match[3])}{match[4]}"


def _restore_match(match: re.Match) -> str:
    return f"{match[1]}{match[2] or ''}\n{html.unescape(match[3])}{match[4]}"


def codeblock_preserve(text: str) -> str:
    """Entity-encode the body of each fenced code block.

    Runs first on every write so later save filters leave code alone. Text
    outside fences is returned untouched.
    """
    return _CODEBLOCK_RE.sub(_preserve_match, text)


def codeblock_restore(text: str) -> str:
    """Exact inverse of ``codeblock_preserve``."""
    return _CODEBLOCK_RE.sub(_restore_match, text)


def unp(text: str) -> str:
    """Strip ``<p>`` wrappers that end at a line break or end of text."""
    return _EDITOR_PARAGRAPH_RE.sub(r"\1\2", text)


def _escape_marker(match: re.Match) -> str:
    if match[0].startswith("*"):
        return "&#42; "
    return f"&amp;{match[1] or ''}#42; "


def _unescape_marker(match: re.Match) -> str:
    levels = match[1] or ""
    if not levels:
        return "* "
    return f"&{levels[len('amp;'):]}#42; "


def escape_lists(text: str) -> str:
    """Replace line-initial ``* `` with ``&#42; `` so editors leave it alone.

    Lines already starting with an escaped marker gain one more level of
    ``&amp;`` so ``unescape_lists`` can tell them apart.
    """
    return _LIST_MARKER_RE.sub(_escape_marker, text)


def unescape_lists(text: str, *args) -> str:
    """Inverse of ``escape_lists``. Extra hook arguments are ignored."""
    return _ESCAPED_LIST_MARKER_RE.sub(_unescape_marker, text)


def unslash(text: str) -> str:
    return _SLASHED_CHAR_RE.sub(r"\1", text)


def slash(text: str) -> str:
    return _SLASHABLE_CHAR_RE.sub(r"\\\1", text)


class MarkdownTransformer:
    """Turns author Markdown into storable HTML.

    The renderer is any object with ``render(text, namespace="")``.
    """

    def __init__(self, renderer: Renderer):
        self.renderer = renderer

    def transform(self, text: str, context: TransformContext | None = None) -> str:
        context = context or TransformContext()
        text = text or ""

        if has_blocks(text):
            return text
        if context.unslash:
            text = unslash(text)

        text = transform_pre.apply(text, context)
        text = text.replace("</p><p>", "</p>\n\n<p>").replace("</p>\n<p>", "</p>\n\n<p>")
        text = unp(text)
        text = _ESCAPED_BLOCKQUOTE_RE.sub(">", text)
        namespace = str(context.id) if context.id else ""
        if context.decode_code_blocks:
            text = codeblock_restore(text)

        text = self.renderer.render(text, namespace=namespace)

        text = _FOOTNOTE_ID_RE.sub(r"\1-", text)
        text = text.rstrip()
        text = transform_post.apply(text, context)

        if context.unslash:
            text = slash(text)
        return text
