"""Tests for the Markdown transform pipeline."""

from django.test import SimpleTestCase, tag

from dualmark.apps.core.markdown import MarkdownItRenderer
from dualmark.apps.markdown.pipeline import (
    MarkdownTransformer,
    TransformContext,
    codeblock_preserve,
    codeblock_restore,
    escape_lists,
    has_blocks,
    transform_post,
    transform_pre,
    unescape_lists,
    unp,
)


class RecordingRenderer:
    """Renderer stand-in that records what it was asked to render."""

    def __init__(self, output=None):
        self.calls = []
        self.output = output

    def render(self, text, namespace=""):
        self.calls.append((text, namespace))
        return self.output if self.output is not None else f"<p>{text}</p>\n"


class FailingRenderer:
    def render(self, text, namespace=""):
        raise RuntimeError("renderer broke")


@tag("markdown")
class TransformStepTests(SimpleTestCase):
    def setUp(self):
        self.renderer = RecordingRenderer()
        self.transformer = MarkdownTransformer(self.renderer)

    def rendered_input(self):
        return self.renderer.calls[-1][0]

    def test_structured_blocks_returned_unchanged(self):
        text = "<!-- wp:paragraph -->\n<p>*not markdown*</p>\n<!-- /wp:paragraph -->"

        self.assertEqual(self.transformer.transform(text), text)
        self.assertEqual(self.renderer.calls, [])

    def test_empty_text(self):
        self.assertEqual(self.transformer.transform(""), "<p></p>")
        self.assertEqual(self.transformer.transform(None), "<p></p>")

    def test_editor_paragraphs_joined_and_unwrapped(self):
        self.transformer.transform("<p>one</p><p>two</p>")
        self.assertEqual(self.rendered_input(), "one\n\ntwo")

    def test_single_newline_paragraphs_separated(self):
        self.transformer.transform("<p>one</p>\n<p>two</p>")
        self.assertEqual(self.rendered_input(), "one\n\ntwo")

    def test_escaped_blockquote_repaired(self):
        self.transformer.transform("&gt; quoted\nnot &gt; this")
        self.assertEqual(self.rendered_input(), "> quoted\nnot &gt; this")

    def test_namespace_from_context_id(self):
        self.transformer.transform("text", TransformContext(id=42))
        self.assertEqual(self.renderer.calls[-1][1], "42")

    def test_no_namespace_without_id(self):
        self.transformer.transform("text")
        self.transformer.transform("text", TransformContext(id=0))
        self.assertEqual([namespace for _text, namespace in self.renderer.calls], ["", ""])

    def test_code_blocks_decoded_before_rendering(self):
        self.transformer.transform("```\nif a &lt; b:\n```")
        self.assertEqual(self.rendered_input(), "```\nif a < b:\n```")

    def test_code_block_decoding_can_be_turned_off(self):
        self.transformer.transform(
            "```\nif a &lt; b:\n```", TransformContext(decode_code_blocks=False)
        )
        self.assertEqual(self.rendered_input(), "```\nif a &lt; b:\n```")

    def test_footnote_delimiter_rewritten(self):
        self.renderer.output = (
            '<sup id="fnref:1"><a href="#fn:1">1</a></sup>'
            '<li id="fn:1"><a href="#fnref:1">back</a></li>'
        )

        html = self.transformer.transform("text")

        self.assertNotIn("fn:", html)
        self.assertNotIn("fnref:", html)
        self.assertIn('id="fnref-1"', html)
        self.assertIn('href="#fn-1"', html)

    def test_trailing_whitespace_trimmed(self):
        self.renderer.output = "<p>x</p>\n\n  "
        self.assertEqual(self.transformer.transform("x"), "<p>x</p>")

    def test_pre_and_post_extension_points(self):
        def shout(text, context):
            return text.upper()

        def wrap(html, context):
            return f"<div>{html}</div>"

        with transform_pre.registered(shout), transform_post.registered(wrap):
            html = self.transformer.transform("hello")

        self.assertEqual(self.rendered_input(), "HELLO")
        self.assertEqual(html, "<div><p>HELLO</p></div>")

    def test_extension_points_receive_context(self):
        seen = []

        def record(text, context):
            seen.append(context)
            return text

        context = TransformContext(id=7)
        with transform_pre.registered(record):
            self.transformer.transform("x", context)

        self.assertEqual(seen, [context])

    def test_unslash_round_trip(self):
        html = self.transformer.transform("It\\'s", TransformContext(unslash=True))

        self.assertEqual(self.rendered_input(), "It's")
        self.assertEqual(html, "<p>It\\'s</p>")

    def test_renderer_errors_propagate(self):
        transformer = MarkdownTransformer(FailingRenderer())
        with self.assertRaises(RuntimeError):
            transformer.transform("x")


@tag("markdown")
class RealRendererTransformTests(SimpleTestCase):
    def setUp(self):
        self.transformer = MarkdownTransformer(MarkdownItRenderer())

    def test_footnotes_of_different_items_do_not_collide(self):
        text = "Claim[^1]\n\n[^1]: Source"

        first = self.transformer.transform(text, TransformContext(id=1))
        second = self.transformer.transform(text, TransformContext(id=2))

        self.assertIn('id="fn-1-1"', first)
        self.assertIn('id="fn-2-1"', second)
        self.assertNotIn('id="fn-1-1"', second)

    def test_code_keeps_its_characters(self):
        html = self.transformer.transform(codeblock_preserve("```\na < b && c\n```"))
        self.assertIn("<code>a &lt; b &amp;&amp; c\n</code>", html)


@tag("markdown")
class CodeBlockPreservationTests(SimpleTestCase):
    samples = [
        "",
        "no code here < & >",
        "```\n<b>bold</b> & \"quotes\" 'single'\n```",
        "```python\nif a < b:\n    print('&amp;')\n```\n\nafter",
        "~~~\nx > y\n~~~",
        "```\nunterminated <fence>",
        "before\n```\none\n```\nmiddle <i>\n```\ntwo &\n```",
        "```\n&lt;already escaped&gt;\n```",
    ]

    def test_restore_inverts_preserve(self):
        for text in self.samples:
            with self.subTest(text=text):
                self.assertEqual(codeblock_restore(codeblock_preserve(text)), text)

    def test_only_fence_bodies_encoded(self):
        text = "a < b\n```html\n<p>x</p>\n```\nc > d"
        self.assertEqual(
            codeblock_preserve(text),
            "a < b\n```html\n&lt;p&gt;x&lt;/p&gt;\n```\nc > d",
        )


@tag("markdown")
class ListEscapingTests(SimpleTestCase):
    def test_line_initial_markers_escaped(self):
        self.assertEqual(escape_lists("* one\n* two\nnot * this"), "&#42; one\n&#42; two\nnot * this")

    def test_already_escaped_markers_gain_a_level(self):
        self.assertEqual(escape_lists("&#42; x"), "&amp;#42; x")
        self.assertEqual(escape_lists("&amp;#42; x"), "&amp;amp;#42; x")

    def test_unescape_inverts_escape(self):
        samples = [
            "",
            "* a\n* b",
            "&#42; literal",
            "&amp;#42; deeper\n* mixed",
            "*emphasis* stays",
            "  * indented",
        ]
        for text in samples:
            with self.subTest(text=text):
                self.assertEqual(unescape_lists(escape_lists(text)), text)


@tag("markdown")
class HelperTests(SimpleTestCase):
    def test_has_blocks(self):
        self.assertTrue(has_blocks("<!-- wp:image -->"))
        self.assertFalse(has_blocks("<!-- comment -->"))
        self.assertFalse(has_blocks(None))

    def test_unp_leaves_inline_paragraph_endings(self):
        self.assertEqual(unp("<p>a</p>\n<p>b</p>"), "a\nb")
        self.assertEqual(unp("<p>a</p> trailing"), "<p>a</p> trailing")
