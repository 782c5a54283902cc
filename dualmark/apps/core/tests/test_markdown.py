"""Tests for the markdown-it renderer and the HTML sanitizer."""

from django.test import SimpleTestCase, tag

from dualmark.apps.core.markdown import MarkdownItRenderer, sanitize_html


@tag("markdown")
class MarkdownItRendererTests(SimpleTestCase):
    def setUp(self):
        self.renderer = MarkdownItRenderer()

    def test_basic_markdown(self):
        html = self.renderer.render("**bold** and *italic*")
        self.assertIn("<strong>bold</strong>", html)
        self.assertIn("<em>italic</em>", html)

    def test_tables_enabled(self):
        html = self.renderer.render("| a | b |\n|---|---|\n| 1 | 2 |")
        self.assertIn("<table>", html)

    def test_footnotes_without_namespace(self):
        html = self.renderer.render("Text[^1]\n\n[^1]: Note")
        self.assertIn('id="fnref1"', html)
        self.assertIn('id="fn1"', html)

    def test_footnotes_scoped_by_namespace(self):
        html = self.renderer.render("Text[^1]\n\n[^1]: Note", namespace="42")
        self.assertIn('id="fnref-42-1"', html)
        self.assertIn('href="#fn-42-1"', html)
        self.assertNotIn('id="fn1"', html)

    def test_different_namespaces_never_share_anchors(self):
        first = self.renderer.render("A[^1]\n\n[^1]: x", namespace="1")
        second = self.renderer.render("B[^1]\n\n[^1]: y", namespace="2")
        self.assertIn('id="fn-1-1"', first)
        self.assertIn('id="fn-2-1"', second)
        self.assertNotIn('id="fn-1-1"', second)


@tag("markdown")
class SanitizeHtmlTests(SimpleTestCase):
    def test_empty(self):
        self.assertEqual(sanitize_html(""), "")

    def test_script_removed(self):
        self.assertNotIn("<script", sanitize_html("<p>ok</p><script>alert(1)</script>"))

    def test_comments_kept(self):
        html = '<!-- wp:paragraph --><p>x</p><!-- /wp:paragraph -->'
        self.assertIn("<!-- wp:paragraph -->", sanitize_html(html))

    def test_footnote_attributes_kept(self):
        html = '<sup class="footnote-ref"><a href="#fn-1-1" id="fnref-1-1">[1]</a></sup>'
        cleaned = sanitize_html(html)
        self.assertIn('id="fnref-1-1"', cleaned)
        self.assertIn('href="#fn-1-1"', cleaned)
