"""Tests for the XML-RPC endpoint."""

import xmlrpc.client

from constance.test import override_config
from django.test import TestCase, tag
from django.urls import reverse

from dualmark.apps.content import cache
from dualmark.apps.content.signals import remote_call, remote_session_finished
from dualmark.apps.core.test_utils import (
    CacheClearMixin,
    MarkdownEnabledMixin,
    create_item,
    create_page,
    xmlrpc_payload,
)
from dualmark.apps.remote import methods


class XmlRpcTestMixin:
    def call(self, method, *params):
        response = self.client.post(
            reverse("xmlrpc"), data=xmlrpc_payload(method, *params), content_type="text/xml"
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response["Content-Type"], "text/xml; charset=utf-8")
        (result,), _method = xmlrpc.client.loads(response.content)
        return result

    def assertFault(self, code, method, *params):
        with self.assertRaises(xmlrpc.client.Fault) as ctx:
            self.call(method, *params)
        self.assertEqual(ctx.exception.faultCode, code)


@tag("remote")
class MarkdownRemoteReadTests(XmlRpcTestMixin, MarkdownEnabledMixin, TestCase):
    def setUp(self):
        super().setUp()
        self.item = create_item("Some *text*", title="Markdown post")
        self.page = create_page("A *page*")

    def test_get_post_returns_markdown(self):
        result = self.call("wp.getPost", 1, "user", "pass", self.item.pk)

        self.assertEqual(result["post_id"], str(self.item.pk))
        self.assertEqual(result["post_title"], "Markdown post")
        self.assertEqual(result["post_content"], "Some *text*")

    def test_primed_snapshot_evicted_after_session(self):
        self.call("wp.getPost", 1, "user", "pass", self.item.pk)

        self.assertIsNone(cache.cache_get(self.item.pk))

    def test_metaweblog_get_post_returns_markdown(self):
        result = self.call("metaWeblog.getPost", self.item.pk, "user", "pass")

        self.assertEqual(result["postid"], str(self.item.pk))
        self.assertEqual(result["description"], "Some *text*")

    def test_get_page_returns_markdown(self):
        result = self.call("wp.getPage", 1, self.page.pk, "user", "pass")

        self.assertEqual(result["page_id"], str(self.page.pk))
        self.assertEqual(result["description"], "A *page*")

    def test_recent_posts_listing_swapped(self):
        with override_config(MARKDOWN_POSTS_ENABLED=False):
            plain = create_item("<p>Plain</p>", title="Plain post")
        other = create_item("Other **post**", title="Other post")

        results = self.call("metaWeblog.getRecentPosts", 1, "user", "pass", 10)

        by_id = {result["postid"]: result["description"] for result in results}
        self.assertEqual(len(results), 3)
        self.assertEqual(by_id[str(self.item.pk)], "Some *text*")
        self.assertEqual(by_id[str(other.pk)], "Other **post**")
        self.assertEqual(by_id[str(plain.pk)], "<p>Plain</p>")

    def test_get_posts_filter(self):
        results = self.call("wp.getPosts", 1, "user", "pass", {"post_type": "page", "number": 5})

        self.assertEqual([result["post_id"] for result in results], [str(self.page.pk)])
        self.assertEqual(results[0]["post_content"], "A *page*")

    def test_get_pages(self):
        results = self.call("wp.getPages", 1, "user", "pass", 10)
        self.assertEqual([result["page_id"] for result in results], [str(self.page.pk)])

    def test_html_served_when_posting_disabled(self):
        with override_config(MARKDOWN_POSTS_ENABLED=False):
            result = self.call("wp.getPost", 1, "user", "pass", self.item.pk)

        self.assertEqual(result["post_content"], "<p>Some <em>text</em></p>")


@tag("remote")
class RemoteSessionTests(XmlRpcTestMixin, CacheClearMixin, TestCase):
    def test_malformed_payload_is_a_parse_fault(self):
        response = self.client.post(reverse("xmlrpc"), data=b"<not-xml", content_type="text/xml")

        with self.assertRaises(xmlrpc.client.Fault) as ctx:
            xmlrpc.client.loads(response.content)
        self.assertEqual(ctx.exception.faultCode, -32700)

    def test_unknown_method(self):
        self.assertFault(-32601, "wp.deletePost", 1, "user", "pass", 1)

    def test_missing_item(self):
        self.assertFault(methods.INVALID_ITEM_FAULT, "wp.getPost", 1, "user", "pass", 999_999)
        self.assertFault(methods.INVALID_ITEM_FAULT, "metaWeblog.getPost", "abc", "user", "pass")

    def test_get_page_rejects_posts(self):
        post = create_item("<p>Post</p>")
        self.assertFault(methods.INVALID_ITEM_FAULT, "wp.getPage", 1, post.pk, "user", "pass")

    def test_get_not_allowed(self):
        self.assertEqual(self.client.get(reverse("xmlrpc")).status_code, 405)

    def test_session_signals_sent(self):
        item = create_item("<p>Post</p>")
        calls = []
        finished = []

        def on_call(sender, session, method, **kwargs):
            calls.append((method, session.params))

        def on_finished(sender, session, **kwargs):
            finished.append(session.method)

        remote_call.connect(on_call)
        remote_session_finished.connect(on_finished)
        self.addCleanup(remote_call.disconnect, on_call)
        self.addCleanup(remote_session_finished.disconnect, on_finished)

        self.call("wp.getPost", 1, "user", "pass", item.pk)

        self.assertEqual(calls, [("wp.getPost", (1, "user", "pass", item.pk))])
        self.assertEqual(finished, ["wp.getPost"])

    def test_session_finished_sent_for_faults(self):
        finished = []

        def on_finished(sender, session, **kwargs):
            finished.append(session.method)

        remote_session_finished.connect(on_finished)
        self.addCleanup(remote_session_finished.disconnect, on_finished)

        self.assertFault(-32601, "nope")

        self.assertEqual(finished, ["nope"])
