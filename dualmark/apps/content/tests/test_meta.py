"""Tests for the metadata store."""

from django.test import TestCase, tag

from dualmark.apps.content.meta import get_meta, update_meta
from dualmark.apps.content.models import ContentItem, ContentMeta
from dualmark.apps.content.services import HistoricalContentItem
from dualmark.apps.core.test_utils import CacheClearMixin, create_item


@tag("content")
class ContentMetaTests(CacheClearMixin, TestCase):
    def test_unset_key_is_none(self):
        item = create_item("<p>x</p>")
        self.assertIsNone(get_meta(ContentItem, item.pk, "colour"))
        self.assertIsNone(get_meta(ContentItem, None, "colour"))

    def test_update_overwrites(self):
        item = create_item("<p>x</p>")
        update_meta(ContentItem, item.pk, "colour", "red")
        update_meta(ContentItem, item.pk, "colour", "blue")

        self.assertEqual(get_meta(ContentItem, item.pk, "colour"), "blue")
        self.assertEqual(ContentMeta.objects.count(), 1)

    def test_items_and_revisions_do_not_share_values(self):
        item = create_item("<p>x</p>")
        revision = item.history.first()
        update_meta(HistoricalContentItem, revision.pk, "colour", "red")

        self.assertIsNone(get_meta(ContentItem, revision.pk, "colour"))
        self.assertEqual(get_meta(HistoricalContentItem, revision.pk, "colour"), "red")
