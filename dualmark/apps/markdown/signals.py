"""Signal receivers wiring the Markdown engine into content lifecycles."""

import logging

from django.db.models.signals import post_save, pre_save
from django.dispatch import receiver
from simple_history.signals import (
    post_create_historical_record,
    pre_create_historical_record,
)

from dualmark.apps.content.models import ContentItem
from dualmark.apps.content.services import HistoricalContentItem
from dualmark.apps.content.signals import (
    remote_call,
    remote_session_finished,
    remote_session_started,
    revision_restored,
)

from . import registry
from .primer import CachePrimer
from .revisions import restore_markdown_revision
from .services import get_sync

logger = logging.getLogger(__name__)


@receiver(pre_save, sender=ContentItem)
def convert_item_content(sender, instance, raw=False, **kwargs):
    """Store the Markdown as source and its HTML as rendered content."""
    if raw:
        return
    get_sync().prepare_write(instance)


@receiver(post_save, sender=ContentItem)
def flag_markdown_item(sender, instance, raw=False, **kwargs):
    if raw:
        return
    get_sync().commit_flags(instance)


@receiver(pre_create_historical_record, sender=HistoricalContentItem)
def queue_revision_flag(sender, instance, history_instance, **kwargs):
    get_sync().queue_revision(instance, history_instance)


@receiver(post_create_historical_record, sender=HistoricalContentItem)
def flag_markdown_revision(sender, instance, history_instance, **kwargs):
    get_sync().commit_revision_flag(history_instance)


@receiver(revision_restored, sender=ContentItem)
def restore_markdown_source(sender, item, revision, **kwargs):
    restore_markdown_revision(item, revision)


@receiver(remote_session_started)
def prime_early_read(sender, session, **kwargs):
    """Some remote methods load their item before the call is announced."""
    if registry.is_posting_enabled():
        CachePrimer.for_session(session).prime_from_payload(session.raw_payload)


@receiver(remote_call)
def prime_remote_call(sender, session, method, **kwargs):
    if registry.is_posting_enabled():
        CachePrimer.for_session(session).on_call(method, session.params)


@receiver(remote_session_finished)
def release_primed_items(sender, session, **kwargs):
    released = CachePrimer.for_session(session).release()
    if released:
        logger.debug("markdown_cache_released", extra={"count": released})
