"""Content lifecycle signals and cache upkeep.

Custom signals (all sent synchronously):

- ``revision_restored(item, revision)``: after ``restore_revision`` has written
  the revision's fields back onto ``item``.
- ``remote_session_started(session)``: a remote procedure request arrived;
  ``session.raw_payload`` holds the unparsed body.
- ``remote_call(session, method)``: the remote method is about to be served.
- ``remote_session_finished(session)``: the response has been built.
"""

from django.db.models.signals import post_delete, post_save
from django.dispatch import Signal, receiver

from . import cache
from .models import ContentItem

revision_restored = Signal()
remote_session_started = Signal()
remote_call = Signal()
remote_session_finished = Signal()


@receiver(post_save, sender=ContentItem)
@receiver(post_delete, sender=ContentItem)
def evict_cached_item(sender, instance, **kwargs):
    """Drop the cached snapshot so the next read sees the stored row."""
    cache.cache_delete(instance.pk)
