"""Blogging-API methods served over XML-RPC.

Each method takes the ``RemoteSession`` and returns a marshallable value or
raises ``xmlrpc.client.Fault``. Methods call ``announce`` at the point the
call is made visible to the rest of the system: most do so before touching
storage, but ``metaWeblog.getPost`` and ``wp.getPage`` load their item first.
"""

from __future__ import annotations

import xmlrpc.client
from collections.abc import Callable
from typing import Any

from dualmark.apps.content.models import ContentItem
from dualmark.apps.content.selectors import ItemQuery, ItemSnapshot, get_item, run_query
from dualmark.apps.content.signals import remote_call

INVALID_ITEM_FAULT = 404
DEFAULT_LISTING_SIZE = 10

MethodHandler = Callable[[Any], Any]

_methods: dict[str, MethodHandler] = {}


def register(name: str):
    def decorator(func: MethodHandler) -> MethodHandler:
        _methods[name] = func
        return func

    return decorator


def get_handler(name: str) -> MethodHandler | None:
    return _methods.get(name)


def announce(session) -> None:
    remote_call.send(sender=type(session), session=session, method=session.method)


def _param(params, position: int, default=None):
    return params[position] if len(params) > position else default


def _load_item(params, position: int, item_type: str | None = None) -> ItemSnapshot:
    try:
        item_id = int(_param(params, position))
    except (TypeError, ValueError) as exc:
        raise xmlrpc.client.Fault(INVALID_ITEM_FAULT, "Invalid post ID.") from exc
    snapshot = get_item(item_id)
    if snapshot is None or (item_type is not None and snapshot.item_type != item_type):
        raise xmlrpc.client.Fault(INVALID_ITEM_FAULT, "Invalid post ID.")
    return snapshot


def _listing_size(value) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return DEFAULT_LISTING_SIZE
    return number if number > 0 else DEFAULT_LISTING_SIZE


def metaweblog_struct(snapshot: ItemSnapshot) -> dict[str, Any]:
    struct = {
        "postid": str(snapshot.id),
        "title": snapshot.title,
        "description": snapshot.rendered_content,
        "wp_slug": snapshot.name,
        "post_type": snapshot.item_type,
    }
    if snapshot.created_at is not None:
        struct["dateCreated"] = xmlrpc.client.DateTime(snapshot.created_at)
    return struct


def page_struct(snapshot: ItemSnapshot) -> dict[str, Any]:
    struct = metaweblog_struct(snapshot)
    struct["page_id"] = struct.pop("postid")
    struct["wp_page_parent_id"] = str(snapshot.parent_id or 0)
    return struct


def post_struct(snapshot: ItemSnapshot) -> dict[str, Any]:
    struct = {
        "post_id": str(snapshot.id),
        "post_title": snapshot.title,
        "post_content": snapshot.rendered_content,
        "post_name": snapshot.name,
        "post_type": snapshot.item_type,
        "post_parent": str(snapshot.parent_id or 0),
    }
    if snapshot.created_at is not None:
        struct["post_date"] = xmlrpc.client.DateTime(snapshot.created_at)
    return struct


@register("metaWeblog.getPost")
def metaweblog_get_post(session):
    """metaWeblog.getPost(post_id, username, password)"""
    snapshot = _load_item(session.params, 0)
    announce(session)
    return metaweblog_struct(snapshot)


@register("wp.getPage")
def wp_get_page(session):
    """wp.getPage(blog_id, page_id, username, password)"""
    snapshot = _load_item(session.params, 1, ContentItem.ItemType.PAGE)
    announce(session)
    return page_struct(snapshot)


@register("wp.getPost")
def wp_get_post(session):
    """wp.getPost(blog_id, username, password, post_id)"""
    announce(session)
    return post_struct(_load_item(session.params, 3))


@register("metaWeblog.getRecentPosts")
def metaweblog_get_recent_posts(session):
    """metaWeblog.getRecentPosts(blog_id, username, password, number)"""
    announce(session)
    query = ItemQuery(limit=_listing_size(_param(session.params, 3)), session=session)
    return [metaweblog_struct(snapshot) for snapshot in run_query(query)]


@register("wp.getPages")
def wp_get_pages(session):
    """wp.getPages(blog_id, username, password, number)"""
    announce(session)
    query = ItemQuery(
        item_types=(ContentItem.ItemType.PAGE,),
        limit=_listing_size(_param(session.params, 3)),
        session=session,
    )
    return [page_struct(snapshot) for snapshot in run_query(query)]


@register("wp.getPosts")
def wp_get_posts(session):
    """wp.getPosts(blog_id, username, password, filter)"""
    announce(session)
    post_filter = _param(session.params, 3) or {}
    if not isinstance(post_filter, dict):
        post_filter = {}
    item_type = post_filter.get("post_type", ContentItem.ItemType.POST)
    query = ItemQuery(
        item_types=(item_type,),
        limit=_listing_size(post_filter.get("number")),
        session=session,
    )
    return [post_struct(snapshot) for snapshot in run_query(query)]
