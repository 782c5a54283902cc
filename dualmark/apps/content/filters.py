"""Extension points the content app invokes.

- ``content_save_pre(text)``: rendered content about to be stored, as given.
- ``rendered_html_pre(html)``: HTML generated from an item's source, about to be stored.
- ``comment_content_pre(text)``: comment body about to be stored.
- ``edit_content(text, item_id)``: rendered field as shown in the editor.
- ``edit_content_filtered(text, item_id)``: source field as shown in the editor.
- ``parse_query(query)``: an ``ItemQuery`` before it runs.
- ``query_results(snapshots, query)``: snapshots returned by an unsuppressed query.
"""

from dualmark.apps.core.hooks import ExtensionPoint

content_save_pre = ExtensionPoint("content_save_pre")
rendered_html_pre = ExtensionPoint("rendered_html_pre")
comment_content_pre = ExtensionPoint("comment_content_pre")
edit_content = ExtensionPoint("edit_content")
edit_content_filtered = ExtensionPoint("edit_content_filtered")
parse_query = ExtensionPoint("parse_query")
query_results = ExtensionPoint("query_results")
