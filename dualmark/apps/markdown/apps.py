from django.apps import AppConfig


class MarkdownConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "dualmark.apps.markdown"
    label = "markdown"
    verbose_name = "Markdown"

    def ready(self):
        from dualmark.apps.core.markdown import MarkdownItRenderer

        from .pipeline import MarkdownTransformer
        from .sync import MarkdownSync

        self.transformer = MarkdownTransformer(MarkdownItRenderer())
        self.sync = MarkdownSync(self.transformer)

        from . import signals

        del signals  # imported for side effects (signal registration)

        self._register_content_hooks()
        self._register_list_safe_previews()

    def _register_content_hooks(self):
        from dualmark.apps.content import filters

        from . import primer
        from .pipeline import codeblock_preserve

        hooks = [
            (filters.content_save_pre, codeblock_preserve, 1),
            (filters.comment_content_pre, self.sync.transform_comment, 9),
            (filters.edit_content, self.sync.edit_view, 10),
            (filters.edit_content_filtered, self.sync.edit_view_filtered, 10),
            (filters.parse_query, primer.make_filterable, 10),
            (filters.query_results, primer.swap_listing, 10),
        ]
        for point, func, priority in hooks:
            if func not in point:
                point.register(func, priority)

    @staticmethod
    def _register_list_safe_previews():
        from django.conf import settings

        from dualmark.apps.content.filters import content_save_pre

        from .pipeline import transform_pre, unescape_lists, untransformed_content
        from .sync import escape_lists_when_posting

        if not getattr(settings, "MARKDOWN_LIST_SAFE_PREVIEWS", False):
            return
        hooks = [
            (content_save_pre, escape_lists_when_posting, 10),
            (transform_pre, unescape_lists, 10),
            (untransformed_content, unescape_lists, 10),
        ]
        for point, func, priority in hooks:
            if func not in point:
                point.register(func, priority)
