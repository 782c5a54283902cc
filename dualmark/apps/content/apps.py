from django.apps import AppConfig


class ContentConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "dualmark.apps.content"
    verbose_name = "Content"

    def ready(self):
        from . import signals

        del signals  # imported for side effects (signal registration)

        self._register_sanitizers()

    @staticmethod
    def _register_sanitizers():
        from dualmark.apps.core.markdown import sanitize_html

        from .filters import comment_content_pre, rendered_html_pre

        # Content written as given is stored as given; only generated HTML is cleaned
        for point in (rendered_html_pre, comment_content_pre):
            if sanitize_html not in point:
                point.register(sanitize_html)
