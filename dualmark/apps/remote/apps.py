from django.apps import AppConfig


class RemoteConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "dualmark.apps.remote"
    verbose_name = "Remote publishing"
