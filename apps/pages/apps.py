"""App configuration for pages app."""

from django.apps import AppConfig


class PagesConfig(AppConfig):
    """Configuration for the pages app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.pages"
    verbose_name = "Pages"
