"""Django app configuration for Scrapman."""

from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class ScrapmanConfig(AppConfig):
    """Configuration for Scrapman app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "scrapman"
    verbose_name = _("Gestiune Stocuri")
