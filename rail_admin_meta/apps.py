"""
Django app configuration for the rail-admin-meta library.

This module configures:
- Signal handlers that keep shared model decorators in sync with migrations
- Settings cache invalidation when RAIL_ADMIN_META changes
"""

import logging

from django.apps import AppConfig as BaseAppConfig

logger = logging.getLogger(__name__)


class AppConfig(BaseAppConfig):
    """Django app configuration for rail-admin-meta."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "rail_admin_meta"
    verbose_name = "Rail Admin Meta"
    label = "rail_admin_meta"

    def ready(self):
        """Connect signal handlers after Django has loaded."""
        from .signals import connect_signals

        connect_signals()
        logger.debug("rail-admin-meta signal handlers connected")
