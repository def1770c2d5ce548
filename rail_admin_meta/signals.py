"""Signal handlers for model decorator cache invalidation.

Shared decorators remember the field metadata they derived. After a
migration a table may exist that did not before, or gain columns, so the
registry is dropped whenever ``migrate`` finishes for an app.
"""

import logging
from typing import Any

from django.core.signals import setting_changed
from django.db.models.signals import post_migrate

from .config_proxy import clear_settings_cache, get_setting

logger = logging.getLogger(__name__)


def clear_decorators_after_migrate(sender: Any = None, **kwargs: Any) -> None:
    """Drop every shared ``ModelDecorator`` once a migration has run.

    Args:
        sender: The AppConfig that was migrated.
        **kwargs: Additional signal arguments.
    """
    if not get_setting("clear_cache_on_migrate", True):
        return

    from .decorators.model_decorator import ModelDecorator

    ModelDecorator.clear_cache()
    app_label = getattr(sender, "label", None)
    logger.info(f"Cleared model decorators after migrating {app_label or 'apps'}")


def connect_signals() -> None:
    """Connect the handlers; safe to call more than once."""
    post_migrate.connect(
        clear_decorators_after_migrate,
        dispatch_uid="rail_admin_meta.clear_decorators_after_migrate",
    )
    setting_changed.connect(
        clear_settings_cache,
        dispatch_uid="rail_admin_meta.clear_settings_cache",
    )


__all__ = ["clear_decorators_after_migrate", "connect_signals"]
