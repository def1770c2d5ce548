"""
Default configuration for the rail-admin-meta library.

Every key the library reads from ``settings.RAIL_ADMIN_META`` has its
fallback here. Projects override individual keys; missing keys resolve to
these values through ``rail_admin_meta.config_proxy``.
"""

from __future__ import annotations

from typing import Any

LIBRARY_VERSION = "0.1.0"
LIBRARY_NAME = "rail-admin-meta"

SETTINGS_NAME = "RAIL_ADMIN_META"


# --------------------------------------------------------------------------- #
# Field list rules
# --------------------------------------------------------------------------- #
LIBRARY_DEFAULTS: dict[str, Any] = {
    # Storage types too bulky or opaque for a compact index table.
    "index_excluded_types": [
        "binary",
        "citext",
        "hstore",
        "json",
        "jsonb",
        "tsvector",
        "xml",
        "blob",
        "mediumblob",
        "longblob",
        "text",
        "mediumtext",
        "longtext",
    ],
    # Attachment models rendered by dedicated widgets, not show-page rows.
    "show_excluded_classes": [
        "filer.File",
        "filer.Image",
    ],
    # Auto-managed timestamps never offered on forms.
    "form_excluded_fields": [
        "created_at",
        "updated_at",
    ],
    "title_field_names": ["name", "title", "label"],
    "title_field_types": ["string", "citext", "text"],
    # Extra ``{internal_type: storage_tag}`` pairs for custom model fields.
    "type_mappings": {},
    "clear_cache_on_migrate": True,
}


__all__ = [
    "LIBRARY_VERSION",
    "LIBRARY_NAME",
    "SETTINGS_NAME",
    "LIBRARY_DEFAULTS",
]
