"""
rail-admin-meta: field metadata for auto-generated Django admin interfaces.

The entry point is :class:`rail_admin_meta.decorators.ModelDecorator`, which
derives the index, show and form field lists of a model.
"""

__version__ = "0.1.0"
