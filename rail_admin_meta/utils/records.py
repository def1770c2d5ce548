"""
Uniform read access to records.

A record handed to a model decorator may be a model instance, a form, or a
plain mapping (e.g. a ``values()`` row). ``read_attribute`` reads a named
value from any of them and yields ``None`` when it is absent.
"""

from collections.abc import Mapping
from typing import Any, Optional


def read_attribute(record: Any, name: Optional[str], default: Any = None) -> Any:
    """
    Read ``name`` from ``record``.

    Args:
        record: Model instance, form, mapping or any object.
        name: Attribute or key to read; ``None`` reads nothing.
        default: Returned when the value is absent.

    Returns:
        The value, or ``default`` when the record lacks it.
    """
    if record is None or not name:
        return default
    if isinstance(record, Mapping):
        return record.get(name, default)
    return getattr(record, name, default)


__all__ = ["read_attribute"]
