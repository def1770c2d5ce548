"""
Data structures for field metadata.

``FieldMetadata`` describes one field of a model. ``FieldMap`` is the
read-only name -> metadata mapping shared by every view of a model;
``MutableFieldMap`` is the per-view copy obtained through ``FieldMap.clone``.
"""

from __future__ import annotations

import copy
import dataclasses
from collections.abc import Iterable, Iterator, Mapping, MutableMapping
from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class FieldMetadata:
    """Metadata about a general (column) field or an association field."""

    name: str = ""
    type: str = ""
    label: str = ""
    is_association: bool = False
    is_through: bool = False
    has_scope: bool = False
    foreign_key: Optional[str] = None
    polymorphic_type: Optional[str] = None
    related_class: Optional[type] = None

    @property
    def is_empty(self) -> bool:
        """True for the placeholder returned by a default-valued map."""
        return not self.name

    @property
    def related_class_name(self) -> Optional[str]:
        """``app_label.ModelName`` of the associated model, if any."""
        if self.related_class is None:
            return None
        meta = getattr(self.related_class, "_meta", None)
        label = getattr(meta, "label", None)
        return label or self.related_class.__name__

    def replace(self, **changes: Any) -> "FieldMetadata":
        """Return a copy with ``changes`` applied."""
        return dataclasses.replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        """Plain dict form; the associated model is stored under ``class``."""
        if self.is_empty:
            return {}
        data: dict[str, Any] = {
            "name": self.name,
            "type": self.type,
            "label": self.label,
        }
        if self.is_association:
            data.update(
                is_association=True,
                is_through=self.is_through,
                has_scope=self.has_scope,
            )
            if self.foreign_key:
                data["foreign_key"] = self.foreign_key
            if self.polymorphic_type:
                data["polymorphic_type"] = self.polymorphic_type
            data["class"] = self.related_class
        return data


EMPTY_FIELD = FieldMetadata()


class FieldMap(Mapping):
    """
    Read-only mapping of field name to ``FieldMetadata``.

    With ``empty_default`` set, looking up a missing name yields
    ``EMPTY_FIELD`` instead of raising ``KeyError``. Membership tests and
    iteration only ever see the real entries.
    """

    def __init__(
        self,
        entries: Optional[Mapping[str, FieldMetadata]] = None,
        *,
        empty_default: bool = False,
    ):
        self._entries: dict[str, FieldMetadata] = dict(entries or {})
        self._empty_default = empty_default

    @property
    def empty_default(self) -> bool:
        return self._empty_default

    def __getitem__(self, name: str) -> FieldMetadata:
        try:
            return self._entries[name]
        except KeyError:
            if self._empty_default:
                return EMPTY_FIELD
            raise

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self._entries)!r})"

    def names(self) -> list[str]:
        return list(self._entries)

    def without(self, names: Iterable[str]) -> "FieldMap":
        """Return a new map without the given names."""
        dropped = set(names)
        return type(self)(
            {k: v for k, v in self._entries.items() if k not in dropped},
            empty_default=self._empty_default,
        )

    def clone(self) -> "MutableFieldMap":
        """Deep copy into an independently mutable map."""
        return MutableFieldMap(
            copy.deepcopy(self._entries), empty_default=self._empty_default
        )


class MutableFieldMap(FieldMap, MutableMapping):
    """Mutable per-view copy of a ``FieldMap``."""

    def __setitem__(self, name: str, metadata: FieldMetadata) -> None:
        self._entries[name] = metadata

    def __delitem__(self, name: str) -> None:
        del self._entries[name]

    def freeze(self) -> FieldMap:
        return FieldMap(dict(self._entries), empty_default=self._empty_default)


__all__ = ["FieldMetadata", "EMPTY_FIELD", "FieldMap", "MutableFieldMap"]
