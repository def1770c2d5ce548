"""
ModelDecorator implementation.

A ``ModelDecorator`` wraps one Django model and derives, once and lazily,
the field metadata an auto-generated admin interface renders: the canonical
field map plus the field lists of the index, show and form pages.
"""

import logging
import threading
import weakref
from typing import Any, Optional

from django.db import models
from django.utils.encoding import force_str
from django.utils.functional import cached_property

from ..config_proxy import get_setting_set
from ..exceptions import SchemaUnavailableError
from ..utils.records import read_attribute
from .fields_builder import FieldsBuilder
from .schema import DjangoSchemaSource
from .title_finder import TitleFieldFinder
from .types import FieldMap, MutableFieldMap

logger = logging.getLogger(__name__)


class ModelDecorator:
    """
    Field metadata of a Django model for index, show and form pages.

    Every derived value is computed on first access and kept for the
    lifetime of the decorator. ``fields`` is frozen; ``index_fields``,
    ``show_fields`` and ``form_fields`` are independent copies of it that
    callers may customise per page.

    Example::

        decorator = ModelDecorator.for_model(Article)
        decorator.fields
        # FieldMap(['id', 'title', 'created_at', 'category'])
        decorator.form_field_names
        # ['title', 'category']
    """

    fields_builder_class = FieldsBuilder
    title_field_finder_class = TitleFieldFinder

    _registry: "weakref.WeakKeyDictionary[type[models.Model], dict[type, ModelDecorator]]" = (
        weakref.WeakKeyDictionary()
    )
    _registry_lock = threading.Lock()

    def __init__(self, model_class: type[models.Model]):
        self.model_class = model_class
        self._meta = model_class._meta
        self.schema = DjangoSchemaSource(model_class)
        self._fields: Optional[FieldMap] = None
        self._title_field_finder: Optional[TitleFieldFinder] = None

    @classmethod
    def for_model(cls, model_class: type[models.Model]) -> "ModelDecorator":
        """Return the shared decorator of ``model_class``, creating it once."""
        with cls._registry_lock:
            per_model = cls._registry.get(model_class)
            if per_model is None:
                per_model = {}
                cls._registry[model_class] = per_model
            decorator = per_model.get(cls)
            if decorator is None:
                decorator = cls(model_class)
                per_model[cls] = decorator
                logger.debug(f"Registered {cls.__name__} for {decorator.model_label}")
            return decorator

    @classmethod
    def clear_cache(cls, model_class: Optional[type[models.Model]] = None) -> None:
        """Forget shared decorators, for one model or for all of them."""
        with cls._registry_lock:
            if model_class is None:
                cls._registry.clear()
            else:
                cls._registry.pop(model_class, None)

    def __repr__(self) -> str:
        return f"<{type(self).__name__}: {self.model_label}>"

    @property
    def model_label(self) -> str:
        return self._meta.label

    @property
    def resources_name(self) -> str:
        return force_str(self._meta.verbose_name_plural)

    @property
    def fields(self) -> FieldMap:
        """
        Canonical metadata of the general and association fields.

        Foreign key and polymorphic type columns of associations are left
        out, the association entry represents them. Before the model's table
        exists the map is empty and yields an empty record for any name, so
        that database creation and migration commands can still run.

        Example::

            {
                # general field
                "id": FieldMetadata(name="id", type="integer", label="ID"),
                # association field
                "category": FieldMetadata(
                    name="category",
                    type="belongs_to",
                    label="Category",
                    is_association=True,
                    foreign_key="category_id",
                    related_class=Category,
                ),
            }
        """
        if self._fields is not None:
            return self._fields
        try:
            fields = self._build_fields()
        except SchemaUnavailableError as exc:
            logger.warning(f"Field metadata unavailable for {self.model_label}: {exc}")
            return FieldMap(empty_default=True)
        self._fields = fields
        return fields

    def _build_fields(self) -> FieldMap:
        if not self.schema.table_exists():
            logger.debug(f"{self.model_label} has no table yet, using empty fields")
            return FieldMap(empty_default=True)

        associations = self.association_fields()
        merged = dict(self.general_fields(check_table=False))
        merged.update(associations)
        fields = FieldMap(merged).without(
            self.foreign_keys_from_associations(associations)
        )
        logger.debug(f"Built {len(fields)} fields for {self.model_label}")
        return fields

    @cached_property
    def index_fields(self) -> MutableFieldMap:
        """A copy of ``fields`` for the index page."""
        return self.fields.clone()

    @cached_property
    def show_fields(self) -> MutableFieldMap:
        """A copy of ``fields`` for the show page."""
        return self.fields.clone()

    @cached_property
    def form_fields(self) -> MutableFieldMap:
        """A copy of ``fields`` for the new/edit form."""
        return self.fields.clone()

    @cached_property
    def index_field_names(self) -> list[str]:
        """Index page fields: primitive columns of compact storage types."""
        excluded_types = get_setting_set("index_excluded_types")
        return [
            name
            for name, metadata in self.index_fields.items()
            if not metadata.is_association and metadata.type not in excluded_types
        ]

    @cached_property
    def show_field_names(self) -> list[str]:
        """Show page fields: all but associations to attachment models."""
        excluded_classes = get_setting_set("show_excluded_classes")
        names = []
        for name, metadata in self.show_fields.items():
            related = metadata.related_class
            if related is not None and (
                metadata.related_class_name in excluded_classes
                or related.__name__ in excluded_classes
            ):
                continue
            names.append(name)
        return names

    @cached_property
    def form_field_names(self) -> list[str]:
        """
        Form fields: everything except primary keys (including parent links
        of multi-table inheritance), auto-managed timestamps and associations
        with a scope or a through model.
        """
        excluded_names = get_setting_set("form_excluded_fields")
        key_columns = self.primary_key_columns
        return [
            name
            for name, metadata in self.form_fields.items()
            if name not in key_columns
            and metadata.foreign_key not in key_columns
            and name not in excluded_names
            and not metadata.has_scope
            and not metadata.is_through
        ]

    @cached_property
    def primary_key(self) -> Optional[str]:
        return self.schema.primary_key()

    @cached_property
    def primary_key_columns(self) -> frozenset[str]:
        columns = set(self.schema.primary_key_columns())
        if self.primary_key is not None:
            columns.add(self.primary_key)
        return frozenset(columns)

    def form_errors(self, record: Any) -> Any:
        """Validation errors of ``record`` (e.g. a bound form), if it has any."""
        return read_attribute(record, "errors")

    def guess_title(self, record: Any) -> Any:
        """
        Value of the field that looks like the name of ``record``.

        Returns ``None`` when the model has no such field or the record does
        not carry a value for it.
        """
        return read_attribute(record, self.title_field_finder.find())

    @cached_property
    def fields_builder(self) -> FieldsBuilder:
        return self.fields_builder_class(self.model_class, schema=self.schema)

    @property
    def title_field_finder(self) -> TitleFieldFinder:
        if self._title_field_finder is not None:
            return self._title_field_finder
        try:
            general_fields = self.general_fields()
        except SchemaUnavailableError as exc:
            logger.warning(f"Title field unavailable for {self.model_label}: {exc}")
            return self.title_field_finder_class(FieldMap(), self.model_label)
        self._title_field_finder = self.title_field_finder_class(
            general_fields, self.model_label
        )
        return self._title_field_finder

    def general_fields(self, check_table: bool = True) -> FieldMap:
        return self.fields_builder.general_fields(check_table=check_table)

    def association_fields(self) -> FieldMap:
        return self.fields_builder.association_fields()

    def foreign_keys_from_associations(
        self, fields: Optional[FieldMap] = None
    ) -> list[str]:
        """Foreign key and polymorphic type columns claimed by associations."""
        if fields is None:
            fields = self.association_fields()
        keys = []
        for metadata in fields.values():
            if metadata.foreign_key:
                keys.append(metadata.foreign_key)
            if metadata.polymorphic_type:
                keys.append(metadata.polymorphic_type)
        return keys


__all__ = ["ModelDecorator"]
