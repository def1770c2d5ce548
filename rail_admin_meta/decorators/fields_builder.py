"""
Field metadata builder.

Turns a Django model's concrete columns and relations into ``FieldMap``
instances. Both builders are pure functions of the model; memoization is the
job of ``ModelDecorator``.
"""

import logging
from typing import Optional

from django.db import models
from django.forms.utils import pretty_name
from django.utils.encoding import force_str
from django.utils.text import capfirst

from .schema import DjangoSchemaSource
from .types import FieldMap, FieldMetadata

logger = logging.getLogger(__name__)

BELONGS_TO = "belongs_to"
HAS_ONE = "has_one"
HAS_MANY = "has_many"
HAS_AND_BELONGS_TO_MANY = "has_and_belongs_to_many"


def _is_generic_foreign_key(field) -> bool:
    """
    Detect a django.contrib.contenttypes GenericForeignKey.

    Checked by shape so contenttypes need not be installed.
    """
    return (
        getattr(field, "many_to_one", False)
        and not getattr(field, "concrete", True)
        and hasattr(field, "ct_field")
        and hasattr(field, "fk_field")
    )


def _has_custom_through(relation) -> bool:
    through = getattr(relation, "through", None)
    if through is None or not hasattr(through, "_meta"):
        return False
    return not through._meta.auto_created


class FieldsBuilder:
    """Builds general and association field metadata for a model."""

    def __init__(
        self,
        model: type[models.Model],
        schema: Optional[DjangoSchemaSource] = None,
    ):
        self.model = model
        self._meta = model._meta
        self.schema = schema or DjangoSchemaSource(model)

    def general_fields(self, check_table: bool = True) -> FieldMap:
        """
        Metadata for every concrete column, keyed by column attribute name.

        Returns an empty map while the model's table does not exist. Callers
        that already know the table exists pass ``check_table=False``.
        """
        if check_table and not self.schema.table_exists():
            logger.debug(f"Table for {self._meta.label} does not exist yet")
            return FieldMap()

        entries = {}
        for field in self._meta.concrete_fields:
            name = field.attname
            entries[name] = FieldMetadata(
                name=name,
                type=self.schema.storage_type(field),
                label=self._column_label(field),
            )
        return FieldMap(entries)

    def association_fields(self) -> FieldMap:
        """Metadata for every visible forward and reverse relation."""
        entries = {}
        for field in self._meta.get_fields():
            if not field.is_relation:
                continue
            metadata = self._association_metadata(field)
            if metadata is not None:
                entries[metadata.name] = metadata
        return FieldMap(entries)

    def _column_label(self, field) -> str:
        if field.attname != field.name:
            return pretty_name(field.attname)
        return capfirst(force_str(field.verbose_name))

    def _association_metadata(self, field) -> Optional[FieldMetadata]:
        if field.auto_created and not field.concrete:
            return self._reverse_metadata(field)

        if _is_generic_foreign_key(field):
            return FieldMetadata(
                name=field.name,
                type=BELONGS_TO,
                label=pretty_name(field.name),
                is_association=True,
                foreign_key=field.fk_field,
                polymorphic_type=field.ct_field,
            )

        remote_field = getattr(field, "remote_field", None)
        has_scope = bool(getattr(remote_field, "limit_choices_to", None))
        label = capfirst(force_str(getattr(field, "verbose_name", field.name)))

        if field.many_to_many:
            is_through = _has_custom_through(remote_field)
            return FieldMetadata(
                name=field.name,
                type=HAS_MANY if is_through else HAS_AND_BELONGS_TO_MANY,
                label=label,
                is_association=True,
                is_through=is_through,
                has_scope=has_scope,
                related_class=field.related_model,
            )

        if field.one_to_many:
            # GenericRelation
            return FieldMetadata(
                name=field.name,
                type=HAS_MANY,
                label=label,
                is_association=True,
                has_scope=has_scope,
                related_class=field.related_model,
            )

        if field.many_to_one or field.one_to_one:
            return FieldMetadata(
                name=field.name,
                type=BELONGS_TO,
                label=label,
                is_association=True,
                has_scope=has_scope,
                foreign_key=field.attname,
                related_class=field.related_model,
            )

        logger.debug(f"Skipping unsupported relation {self._meta.label}.{field.name}")
        return None

    def _reverse_metadata(self, relation) -> FieldMetadata:
        related_meta = relation.related_model._meta
        name = relation.get_accessor_name()

        if relation.one_to_one:
            return FieldMetadata(
                name=name,
                type=HAS_ONE,
                label=capfirst(force_str(related_meta.verbose_name)),
                is_association=True,
                related_class=relation.related_model,
            )

        is_through = relation.many_to_many and _has_custom_through(relation)
        if relation.many_to_many and not is_through:
            kind = HAS_AND_BELONGS_TO_MANY
        else:
            kind = HAS_MANY
        return FieldMetadata(
            name=name,
            type=kind,
            label=capfirst(force_str(related_meta.verbose_name_plural)),
            is_association=True,
            is_through=is_through,
            related_class=relation.related_model,
        )


__all__ = [
    "BELONGS_TO",
    "HAS_ONE",
    "HAS_MANY",
    "HAS_AND_BELONGS_TO_MANY",
    "FieldsBuilder",
]
