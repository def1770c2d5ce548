"""
Schema source backed by Django's model ``_meta`` API.

Answers the questions the field builder and decorator ask about a model:
does its table exist, what is its primary key, and which storage type tag
describes a given model field.
"""

import logging
import re
from typing import Optional

from django.db import OperationalError, connections, models, router

from ..config_proxy import get_setting
from ..exceptions import SchemaUnavailableError

logger = logging.getLogger(__name__)


# Django internal type -> storage type tag.
STORAGE_TYPE_MAP: dict[str, str] = {
    "AutoField": "integer",
    "BigAutoField": "integer",
    "SmallAutoField": "integer",
    "IntegerField": "integer",
    "BigIntegerField": "integer",
    "SmallIntegerField": "integer",
    "PositiveIntegerField": "integer",
    "PositiveBigIntegerField": "integer",
    "PositiveSmallIntegerField": "integer",
    "CharField": "string",
    "SlugField": "string",
    "EmailField": "string",
    "URLField": "string",
    "FilePathField": "string",
    "FileField": "string",
    "ImageField": "string",
    "GenericIPAddressField": "inet",
    "IPAddressField": "inet",
    "TextField": "text",
    "BooleanField": "boolean",
    "NullBooleanField": "boolean",
    "DateField": "date",
    "DateTimeField": "datetime",
    "TimeField": "time",
    "DurationField": "interval",
    "DecimalField": "decimal",
    "FloatField": "float",
    "UUIDField": "uuid",
    "BinaryField": "binary",
    "JSONField": "json",
    # django.contrib.postgres
    "HStoreField": "hstore",
    "CICharField": "citext",
    "CIEmailField": "citext",
    "CITextField": "citext",
    "ArrayField": "array",
    "SearchVectorField": "tsvector",
}

_FIELD_SUFFIX = re.compile(r"Field$")


class DjangoSchemaSource:
    """Reads table existence, primary keys and storage types for a model."""

    def __init__(self, model: type[models.Model]):
        self.model = model
        self._meta = model._meta

    @property
    def database(self) -> str:
        return router.db_for_read(self.model) or "default"

    def table_exists(self) -> bool:
        """
        Check whether the model's table has been created.

        Raises:
            SchemaUnavailableError: the database cannot be reached.
        """
        alias = self.database
        try:
            with connections[alias].cursor() as cursor:
                tables = connections[alias].introspection.table_names(cursor)
        except OperationalError as exc:
            raise SchemaUnavailableError(
                f"Database '{alias}' is unreachable: {exc}",
                model_name=self._meta.label,
                database=alias,
            ) from exc
        return self._meta.db_table in tables

    def primary_key(self) -> Optional[str]:
        pk = self._meta.pk
        return pk.attname if pk is not None else None

    def primary_key_columns(self) -> list[str]:
        """
        Columns holding a primary key: the model's own and, under multi-table
        inheritance, those of its concrete parents.
        """
        return [
            field.attname for field in self._meta.concrete_fields if field.primary_key
        ]

    def storage_type(self, field: models.Field) -> str:
        """
        Return the storage type tag of a concrete field.

        Foreign key columns report the type of the column they point at.
        """
        if field.is_relation and getattr(field, "target_field", None) is not None:
            field = field.target_field
        internal_type = field.get_internal_type()
        custom = get_setting("type_mappings") or {}
        if internal_type in custom:
            return custom[internal_type]
        if internal_type in STORAGE_TYPE_MAP:
            return STORAGE_TYPE_MAP[internal_type]
        return _FIELD_SUFFIX.sub("", internal_type).lower() or internal_type.lower()


__all__ = ["STORAGE_TYPE_MAP", "DjangoSchemaSource"]
