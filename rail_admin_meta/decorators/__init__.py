"""
Model decorators.

Derive the field metadata and page field lists of Django models.
"""

from .fields_builder import FieldsBuilder
from .model_decorator import ModelDecorator
from .schema import STORAGE_TYPE_MAP, DjangoSchemaSource
from .title_finder import TitleFieldFinder
from .types import EMPTY_FIELD, FieldMap, FieldMetadata, MutableFieldMap

__all__ = [
    "EMPTY_FIELD",
    "FieldMap",
    "FieldMetadata",
    "MutableFieldMap",
    "STORAGE_TYPE_MAP",
    "DjangoSchemaSource",
    "FieldsBuilder",
    "TitleFieldFinder",
    "ModelDecorator",
]
