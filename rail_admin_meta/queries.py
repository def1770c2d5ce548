"""GraphQL query types for admin field lists.

Exposes the field metadata and the index/show/form field lists derived by
``ModelDecorator`` so that a frontend can lay out generated admin pages.
"""

import logging
from typing import Optional

import graphene
from django.apps import apps
from graphql import GraphQLError

from .decorators.model_decorator import ModelDecorator
from .decorators.types import FieldMetadata

logger = logging.getLogger(__name__)


class FieldMetadataType(graphene.ObjectType):
    """Metadata of one general or association field."""

    name = graphene.String(required=True)
    type = graphene.String(required=True)
    label = graphene.String(required=True)
    is_association = graphene.Boolean(required=True)
    is_through = graphene.Boolean(required=True)
    has_scope = graphene.Boolean(required=True)
    foreign_key = graphene.String()
    polymorphic_type = graphene.String()
    related_model = graphene.String(description="app_label.ModelName")

    @staticmethod
    def from_metadata(metadata: FieldMetadata) -> "FieldMetadataType":
        return FieldMetadataType(
            name=metadata.name,
            type=metadata.type,
            label=metadata.label,
            is_association=metadata.is_association,
            is_through=metadata.is_through,
            has_scope=metadata.has_scope,
            foreign_key=metadata.foreign_key,
            polymorphic_type=metadata.polymorphic_type,
            related_model=metadata.related_class_name,
        )


class ModelFieldsType(graphene.ObjectType):
    """Field metadata and page field lists of a model."""

    app_label = graphene.String(required=True)
    model_name = graphene.String(required=True)
    verbose_name_plural = graphene.String(required=True)
    primary_key = graphene.String()
    is_provisioned = graphene.Boolean(
        required=True, description="False until the model's table exists"
    )
    fields = graphene.List(graphene.NonNull(FieldMetadataType), required=True)
    index_field_names = graphene.List(graphene.NonNull(graphene.String), required=True)
    show_field_names = graphene.List(graphene.NonNull(graphene.String), required=True)
    form_field_names = graphene.List(graphene.NonNull(graphene.String), required=True)

    @staticmethod
    def from_decorator(decorator: ModelDecorator) -> "ModelFieldsType":
        meta = decorator.model_class._meta
        fields = decorator.fields
        return ModelFieldsType(
            app_label=meta.app_label,
            model_name=meta.object_name,
            verbose_name_plural=decorator.resources_name,
            primary_key=decorator.primary_key,
            is_provisioned=bool(fields),
            fields=[FieldMetadataType.from_metadata(m) for m in fields.values()],
            index_field_names=decorator.index_field_names,
            show_field_names=decorator.show_field_names,
            form_field_names=decorator.form_field_names,
        )


class ModelDecoratorQuery(graphene.ObjectType):
    """GraphQL queries for admin field lists."""

    admin_fields = graphene.Field(
        ModelFieldsType,
        app_label=graphene.String(required=True, description="Django app label"),
        model_name=graphene.String(required=True, description="Model class name"),
        description="Field metadata and page field lists of a Django model",
    )

    def resolve_admin_fields(
        self, info, app_label: str, model_name: str
    ) -> Optional[ModelFieldsType]:
        """Resolve the field lists of ``app_label.model_name``.

        Raises:
            GraphQLError: If the model is not installed.
        """
        try:
            model = apps.get_model(app_label, model_name)
        except LookupError:
            logger.warning(
                "admin_fields requested for unknown model '%s.%s'",
                app_label,
                model_name,
            )
            raise GraphQLError("Unknown model requested.")

        return ModelFieldsType.from_decorator(ModelDecorator.for_model(model))


__all__ = ["FieldMetadataType", "ModelFieldsType", "ModelDecoratorQuery"]
