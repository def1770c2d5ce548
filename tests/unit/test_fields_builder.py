"""
Unit tests for FieldsBuilder and the Django schema source.
"""

from unittest.mock import patch

import pytest
from django.contrib.contenttypes.models import ContentType
from django.db import OperationalError, connections
from django.test import TestCase, override_settings

from rail_admin_meta.decorators.fields_builder import FieldsBuilder
from rail_admin_meta.decorators.schema import DjangoSchemaSource
from rail_admin_meta.exceptions import SchemaUnavailableError
from tests.models import (
    Article,
    Author,
    Category,
    Document,
    Draft,
    LandingPage,
    Post,
    PostTag,
    Tag,
)

pytestmark = pytest.mark.unit


class TestGeneralFields(TestCase):
    def test_columns_keyed_by_attribute_name(self):
        fields = FieldsBuilder(Article).general_fields()

        assert set(fields) == {"id", "title", "created_at", "category_id"}
        assert all(not metadata.is_association for metadata in fields.values())

    def test_storage_types(self):
        fields = FieldsBuilder(Post).general_fields()

        assert fields["id"].type == "integer"
        assert fields["headline"].type == "string"
        assert fields["body"].type == "text"
        assert fields["payload"].type == "binary"
        assert fields["extra"].type == "json"
        assert fields["updated_at"].type == "datetime"
        assert fields["object_id"].type == "integer"
        # foreign key columns take the type of the column they point at
        assert fields["author_id"].type == "integer"

    def test_labels(self):
        fields = FieldsBuilder(Article).general_fields()

        assert fields["title"].label == "Title"
        assert fields["created_at"].label == "Created at"
        assert fields["category_id"].label == "Category id"

    def test_empty_when_table_missing(self):
        fields = FieldsBuilder(Draft).general_fields()

        assert len(fields) == 0

    def test_table_check_can_be_skipped(self):
        fields = FieldsBuilder(Draft).general_fields(check_table=False)

        assert set(fields) == {"id", "title"}

    @override_settings(RAIL_ADMIN_META={"type_mappings": {"FileField": "attachment"}})
    def test_custom_type_mappings(self):
        fields = FieldsBuilder(Document).general_fields()

        assert fields["file"].type == "attachment"


class TestAssociationFields(TestCase):
    def test_belongs_to(self):
        category = FieldsBuilder(Article).association_fields()["category"]

        assert category.type == "belongs_to"
        assert category.is_association
        assert category.foreign_key == "category_id"
        assert category.related_class is Category
        assert not category.has_scope
        assert not category.is_through

    def test_scoped_belongs_to(self):
        author = FieldsBuilder(Post).association_fields()["author"]

        assert author.has_scope
        assert author.foreign_key == "author_id"

    def test_many_to_many(self):
        fields = FieldsBuilder(Post).association_fields()

        assert fields["reviewers"].type == "has_and_belongs_to_many"
        assert not fields["reviewers"].is_through
        assert fields["reviewers"].related_class is Author
        assert fields["reviewers"].foreign_key is None

        assert fields["tags"].type == "has_many"
        assert fields["tags"].is_through
        assert fields["tags"].related_class is Tag

    def test_generic_foreign_key_is_polymorphic(self):
        subject = FieldsBuilder(Post).association_fields()["subject"]

        assert subject.type == "belongs_to"
        assert subject.foreign_key == "object_id"
        assert subject.polymorphic_type == "content_type"
        assert subject.related_class is None

    def test_content_type_foreign_key(self):
        content_type = FieldsBuilder(Post).association_fields()["content_type"]

        assert content_type.related_class is ContentType
        assert content_type.foreign_key == "content_type_id"

    def test_reverse_relations(self):
        category = FieldsBuilder(Category).association_fields()
        assert category["article_set"].type == "has_many"
        assert category["article_set"].related_class is Article
        assert category["article_set"].label == "Articles"

        author = FieldsBuilder(Author).association_fields()
        assert author["post_set"].type == "has_many"
        assert author["reviewed_posts"].type == "has_and_belongs_to_many"

        tag = FieldsBuilder(Tag).association_fields()
        assert tag["post_set"].type == "has_many"
        assert tag["post_set"].is_through
        assert tag["posttag_set"].related_class is PostTag

    def test_generic_relation(self):
        mentions = FieldsBuilder(Category).association_fields()["mentions"]

        assert mentions.type == "has_many"
        assert mentions.related_class is Post

    def test_hidden_reverse_relations_skipped(self):
        fields = FieldsBuilder(Document).association_fields()

        assert len(fields) == 0

    def test_association_fields_do_not_need_a_table(self):
        fields = FieldsBuilder(Draft).association_fields()

        assert len(fields) == 0


class TestDjangoSchemaSource(TestCase):
    def test_table_exists(self):
        assert DjangoSchemaSource(Article).table_exists()
        assert not DjangoSchemaSource(Draft).table_exists()

    def test_primary_key(self):
        assert DjangoSchemaSource(Article).primary_key() == "id"

    def test_primary_key_columns_include_inherited_keys(self):
        assert DjangoSchemaSource(Article).primary_key_columns() == ["id"]
        assert set(DjangoSchemaSource(LandingPage).primary_key_columns()) == {
            "id",
            "page_ptr_id",
        }

    def test_unreachable_database(self):
        introspection = connections["default"].introspection
        with patch.object(
            introspection, "table_names", side_effect=OperationalError("down")
        ):
            with pytest.raises(SchemaUnavailableError) as excinfo:
                DjangoSchemaSource(Article).table_exists()

        assert excinfo.value.model_name == "tests.Article"
        assert excinfo.value.database == "default"
