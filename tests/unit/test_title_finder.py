"""
Unit tests for TitleFieldFinder.
"""

import pytest
from django.test import override_settings

from rail_admin_meta.decorators.title_finder import TitleFieldFinder
from rail_admin_meta.decorators.types import FieldMap, FieldMetadata

pytestmark = pytest.mark.unit


def _fields(*pairs) -> FieldMap:
    return FieldMap(
        {name: FieldMetadata(name=name, type=kind, label=name) for name, kind in pairs}
    )


def test_exact_conventional_name_wins():
    finder = TitleFieldFinder(
        _fields(("id", "integer"), ("code", "string"), ("title", "string"))
    )

    assert finder.find() == "title"


def test_conventional_names_checked_in_priority_order():
    finder = TitleFieldFinder(_fields(("label", "string"), ("name", "string")))

    assert finder.find() == "name"


def test_name_containing_a_conventional_word():
    finder = TitleFieldFinder(
        _fields(("code", "string"), ("full_name", "string"), ("notes", "text"))
    )

    assert finder.find() == "full_name"


def test_first_short_text_field_before_long_text():
    finder = TitleFieldFinder(
        _fields(("summary", "text"), ("headline", "string"), ("slug", "string"))
    )

    assert finder.find() == "headline"


def test_first_text_field_as_last_resort():
    finder = TitleFieldFinder(_fields(("id", "integer"), ("summary", "text")))

    assert finder.find() == "summary"


def test_conventional_name_must_be_text_typed():
    finder = TitleFieldFinder(_fields(("name", "integer"), ("code", "string")))

    assert finder.find() == "code"


def test_none_without_candidates():
    assert TitleFieldFinder(_fields(("id", "integer"))).find() is None
    assert TitleFieldFinder(FieldMap()).find() is None


@override_settings(RAIL_ADMIN_META={"title_field_names": ["subject"]})
def test_conventional_names_are_configurable():
    finder = TitleFieldFinder(_fields(("name", "string"), ("subject", "string")))

    assert finder.find() == "subject"


def test_result_is_memoized():
    fields = {"title": FieldMetadata(name="title", type="string", label="Title")}
    finder = TitleFieldFinder(FieldMap(fields))

    assert finder.find() == "title"
    finder.general_fields = FieldMap()
    assert finder.find() == "title"
