"""
Integration tests for the describe_admin_fields management command.
"""

import json
from io import StringIO

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError

pytestmark = [pytest.mark.integration, pytest.mark.django_db]


def _run(*args):
    stdout, stderr = StringIO(), StringIO()
    call_command("describe_admin_fields", *args, stdout=stdout, stderr=stderr)
    return stdout.getvalue(), stderr.getvalue()


def test_prints_every_view():
    out, err = _run("tests.Article")

    assert "tests.Article" in out
    assert "primary key: id" in out
    assert "index: id, title, created_at" in out
    assert "form: title, category" in out
    assert "show: " in out
    assert err == ""


def test_json_output_for_one_view():
    out, _ = _run("tests.Post", "--view", "form", "--json")
    payload = json.loads(out)

    assert payload["model"] == "tests.Post"
    assert payload["primary_key"] == "id"
    assert "index_field_names" not in payload
    assert "tags" not in payload["form_field_names"]
    assert "headline" in payload["form_field_names"]


def test_warns_when_table_missing():
    out, err = _run("tests.Draft")

    assert "No fields for tests.Draft" in err
    assert "index: -" in out


def test_unknown_model():
    with pytest.raises(CommandError):
        _run("tests.Missing")
