"""Tests for gham/models/domain.py."""

import pytest
from pydantic import ValidationError

from gham.models import DEFAULT_USERNAME, AppConfig, Context, RepoAssignment


class TestContext:
    def test_name_is_stripped(self):
        assert Context(name="  work ").name == "work"

    @pytest.mark.parametrize("name", ["", "   "])
    def test_empty_name_rejected(self, name):
        with pytest.raises(ValidationError):
            Context(name=name)

    def test_null_optional_fields(self):
        ctx = Context(name="work", username=None, email=None)

        assert ctx.username == ""
        assert ctx.email == ""

    def test_custom_username(self):
        assert Context(name="w", username="alice").has_custom_username is True
        assert Context(name="w", username=DEFAULT_USERNAME).has_custom_username is False
        assert Context(name="w").has_custom_username is False


class TestRepoAssignment:
    def test_alias_and_field_name(self):
        by_alias = RepoAssignment.model_validate({"path": "/src/p", "contextName": "work"})
        by_name = RepoAssignment(path="/src/p", context_name="work")

        assert by_alias == by_name
        assert by_name.model_dump(by_alias=True) == {"path": "/src/p", "contextName": "work"}


class TestAppConfig:
    def test_to_document_omits_empty_fields(self):
        config = AppConfig(contexts=[Context(name="work", username="alice")])

        assert config.to_document() == {
            "contexts": [{"name": "work", "username": "alice"}],
            "repositories": [],
        }
