import pytest
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from sample_users_mcp.core.exceptions import InvalidToolDefinitionError
from sample_users_mcp.core.tools.schema import SchemaValidator


def test_assert_no_recursive_refs_no_recursion():
    schema = {
        "type": "object",
        "properties": {
            "prop1": {"type": "string"},
            "prop2": {"type": "object", "properties": {"subprop": {"type": "integer"}}},
        },
    }
    # Should not raise
    SchemaValidator.assert_no_recursive_refs(schema)


def test_assert_no_recursive_refs_with_recursion():
    schema = {
        "$defs": {"Node": {"type": "object", "properties": {"child": {"$ref": "#/$defs/Node"}}}},
        "properties": {"root": {"$ref": "#/$defs/Node"}},
    }
    with pytest.raises(InvalidToolDefinitionError, match="Recursive structure detected"):
        SchemaValidator.assert_no_recursive_refs(schema)


def test_sanitize_schema_removes_metadata():
    schema = {
        "$schema": "http://json-schema.org/draft-07/schema#",
        "$id": "http://example.com/schema",
        "title": "MySchema",
        "type": "object",
        "properties": {"field": {"type": "string", "title": "FieldTitle"}},
        "definitions": {"SomeDef": {}},
    }
    sanitized = SchemaValidator.sanitize_schema(schema)

    assert "$schema" not in sanitized
    assert "$id" not in sanitized
    assert "title" not in sanitized
    assert "definitions" not in sanitized
    assert "title" not in sanitized["properties"]["field"]


def test_sanitize_schema_keeps_property_named_title():
    schema = {"type": "object", "properties": {"title": {"type": "string", "title": "Title"}}}
    sanitized = SchemaValidator.sanitize_schema(schema)
    assert sanitized["properties"]["title"] == {"type": "string"}


def test_sanitize_schema_simplifies_optional():
    schema = {
        "type": "object",
        "properties": {
            "optional_field": {
                "anyOf": [{"type": "integer", "description": "An integer"}, {"type": "null"}],
                "description": "Parent description",
            }
        },
    }
    sanitized = SchemaValidator.sanitize_schema(schema)
    field = sanitized["properties"]["optional_field"]

    assert "anyOf" not in field
    assert field["type"] == "integer"
    assert field["description"] == "Parent description"


def test_sanitize_schema_keep_nullable():
    schema = {
        "type": "object",
        "properties": {"maybe": {"anyOf": [{"type": "integer"}, {"type": "null"}]}},
    }
    sanitized = SchemaValidator.sanitize_schema(schema, keep_nullable=True)
    assert sanitized["properties"]["maybe"]["anyOf"] == [{"type": "integer"}, {"type": "null"}]


def test_sanitize_schema_enforces_additional_properties():
    schema = {"type": "object", "properties": {"field": {"type": "string"}}}
    sanitized = SchemaValidator.sanitize_schema(schema)
    assert sanitized["additionalProperties"] is False


class Strict(BaseModel):
    model_config = ConfigDict(extra="forbid", strict=True)

    name: str
    count: int
    label: str = Field(default="default", min_length=1)


def test_validate_payload_accepts_matching_dict():
    validated = SchemaValidator.validate_payload(Strict, {"name": "a", "count": 1})
    assert validated == Strict(name="a", count=1)


def test_validate_payload_revalidates_instances():
    instance = Strict(name="a", count=1)

    validated = SchemaValidator.validate_payload(Strict, instance)

    assert validated == instance
    assert validated is not instance


def test_validate_payload_catches_mutated_instances():
    instance = Strict(name="a", count=1)
    instance.label = ""

    with pytest.raises(ValidationError) as exc_info:
        SchemaValidator.validate_payload(Strict, instance)

    assert [v["field"] for v in SchemaValidator.describe_errors(exc_info.value)] == ["label"]


def test_describe_errors_lists_every_violation():
    with pytest.raises(ValidationError) as exc_info:
        SchemaValidator.validate_payload(Strict, {"count": "1", "label": "", "extra": True})

    violations = SchemaValidator.describe_errors(exc_info.value)
    by_field = {v["field"]: v["type"] for v in violations}

    assert by_field == {
        "name": "missing",
        "count": "int_type",
        "label": "string_too_short",
        "extra": "extra_forbidden",
    }
    assert all(v["message"] for v in violations)


def test_describe_errors_for_non_mapping_payload():
    with pytest.raises(ValidationError) as exc_info:
        SchemaValidator.validate_payload(Strict, ["not", "a", "dict"])

    violations = SchemaValidator.describe_errors(exc_info.value)
    assert len(violations) == 1
    assert violations[0]["field"] == "(root)"
