from __future__ import annotations

import re
from typing import Optional

import pytest

from yaml_schema import (
    Alias,
    InvalidPattern,
    InvalidSchema,
    InvalidString,
    Mapping,
    MissingRequiredField,
    Node,
    Pointer,
    Scalar,
    Sequence,
    UnexpectedProperty,
    UnexpectedTag,
    UnexpectedType,
    UnexpectedValue,
    Valid,
    ValidationError,
    Validator,
    invalid,
    parse,
    validate,
)
from yaml_schema.config import SchemaConfig


def _obj(**properties) -> dict:
    return {"type": "object", "properties": properties}


# -- scalars ------------------------------------------------------------------


def test_integer_plain_and_quoted() -> None:
    assert validate({"type": "integer"}, parse("42"))
    with pytest.raises(UnexpectedValue, match="expected integer, got string"):
        validate({"type": "integer"}, parse("'42'"))
    with pytest.raises(UnexpectedValue):
        validate({"type": "integer"}, parse('"42"'))


def test_integer_error() -> None:
    with pytest.raises(UnexpectedValue, match="expected integer"):
        validate({"type": "integer"}, parse("foo"))
    with pytest.raises(UnexpectedValue, match="expected integer"):
        validate({"type": "integer"}, parse("'foo'"))
    with pytest.raises(UnexpectedType, match="Scalar"):
        validate({"type": "integer"}, parse("foo: bar"))


def test_sexagesimal_is_not_integer() -> None:
    with pytest.raises(UnexpectedValue, match="expected integer, got sexagesimal"):
        validate({"type": "integer"}, parse("1:30"))


def test_null_error() -> None:
    with pytest.raises(UnexpectedValue, match="empty string"):
        validate({"type": "null"}, parse("foo"))
    with pytest.raises(UnexpectedType, match="Scalar"):
        validate({"type": "null"}, parse("foo: bar"))
    with pytest.raises(UnexpectedValue, match="empty string"):
        validate({"type": "null"}, parse("~"))
    assert validate({"type": "null"}, parse("---"))


def test_boolean_error() -> None:
    with pytest.raises(UnexpectedValue, match="true"):
        validate({"type": "boolean"}, parse("foo"))
    with pytest.raises(UnexpectedType, match="Scalar"):
        validate({"type": "boolean"}, parse("foo: bar"))
    # yes/no load as booleans but the schema only admits the literals
    with pytest.raises(UnexpectedValue):
        validate({"type": "boolean"}, parse("yes"))
    with pytest.raises(UnexpectedValue, match="expected boolean, got string"):
        validate({"type": "boolean"}, parse("'true'"))
    assert validate({"type": "boolean"}, parse("true"))
    assert validate({"type": "boolean"}, parse("false"))


@pytest.mark.parametrize(
    "text, type_",
    [
        (".inf", "float"),
        ("-.inf", "float"),
        (".nan", "float"),
        ("1.5", "float"),
        ("2025-11-19 12:34:56.123456 +09:00", "time"),
        ("2025-11-19T12:34:56Z", "time"),
        ("2025-11-19", "date"),
        (":foo", "symbol"),
    ],
)
def test_accept_non_strings(text: str, type_: str) -> None:
    doc = parse(f"foo: {text}")
    assert validate(_obj(foo={"type": type_}), doc)
    with pytest.raises(UnexpectedValue):
        validate(_obj(foo={"type": "string"}), doc)


def test_mismatch_reports_found_classification() -> None:
    with pytest.raises(UnexpectedValue, match="expected float, got integer"):
        validate({"type": "float"}, parse("42"))
    with pytest.raises(UnexpectedValue, match="expected date, got time"):
        validate({"type": "date"}, parse("2025-11-19 12:00:00"))
    with pytest.raises(UnexpectedValue, match="expected symbol, got string"):
        validate({"type": "symbol"}, parse("foo"))


# -- patterns -----------------------------------------------------------------


@pytest.mark.parametrize(
    "text, type_, pattern",
    [
        (":foo", "symbol", r":bar"),
        ("2025-11-19 12:34:56 +09:00", "time", r"yay"),
        ("", "null", r"notnull"),
        ("1.2", "float", r"1\.3"),
        ("true", "boolean", r"tru"),
        ("2025-11-19", "date", r"2025-11-20"),
    ],
)
def test_pattern_on_non_strings(text: str, type_: str, pattern: str) -> None:
    doc = parse(f"foo: {text}")
    with pytest.raises(InvalidPattern):
        validate(_obj(foo={"type": type_, "pattern": re.compile(pattern)}), doc)


def test_pattern_date_match() -> None:
    doc = parse("---\n foo: 2025-11-19")
    assert validate(_obj(foo={"type": "date", "pattern": re.compile(r"2025-11-19")}), doc)


def test_regular_expression() -> None:
    doc = parse("bar")
    with pytest.raises(InvalidPattern):
        validate({"type": "string", "pattern": "foo"}, doc)
    # full match, not search
    with pytest.raises(InvalidString):
        validate({"type": "string", "pattern": "ba"}, doc)
    assert validate({"type": "string", "pattern": "bar"}, doc)
    assert validate({"type": "string", "pattern": re.compile("b.r")}, doc)


# -- strings ------------------------------------------------------------------


def test_string_min_length() -> None:
    with pytest.raises(InvalidString):
        validate({"type": "string", "minLength": 6}, parse("--- hello"))
    assert validate({"type": "string", "minLength": 5}, parse("--- hello"))


def test_string_max_length() -> None:
    with pytest.raises(InvalidString):
        validate({"type": "string", "maxLength": 4}, parse("--- hello"))
    assert validate({"type": "string", "maxLength": 5}, parse("--- hello"))


def test_string_length_counts_bytes() -> None:
    with pytest.raises(InvalidString):
        validate({"type": "string", "maxLength": 2}, parse("--- 'é1'"))


@pytest.mark.parametrize("text, found", [("1", "integer"), ("false", "boolean"), ("true", "boolean"), ("--- ", "null")])
def test_invalid_string(text: str, found: str) -> None:
    with pytest.raises(UnexpectedValue, match=f"expected string, got {found}"):
        validate({"type": "string"}, parse(text))


@pytest.mark.parametrize("text", ["'1'", "'false'", "'true'", "--- ''", '"yes"', "|\n  1\n"])
def test_valid_quoted_string(text: str) -> None:
    assert validate({"type": "string"}, parse(text))


def test_long_words_are_strings() -> None:
    assert validate({"type": "string"}, parse("foobar"))
    assert validate({"type": "string"}, parse("Offline"))


# -- tags ---------------------------------------------------------------------


def test_missing_tag() -> None:
    with pytest.raises(UnexpectedTag, match="none specified"):
        validate({"type": "object", "tag": "aaron"}, parse("foo: bar"))


def test_wrong_tag() -> None:
    with pytest.raises(UnexpectedTag, match="lolol"):
        validate({"type": "object", "tag": "aaron"}, parse("--- !lolol\nfoo: bar"))


def test_unexpected_tag_on_object() -> None:
    with pytest.raises(UnexpectedTag, match="expected no tag"):
        validate(_obj(foo={"type": "string"}), parse("--- !lolol\nfoo: bar"))


def test_unexpected_tag() -> None:
    with pytest.raises(UnexpectedTag, match="lolol"):
        validate({"type": "string"}, parse("--- !lolol\n foo"))


def test_tag_on_non_object_types_is_rejected() -> None:
    with pytest.raises(UnexpectedTag):
        validate({"type": "string"}, parse("--- !!str foo"))
    with pytest.raises(UnexpectedTag):
        validate({"type": "array", "items": {"type": "string"}}, parse("--- !list\n- a"))


class CustomInfo:
    def read_tag(self, node: Node) -> Optional[str]:
        if node.tag == "!aaron":
            return "test"
        return node.tag


def test_custom_node_info() -> None:
    validator = Validator(CustomInfo())
    doc = parse("--- !aaron\nfoo: bar")
    schema = {
        "type": "object",
        "tag": "test",
        "properties": {"foo": {"type": "string"}},
    }
    assert validator.validate(schema, doc)
    with pytest.raises(UnexpectedTag):
        validate(schema, doc)


def test_nullable_with_tag() -> None:
    schema = {
        "type": ["null", "object"],
        "tag": "!foo",
        "properties": {"segments": {"type": "string"}},
    }
    assert validate(schema, parse("--- !foo\nsegments: foo\n"))
    assert validate(schema, parse("---"))


# -- objects ------------------------------------------------------------------


def test_property_names() -> None:
    doc = parse("---\n  hello: world")
    with pytest.raises(InvalidString):
        validate(
            {
                "type": "object",
                "properties": {"hello": {"type": "string"}},
                "propertyNames": {"maxLength": 4},
                "items": {"type": "string"},
            },
            doc,
        )
    assert validate(
        {
            "type": "object",
            "properties": {"hello": {"type": "string"}},
            "propertyNames": {"maxLength": 5, "pattern": "[a-z]+"},
        },
        doc,
    )


def test_additional_properties() -> None:
    doc = parse("---\n  hello: world\n  foo: bar")
    with pytest.raises(UnexpectedProperty, match='"foo"'):
        validate(
            {
                "type": "object",
                "properties": {"hello": {"type": "string"}},
                "items": {"type": "string"},
            },
            doc,
        )

    assert validate(
        {
            "type": "object",
            "properties": {"hello": {"type": "string"}},
            "additionalProperties": {"type": "string"},
        },
        doc,
    )

    with pytest.raises(UnexpectedValue):
        validate(
            {
                "type": "object",
                "properties": {"hello": {"type": "string"}},
                "additionalProperties": {"type": "null"},
            },
            doc,
        )


def test_duplicate_key_is_unexpected_property() -> None:
    schema = _obj(foo={"type": "integer"})
    error = invalid(schema, parse("foo: 1\nfoo: 2"))
    assert isinstance(error, UnexpectedProperty)
    assert 'unknown property "foo"' in str(error)

    schema["additionalProperties"] = {"type": "integer"}
    assert validate(schema, parse("foo: 1\nfoo: 2"))
    with pytest.raises(UnexpectedValue):
        validate(schema, parse("foo: 1\nfoo: bar"))


def test_additional_properties_boolean() -> None:
    doc = parse("foo: 1\nbar: 2")
    schema = _obj(foo={"type": "integer"})

    schema["additionalProperties"] = False
    with pytest.raises(UnexpectedProperty, match='"bar"'):
        validate(schema, doc)

    schema["additionalProperties"] = True
    assert validate(schema, doc)
    assert validate(schema, parse("foo: 1\nbar: [x, {y: z}]"))


def test_additional_properties_must_be_schema_or_boolean() -> None:
    schema = _obj(foo={"type": "integer"})
    schema["additionalProperties"] = "string"
    with pytest.raises(InvalidSchema, match="additionalProperties"):
        validate(schema, parse("foo: 1\nbar: 2"))
def test_missing_required() -> None:
    schema = {
        "type": "object",
        "properties": {
            "foo": {"type": "string"},
            "bar": {"type": "string"},
            "baz": {"type": "string"},
        },
        "required": ["foo", "baz"],
    }
    with pytest.raises(MissingRequiredField, match="baz"):
        validate(schema, parse("foo: bar"))
    assert validate(schema, parse("---\n  foo: bar\n  baz: hello"))


def test_missing_required_names_field() -> None:
    schema = {
        "type": "object",
        "properties": {"foo": {"type": "string"}},
        "required": ["foo", "bar"],
    }
    error = invalid(schema, parse("foo: x"))
    assert isinstance(error, MissingRequiredField)
    assert '"bar"' in str(error)


def test_required_with_items() -> None:
    schema = {"type": "object", "items": {"type": "integer"}, "required": ["a"]}
    assert validate(schema, parse("a: 1\nb: 2"))
    with pytest.raises(MissingRequiredField):
        validate(schema, parse("b: 2"))


def test_items_applies_to_every_value() -> None:
    schema = {"type": "object", "items": {"type": "integer"}}
    assert validate(schema, parse("a: 1\nb: 2"))
    with pytest.raises(UnexpectedValue) as excinfo:
        validate(schema, parse("a: 1\nb: two"))
    assert excinfo.value.path == ["root", "b"]


def test_object_without_specified_properties() -> None:
    with pytest.raises(InvalidSchema):
        validate({"type": "object"}, parse("---\nfoo: bar"))


def test_invalid_sub_property() -> None:
    schema = _obj(foo=_obj(hello={"type": "integer"}))
    with pytest.raises(UnexpectedValue) as excinfo:
        validate(schema, parse("---\nfoo: \n  hello: world"))
    assert excinfo.value.path == ["root", "foo", "hello"]
    assert "path: root -> foo -> hello" in str(excinfo.value)


def test_invalid_object_key_type() -> None:
    # integer keys aren't allowed
    schema = _obj(foo=_obj(hello={"type": "integer"}))
    with pytest.raises(UnexpectedValue, match="expected string, got integer"):
        validate(schema, parse("---\nfoo: \n  1: 2"))


def test_quoted_integer_key_is_a_string() -> None:
    assert validate({"type": "object", "items": {"type": "integer"}}, parse("'1': 2"))


def test_wrong_type() -> None:
    with pytest.raises(UnexpectedType, match="Scalar"):
        validate({"type": "string"}, parse("foo: bar"))
    with pytest.raises(UnexpectedType, match="Mapping"):
        validate({"type": "object"}, parse("foo"))
    with pytest.raises(UnexpectedType, match="Sequence"):
        validate({"type": "array"}, parse("foo"))


# -- arrays -------------------------------------------------------------------


def test_min_items() -> None:
    schema = {"type": "array", "items": {"type": "string"}, "minItems": 2}
    with pytest.raises(UnexpectedValue):
        validate(schema, parse("---\n- bar"))
    schema["minItems"] = 1
    assert validate(schema, parse("---\n- bar"))


def test_array_max_items() -> None:
    schema = {"type": "array", "items": {"type": "integer"}, "maxItems": 2}
    assert validate(schema, parse("- 0\n- 1"))
    with pytest.raises(UnexpectedValue):
        validate({**schema, "maxItems": 1}, parse("- 0\n- 1"))


def test_error_in_array_sequence() -> None:
    schema = {"type": "array", "items": {"type": "integer"}}
    with pytest.raises(UnexpectedValue) as excinfo:
        validate(schema, parse("- foo\n- 1"))
    assert excinfo.value.path == ["root", 0]
    with pytest.raises(UnexpectedValue) as excinfo:
        validate(schema, parse("- 1\n- foo"))
    assert excinfo.value.path == ["root", 1]


def test_error_in_array_sequence_prefix_items() -> None:
    with pytest.raises(UnexpectedValue):
        validate(
            {"type": "array", "prefixItems": [{"type": "integer"}, {"type": "integer"}]},
            parse("- foo\n- 1"),
        )
    with pytest.raises(UnexpectedValue):
        validate(
            {"type": "array", "prefixItems": [{"type": "string"}, {"type": "string"}]},
            parse("- foo\n- 1"),
        )
    assert validate(
        {"type": "array", "prefixItems": [{"type": "string"}, {"type": "integer"}]},
        parse("- foo\n- 1"),
    )


def test_array_without_items() -> None:
    with pytest.raises(InvalidSchema):
        validate({"type": "array"}, parse("- a"))


def test_array_mixed_types() -> None:
    doc = parse("---\nsegments:\n- 3\n- 0\n- 0\n- beta3\n")
    assert validate(
        _obj(segments={"type": "array", "items": {"type": ["integer", "string"]}}),
        doc,
    )


# -- unions -------------------------------------------------------------------


def test_multiple_valid() -> None:
    assert validate({"type": ["string", "integer"]}, parse("'1'"))


def test_multiple_invalid_reports_last_alternative() -> None:
    with pytest.raises(UnexpectedValue, match="expected integer, got string"):
        validate({"type": ["null", "integer"]}, parse("'1'"))


def test_nullable_integer() -> None:
    assert validate({"type": ["null", "integer"]}, parse("---"))


def test_multiple_valid_array_type() -> None:
    assert validate({"type": ["null", "array"], "items": {"type": "string"}}, parse("- '1'"))


def test_multiple_invalid_array_type() -> None:
    schema = {"type": ["null", "array"], "items": {"type": "integer"}}
    with pytest.raises(UnexpectedValue):
        validate(schema, parse("- '1'"))
    with pytest.raises(UnexpectedValue):
        validate(schema, parse("- 1\n- '123'"))


def test_unknown_type_is_schema_error() -> None:
    with pytest.raises(InvalidSchema, match="unknown type"):
        validate({"type": "decimal"}, parse("1"))
    with pytest.raises(InvalidSchema):
        invalid({"type": "decimal"}, parse("1"))


def test_empty_type_list_is_schema_error() -> None:
    with pytest.raises(InvalidSchema, match="must not be empty"):
        validate({"type": []}, parse("1"))


def test_messages_double_quote_values() -> None:
    error = invalid({"type": "object", "tag": "!foo"}, parse("--- !bar\na: 1"))
    assert 'expected tag "!foo", but got "!bar"' in str(error)
    error = invalid({"type": "null"}, parse("x"))
    assert 'expected empty string, got "x"' in str(error)
    error = invalid({"type": "object", "properties": {}}, parse("- 1"))
    assert 'expected Mapping, got "Sequence"' in str(error)


# -- aliases ------------------------------------------------------------------


def test_allow_objects_with_aliases() -> None:
    doc = parse("---\nfoo: &1\n- foo\nbar: *1\n")
    schema = _obj(
        foo={"type": "array", "items": {"type": "string"}},
        bar={"type": "array", "items": {"type": "string"}},
    )
    assert validate(schema, doc)


def test_alias_is_validated_against_its_own_schema() -> None:
    doc = parse("---\nfoo: &1\n- foo\nbar: *1\n")
    schema = _obj(
        foo={"type": "array", "items": {"type": "string"}},
        bar={"type": "array", "items": {"type": "integer"}},
    )
    with pytest.raises(UnexpectedValue) as excinfo:
        validate(schema, doc)
    assert excinfo.value.path == ["root", "bar", 0]


def test_alias_table_is_per_call() -> None:
    anchored = Scalar("1", anchor="a")
    first = Sequence(children=[anchored, Alias(anchor="a")])
    second = Sequence(children=[Alias(anchor="a")])
    schema = {"type": "array", "items": {"type": "integer"}}
    assert validate(schema, first)
    with pytest.raises(KeyError):
        validate(schema, second)


def test_anchor_past_prefix_items_can_be_aliased() -> None:
    doc = parse("list: [1, &a foo]\nother: *a\n")
    schema = _obj(
        list={"type": "array", "prefixItems": [{"type": "integer"}]},
        other={"type": "string"},
    )
    assert validate(schema, doc)


def test_nested_anchor_past_prefix_items_can_be_aliased() -> None:
    doc = parse("list: [1, {x: [&a 2]}]\nother: *a\n")
    schema = _obj(
        list={"type": "array", "prefixItems": [{"type": "integer"}]},
        other={"type": "integer"},
    )
    assert validate(schema, doc)
    schema["properties"]["other"] = {"type": "string"}
    with pytest.raises(UnexpectedValue, match="expected string, got integer"):
        validate(schema, doc)


def test_anchor_under_open_additional_properties_can_be_aliased() -> None:
    doc = parse("extra: &a 1\nfoo: *a\n")
    schema = {"type": "object", "properties": {"foo": {"type": "integer"}}, "additionalProperties": True}
    assert validate(schema, doc)


# -- entry points -------------------------------------------------------------


def test_invalid_returns_error_value() -> None:
    schema = {"type": "array", "items": {"type": "integer"}, "maxItems": 1}
    doc = parse("[0, 1]")
    assert invalid({"type": "array", "items": {"type": "integer"}}, doc) is False
    error = invalid(schema, doc)
    assert isinstance(error, UnexpectedValue)
    assert error.kind == "UnexpectedValue"
    with pytest.raises(UnexpectedValue) as excinfo:
        validate(schema, doc)
    assert str(excinfo.value) == str(error)


def test_validation_is_repeatable() -> None:
    schema = _obj(foo={"type": "string"})
    schema["required"] = ["foo", "bar"]
    doc = parse("foo: x")
    first = invalid(schema, doc)
    second = invalid(schema, doc)
    assert type(first) is type(second) is MissingRequiredField
    assert str(first) == str(second)
    assert schema == {
        "type": "object",
        "properties": {"foo": {"type": "string"}},
        "required": ["foo", "bar"],
    }


def test_hand_built_nodes() -> None:
    tree = Mapping(children=[(Scalar("n"), Scalar("42"))])
    assert validate(_obj(n={"type": "integer"}), tree)
    tree.children[0][1].quoted = True
    assert isinstance(invalid(_obj(n={"type": "integer"}), tree), UnexpectedValue)


def test_valid_sentinel() -> None:
    assert repr(Valid) == "Valid"
    assert not Valid


def test_error_location_points_back_into_tree() -> None:
    doc = parse("foo:\n  hello: world\n")
    error = invalid(_obj(foo=_obj(hello={"type": "integer"})), doc)
    assert isinstance(error, ValidationError)
    assert error.location.line == 2
    assert error.location.yaml_path == "/foo/hello"
    assert Pointer.lookup(error.location.yaml_path, doc) is Pointer.lookup("/foo/hello", doc)


def test_config_root_name_and_separator() -> None:
    validator = Validator(config=SchemaConfig(root_name="doc", path_separator="."))
    error = validator.invalid(_obj(foo={"type": "integer"}), parse("foo: bar"))
    assert error.path == ["doc", "foo"]
    assert "path: doc.foo" in str(error)


def test_config_check_schema() -> None:
    validator = Validator(config=SchemaConfig(check_schema=True))
    with pytest.raises(InvalidSchema):
        validator.validate({"type": "integer", "maxLength": -1}, parse("1"))
    assert validator.validate({"type": "integer"}, parse("1"))
