from __future__ import annotations

from typing import Any

from schemadesigner.introspection import JsonSchemaSource, introspect, resolve_pointer
from schemadesigner.typing.enums import SchemaShape, SchemaType, UnionMember


def _user_document() -> dict[str, Any]:
    return {
        "$ref": "#/definitions/User",
        "definitions": {
            "User": {
                "type": "object",
                "properties": {
                    "name": {"type": "string", "minLength": 1, "pattern": "^[a-z]+$"},
                    "age": {"type": "number", "minimum": 0, "maximum": 120},
                    "tags": {"type": "array", "items": {"type": "string"}, "maxItems": 5},
                    "role": {"type": "string", "enum": ["admin", "user"]},
                    "birth": {"type": "string", "format": "date-time"},
                    "nick": {"type": ["string", "null"]},
                    "active": {"type": "boolean"},
                },
                "required": ["name", "age", "tags", "role", "birth", "active"],
                "additionalProperties": False,
            },
        },
        "$schema": "http://json-schema.org/draft-07/schema#",
    }


def _source(node: dict[str, Any]) -> JsonSchemaSource:
    return JsonSchemaSource.from_document(node)


def test_introspect_document_builds_field_tree() -> None:
    root = introspect(_source(_user_document()), "User")
    children = {child.name: child for child in root.children}

    assert root.type == SchemaType.OBJECT
    assert list(children) == ["name", "age", "tags", "role", "birth", "nick", "active"]
    assert children["name"].type == SchemaType.STRING
    assert children["name"].validations is not None
    assert children["name"].validations.min == 1
    assert children["name"].validations.regex == "^[a-z]+$"
    assert children["name"].validations.required is None
    assert children["age"].validations is not None
    assert (children["age"].validations.min, children["age"].validations.max) == (0, 120)
    assert children["tags"].children[0].name == "item"
    assert children["tags"].validations is not None
    assert children["tags"].validations.max == 5
    assert children["role"].enum_values == ("admin", "user")
    assert children["birth"].type == SchemaType.DATE
    assert children["nick"].type == SchemaType.UNION
    assert children["nick"].union_types == (UnionMember.STRING, UnionMember.NULL)
    assert children["nick"].validations is not None
    assert children["nick"].validations.required is False
    assert children["active"].type == SchemaType.BOOLEAN


def test_shape_priority_prefers_object_then_array_then_enum() -> None:
    assert _source({"properties": {}, "items": {}}).shape() == SchemaShape.OBJECT
    assert _source({"items": {}, "enum": ["a"]}).shape() == SchemaShape.ARRAY
    assert _source({"enum": ["a"], "anyOf": [{"type": "string"}]}).shape() == SchemaShape.ENUM
    assert _source({"const": "fixed"}).shape() == SchemaShape.ENUM


def test_shape_of_scalars() -> None:
    assert _source({"type": "integer"}).shape() == SchemaShape.NUMBER
    assert _source({"type": "boolean"}).shape() == SchemaShape.BOOLEAN
    assert _source({"type": "string", "format": "date"}).shape() == SchemaShape.DATE
    assert _source({"type": "null"}).shape() == SchemaShape.NULL
    assert _source({"type": "string"}).shape() == SchemaShape.OTHER
    assert _source({"enum": [1, 2]}).shape() == SchemaShape.OTHER


def test_union_options_from_any_of_and_type_list() -> None:
    any_of = _source({"anyOf": [{"type": "number"}, {"type": "object", "properties": {}}]})
    type_list = _source({"type": ["boolean", "null"]})

    assert [option.shape() for option in any_of.options()] == [SchemaShape.NUMBER, SchemaShape.OBJECT]
    assert [option.shape() for option in type_list.options()] == [SchemaShape.BOOLEAN, SchemaShape.NULL]


def test_tuple_items_use_first_entry() -> None:
    source = _source({"type": "array", "items": [{"type": "number"}, {"type": "string"}]})
    element = source.element()

    assert element is not None
    assert element.shape() == SchemaShape.NUMBER


def test_prefix_items_are_read_as_element() -> None:
    element = _source({"type": "array", "prefixItems": [{"type": "boolean"}]}).element()

    assert element is not None
    assert element.shape() == SchemaShape.BOOLEAN


def test_single_all_of_is_unwrapped() -> None:
    source = _source({"allOf": [{"type": "number", "minimum": 2}], "description": "Count"})

    assert source.shape() == SchemaShape.NUMBER
    assert source.bounds() == (2, None)


def test_ref_siblings_override_target() -> None:
    document = {
        "$defs": {"Code": {"type": "string", "pattern": "^a"}},
        "type": "object",
        "properties": {"code": {"$ref": "#/$defs/Code", "pattern": "^b"}},
    }

    root = introspect(_source(document))

    assert root.children[0].validations is not None
    assert root.children[0].validations.regex == "^b"


def test_cyclic_reference_degrades_to_string() -> None:
    document = {
        "$defs": {"Node": {"type": "object", "properties": {"next": {"$ref": "#/$defs/Node"}}}},
        "$ref": "#/$defs/Node",
    }

    root = introspect(_source(document), "Node")

    assert root.type == SchemaType.OBJECT
    assert root.children[0].name == "next"
    assert root.children[0].type == SchemaType.STRING


def test_sibling_references_are_not_cycles() -> None:
    document = {
        "$defs": {"Point": {"type": "object", "properties": {"x": {"type": "number"}}}},
        "type": "object",
        "properties": {"a": {"$ref": "#/$defs/Point"}, "b": {"$ref": "#/$defs/Point"}},
    }

    root = introspect(_source(document))

    assert [child.type for child in root.children] == [SchemaType.OBJECT, SchemaType.OBJECT]


def test_unresolvable_reference_is_dropped() -> None:
    assert _source({"$ref": "other.json#/Thing", "type": "boolean"}).shape() == SchemaShape.BOOLEAN


def test_collapse_nullable_marks_branch_optional() -> None:
    document = {"anyOf": [{"type": "number", "maximum": 3}, {"type": "null"}]}

    plain = JsonSchemaSource.from_document(document)
    collapsed = JsonSchemaSource.from_document(document, collapse_nullable=True)

    assert plain.shape() == SchemaShape.UNION
    assert collapsed.shape() == SchemaShape.NUMBER
    assert collapsed.is_optional() is True
    assert collapsed.bounds() == (None, 3)


def test_empty_property_names_are_skipped() -> None:
    source = _source({"type": "object", "properties": {"": {"type": "string"}, "ok": {"type": "string"}}})

    assert [key for key, _child in source.properties()] == ["ok"]


def test_resolve_pointer() -> None:
    document = {"$defs": {"a/b": {"type": "string"}}, "list": [{"type": "number"}]}

    assert resolve_pointer(document, "#/$defs/a~1b") == {"type": "string"}
    assert resolve_pointer(document, "#/list/0") == {"type": "number"}
    assert resolve_pointer(document, "#/missing") is None
    assert resolve_pointer(document, "https://example.com/schema") is None


def test_any_of_with_empty_not_reads_as_optional_branch() -> None:
    source = _source({"anyOf": [{"not": {}}, {"type": "number", "minimum": 1}], "description": "Count"})

    assert source.shape() == SchemaShape.NUMBER
    assert source.is_optional() is True
    assert source.bounds() == (1, None)
    assert source.node["description"] == "Count"


def test_optional_array_element_is_introspected_as_not_required() -> None:
    field = introspect(_source({"type": "array", "items": {"anyOf": [{"not": {}}, {"type": "string"}]}}), "tags")

    item = field.children[0]
    assert item.type == SchemaType.STRING
    assert item.validations is not None
    assert item.validations.required is False


def test_any_of_with_other_branches_stays_a_union() -> None:
    source = _source({"anyOf": [{"not": {}}, {"type": "string"}, {"type": "number"}]})

    assert source.shape() == SchemaShape.UNION
    assert source.is_optional() is False


def test_non_finite_bounds_are_ignored() -> None:
    assert _source({"type": "number", "minimum": float("-inf"), "maximum": float("nan")}).bounds() == (None, None)
