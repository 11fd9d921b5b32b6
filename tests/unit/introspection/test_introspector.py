from __future__ import annotations

from dataclasses import dataclass, field

from schemadesigner.introspection import ARRAY_ITEM_NAME, introspect
from schemadesigner.typing.enums import SchemaShape, SchemaType, UnionMember
from schemadesigner.typing.models import ValidationOptions


@dataclass
class _StubSchema:
    kind: SchemaShape
    fields: list[tuple[str, _StubSchema]] = field(default_factory=list)
    item: _StubSchema | None = None
    values: list[str] = field(default_factory=list)
    choices: list[_StubSchema] = field(default_factory=list)
    optional: bool = False
    minimum: int | float | None = None
    maximum: int | float | None = None
    regex: str | None = None

    def shape(self) -> SchemaShape:
        return self.kind

    def properties(self) -> list[tuple[str, _StubSchema]]:
        return self.fields

    def element(self) -> _StubSchema | None:
        return self.item

    def enum_values(self) -> list[str]:
        return self.values

    def options(self) -> list[_StubSchema]:
        return self.choices

    def is_optional(self) -> bool:
        return self.optional

    def bounds(self) -> tuple[int | float | None, int | float | None]:
        return self.minimum, self.maximum

    def pattern(self) -> str | None:
        return self.regex


def test_introspect_object_keeps_property_order() -> None:
    source = _StubSchema(
        SchemaShape.OBJECT,
        fields=[
            ("name", _StubSchema(SchemaShape.OTHER, minimum=1, regex="^[a-z]+$")),
            ("age", _StubSchema(SchemaShape.NUMBER, optional=True, minimum=0, maximum=120)),
            ("active", _StubSchema(SchemaShape.BOOLEAN)),
        ],
    )

    root = introspect(source, "user")

    assert root.name == "user"
    assert root.type == SchemaType.OBJECT
    assert [(child.name, child.type) for child in root.children] == [
        ("name", SchemaType.STRING),
        ("age", SchemaType.NUMBER),
        ("active", SchemaType.BOOLEAN),
    ]
    assert root.children[0].validations == ValidationOptions(min=1, regex="^[a-z]+$")
    assert root.children[1].validations == ValidationOptions(required=False, min=0, max=120)


def test_introspect_default_name_is_root() -> None:
    assert introspect(_StubSchema(SchemaShape.OTHER)).name == "root"


def test_introspect_array_names_element_item() -> None:
    source = _StubSchema(SchemaShape.ARRAY, item=_StubSchema(SchemaShape.DATE), maximum=3)

    field = introspect(source, "dates")

    assert field.type == SchemaType.ARRAY
    assert [(child.name, child.type) for child in field.children] == [(ARRAY_ITEM_NAME, SchemaType.DATE)]
    assert field.validations == ValidationOptions(max=3)


def test_introspect_array_without_element() -> None:
    assert introspect(_StubSchema(SchemaShape.ARRAY)).children == ()


def test_introspect_enum_values() -> None:
    field = introspect(_StubSchema(SchemaShape.ENUM, values=["a", "b"]), "letter")

    assert field.type == SchemaType.ENUM
    assert field.enum_values == ("a", "b")


def test_introspect_union_members_fall_back_to_string() -> None:
    source = _StubSchema(
        SchemaShape.UNION,
        choices=[
            _StubSchema(SchemaShape.NULL),
            _StubSchema(SchemaShape.NUMBER),
            _StubSchema(SchemaShape.OBJECT),
            _StubSchema(SchemaShape.OTHER),
        ],
    )

    field = introspect(source, "value")

    assert field.type == SchemaType.UNION
    assert field.union_types == (UnionMember.NULL, UnionMember.NUMBER, UnionMember.STRING, UnionMember.STRING)


def test_introspect_null_shape_uses_open_tag() -> None:
    assert introspect(_StubSchema(SchemaShape.NULL)).type == "null"


def test_introspect_never_recovers_authoring_attributes() -> None:
    field = introspect(_StubSchema(SchemaShape.OTHER, optional=True), "note")

    assert field.label is None
    assert field.description is None
    assert field.calculated_field is None
    assert field.validations is not None
    assert field.validations.custom is None
    assert field.validations.default is None
    assert field.validations.required is False
