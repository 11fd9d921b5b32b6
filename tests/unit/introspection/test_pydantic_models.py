from __future__ import annotations

from datetime import datetime  # noqa: TC003
from typing import Annotated, Literal

import pytest
from pydantic import BaseModel, Field

from schemadesigner.exceptions import FieldTreeLoadError
from schemadesigner.introspection import introspect_model, model_json_schema
from schemadesigner.typing.enums import SchemaType, UnionMember


class Address(BaseModel):
    street: str = Field(min_length=1)
    zip_code: Annotated[str, Field(pattern=r"^\d{5}$")] | None = None


class Customer(BaseModel):
    name: str
    age: int = Field(ge=0, le=150)
    tier: Literal["gold", "silver"]
    joined: datetime
    tags: list[str] = Field(default_factory=list, max_length=3)
    address: Address
    score: int | str
    nickname: str | None = None
    active: bool = True


def test_introspect_model_uses_class_name() -> None:
    assert introspect_model(Customer).name == "Customer"
    assert introspect_model(Customer, "customer").name == "customer"


def test_introspect_model_maps_field_types() -> None:
    root = introspect_model(Customer)
    children = {child.name: child for child in root.children}

    assert list(children) == ["name", "age", "tier", "joined", "tags", "address", "score", "nickname", "active"]
    assert children["name"].type == SchemaType.STRING
    assert children["age"].type == SchemaType.NUMBER
    assert children["tier"].type == SchemaType.ENUM
    assert children["tier"].enum_values == ("gold", "silver")
    assert children["joined"].type == SchemaType.DATE
    assert children["tags"].type == SchemaType.ARRAY
    assert children["tags"].children[0].type == SchemaType.STRING
    assert children["address"].type == SchemaType.OBJECT
    assert children["score"].type == SchemaType.UNION
    assert children["score"].union_types == (UnionMember.NUMBER, UnionMember.STRING)
    assert children["active"].type == SchemaType.BOOLEAN


def test_introspect_model_reads_constraints_and_optionality() -> None:
    root = introspect_model(Customer)
    children = {child.name: child for child in root.children}

    age = children["age"].validations
    tags = children["tags"].validations
    assert age is not None
    assert (age.min, age.max, age.required) == (0, 150, None)
    assert tags is not None
    assert (tags.max, tags.required) == (3, False)
    assert children["nickname"].type == SchemaType.STRING
    assert children["nickname"].validations is not None
    assert children["nickname"].validations.required is False


def test_introspect_model_follows_nested_model_refs() -> None:
    root = introspect_model(Customer)
    address = next(child for child in root.children if child.name == "address")
    street, zip_code = address.children

    assert street.validations is not None
    assert street.validations.min == 1
    assert zip_code.type == SchemaType.STRING
    assert zip_code.validations is not None
    assert zip_code.validations.regex == r"^\d{5}$"
    assert zip_code.validations.required is False


def test_introspect_model_accepts_plain_types() -> None:
    field = introspect_model(list[int], "numbers")

    assert field.type == SchemaType.ARRAY
    assert field.children[0].type == SchemaType.NUMBER


def test_model_json_schema_wraps_pydantic_errors() -> None:
    class _Opaque:
        pass

    with pytest.raises(FieldTreeLoadError, match="Cannot build a JSON schema"):
        model_json_schema(_Opaque)
