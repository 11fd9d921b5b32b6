"""Field tree reconstruction from existing schema objects."""

from __future__ import annotations

from typing import TYPE_CHECKING

from schemadesigner.logging import get_logger
from schemadesigner.typing.enums import SchemaShape, SchemaType, UnionMember
from schemadesigner.typing.models import SchemaField, ValidationOptions

if TYPE_CHECKING:
    from schemadesigner.typing.protocol import IntrospectableSchema

logger = get_logger(__name__)

ARRAY_ITEM_NAME = "item"
NULL_TYPE = "null"

_SCALAR_TYPES: dict[SchemaShape, SchemaType | str] = {
    SchemaShape.NUMBER: SchemaType.NUMBER,
    SchemaShape.BOOLEAN: SchemaType.BOOLEAN,
    SchemaShape.DATE: SchemaType.DATE,
    SchemaShape.NULL: NULL_TYPE,
}
_UNION_MEMBERS: dict[SchemaShape, UnionMember] = {
    SchemaShape.NULL: UnionMember.NULL,
    SchemaShape.NUMBER: UnionMember.NUMBER,
    SchemaShape.BOOLEAN: UnionMember.BOOLEAN,
    SchemaShape.DATE: UnionMember.DATE,
}


def introspect(source: IntrospectableSchema, name: str = "root") -> SchemaField:
    """Build the field tree describing a schema object.

    Custom refinements, defaults, labels, descriptions and calculated fields
    cannot be recovered from a schema object and are never populated.

    Args:
        source (IntrospectableSchema): Schema object to describe.
        name (str): Name of the produced root field.

    Returns:
        SchemaField: Reconstructed field tree.
    """
    shape = source.shape()
    payload: dict[str, object] = {"name": name, "type": SchemaType.STRING}

    if shape == SchemaShape.OBJECT:
        payload["type"] = SchemaType.OBJECT
        payload["children"] = tuple(introspect(child, key) for key, child in source.properties())
    elif shape == SchemaShape.ARRAY:
        payload["type"] = SchemaType.ARRAY
        element = source.element()
        payload["children"] = () if element is None else (introspect(element, ARRAY_ITEM_NAME),)
    elif shape == SchemaShape.ENUM:
        payload["type"] = SchemaType.ENUM
        payload["enum_values"] = tuple(source.enum_values())
    elif shape == SchemaShape.UNION:
        payload["type"] = SchemaType.UNION
        payload["union_types"] = tuple(_union_member(option) for option in source.options())
    elif shape in _SCALAR_TYPES:
        payload["type"] = _SCALAR_TYPES[shape]

    payload["validations"] = _validations(source)
    return SchemaField.model_validate(payload)


def _union_member(option: IntrospectableSchema) -> UnionMember:
    shape = option.shape()
    member = _UNION_MEMBERS.get(shape)
    if member is None:
        if shape != SchemaShape.OTHER:
            logger.debug("Union option classified as string", extra={"shape": str(shape)})
        return UnionMember.STRING
    return member


def _validations(source: IntrospectableSchema) -> ValidationOptions:
    minimum, maximum = source.bounds()
    return ValidationOptions(
        required=False if source.is_optional() else None,
        min=minimum,
        max=maximum,
        regex=source.pattern(),
    )
