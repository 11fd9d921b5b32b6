"""Zod source generation from field trees."""

from __future__ import annotations

from schemadesigner.literals import double_quoted, format_number, literal_token, single_quoted
from schemadesigner.logging import get_logger
from schemadesigner.typing.enums import SchemaType, UnionMember
from schemadesigner.typing.models import SchemaField, ValidationOptions

logger = get_logger(__name__)

ZOD_IMPORT = "import { z } from 'zod';"

_COERCED_TYPES = frozenset({SchemaType.NUMBER, SchemaType.DATE})
_KNOWN_TYPES = frozenset(SchemaType)
_UNION_ELEMENTS = {
    UnionMember.NULL: "z.null()",
    UnionMember.UNDEFINED: "z.undefined()",
    UnionMember.NUMBER: "z.number()",
    UnionMember.DATE: "z.date()",
}
_OBJECT_ENTRY_SEPARATOR = ",\n    "


def generate_zod_schema(field: SchemaField) -> str:
    """Generate a Zod module declaring the schema of a field tree.

    Args:
        field (SchemaField): Root field.

    Returns:
        str: Module text: zod import, `const <name>Schema = ...;` and its default export.
    """
    declaration = f"{field.name}Schema"
    return f"{ZOD_IMPORT}\n\nconst {declaration} = {field_expression(field)};\n\nexport default {declaration};"


generate = generate_zod_schema


def field_expression(field: SchemaField) -> str:
    """Build the Zod expression of one field, modifiers included.

    Args:
        field (SchemaField): Field to render.

    Returns:
        str: Zod expression.
    """
    expression = _base_expression(field)
    if field.type != SchemaType.ENUM:
        expression += "".join(_validation_modifiers(field))
    return expression + _describe_modifier(field)


def _base_expression(field: SchemaField) -> str:
    field_type = field.type
    if field_type == SchemaType.ENUM:
        return f"z.enum([{', '.join(single_quoted(value) for value in field.enum_values)}])"
    if field_type == SchemaType.UNION:
        return _union_expression(field)
    if field_type == SchemaType.OBJECT:
        return _object_expression(field)
    if field_type == SchemaType.ARRAY:
        if not field.children:
            return "z.array()"
        return f"z.array({field_expression(field.children[0])})"
    if field_type == SchemaType.CALCULATED:
        return _calculated_expression(field)
    if field_type in _COERCED_TYPES:
        return f"z.coerce.{field_type}()"
    if field_type not in _KNOWN_TYPES:
        logger.debug("Unknown field type rendered as plain constructor", extra={"field_type": str(field_type)})
    return f"z.{field_type}()"


def _union_expression(field: SchemaField) -> str:
    if not field.union_types:
        return "z.union()"
    elements = [_UNION_ELEMENTS.get(tag, f"z.{tag}()") for tag in field.union_types]
    return f"z.union([{', '.join(elements)}])"


def _object_expression(field: SchemaField) -> str:
    if not field.children:
        return "z.object({})"
    entries = _OBJECT_ENTRY_SEPARATOR.join(f"{child.name}: {field_expression(child)}" for child in field.children)
    return f"z.object({{\n    {entries}\n  }})"


def _calculated_expression(field: SchemaField) -> str:
    options = field.calculated_field
    if options is None:
        return "z.function()"
    return f"z.function().implement(({', '.join(options.dependencies)}) => {options.formula})"


def _validation_modifiers(field: SchemaField) -> list[str]:
    """Return validation modifiers in application order.

    optional, min, max, regex, refine, default.

    Args:
        field (SchemaField): Field owning the validations.

    Returns:
        list[str]: Modifier call texts, each starting with a dot.
    """
    options: ValidationOptions | None = field.validations
    if options is None:
        return []

    modifiers: list[str] = []
    if options.required is False:
        modifiers.append(".optional()")
    if options.min is not None:
        modifiers.append(f".min({format_number(options.min)})")
    if options.max is not None:
        modifiers.append(f".max({format_number(options.max)})")
    if options.regex:
        modifiers.append(f".regex(/{options.regex}/)")
    if options.custom:
        modifiers.append(f".refine({options.custom})")
    if options.default is not None and options.default != "":
        modifiers.append(f".default({_default_token(field, options.default)})")
    return modifiers


def _default_token(field: SchemaField, value: str | float | bool) -> str:
    if field.type == SchemaType.STRING:
        return double_quoted(value if isinstance(value, str) else literal_token(value))
    return literal_token(value)


def _describe_modifier(field: SchemaField) -> str:
    arguments = [double_quoted(text) for text in (field.label, field.description) if text]
    if not arguments:
        return ""
    return f".describe({', '.join(arguments)})"
