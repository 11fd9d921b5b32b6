"""Introspection of pydantic models and annotated types."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, PydanticUserError, TypeAdapter

from schemadesigner.exceptions import FieldTreeLoadError
from schemadesigner.introspection.introspector import introspect
from schemadesigner.introspection.json_schema import JsonSchemaSource
from schemadesigner.logging import get_logger
from schemadesigner.typing.models import SchemaField

logger = get_logger(__name__)


def model_json_schema(target: Any) -> dict[str, Any]:
    """Return the JSON Schema pydantic derives for a model class or a type.

    Args:
        target (Any): `BaseModel` subclass or any type `TypeAdapter` accepts.

    Raises:
        FieldTreeLoadError: If pydantic cannot describe the target.

    Returns:
        dict[str, Any]: JSON Schema document.
    """
    try:
        if isinstance(target, type) and issubclass(target, BaseModel):
            return target.model_json_schema()
        return TypeAdapter(target).json_schema()
    except PydanticUserError as exc:
        raise FieldTreeLoadError(message=f"Cannot build a JSON schema for {target!r}: {exc}") from exc


def introspect_model(target: Any, name: str | None = None) -> SchemaField:
    """Build the field tree describing a pydantic model.

    `Optional[X]` annotations become optional `X` fields instead of unions with
    null.

    Args:
        target (Any): `BaseModel` subclass or any type `TypeAdapter` accepts.
        name (str | None): Root field name, defaults to the class name.

    Returns:
        SchemaField: Reconstructed field tree.
    """
    document = model_json_schema(target)
    root_name = name or getattr(target, "__name__", None) or "root"
    logger.debug("Introspecting pydantic schema", extra={"root_name": root_name})
    return introspect(JsonSchemaSource.from_document(document, collapse_nullable=True), root_name)
