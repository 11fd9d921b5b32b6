"""Core domain model exports."""

from schemadesigner.typing.models.field import CalculatedFieldOptions, SchemaField, ValidationOptions

__all__ = [
    "CalculatedFieldOptions",
    "SchemaField",
    "ValidationOptions",
]
