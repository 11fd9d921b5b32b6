"""Typing-centric domain modules."""

from schemadesigner.typing.enums import EvaluatorKind, SchemaShape, SchemaType, UnionMember
from schemadesigner.typing.models import CalculatedFieldOptions, SchemaField, ValidationOptions
from schemadesigner.typing.protocol import IntrospectableSchema, SchemaEvaluator

__all__ = [
    "CalculatedFieldOptions",
    "EvaluatorKind",
    "IntrospectableSchema",
    "SchemaEvaluator",
    "SchemaField",
    "SchemaShape",
    "SchemaType",
    "UnionMember",
    "ValidationOptions",
]
