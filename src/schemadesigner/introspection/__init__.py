"""Schema introspection: existing schema objects to field trees."""

from schemadesigner.introspection.introspector import ARRAY_ITEM_NAME, introspect
from schemadesigner.introspection.json_schema import JsonSchemaSource, resolve_pointer
from schemadesigner.introspection.pydantic_models import introspect_model, model_json_schema

__all__ = [
    "ARRAY_ITEM_NAME",
    "JsonSchemaSource",
    "introspect",
    "introspect_model",
    "model_json_schema",
    "resolve_pointer",
]
