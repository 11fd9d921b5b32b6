"""Interchange (JSON Schema) documents derived from generated code."""

from schemadesigner.interchange.bridge import (
    ERROR_PREFIX,
    build_evaluator,
    interchange_document,
    render_interchange_document,
)
from schemadesigner.interchange.node import NodeEvaluator
from schemadesigner.interchange.zod_text import ZodTextEvaluator, parse_expression, parse_module, to_json_schema

__all__ = [
    "ERROR_PREFIX",
    "NodeEvaluator",
    "ZodTextEvaluator",
    "build_evaluator",
    "interchange_document",
    "parse_expression",
    "parse_module",
    "render_interchange_document",
    "to_json_schema",
]
