"""Schema designer package: field trees, Zod generation and schema introspection."""

from schemadesigner.exceptions import (
    DependencyError,
    EvaluationError,
    FieldTreeError,
    FieldTreeLoadError,
    PackageError,
    SettingsError,
)
from schemadesigner.logging import configure_logging, get_logger
from schemadesigner.settings import Settings, get_settings

__version__ = "0.1.0"

# Initialize package logger at import time via `get_logger`.
logger = get_logger("schemadesigner")

from schemadesigner.generator import generate, generate_zod_schema  # noqa: E402
from schemadesigner.introspection import introspect, introspect_model  # noqa: E402
from schemadesigner.summary import summarize  # noqa: E402
from schemadesigner.typing import SchemaField, SchemaType, ValidationOptions  # noqa: E402

__all__ = [
    "DependencyError",
    "EvaluationError",
    "FieldTreeError",
    "FieldTreeLoadError",
    "PackageError",
    "SchemaField",
    "SchemaType",
    "Settings",
    "SettingsError",
    "ValidationOptions",
    "__version__",
    "configure_logging",
    "generate",
    "generate_zod_schema",
    "get_logger",
    "get_settings",
    "introspect",
    "introspect_model",
    "logger",
    "summarize",
]
