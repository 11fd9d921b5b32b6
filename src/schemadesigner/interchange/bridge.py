"""Interchange document rendering with failure isolation."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from schemadesigner.generator import generate_zod_schema
from schemadesigner.interchange.node import NodeEvaluator
from schemadesigner.interchange.zod_text import ZodTextEvaluator
from schemadesigner.logging import get_logger
from schemadesigner.settings import Settings, get_settings
from schemadesigner.typing.enums import EvaluatorKind

if TYPE_CHECKING:
    from schemadesigner.typing.models import SchemaField
    from schemadesigner.typing.protocol import SchemaEvaluator

logger = get_logger(__name__)

ERROR_PREFIX = "// Error generating JSON schema: "


def build_evaluator(settings: Settings | None = None) -> SchemaEvaluator:
    """Build the evaluator selected by settings.

    Args:
        settings (Settings | None): Runtime settings, defaults to the cached settings.

    Returns:
        SchemaEvaluator: Configured evaluator.
    """
    config = settings or get_settings()
    if config.evaluator == EvaluatorKind.NODE:
        return NodeEvaluator(
            node_binary=config.node_binary,
            node_modules_path=config.node_modules_path,
            timeout=config.evaluator_timeout,
        )
    return ZodTextEvaluator()


def render_interchange_document(
    code: str,
    name: str,
    evaluator: SchemaEvaluator | None = None,
    *,
    indent: int | None = None,
) -> str:
    """Evaluate generated code and render the resulting JSON Schema document.

    Evaluation failures never propagate: the error message is returned in place
    of the document.

    Args:
        code (str): Generated module text.
        name (str): Root schema name.
        evaluator (SchemaEvaluator | None): Evaluator, defaults to the configured one.
        indent (int | None): JSON indentation, defaults to settings.

    Returns:
        str: Indented JSON document, or `// Error generating JSON schema: <message>`.
    """
    try:
        settings = get_settings()
        active = evaluator or build_evaluator(settings)
        document = active.evaluate(code, name)
        return json.dumps(document, indent=settings.json_indent if indent is None else indent)
    except Exception as exc:  # noqa: BLE001
        logger.warning("Interchange evaluation failed", extra={"schema_name": name, "error": str(exc)})
        return f"{ERROR_PREFIX}{str(exc) or 'Unknown error'}"


def interchange_document(
    field: SchemaField,
    evaluator: SchemaEvaluator | None = None,
    *,
    indent: int | None = None,
) -> str:
    """Generate the Zod module of a field tree and render its interchange document.

    Args:
        field (SchemaField): Root field.
        evaluator (SchemaEvaluator | None): Evaluator, defaults to the configured one.
        indent (int | None): JSON indentation, defaults to settings.

    Returns:
        str: JSON document or error string.
    """
    return render_interchange_document(generate_zod_schema(field), field.name, evaluator, indent=indent)
