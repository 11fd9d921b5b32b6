"""CLI entry point for the schema designer."""

from __future__ import annotations

import argparse
import importlib
import json
import sys
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from schemadesigner import __version__, logger
from schemadesigner.dependencies import ensure_node_evaluator_dependencies
from schemadesigner.exceptions import FieldTreeLoadError, PackageError
from schemadesigner.generator import generate_zod_schema
from schemadesigner.interchange import build_evaluator, interchange_document
from schemadesigner.introspection import JsonSchemaSource, introspect, introspect_model
from schemadesigner.logging import configure_logging
from schemadesigner.samples import SAMPLE_COLLECTIONS, get_sample
from schemadesigner.settings import Settings, get_settings
from schemadesigner.summary import summarize
from schemadesigner.tree import iter_fields
from schemadesigner.typing.enums import EvaluatorKind
from schemadesigner.typing.models import SchemaField


def _add_tree_source(parser: argparse.ArgumentParser) -> None:
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--input", type=Path, dest="input_path", help="Field tree JSON file")
    source.add_argument("--sample", choices=sorted(SAMPLE_COLLECTIONS), dest="sample", help="Built-in sample tree")


def build_parser() -> argparse.ArgumentParser:
    """Create the command-line parser.

    Returns:
        argparse.ArgumentParser: The configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="schemadesigner")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command")

    generate_parser = subparsers.add_parser("generate", help="Generate Zod source from a field tree")
    _add_tree_source(generate_parser)
    generate_parser.add_argument("--output", type=Path, default=None, dest="output_path")

    interchange_parser = subparsers.add_parser("interchange", help="Render the JSON Schema of a field tree")
    _add_tree_source(interchange_parser)
    interchange_parser.add_argument(
        "--evaluator",
        type=EvaluatorKind.from_str,
        default=None,
        dest="evaluator",
        help="python (default) or node",
    )
    interchange_parser.add_argument("--output", type=Path, default=None, dest="output_path")

    introspect_parser = subparsers.add_parser("introspect", help="Build a field tree from an existing schema")
    target = introspect_parser.add_mutually_exclusive_group(required=True)
    target.add_argument("--schema", type=Path, dest="schema_path", help="JSON Schema document")
    target.add_argument("--model", dest="model", help="Pydantic model as 'package.module:Model'")
    introspect_parser.add_argument("--name", default=None, dest="name")
    introspect_parser.add_argument("--output", type=Path, default=None, dest="output_path")

    summary_parser = subparsers.add_parser("summary", help="Print the field tree with validation summaries")
    _add_tree_source(summary_parser)

    subparsers.add_parser("samples", help="List built-in sample trees")

    return parser


def load_field_tree(path: Path) -> SchemaField:
    """Load a field tree from a JSON file.

    Args:
        path (Path): JSON file using wire (camelCase) names.

    Raises:
        FieldTreeLoadError: If the file cannot be read or is not a valid field tree.

    Returns:
        SchemaField: Loaded tree.
    """
    try:
        payload = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise FieldTreeLoadError(message=f"Cannot read field tree {path}: {exc}") from exc
    try:
        field = SchemaField.model_validate_json(payload)
    except ValidationError as exc:
        raise FieldTreeLoadError(message=f"Invalid field tree {path}: {exc}") from exc

    for violation in field.invariant_violations():
        logger.warning("Field tree invariant violated", extra={"violation": violation})
    return field


def load_json_document(path: Path) -> dict[str, Any]:
    """Load a JSON Schema document.

    Args:
        path (Path): JSON file.

    Raises:
        FieldTreeLoadError: If the file cannot be read or is not a JSON object.

    Returns:
        dict[str, Any]: Parsed document.
    """
    try:
        document = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise FieldTreeLoadError(message=f"Cannot load JSON schema {path}: {exc}") from exc
    if not isinstance(document, dict):
        raise FieldTreeLoadError(message=f"JSON schema must be an object: {path}")
    return document


def import_target(reference: str) -> Any:
    """Import `package.module:Attribute`.

    Args:
        reference (str): Import reference.

    Raises:
        FieldTreeLoadError: If the module or attribute cannot be imported.

    Returns:
        Any: Imported object.
    """
    module_name, _, attribute_path = reference.partition(":")
    if not module_name or not attribute_path:
        raise FieldTreeLoadError(message=f"Expected 'package.module:Attribute', got: {reference}")
    try:
        target: Any = importlib.import_module(module_name)
        for attribute in attribute_path.split("."):
            target = getattr(target, attribute)
    except (ImportError, AttributeError) as exc:
        raise FieldTreeLoadError(message=f"Cannot import {reference}: {exc}") from exc
    return target


def render_summary_tree(root: SchemaField) -> str:
    """Render one line per field with its type and validation summary.

    Args:
        root (SchemaField): Tree root.

    Returns:
        str: Indented tree.
    """
    lines: list[str] = []
    for path, field in iter_fields(root):
        line = f"{'  ' * len(path)}{field.name} ({field.type})"
        summary = summarize(field.type, field.validations)
        if summary:
            line += f" [{summary}]"
        lines.append(line)
    return "\n".join(lines)


def _tree_from_args(args: argparse.Namespace) -> SchemaField:
    if args.sample:
        return get_sample(args.sample)
    return load_field_tree(args.input_path)


def _emit(text: str, output_path: Path | None) -> None:
    if output_path is None:
        sys.stdout.write(f"{text}\n")
        return
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(f"{text}\n", encoding="utf-8")
    logger.info("Output written", extra={"output_path": str(output_path)})


def _run_interchange(args: argparse.Namespace, settings: Settings) -> str:
    if args.evaluator is not None:
        settings = settings.model_copy(update={"evaluator": args.evaluator})
    if settings.evaluator == EvaluatorKind.NODE:
        ensure_node_evaluator_dependencies(settings.node_binary)
    return interchange_document(_tree_from_args(args), build_evaluator(settings), indent=settings.json_indent)


def _run_introspect(args: argparse.Namespace) -> str:
    if args.model:
        field = introspect_model(import_target(args.model), args.name)
    else:
        source = JsonSchemaSource.from_document(load_json_document(args.schema_path))
        field = introspect(source, args.name or "root")
    return json.dumps(field.to_payload(), indent=2)


def _run_command(args: argparse.Namespace, settings: Settings) -> str:
    if args.command == "generate":
        return generate_zod_schema(_tree_from_args(args))
    if args.command == "interchange":
        return _run_interchange(args, settings)
    if args.command == "introspect":
        return _run_introspect(args)
    if args.command == "summary":
        return render_summary_tree(_tree_from_args(args))
    return "\n".join(sorted(SAMPLE_COLLECTIONS))


def main(argv: list[str] | None = None) -> int:
    """Run the CLI.

    Args:
        argv (list[str] | None): Arguments, defaults to `sys.argv[1:]`.

    Returns:
        int: Exit code (0 for success, 1 for error).
    """
    settings = get_settings()
    configure_logging(settings=settings)

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    try:
        output = _run_command(args, settings)
        _emit(output, getattr(args, "output_path", None))
    except PackageError:
        logger.exception("Command failed", extra={"command": args.command})
        return 1
    except KeyboardInterrupt:
        logger.info("Command aborted by user")
        return 130
    except Exception:
        logger.exception("Unexpected error", extra={"command": args.command})
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
