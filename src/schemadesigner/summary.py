"""Short human-readable labels for field validations."""

from __future__ import annotations

from collections.abc import Mapping

from schemadesigner.literals import format_number
from schemadesigner.typing.enums import SchemaType
from schemadesigner.typing.models import ValidationOptions


def _option(validations: ValidationOptions | Mapping[str, object], key: str) -> object:
    if isinstance(validations, Mapping):
        return validations.get(key)
    return getattr(validations, key, None)


def summarize(
    field_type: SchemaType | str,  # noqa: ARG001
    validations: ValidationOptions | Mapping[str, object] | None,
) -> str:
    """Summarize validation options as a comma-separated label list.

    `required` is only listed when explicitly truthy, unlike the generator which
    treats anything but `required=False` as required.

    Args:
        field_type (SchemaType | str): Field type, kept for display callers.
        validations (ValidationOptions | Mapping[str, object] | None): Validation options.

    Returns:
        str: e.g. `"required, min: 3"`, or an empty string without validations.
    """
    if validations is None:
        return ""

    parts: list[str] = []
    if _option(validations, "required"):
        parts.append("required")
    for bound in ("min", "max"):
        value = _option(validations, bound)
        if isinstance(value, (int, float)):
            parts.append(f"{bound}: {format_number(value)}")
        elif value is not None:
            parts.append(f"{bound}: {value}")
    if _option(validations, "regex"):
        parts.append("regex")
    if _option(validations, "custom"):
        parts.append("custom")
    return ", ".join(parts)
