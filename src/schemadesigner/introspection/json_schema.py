"""Introspection source over JSON Schema documents."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from schemadesigner.logging import get_logger
from schemadesigner.typing.enums import SchemaShape

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

logger = get_logger(__name__)

_DATE_FORMATS = frozenset({"date", "date-time"})
_NUMERIC_TYPES = frozenset({"number", "integer"})
_MIN_KEYWORDS = ("minimum", "minLength", "minItems")
_MAX_KEYWORDS = ("maximum", "maxLength", "maxItems")
_UNDEFINED = {"not": {}}


@dataclass(frozen=True)
class JsonSchemaSource:
    """One schema node of a JSON Schema document.

    `$ref` pointers into the same document and single-entry `allOf` wrappers are
    resolved on construction, and `anyOf [{"not": {}}, X]` is read as an optional
    `X`. A reference that is already being expanded on the current path makes the
    node report `SchemaShape.OTHER`.
    """

    node: Mapping[str, Any]
    document: Mapping[str, Any]
    optional: bool = False
    collapse_nullable: bool = False
    seen_refs: frozenset[str] = frozenset()
    cyclic: bool = field(default=False, init=False)

    def __post_init__(self) -> None:
        """Resolve references and wrappers of the wrapped node."""
        node, seen_refs, cyclic = _unwrap(self.node, self.document, self.seen_refs)
        optional = self.optional
        if not cyclic:
            present = _collapse_undefined(node)
            if present is not None:
                node, seen_refs, cyclic = _unwrap(present, self.document, seen_refs)
                optional = True
        if self.collapse_nullable and not cyclic:
            collapsed = _collapse_nullable(node)
            if collapsed is not None:
                node, seen_refs, cyclic = _unwrap(collapsed, self.document, seen_refs)
                optional = True
        object.__setattr__(self, "node", node)
        object.__setattr__(self, "seen_refs", seen_refs)
        object.__setattr__(self, "cyclic", cyclic)
        object.__setattr__(self, "optional", optional)

    @classmethod
    def from_document(cls, document: Mapping[str, Any], *, collapse_nullable: bool = False) -> JsonSchemaSource:
        """Wrap the root schema of a document.

        Args:
            document (Mapping[str, Any]): JSON Schema document.
            collapse_nullable (bool): Read `anyOf [X, null]` as an optional `X`.

        Returns:
            JsonSchemaSource: Root source.
        """
        return cls(node=document, document=document, collapse_nullable=collapse_nullable)

    def _child(self, node: Mapping[str, Any], *, optional: bool = False) -> JsonSchemaSource:
        return JsonSchemaSource(
            node=node,
            document=self.document,
            optional=optional,
            collapse_nullable=self.collapse_nullable,
            seen_refs=self.seen_refs,
        )

    def _types(self) -> list[str]:
        declared = self.node.get("type")
        if isinstance(declared, str):
            return [declared]
        if isinstance(declared, list):
            return [entry for entry in declared if isinstance(entry, str)]
        return []

    def _enum_literals(self) -> list[str] | None:
        values = self.node.get("enum")
        if values is None and "const" in self.node:
            values = [self.node["const"]]
        if isinstance(values, list) and values and all(isinstance(value, str) for value in values):
            return list(values)
        return None

    def shape(self) -> SchemaShape:  # noqa: PLR0911
        """Classify the node, testing object, array, enum and union first.

        Returns:
            SchemaShape: Node shape.
        """
        if self.cyclic:
            return SchemaShape.OTHER
        types = self._types()
        if types == ["object"] or "properties" in self.node:
            return SchemaShape.OBJECT
        if types == ["array"] or "items" in self.node:
            return SchemaShape.ARRAY
        if self._enum_literals() is not None:
            return SchemaShape.ENUM
        if self.options():
            return SchemaShape.UNION
        if len(types) == 1 and types[0] in _NUMERIC_TYPES:
            return SchemaShape.NUMBER
        if types == ["boolean"]:
            return SchemaShape.BOOLEAN
        if types == ["string"] and self.node.get("format") in _DATE_FORMATS:
            return SchemaShape.DATE
        if types == ["null"]:
            return SchemaShape.NULL
        return SchemaShape.OTHER

    def properties(self) -> Iterator[tuple[str, JsonSchemaSource]]:
        """Yield properties in document order, optional unless listed as required.

        Yields:
            tuple[str, JsonSchemaSource]: Property name and schema.
        """
        required = set(self.node.get("required") or ())
        for key, sub_schema in (self.node.get("properties") or {}).items():
            if not key:
                logger.debug("Skipping property with empty name")
                continue
            yield key, self._child(_as_node(sub_schema), optional=key not in required)

    def element(self) -> JsonSchemaSource | None:
        """Return the items schema.

        Returns:
            JsonSchemaSource | None: Items schema, first entry of a tuple form.
        """
        items = self.node.get("items")
        if isinstance(items, list):
            items = items[0] if items else None
        if items is None:
            prefix_items = self.node.get("prefixItems")
            items = prefix_items[0] if isinstance(prefix_items, list) and prefix_items else None
        if items is None:
            return None
        return self._child(_as_node(items))

    def enum_values(self) -> list[str]:
        """Return string enum literals.

        Returns:
            list[str]: Literals in document order.
        """
        return self._enum_literals() or []

    def options(self) -> list[JsonSchemaSource]:
        """Return union options from `anyOf`, `oneOf` or a multi-type `type` list.

        Returns:
            list[JsonSchemaSource]: Options in document order.
        """
        for keyword in ("anyOf", "oneOf"):
            choices = self.node.get(keyword)
            if isinstance(choices, list) and choices:
                return [self._child(_as_node(choice)) for choice in choices]
        types = self._types()
        if len(types) > 1:
            return [self._child({"type": declared}) for declared in types]
        return []

    def is_optional(self) -> bool:
        """Return whether the node is not required by its parent or wrapped as optional.

        Returns:
            bool: True when optional.
        """
        return self.optional

    def bounds(self) -> tuple[int | float | None, int | float | None]:
        """Return inclusive bounds: value, length or item count.

        Returns:
            tuple[int | float | None, int | float | None]: `(min, max)`.
        """
        return _first_number(self.node, _MIN_KEYWORDS), _first_number(self.node, _MAX_KEYWORDS)

    def pattern(self) -> str | None:
        """Return the `pattern` keyword.

        Returns:
            str | None: Pattern source.
        """
        pattern = self.node.get("pattern")
        return pattern if isinstance(pattern, str) else None


def _as_node(value: object) -> Mapping[str, Any]:
    """Return a schema node, mapping boolean schemas to empty nodes."""
    if isinstance(value, dict):
        return value
    return {}


def _first_number(node: Mapping[str, Any], keywords: tuple[str, ...]) -> int | float | None:
    for keyword in keywords:
        value = node.get(keyword)
        if isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value):
            return value
    return None


def resolve_pointer(document: Mapping[str, Any], ref: str) -> Mapping[str, Any] | None:
    """Resolve a local JSON pointer reference.

    Args:
        document (Mapping[str, Any]): Document the pointer refers into.
        ref (str): Reference such as `#/$defs/Address`.

    Returns:
        Mapping[str, Any] | None: Target node, or None when unresolvable or external.
    """
    if not ref.startswith("#"):
        return None
    target: Any = document
    for token in filter(None, ref[1:].split("/")):
        key = token.replace("~1", "/").replace("~0", "~")
        if isinstance(target, dict) and key in target:
            target = target[key]
        elif isinstance(target, list) and key.isdigit() and int(key) < len(target):
            target = target[int(key)]
        else:
            return None
    return target if isinstance(target, dict) else None


def _unwrap(
    node: Mapping[str, Any],
    document: Mapping[str, Any],
    seen_refs: frozenset[str],
) -> tuple[Mapping[str, Any], frozenset[str], bool]:
    """Expand `$ref` and single-entry `allOf`, keeping sibling keywords.

    Args:
        node (Mapping[str, Any]): Node to unwrap.
        document (Mapping[str, Any]): Owning document.
        seen_refs (frozenset[str]): References expanded on the current path.

    Returns:
        tuple[Mapping[str, Any], frozenset[str], bool]: Node, updated references, cycle flag.
    """
    while True:
        ref = node.get("$ref")
        if isinstance(ref, str):
            if ref in seen_refs:
                logger.debug("Cyclic schema reference", extra={"ref": ref})
                return node, seen_refs, True
            target = resolve_pointer(document, ref)
            if target is None:
                logger.debug("Unresolvable schema reference", extra={"ref": ref})
                return {key: value for key, value in node.items() if key != "$ref"}, seen_refs, False
            siblings = {key: value for key, value in node.items() if key != "$ref"}
            node = {**target, **siblings}
            seen_refs |= {ref}
            continue
        wrapped = node.get("allOf")
        if isinstance(wrapped, list) and len(wrapped) == 1 and isinstance(wrapped[0], dict):
            siblings = {key: value for key, value in node.items() if key != "allOf"}
            node = {**wrapped[0], **siblings}
            continue
        return node, seen_refs, False


def _collapse_nullable(node: Mapping[str, Any]) -> Mapping[str, Any] | None:
    """Return the non-null branch of a nullable node, None when not nullable."""
    choices = node.get("anyOf")
    if isinstance(choices, list) and len(choices) == 2:  # noqa: PLR2004
        non_null = [choice for choice in choices if not (isinstance(choice, dict) and choice.get("type") == "null")]
        if len(non_null) == 1 and isinstance(non_null[0], dict):
            siblings = {key: value for key, value in node.items() if key != "anyOf"}
            return {**non_null[0], **siblings}
    declared = node.get("type")
    if isinstance(declared, list) and len(declared) == 2 and "null" in declared:  # noqa: PLR2004
        remaining = next((entry for entry in declared if entry != "null"), None)
        if remaining is not None:
            return {**node, "type": remaining}
    return None


def _collapse_undefined(node: Mapping[str, Any]) -> Mapping[str, Any] | None:
    """Return `X` from `anyOf [{"not": {}}, X]`, the optional form outside a property."""
    choices = node.get("anyOf")
    if not (isinstance(choices, list) and len(choices) == 2 and _UNDEFINED in choices):  # noqa: PLR2004
        return None
    present = next((choice for choice in choices if choice != _UNDEFINED), None)
    if not isinstance(present, dict):
        return None
    siblings = {key: value for key, value in node.items() if key != "anyOf"}
    return {**present, **siblings}
