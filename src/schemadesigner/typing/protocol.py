"""Interfaces for schema sources and interchange evaluators."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from schemadesigner.typing.enums import SchemaShape


class IntrospectableSchema(Protocol):
    """Capability surface of an existing schema object.

    `shape` reports exactly one case of the closed `SchemaShape` set; the other
    capabilities are only consulted for the matching case.
    """

    def shape(self) -> SchemaShape:
        """Return the shape of this schema.

        Returns:
            SchemaShape: Object, array, enum, union, scalar kind, or `OTHER`.
        """

    def properties(self) -> Iterable[tuple[str, IntrospectableSchema]]:
        """Yield named sub-schemas of an object shape in declaration order.

        Returns:
            Iterable[tuple[str, IntrospectableSchema]]: Property name and sub-schema.
        """

    def element(self) -> IntrospectableSchema | None:
        """Return the element schema of an array shape.

        Returns:
            IntrospectableSchema | None: Element schema, if declared.
        """

    def enum_values(self) -> Sequence[str]:
        """Return the literal values of an enum shape.

        Returns:
            Sequence[str]: Values in declaration order.
        """

    def options(self) -> Sequence[IntrospectableSchema]:
        """Return the options of a union shape.

        Returns:
            Sequence[IntrospectableSchema]: Options in declaration order.
        """

    def is_optional(self) -> bool:
        """Return whether the schema accepts a missing value.

        Returns:
            bool: True when optional.
        """

    def bounds(self) -> tuple[int | float | None, int | float | None]:
        """Return the minimum and maximum bounds.

        Returns:
            tuple[int | float | None, int | float | None]: `(min, max)`, None when absent.
        """

    def pattern(self) -> str | None:
        """Return the string pattern source.

        Returns:
            str | None: Pattern source text, if any.
        """


class SchemaEvaluator(Protocol):
    """Turns generated schema source code into an interchange document."""

    def evaluate(self, code: str, name: str) -> dict[str, Any]:
        """Evaluate generated code.

        Args:
            code: Generated module source.
            name: Root schema name used for the document definitions.

        Returns:
            dict[str, Any]: JSON Schema document.
        """
