"""Project enums."""

from __future__ import annotations

from enum import StrEnum


class _EnumMixin(StrEnum):
    """Shared conversion helpers for user-facing enums."""

    @classmethod
    def from_str(cls, value: str) -> _EnumMixin:
        """Parse enum from string.

        Args:
            value: Raw string value.

        Raises:
            ValueError: If the value is not supported.

        Returns:
            _EnumMixin: Parsed enum value.
        """
        try:
            return cls(value)
        except ValueError as exc:
            supported = ", ".join(member.value for member in cls)
            message = f"Unsupported {cls.__name__} value '{value}'. Expected one of: {supported}"
            raise ValueError(message) from exc

    @classmethod
    def coerce(cls, value: str) -> _EnumMixin | str:
        """Return the enum member for a known tag, the raw tag otherwise.

        Args:
            value: Raw tag.

        Returns:
            _EnumMixin | str: Enum member or unchanged tag.
        """
        try:
            return cls(value)
        except ValueError:
            return value

    def to_str(self) -> str:
        """Return string representation.

        Returns:
            str: Enum string value.
        """
        return self.value


class SchemaType(_EnumMixin):
    """Field types a schema tree can describe."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"
    ENUM = "enum"
    UNION = "union"
    DATE = "date"
    FILE = "file"
    CALCULATED = "calculated"


class UnionMember(_EnumMixin):
    """Primitive tags allowed as union options."""

    NULL = "null"
    UNDEFINED = "undefined"
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"


class SchemaShape(_EnumMixin):
    """Closed set of shapes an introspectable schema can report."""

    OBJECT = "object"
    ARRAY = "array"
    ENUM = "enum"
    UNION = "union"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"
    NULL = "null"
    OTHER = "other"


class EvaluatorKind(_EnumMixin):
    """Evaluator used to derive interchange documents from generated code."""

    PYTHON = "python"
    NODE = "node"
