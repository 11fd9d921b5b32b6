"""Field tree domain models."""

from __future__ import annotations

from collections import Counter

from pydantic import BaseModel, ConfigDict, Field, field_validator

from schemadesigner.typing.enums import SchemaType, UnionMember

_SCALAR_TYPES = frozenset(
    {
        SchemaType.STRING,
        SchemaType.NUMBER,
        SchemaType.BOOLEAN,
        SchemaType.DATE,
        SchemaType.FILE,
        SchemaType.ENUM,
        SchemaType.UNION,
        SchemaType.CALCULATED,
    },
)


class ValidationOptions(BaseModel):
    """Validation attributes attached to a field.

    `min`/`max` are length bounds for strings and arrays and value bounds for
    numbers and must be finite. `custom` and `default` are opaque source text.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, allow_inf_nan=False)

    required: bool | None = None
    min: int | float | None = None
    max: int | float | None = None
    regex: str | None = None
    custom: str | None = None
    default: str | int | float | bool | None = None


class CalculatedFieldOptions(BaseModel):
    """Dependencies and formula of a calculated field."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    dependencies: tuple[str, ...] = ()
    formula: str = ""


class SchemaField(BaseModel):
    """Node of a field tree.

    The payload that matters depends on `type`: `children` for objects (one per
    property, in order) and arrays (element template in `children[0]`),
    `enum_values` for enums, `union_types` for unions and `calculated_field`
    for calculated fields. Payload that does not match the type is ignored.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    name: str = Field(min_length=1)
    type: SchemaType | str
    description: str | None = None
    label: str | None = None
    validations: ValidationOptions | None = None
    children: tuple[SchemaField, ...] = ()
    enum_values: tuple[str, ...] = Field(default=(), alias="enumValues")
    union_types: tuple[UnionMember | str, ...] = Field(default=(), alias="unionTypes")
    calculated_field: CalculatedFieldOptions | None = Field(default=None, alias="calculatedField")

    @field_validator("type", mode="before")
    @classmethod
    def _coerce_type(cls, value: object) -> object:
        """Map known type tags onto `SchemaType`, keep unknown tags as-is."""
        if isinstance(value, str):
            return SchemaType.coerce(value)
        return value

    @field_validator("union_types", mode="before")
    @classmethod
    def _coerce_union_types(cls, value: object) -> object:
        """Map known union tags onto `UnionMember`, keep unknown tags as-is."""
        if isinstance(value, (list, tuple)):
            return tuple(UnionMember.coerce(tag) if isinstance(tag, str) else tag for tag in value)
        return value

    def to_payload(self) -> dict[str, object]:
        """Return the JSON-ready payload using wire (camelCase) names.

        Returns:
            dict[str, object]: Compact payload without unset attributes.
        """
        return self.model_dump(mode="json", by_alias=True, exclude_none=True, exclude_defaults=True)

    def invariant_violations(self, *, prefix: str = "") -> list[str]:
        """List payload/type mismatches in this subtree.

        Nothing here is fatal: consumers ignore mismatched payload. The list is
        meant for warnings.

        Args:
            prefix (str): Dotted path of the parent field.

        Returns:
            list[str]: One message per violation, prefixed with the field path.
        """
        path = f"{prefix}.{self.name}" if prefix else self.name
        violations = [f"{path}: {message}" for message in self._own_violations()]
        for child in self.children:
            violations.extend(child.invariant_violations(prefix=path))
        return violations

    def _own_violations(self) -> list[str]:
        messages: list[str] = []
        if self.type in _SCALAR_TYPES and self.children:
            messages.append(f"children are ignored for {self.type} fields")
        if self.type == SchemaType.ARRAY and len(self.children) > 1:
            messages.append("only the first child of an array is used")
        if self.type == SchemaType.ENUM and not self.enum_values:
            messages.append("enum field has no enumValues")
        if self.type != SchemaType.ENUM and self.enum_values:
            messages.append("enumValues are ignored outside enum fields")
        if self.type == SchemaType.UNION and not self.union_types:
            messages.append("union field has no unionTypes")
        if self.type != SchemaType.UNION and self.union_types:
            messages.append("unionTypes are ignored outside union fields")
        if self.type == SchemaType.CALCULATED and self.calculated_field is None:
            messages.append("calculated field has no calculatedField options")
        if self.type != SchemaType.CALCULATED and self.calculated_field is not None:
            messages.append("calculatedField is ignored outside calculated fields")
        if self.validations is not None and self.validations.regex and self.type != SchemaType.STRING:
            messages.append("regex only applies to string fields")
        if self.type == SchemaType.OBJECT:
            duplicates = sorted(name for name, count in Counter(c.name for c in self.children).items() if count > 1)
            messages.extend(f"duplicate child name '{name}'" for name in duplicates)
        return messages
