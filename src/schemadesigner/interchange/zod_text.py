"""Pure-Python evaluation of generated Zod modules into JSON Schema documents.

The evaluator reads the expression grammar the generator emits and never
executes any of the embedded source text: refinements, formulas and
`implement` bodies are skipped as balanced opaque arguments.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import Any

from schemadesigner.exceptions import EvaluationError

JSON_SCHEMA_DRAFT = "http://json-schema.org/draft-07/schema#"

_IDENTIFIER = re.compile(r"[A-Za-z_$][\w$]*")
_NUMBER = re.compile(r"-?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_REGEX_FLAGS = re.compile(r"[a-z]*")
_PRIMITIVES = frozenset(
    {"string", "number", "bigint", "boolean", "date", "undefined", "null", "void", "any", "unknown", "never", "symbol"},
)
_COERCIBLE = frozenset({"string", "number", "bigint", "boolean", "date"})
_BOUNDED = frozenset({"string", "number", "array", "date"})
_TYPE_LIST_KINDS = {"string": "string", "number": "number", "boolean": "boolean", "null": "null", "bigint": "integer"}
_CLOSERS = {"(": ")", "[": "]", "{": "}"}
_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "b": "\b", "f": "\f", "v": "\v", "0": "\0"}


@dataclass
class ZodNode:
    """Schema described by one parsed Zod expression."""

    kind: str
    properties: list[tuple[str, ZodNode]] = field(default_factory=list)
    element: ZodNode | None = None
    values: list[str] = field(default_factory=list)
    options: list[ZodNode] = field(default_factory=list)
    minimum: float | None = None
    maximum: float | None = None
    pattern: str | None = None
    optional: bool = False
    has_default: bool = False
    default: Any = None
    description: str | None = None

    def is_plain(self) -> bool:
        """Return whether the node carries no keyword besides its type."""
        return (
            self.minimum is None
            and self.maximum is None
            and self.pattern is None
            and not self.has_default
            and self.description is None
            and not self.optional
        )


class ZodTextEvaluator:
    """Evaluator reading generated Zod source without running it."""

    def evaluate(self, code: str, name: str) -> dict[str, Any]:
        """Convert a generated module into a draft-07 JSON Schema document.

        Args:
            code (str): Generated module text.
            name (str): Definition name of the root schema.

        Raises:
            EvaluationError: If the code is outside the supported grammar.

        Returns:
            dict[str, Any]: Document referencing `#/definitions/<name>`.
        """
        node = parse_module(code)
        return {
            "$ref": f"#/definitions/{name}",
            "definitions": {name: to_json_schema(node)},
            "$schema": JSON_SCHEMA_DRAFT,
        }


def parse_module(code: str) -> ZodNode:
    """Parse `import ...; const X = <expr>; export default X;`.

    Args:
        code (str): Module text.

    Returns:
        ZodNode: Schema bound to the default export.
    """
    return _Parser(code).module()


def parse_expression(text: str) -> ZodNode:
    """Parse a single Zod expression such as `z.string().min(1)`.

    Args:
        text (str): Expression text.

    Returns:
        ZodNode: Parsed schema.
    """
    parser = _Parser(text)
    node = parser.expression()
    parser.end()
    return node


def to_json_schema(node: ZodNode) -> dict[str, Any]:
    """Render a parsed node as a JSON Schema fragment.

    An optional node outside an object property is written as
    `{"anyOf": [{"not": {}}, X]}`; properties record optionality through the
    parent's `required` list instead.

    Args:
        node (ZodNode): Parsed schema.

    Returns:
        dict[str, Any]: JSON Schema fragment.
    """
    schema = _type_schema(node)
    if node.optional:
        schema = {"anyOf": [{"not": {}}, schema]}
    return _annotate(schema, node)


def _property_schema(node: ZodNode) -> dict[str, Any]:
    return _annotate(_type_schema(node), node)


def _annotate(schema: dict[str, Any], node: ZodNode) -> dict[str, Any]:
    if node.has_default:
        schema["default"] = node.default
    _put(schema, "description", node.description)
    return schema


def _type_schema(node: ZodNode) -> dict[str, Any]:  # noqa: C901, PLR0912
    kind = node.kind
    schema: dict[str, Any]
    if kind == "string":
        schema = {"type": "string"}
        _put(schema, "minLength", node.minimum)
        _put(schema, "maxLength", node.maximum)
        _put(schema, "pattern", node.pattern)
    elif kind == "number":
        schema = {"type": "number"}
        _put(schema, "minimum", node.minimum)
        _put(schema, "maximum", node.maximum)
    elif kind == "bigint":
        schema = {"type": "integer", "format": "int64"}
    elif kind == "boolean":
        schema = {"type": "boolean"}
    elif kind == "date":
        schema = {"type": "string", "format": "date-time"}
    elif kind == "null":
        schema = {"type": "null"}
    elif kind in {"undefined", "void", "never"}:
        schema = {"not": {}}
    elif kind == "object":
        schema = {"type": "object", "properties": {key: _property_schema(value) for key, value in node.properties}}
        required = [key for key, value in node.properties if not (value.optional or value.has_default)]
        if required:
            schema["required"] = required
        schema["additionalProperties"] = False
    elif kind == "array":
        schema = {"type": "array"}
        if node.element is not None:
            schema["items"] = to_json_schema(node.element)
        _put(schema, "minItems", node.minimum)
        _put(schema, "maxItems", node.maximum)
    elif kind == "enum":
        schema = {"type": "string", "enum": list(node.values)}
    elif kind == "union":
        schema = _union_schema(node)
    else:
        schema = {}
    return schema


def _union_schema(node: ZodNode) -> dict[str, Any]:
    if node.options and all(option.kind in _TYPE_LIST_KINDS and option.is_plain() for option in node.options):
        types = list(dict.fromkeys(_TYPE_LIST_KINDS[option.kind] for option in node.options))
        return {"type": types if len(types) > 1 else types[0]}
    return {"anyOf": [to_json_schema(option) for option in node.options]}


def _put(schema: dict[str, Any], key: str, value: object) -> None:
    if value is None:
        return
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    schema[key] = value


class _Parser:
    """Recursive-descent reader over generated module text."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def error(self, message: str) -> EvaluationError:
        return EvaluationError(message=message, position=self.pos)

    def skip_ws(self, *, comments: bool = True) -> None:
        while self.pos < len(self.text):
            if self.text[self.pos].isspace():
                self.pos += 1
            elif comments and self.text.startswith("//", self.pos):
                newline = self.text.find("\n", self.pos)
                self.pos = len(self.text) if newline == -1 else newline + 1
            elif comments and self.text.startswith("/*", self.pos):
                closing = self.text.find("*/", self.pos + 2)
                if closing == -1:
                    raise self.error("Unterminated comment")
                self.pos = closing + 2
            else:
                return

    def peek(self, token: str) -> bool:
        self.skip_ws()
        return self.text.startswith(token, self.pos)

    def accept(self, token: str) -> bool:
        if self.peek(token):
            self.pos += len(token)
            return True
        return False

    def expect(self, token: str) -> None:
        if not self.accept(token):
            found = self.text[self.pos : self.pos + 12] or "end of input"
            raise self.error(f"Unexpected token: expected '{token}', found '{found}'")

    def identifier(self) -> str:
        self.skip_ws()
        match = _IDENTIFIER.match(self.text, self.pos)
        if match is None:
            raise self.error("Unexpected token: expected an identifier")
        self.pos = match.end()
        return match.group()

    def end(self) -> None:
        self.skip_ws()
        if self.pos != len(self.text):
            raise self.error("Unexpected trailing content")

    def module(self) -> ZodNode:
        while self.peek("import"):
            terminator = self.text.find(";", self.pos)
            if terminator == -1:
                raise self.error("Unterminated import statement")
            self.pos = terminator + 1
        self.expect("const")
        declared = self.identifier()
        self.expect("=")
        node = self.expression()
        self.expect(";")
        self.expect("export")
        self.expect("default")
        exported = self.identifier()
        if exported != declared:
            raise self.error(f"{exported} is not defined")
        self.accept(";")
        self.end()
        return node

    def expression(self) -> ZodNode:
        namespace = self.identifier()
        if namespace != "z":
            raise self.error(f"{namespace} is not defined")
        self.expect(".")
        node = self.constructor()
        while self.accept("."):
            self.modifier(node)
        return node

    def constructor(self) -> ZodNode:  # noqa: PLR0911
        name = self.identifier()
        if name == "coerce":
            self.expect(".")
            target = self.identifier()
            if target not in _COERCIBLE:
                raise self.error(f"z.coerce.{target} is not a function")
            self.empty_call()
            return ZodNode(kind=target)
        if name in _PRIMITIVES:
            self.empty_call()
            return ZodNode(kind=name)
        if name == "object":
            return self.object_call()
        if name == "array":
            self.expect("(")
            if self.accept(")"):
                return ZodNode(kind="array")
            element = self.expression()
            self.expect(")")
            return ZodNode(kind="array", element=element)
        if name == "enum":
            self.expect("(")
            values = self.list_of(self.string_literal)
            self.expect(")")
            return ZodNode(kind="enum", values=values)
        if name == "union":
            self.expect("(")
            if self.peek(")"):
                raise self.error("z.union() requires an array of options")
            options = self.list_of(self.expression)
            self.expect(")")
            return ZodNode(kind="union", options=options)
        if name == "function":
            self.empty_call()
            return ZodNode(kind="function")
        raise self.error(f"z.{name} is not a function")

    def empty_call(self) -> None:
        self.expect("(")
        self.expect(")")

    def object_call(self) -> ZodNode:
        self.expect("(")
        self.expect("{")
        properties: list[tuple[str, ZodNode]] = []
        while not self.accept("}"):
            key = self.string_literal() if self.peek("'") or self.peek('"') else self.identifier()
            self.expect(":")
            properties.append((key, self.expression()))
            if not self.accept(","):
                self.expect("}")
                break
        self.expect(")")
        return ZodNode(kind="object", properties=properties)

    def list_of(self, read_item: Any) -> list[Any]:
        self.expect("[")
        items: list[Any] = []
        while not self.accept("]"):
            items.append(read_item())
            if not self.accept(","):
                self.expect("]")
                break
        return items

    def modifier(self, node: ZodNode) -> None:  # noqa: C901, PLR0912
        method = self.identifier()
        if method == "optional":
            self.empty_call()
            node.optional = True
        elif method in {"min", "max"}:
            if node.kind not in _BOUNDED:
                raise self.error(f"{method} is not a function on z.{node.kind}()")
            self.expect("(")
            value = self.number_literal()
            self.expect(")")
            if node.kind != "date":
                setattr(node, "minimum" if method == "min" else "maximum", value)
        elif method == "regex":
            if node.kind != "string":
                raise self.error(f"regex is not a function on z.{node.kind}()")
            self.expect("(")
            node.pattern = self.regex_literal()
            self.expect(")")
        elif method in {"refine", "implement"}:
            if method == "implement" and node.kind != "function":
                raise self.error(f"implement is not a function on z.{node.kind}()")
            self.opaque_arguments()
        elif method == "default":
            node.default = _literal_value(self.opaque_arguments().strip(), self)
            node.has_default = True
        elif method == "describe":
            self.expect("(")
            arguments = [] if self.peek(")") else [self.string_literal()]
            while self.accept(","):
                arguments.append(self.string_literal())
            self.expect(")")
            if arguments:
                node.description = arguments[0]
        else:
            raise self.error(f"{method} is not a function")

    def number_literal(self) -> float:
        self.skip_ws()
        match = _NUMBER.match(self.text, self.pos)
        if match is None:
            raise self.error("Unexpected token: expected a number")
        self.pos = match.end()
        number = float(match.group())
        return int(number) if number.is_integer() else number

    def string_literal(self) -> str:
        self.skip_ws()
        quote = self.text[self.pos : self.pos + 1]
        if quote not in {"'", '"'}:
            raise self.error("Unexpected token: expected a string")
        self.pos += 1
        chars: list[str] = []
        while self.pos < len(self.text):
            char = self.text[self.pos]
            if char == quote:
                self.pos += 1
                return "".join(chars)
            if char == "\\":
                chars.append(self.escape())
                continue
            if char == "\n":
                break
            chars.append(char)
            self.pos += 1
        raise self.error("Unterminated string literal")

    def escape(self) -> str:
        escaped = self.text[self.pos + 1 : self.pos + 2]
        if escaped == "u":
            digits = self.text[self.pos + 2 : self.pos + 6]
            try:
                value = chr(int(digits, 16))
            except ValueError as exc:
                raise self.error("Invalid unicode escape sequence") from exc
            self.pos += 6
            return value
        self.pos += 2
        return _ESCAPES.get(escaped, escaped)

    def regex_literal(self) -> str:
        self.skip_ws(comments=False)
        if not self.text.startswith("/", self.pos):
            raise self.error("Unexpected token: expected a regular expression")
        start = self.pos + 1
        cursor = start
        in_class = False
        while cursor < len(self.text):
            char = self.text[cursor]
            if char == "\\":
                cursor += 2
                continue
            if char == "\n":
                break
            if char == "[":
                in_class = True
            elif char == "]":
                in_class = False
            elif char == "/" and not in_class:
                source = self.text[start:cursor]
                flags = _REGEX_FLAGS.match(self.text, cursor + 1)
                self.pos = flags.end() if flags else cursor + 1
                return source
            cursor += 1
        raise self.error("Invalid regular expression: missing /")

    def opaque_arguments(self) -> str:
        """Return the raw text between balanced parentheses."""
        self.expect("(")
        start = self.pos
        stack = [")"]
        cursor = self.pos
        while cursor < len(self.text):
            char = self.text[cursor]
            if char in {"'", '"', "`"}:
                cursor = self._skip_quoted(cursor)
                continue
            if char in _CLOSERS:
                stack.append(_CLOSERS[char])
            elif char in {")", "]", "}"}:
                if char != stack.pop():
                    break
                if not stack:
                    self.pos = cursor + 1
                    return self.text[start:cursor]
            cursor += 1
        self.pos = cursor
        raise self.error("Unbalanced argument list")

    def _skip_quoted(self, cursor: int) -> int:
        quote = self.text[cursor]
        cursor += 1
        while cursor < len(self.text):
            char = self.text[cursor]
            if char == "\\":
                cursor += 2
                continue
            if char == quote:
                return cursor + 1
            cursor += 1
        self.pos = cursor
        raise self.error("Unterminated string literal")


def _literal_value(token: str, parser: _Parser) -> Any:
    """Evaluate a default argument limited to literal tokens."""
    if not token:
        return None
    if token[0] in {"'", '"'}:
        literal = _Parser(token)
        value = literal.string_literal()
        literal.end()
        return value
    if token == "undefined":
        return None
    try:
        return json.loads(token)
    except ValueError:
        pass
    if _IDENTIFIER.fullmatch(token):
        raise parser.error(f"{token} is not defined")
    raise parser.error(f"Cannot evaluate default value: {token}")
