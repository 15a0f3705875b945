"""Parse canonical type expressions into type nodes.

Grammar:
    union     := atom ('|' atom)*
    atom      := '"' chars '"'
               | '[' name ']' templates? signature?
    templates := '<' union (',' union)* '>'
    signature := '(' (union (',' union)*)? ')' (':' atom)?     (only after [function])

The expression of every node produced here renders back to the same text,
modulo whitespace.
"""

from __future__ import annotations

from .model import (
    PRIMITIVE_NAMES,
    Array,
    FunctionType,
    Generic,
    Literal,
    Map,
    Named,
    Primitive,
    TypeNode,
    Union,
)


class TypeSyntaxError(Exception):
    """Malformed type expression with column info."""

    def __init__(self, msg: str, text: str, col: int):
        self.msg: str = msg
        self.text: str = text
        self.col: int = col
        super().__init__(msg + " at col " + str(col) + " in '" + text + "'")


def type_for_name(name: str, templates: tuple[TypeNode, ...] = ()) -> TypeNode:
    """Build the node for a bracketed name with optional templates."""
    if name == "Array":
        return Array(templates)
    if name == "Map":
        return Map(templates)
    if templates:
        return Generic(name, templates)
    if name in PRIMITIVE_NAMES:
        return Primitive(name)
    return Named(name)


class _Parser:
    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def error(self, msg: str) -> TypeSyntaxError:
        return TypeSyntaxError(msg, self.text, self.pos)

    def skip_spaces(self) -> None:
        while self.pos < len(self.text) and self.text[self.pos] == " ":
            self.pos += 1

    def peek(self) -> str:
        self.skip_spaces()
        if self.pos < len(self.text):
            return self.text[self.pos]
        return ""

    def expect(self, c: str) -> None:
        if self.peek() != c:
            raise self.error("expected '" + c + "'")
        self.pos += 1

    def parse_union(self) -> TypeNode:
        variants = [self.parse_atom()]
        while self.peek() == "|":
            self.pos += 1
            variants.append(self.parse_atom())
        if len(variants) == 1:
            return variants[0]
        return Union(tuple(variants))

    def parse_atom(self) -> TypeNode:
        c = self.peek()
        if c == '"':
            end = self.text.find('"', self.pos + 1)
            if end < 0:
                raise self.error("unterminated string literal")
            value = self.text[self.pos + 1 : end]
            self.pos = end + 1
            return Literal(value)
        if c != "[":
            raise self.error("expected '[' or '\"'")
        end = self.text.find("]", self.pos + 1)
        if end < 0:
            raise self.error("unterminated type name")
        name = self.text[self.pos + 1 : end].strip()
        if not name:
            raise self.error("empty type name")
        self.pos = end + 1
        templates: tuple[TypeNode, ...] = ()
        if self.peek() == "<":
            self.pos += 1
            templates = self.parse_list(">")
        if name == "function":
            return self.parse_signature()
        return type_for_name(name, templates)

    def parse_list(self, close: str) -> tuple[TypeNode, ...]:
        items: list[TypeNode] = []
        if self.peek() == close:
            self.pos += 1
            return ()
        items.append(self.parse_union())
        while self.peek() == ",":
            self.pos += 1
            items.append(self.parse_union())
        self.expect(close)
        return tuple(items)

    def parse_signature(self) -> FunctionType:
        if self.peek() != "(":
            return FunctionType()
        self.pos += 1
        args = self.parse_list(")")
        return_type: TypeNode | None = None
        if self.peek() == ":":
            self.pos += 1
            return_type = self.parse_atom()
        return FunctionType(args, return_type)


def parse_type(text: str) -> TypeNode:
    """Parse a canonical expression such as `[null]|[Array]<[string]>`."""
    parser = _Parser(text)
    result = parser.parse_union()
    if parser.peek() != "":
        raise parser.error("unexpected trailing text")
    return result
