"""API model - language-agnostic description of an API surface.

This module defines the input tree consumed by the C# engine. Each node's
docstring documents its semantics and invariants.

Architecture:
    JSON / expression text -> [API model] -> Translator + Renderer -> C# declarations

All nodes are frozen (immutable, hashable). Two type nodes are structurally
equal iff their expressions and nested structures match, which is exactly
dataclass equality. Documentation payloads never take part in equality.
"""

from __future__ import annotations

from dataclasses import dataclass, field


# Built-in scalar names. Any other bare name refers to a declared class or type.
PRIMITIVE_NAMES: frozenset[str] = frozenset(
    {
        "any",
        "boolean",
        "Buffer",
        "float",
        "int",
        "null",
        "path",
        "string",
        "void",
    }
)


# ============================================================
# TYPES
# ============================================================


@dataclass(frozen=True)
class TypeNode:
    """Base for all type nodes. Abstract."""

    @property
    def expression(self) -> str:
        """Canonical textual signature, e.g. `[string]|[Array]<[string]>`."""
        raise NotImplementedError(type(self).__name__)


@dataclass(frozen=True)
class Primitive(TypeNode):
    """Built-in scalar: string, boolean, int, float, null, path, Buffer, any.

    `null` doubles as the absence marker inside unions.
    """

    name: str

    @property
    def expression(self) -> str:
        return "[" + self.name + "]"


@dataclass(frozen=True)
class Named(TypeNode):
    """Reference to a declared class or well-known type (Page, Error, Object).

    A bare `Object` with no structure is the generic-object escape hatch.
    """

    name: str

    @property
    def expression(self) -> str:
        return "[" + self.name + "]"


@dataclass(frozen=True)
class Literal(TypeNode):
    """Quoted string constant. Only meaningful as a union variant."""

    value: str

    @property
    def name(self) -> str:
        return '"' + self.value + '"'

    @property
    def expression(self) -> str:
        return self.name


@dataclass(frozen=True)
class Array(TypeNode):
    """Sequence type.

    Invariants:
    - A well-formed array has exactly one template (its element type)
    - More templates describe a multi-dimensional array, which the
      translator rejects
    """

    templates: tuple[TypeNode, ...]

    @property
    def name(self) -> str:
        return "Array"

    @property
    def element(self) -> TypeNode:
        return self.templates[0]

    @property
    def expression(self) -> str:
        return "[Array]" + _templates_expression(self.templates)


@dataclass(frozen=True)
class Map(TypeNode):
    """Associative map type. Well-formed maps carry exactly two templates."""

    templates: tuple[TypeNode, ...]

    @property
    def name(self) -> str:
        return "Map"

    @property
    def key(self) -> TypeNode:
        return self.templates[0]

    @property
    def value(self) -> TypeNode:
        return self.templates[1]

    @property
    def expression(self) -> str:
        return "[Map]" + _templates_expression(self.templates)


@dataclass(frozen=True)
class ObjectLiteral(TypeNode):
    """Structural, unnamed object type.

    Every object literal shares the expression `[Object]`; the shape lives in
    `properties`, so equality of two literals compares their members.
    """

    properties: tuple[MemberNode, ...]

    @property
    def name(self) -> str:
        return "Object"

    @property
    def expression(self) -> str:
        return "[Object]"


@dataclass(frozen=True)
class Union(TypeNode):
    """Union of variants. Order is significant.

    The first variant drives null unwrapping (`[null]|X`) and enum detection.
    Literal unions carry the enum name declared by the source documentation.
    """

    variants: tuple[TypeNode, ...]
    name: str | None = None

    @property
    def expression(self) -> str:
        return "|".join(v.expression for v in self.variants)


@dataclass(frozen=True)
class FunctionType(TypeNode):
    """Callback type.

    `args` is None when the source gave no argument detail at all, which
    collapses to the simplest no-argument callback.
    """

    args: tuple[TypeNode, ...] | None = None
    return_type: TypeNode | None = None

    @property
    def name(self) -> str:
        return "function"

    @property
    def expression(self) -> str:
        if self.args is None:
            return "[function]"
        result = "[function](" + ", ".join(a.expression for a in self.args) + ")"
        if self.return_type is not None:
            result += ":" + self.return_type.expression
        return result


@dataclass(frozen=True)
class Generic(TypeNode):
    """Generic instantiation: `[Promise]<[Page]>`, `[Object]<[string], [string]>`."""

    name: str
    templates: tuple[TypeNode, ...]

    @property
    def expression(self) -> str:
        return "[" + self.name + "]" + _templates_expression(self.templates)


def _templates_expression(templates: tuple[TypeNode, ...]) -> str:
    if not templates:
        return ""
    return "<" + ", ".join(t.expression for t in templates) + ">"


def is_null(typ: TypeNode) -> bool:
    """Check if typ is the null/absence marker."""
    return isinstance(typ, Primitive) and typ.name == "null"


# ============================================================
# MEMBERS AND CLASSES
# ============================================================


@dataclass(frozen=True)
class MemberNode:
    """One class member, object-literal property, or method parameter.

    | kind     | typ                  | args              |
    |----------|----------------------|-------------------|
    | method   | return type or None  | parameters        |
    | property | property type        | ()                |
    | event    | payload type         | ()                |

    Method parameters are MemberNodes of kind "property".
    """

    name: str
    kind: str
    typ: TypeNode | None = None
    alias: str | None = None
    required: bool = False
    is_async: bool = False
    args: tuple[MemberNode, ...] = ()
    doc: str = field(default="", compare=False)

    @property
    def display_name(self) -> str:
        if self.alias:
            return self.alias
        return self.name


@dataclass(frozen=True)
class ClassNode:
    """A documented API class."""

    name: str
    extends: str | None = None
    members: tuple[MemberNode, ...] = ()
    doc: str = field(default="", compare=False)


@dataclass(frozen=True)
class ApiDocument:
    """The whole API surface, classes in input order."""

    classes: tuple[ClassNode, ...]

    def class_names(self) -> list[str]:
        return [c.name for c in self.classes]
