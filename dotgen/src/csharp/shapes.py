"""Fixed-shape rules, keyed by canonical type expression.

Each table is matched once, by exact expression, before the general
translation rules run. Add a row here rather than a branch in the translator.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ShapeRule:
    """Exact expression -> fixed C# type."""

    expression: str
    target: str
    underspecified: bool = False  # source should have said `string`


def _index(rules: tuple[ShapeRule, ...]) -> dict[str, ShapeRule]:
    return {r.expression: r for r in rules}


# Checked before any other rule.
TYPE_SHORTCUTS: dict[str, ShapeRule] = _index(
    (
        ShapeRule("[null]|[Error]", "void"),
        ShapeRule('[boolean]|"mixed"', "MixedState"),
    )
)

# Checked for unions after null unwrapping.
UNION_SHAPES: dict[str, ShapeRule] = _index(
    (
        ShapeRule("[string]|[Buffer]", "byte[]"),
        ShapeRule("[string]|[float]", "string", underspecified=True),
        ShapeRule("[string]|[float]|[boolean]", "string", underspecified=True),
        ShapeRule('[float]|"raf"', "Polling"),
    )
)

# Parameter unions that always become exactly two sibling parameters.
PATH_PAIR = "path-pair"
FLAG_VALUES = "flag-values"

PARAMETER_SHAPES: dict[str, str] = {
    "[string]|[path]": PATH_PAIR,
    "[boolean]|[Array]<[string]>": FLAG_VALUES,
}

# A property of this shape serializes under `{name}String`.
STRING_OR_FLOAT = "[string]|[float]"
