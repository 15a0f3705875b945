"""Method parameter processing and union overload expansion.

C# can't declare a parameter of type `string | int`, so a union parameter the
translator can't resolve is exploded: one overload per variant, with every
other parameter held fixed. Two recurring shapes are instead split into a
fixed pair of sibling parameters (see shapes.PARAMETER_SHAPES).

An optional exploded parameter also gets an overload that omits it entirely,
so a call passing none of the variants stays unambiguous.
"""

from __future__ import annotations

import itertools
import re
from dataclasses import dataclass, field

from src.api.model import MemberNode, ObjectLiteral, Union, is_null

from .casing import argument_name, upper_first
from .context import NULLABLE_TYPES, GenerationContext
from .errors import OverloadError, ShapeError, UnknownShapeError
from .naming import synthesize_name
from .shapes import FLAG_VALUES, PARAMETER_SHAPES, PATH_PAIR
from .translate import translate_type
from .xmldoc import render_text

OPTIONS_NAME = "options"
TIMEOUT_NAME = "timeout"
DECIMAL_TYPES: frozenset[str] = frozenset({"decimal", "float"})

# Waiters that already take what they wait for as arguments.
WAITER_EXEMPTIONS: frozenset[str] = frozenset(
    {
        "WaitForTimeoutAsync",
        "WaitForFunctionAsync",
        "WaitForLoadStateAsync",
        "WaitForURLAsync",
        "WaitForSelectorAsync",
        "WaitForElementStateAsync",
    }
)
WAITER_MARKER = "WaitFor"

_ENUMERABLE = re.compile(r"IEnumerable<(.*)>")
_FIRST_WORD = re.compile(r"^[\s\"']*(\w+)")


@dataclass
class Param:
    """One rendered parameter: `string name = default`."""

    decl: str
    name: str
    optional: bool = False


@dataclass
class UnionParam:
    """Placeholder for an exploded parameter, one Param per variant."""

    source: str
    variants: list[Param] = field(default_factory=list)
    required: bool = False


def declaration(typ: str, name: str, required: bool) -> Param:
    if required:
        return Param(typ + " " + name, name)
    suffix = "?" if typ in NULLABLE_TYPES else ""
    return Param(typ + suffix + " " + name + " = default", name, optional=True)


def variant_tag(typ: str) -> str:
    """Capitalized parameter-name tag for a translated variant type."""
    non_generic = _ENUMERABLE.sub(lambda m: "Enumerable" + upper_first(m.group(1)), typ)
    match = _FIRST_WORD.match(non_generic)
    tag = match.group(1) if match else non_generic
    return upper_first(tag)


class ParamList:
    """Parameters of one method, in declaration order, plus their docs."""

    def __init__(self, ctx: GenerationContext, member: MemberNode, parent: str) -> None:
        self.ctx = ctx
        self.member = member
        self.parent = parent
        self.slots: list[Param | UnionParam] = []
        self.docs: dict[str, list[str]] = {}

    def add_doc(self, name: str, lines: list[str]) -> None:
        if name.startswith("@"):
            name = name[1:]
        if name in self.docs:
            raise OverloadError(
                "parameter " + name + " of " + self.parent + "." + self.member.name
                + " already exists in the docs"
            )
        self.docs[name] = lines

    def doc_for(self, param: Param) -> list[str]:
        return self.docs.get(param.name.lstrip("@"), [])

    def process_all(self, args: tuple[MemberNode, ...]) -> None:
        """Process arguments with any options bag moved to the back."""
        ordered = sorted(args, key=lambda a: OPTIONS_NAME in (a.name, a.alias))
        for arg in ordered:
            self.process(arg)

    def process(self, arg: MemberNode) -> None:
        if arg.typ is None:
            raise UnknownShapeError(
                "argument " + arg.name + " of " + self.parent + "." + self.member.name + " has no type"
            )
        if arg.name == OPTIONS_NAME:
            self._flatten_options(arg)
            return
        shape = PARAMETER_SHAPES.get(arg.typ.expression)
        if shape == PATH_PAIR:
            self._path_pair(arg)
            return
        if shape == FLAG_VALUES:
            self._flag_values(arg)
            return

        name = argument_name(arg.display_name)
        typ = translate_type(
            self.ctx,
            arg.typ,
            self.parent,
            lambda t: synthesize_name(self.ctx, t, self.parent, self.member, arg.display_name),
        )
        if typ is None:
            if not isinstance(arg.typ, Union):
                raise UnknownShapeError("no C# type for " + arg.typ.expression)
            self._explode(arg, name, arg.typ)
            return

        self.add_doc(name, render_text(arg.doc))
        if arg.name == TIMEOUT_NAME and typ in DECIMAL_TYPES:
            self.slots.append(Param("int timeout = 0", "timeout", optional=True))
            return
        self.slots.append(declaration(typ, name, arg.required))

    def _flatten_options(self, arg: MemberNode) -> None:
        typ = arg.typ
        if isinstance(typ, Union) and len(typ.variants) == 2 and is_null(typ.variants[0]):
            typ = typ.variants[1]
        if not isinstance(typ, ObjectLiteral):
            raise ShapeError(
                "options of " + self.parent + "." + self.member.name + " is not an object literal"
            )
        for prop in typ.properties:
            self.process(prop)

    def _path_pair(self, arg: MemberNode) -> None:
        name = argument_name(arg.name)
        self.slots.append(Param("string " + name + " = null", name, optional=True))
        self.slots.append(Param("string " + name + "Path = null", name + "Path", optional=True))
        self.add_doc(name, render_text(arg.doc))
        self.add_doc(
            name + "Path",
            ['Instead of specifying <paramref name="' + name + '"/>, gives the file name to load from.'],
        )

    def _flag_values(self, arg: MemberNode) -> None:
        assert isinstance(arg.typ, Union)
        name = argument_name(arg.name)
        flag_type = translate_type(self.ctx, arg.typ.variants[0], self.parent, _no_fallback)
        values_type = translate_type(self.ctx, arg.typ.variants[1], self.parent, _no_fallback)
        if flag_type is None or values_type is None:
            raise ShapeError("could not split " + arg.typ.expression + " for " + name)
        self.slots.append(declaration(flag_type, name, arg.required))
        self.slots.append(declaration(values_type, name + "Values", arg.required))
        self.add_doc(name, render_text(arg.doc))
        self.add_doc(
            name + "Values",
            [
                'The values to take into account when <paramref name="'
                + name
                + '"/> is <code>true</code>.'
            ],
        )

    def _explode(self, arg: MemberNode, name: str, union: Union) -> None:
        variants = union.variants
        required = arg.required
        # `[null]|A|B` is an optional A|B.
        if variants and is_null(variants[0]):
            variants = variants[1:]
            required = False
        translated: list[str] = []
        for variant in variants:
            typ = translate_type(
                self.ctx,
                variant,
                self.parent,
                lambda t: synthesize_name(self.ctx, t, self.parent, self.member, arg.display_name),
            )
            if typ is None:
                raise ShapeError(
                    "unexpected nested union " + variant.expression + " in argument " + name
                )
            translated.append(typ)
        doc = render_text(arg.doc)
        slot = UnionParam(name, required=required)
        used: set[str] = set()
        for typ in translated:
            variant_name = name + variant_tag(typ)
            base, n = variant_name, 2
            while variant_name in used:
                variant_name = base + str(n)
                n += 1
            used.add(variant_name)
            slot.variants.append(Param(typ + " " + variant_name, variant_name))
            self.add_doc(variant_name, doc)
        self.slots.append(slot)

    def add_waiter_action(self, method_name: str) -> None:
        """Waiters take the action that triggers the awaited event."""
        if WAITER_MARKER not in method_name or method_name in WAITER_EXEMPTIONS:
            return
        action = Param("Func<Task> action = default", "action", optional=True)
        index = len(self.slots)
        for i, slot in enumerate(self.slots):
            if isinstance(slot, Param) and slot.optional:
                index = i
                break
        self.slots.insert(index, action)
        self.add_doc("action", ["Action to perform while waiting"])

    def overloads(self) -> list[list[Param]]:
        """One parameter list per overload, in declaration order."""
        unions = [s for s in self.slots if isinstance(s, UnionParam)]
        if not unions:
            return [[s for s in self.slots if isinstance(s, Param)]]
        result: list[list[Param]] = []
        for combo in itertools.product(*(u.variants for u in unions)):
            picks = iter(combo)
            result.append(
                [next(picks) if isinstance(s, UnionParam) else s for s in self.slots]
            )
        if all(u.required for u in unions):
            return result
        omitted: list[Param] = []
        for slot in self.slots:
            if isinstance(slot, UnionParam):
                if slot.required:
                    raise OverloadError(
                        "unsupported required union argument " + slot.source
                        + " combined with an optional union inside " + self.member.name
                    )
                continue
            omitted.append(slot)
        result.append(omitted)
        return result


def _no_fallback(typ) -> str:
    raise UnknownShapeError("no naming context for " + typ.expression)
