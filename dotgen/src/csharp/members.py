"""Render class and model members into C# declaration lines."""

from __future__ import annotations

from src.api.model import (
    Array,
    Generic,
    MemberNode,
    Named,
    ObjectLiteral,
    TypeNode,
)

from .casing import member_name
from .context import NULLABLE_TYPES, GenerationContext
from .errors import ShapeError, UnknownShapeError
from .naming import synthesize_name, synthesize_result_name
from .overloads import ParamList
from .shapes import STRING_OR_FLOAT
from .translate import translate_type
from .xmldoc import render_param, render_summary

# Zero-argument methods starting with these stay methods.
METHOD_VERB_PREFIXES: tuple[str, ...] = ("Get", "As")

GENERIC_PLACEHOLDER = "T"
STRING_PAIR = "[Object]<[string], [string]>"


def render_member(
    ctx: GenerationContext,
    member: MemberNode,
    parent: str,
    out: list[str],
    in_model: bool = False,
) -> None:
    """Append the declaration of member, followed by a blank line."""
    name = member_name(member)
    if member.kind == "method":
        render_method(ctx, member, parent, name, out)
    elif member.kind == "event":
        if member.typ is None:
            raise ShapeError("no event type for " + name + " in " + parent)
        typ = translate_type(
            ctx, member.typ, parent, lambda t: synthesize_name(ctx, t, parent, member, name)
        )
        if typ is None:
            raise UnknownShapeError("event " + name + " in " + parent + " has a union payload")
        out.extend(render_summary(member.doc))
        out.append("event EventHandler<" + typ + "> " + name + ";")
    elif member.kind == "property":
        _render_property(ctx, member, parent, name, out, in_model)
    else:
        raise UnknownShapeError(
            "problem rendering a member: " + name + " (" + member.kind + ") in " + parent
        )
    out.append("")


def _render_property(
    ctx: GenerationContext,
    member: MemberNode,
    parent: str,
    name: str,
    out: list[str],
    in_model: bool,
) -> None:
    if member.typ is None:
        raise ShapeError("no type for property " + name + " in " + parent)
    typ = translate_type(
        ctx, member.typ, parent, lambda t: synthesize_name(ctx, t, parent, member, name)
    )
    if typ is None:
        raise UnknownShapeError(
            "property " + name + " in " + parent + " has union type " + member.typ.expression
        )
    out.extend(render_summary(member.doc))
    origin = member.name
    if member.typ.expression == STRING_OR_FLOAT:
        origin = member.name + "String"
    if in_model:
        out.append('[JsonPropertyName("' + origin + '")]')
    if member.name == "children":
        ctx.warn("assumed-array", "children property found in " + parent + ", assuming array.")
        typ = "IEnumerable<" + parent + ">"
    if not typ.endswith("?") and not member.required and typ in NULLABLE_TYPES:
        typ = typ + "?"
    if in_model:
        out.append("public " + typ + " " + name + " { get; set; }")
    else:
        out.append("public " + typ + " " + name + " { get; }")


def _is_object(typ: TypeNode) -> bool:
    return isinstance(typ, (ObjectLiteral, Array)) or (
        isinstance(typ, (Named, Generic)) and typ.name == "Object"
    )


def _return_type(ctx: GenerationContext, member: MemberNode, parent: str) -> str:
    if member.typ is None:
        return "void"

    def resolve(t: TypeNode) -> str:
        result = translate_type(
            ctx, t, parent, lambda x: synthesize_result_name(ctx, x, parent, member)
        )
        if result is None:
            raise UnknownShapeError(
                "return type " + t.expression + " of " + parent + "." + member.name
                + " is a union without a C# equivalent"
            )
        return result

    typ = member.typ
    if _is_object(typ) and typ.expression != STRING_PAIR:
        if isinstance(typ, Array):
            if len(typ.templates) != 1:
                return resolve(typ)
            return "IReadOnlyCollection<" + resolve(typ.element) + ">"
        if not isinstance(typ, ObjectLiteral):
            return "dynamic"
    return resolve(typ)


def render_method(
    ctx: GenerationContext, member: MemberNode, parent: str, name: str, out: list[str]
) -> None:
    typ = _return_type(ctx, member, parent)
    # Simple getters read better as properties.
    if (
        not member.args
        and not member.is_async
        and typ != "void"
        and not name.startswith(METHOD_VERB_PREFIXES)
    ):
        out.extend(render_summary(member.doc))
        out.append(typ + " " + name + " { get; }")
        return

    params = ParamList(ctx, member, parent)
    params.process_all(member.args)
    params.add_waiter_action(name)

    if typ == GENERIC_PLACEHOLDER:
        name = name + "<T>"
    if member.is_async:
        typ = "Task" if typ == "void" else "Task<" + typ + ">"
    for i, overload in enumerate(params.overloads()):
        if i > 0:
            out.append("")
        out.extend(render_summary(member.doc))
        for param in overload:
            out.extend(render_param(param.name.lstrip("@"), params.doc_for(param)))
        out.append(typ + " " + name + "(" + ", ".join(p.decl for p in overload) + ");")
