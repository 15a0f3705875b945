"""Type translation: API type node -> C# type expression.

Rules, in precedence order:
1. Fixed-expression shortcuts (shapes.TYPE_SHORTCUTS)
2. `[null]|X` unwraps to X; nullability is the caller's concern
3. Fixed union shapes (shapes.UNION_SHAPES) and `T|[Array]<T>`
4. Literal unions become named enums; other unions translate to None
5. Arrays -> IEnumerable<T>
6. `[Object]<K, V>` -> key/value pair sequence, bare `[Object]` -> object
7. Object literals get a synthesized name from the fallback
8. Maps -> Dictionary<K, V>
9. Functions -> Action<...> / Func<..., R>
10. Other generics -> Name<T1, T2>
11. Names go through the name map, or pass through unchanged

None means "this union can't be one C# type"; the caller explodes it into
overloads.
"""

from __future__ import annotations

from typing import Callable

from src.api.model import (
    Array,
    FunctionType,
    Generic,
    Literal,
    Map,
    Named,
    ObjectLiteral,
    Primitive,
    TypeNode,
    Union,
    is_null,
)

from .context import GenerationContext
from .errors import NamingError, ShapeError, UnknownShapeError
from .shapes import TYPE_SHORTCUTS, UNION_SHAPES

NameFallback = Callable[[TypeNode], str]

# Names the fallback may return that are never model types.
BUILTIN_ESCAPE_NAMES: frozenset[str] = frozenset({"object", "string", "int"})

# Returned by the default fallback when there is no naming context.
OBJECT_SENTINEL = "Object"


def enum_literals(typ: TypeNode) -> tuple[str, ...] | None:
    """Literal values if typ is a literal union (optionally led by null), else None."""
    if not isinstance(typ, Union):
        return None
    variants = typ.variants
    if variants and is_null(variants[0]):
        variants = variants[1:]
    if not variants or not all(isinstance(v, Literal) for v in variants):
        return None
    return tuple(v.value for v in variants if isinstance(v, Literal))


def type_name(typ: TypeNode) -> str:
    """Default fallback: the node's own name."""
    name = getattr(typ, "name", None)
    if isinstance(name, str) and name:
        return name
    return typ.expression


def translate_type(
    ctx: GenerationContext,
    typ: TypeNode,
    parent: str,
    fallback: NameFallback | None = None,
) -> str | None:
    """Translate typ, met while rendering a member of `parent`."""
    if fallback is None:
        fallback = type_name
    shortcut = TYPE_SHORTCUTS.get(typ.expression)
    if shortcut is not None:
        return shortcut.target
    match typ:
        case Union():
            return _translate_union(ctx, typ, parent, fallback)
        case Array(templates=templates):
            if len(templates) != 1:
                raise ShapeError(
                    "array " + typ.expression + " in " + parent + " has more than 1 dimension"
                )
            return "IEnumerable<" + _required(ctx, templates[0], parent, fallback) + ">"
        case Generic(name="Object", templates=templates) if len(templates) == 2:
            key = _required(ctx, templates[0], parent, fallback)
            value = _required(ctx, templates[1], parent, fallback)
            return "IEnumerable<KeyValuePair<" + key + ", " + value + ">>"
        case Named(name="Object") | Generic(name="Object"):
            return "object"
        case ObjectLiteral():
            return _translate_object(ctx, typ, fallback)
        case Map(templates=templates):
            if len(templates) != 2:
                raise ShapeError(
                    "map " + typ.expression + " in " + parent + " has an invalid number of templates"
                )
            key = _required(ctx, templates[0], parent, fallback)
            value = _required(ctx, templates[1], parent, fallback)
            return "Dictionary<" + key + ", " + value + ">"
        case FunctionType():
            return _translate_function(ctx, typ, parent, fallback)
        case Generic(name=name, templates=templates):
            types = [_required(ctx, t, parent, type_name) for t in templates]
            return name + "<" + ", ".join(types) + ">"
        case Primitive(name=name) | Named(name=name):
            return ctx.map_name(name)
        case Literal():
            raise UnknownShapeError(
                "string literal " + typ.expression + " outside of a named union in " + parent
            )
    raise UnknownShapeError("not sure what to do with " + typ.expression + " in " + parent)


def _required(
    ctx: GenerationContext, typ: TypeNode, parent: str, fallback: NameFallback
) -> str:
    """Translate a nested type that must resolve to a single C# type."""
    result = translate_type(ctx, typ, parent, fallback)
    if result is None:
        raise ShapeError("could not translate " + typ.expression + " in " + parent)
    return result


def _translate_union(
    ctx: GenerationContext, typ: Union, parent: str, fallback: NameFallback
) -> str | None:
    variants = typ.variants
    if len(variants) == 2 and is_null(variants[0]) and not isinstance(variants[1], Literal):
        return translate_type(ctx, variants[1], parent, fallback)
    rule = UNION_SHAPES.get(typ.expression)
    if rule is not None:
        if rule.underspecified:
            ctx.warn(
                "underspecified-type",
                (typ.name or parent) + " should be a 'string', but was a " + typ.expression,
            )
        return rule.target
    if (
        len(variants) == 2
        and isinstance(variants[1], Array)
        and len(variants[1].templates) == 1
        and variants[1].element == variants[0]
    ):
        return "IEnumerable<" + _required(ctx, variants[0], parent, fallback) + ">"
    literals = enum_literals(typ)
    if literals is not None and typ.name:
        ctx.enums.register(typ.name, literals)
        return typ.name
    return None


def _translate_object(
    ctx: GenerationContext, typ: ObjectLiteral, fallback: NameFallback
) -> str:
    name = fallback(typ)
    if name == OBJECT_SENTINEL:
        raise ShapeError(
            "object literal with members "
            + ", ".join(p.name for p in typ.properties)
            + " has no naming context"
        )
    if name in BUILTIN_ESCAPE_NAMES:
        return name
    if not ctx.model_types.register(name, typ) and ctx.model_types.get(name) != typ:
        raise NamingError("type " + name + " already exists with a different shape")
    return name


def _translate_function(
    ctx: GenerationContext, typ: FunctionType, parent: str, fallback: NameFallback
) -> str:
    if typ.args is None:
        return "Action"
    arg_types: list[str] = []
    for arg in typ.args:
        translated = translate_type(ctx, arg, parent, fallback)
        if translated is None:
            raise ShapeError(
                "callback argument " + arg.expression + " in " + parent + " could not be translated"
            )
        arg_types.append(translated)
    if typ.return_type is None:
        if not arg_types:
            return "Action"
        return "Action<" + ", ".join(arg_types) + ">"
    return_type = translate_type(ctx, typ.return_type, parent, fallback)
    if return_type is None:
        raise ShapeError(
            "callback return type " + typ.return_type.expression + " in " + parent + " could not be translated"
        )
    return "Func<" + ", ".join(arg_types + [return_type]) + ">"
