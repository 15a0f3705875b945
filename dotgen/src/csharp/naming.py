"""Name synthesis for anonymous object types.

A candidate is built from the lexical chain
`[enclosing type, member display name, inner display name]`, innermost
first. When a candidate is taken by a structurally different type (or is
reserved), the next outer chain element is prepended and the search retries.

Names are first-come: whichever type claims a candidate first keeps the plain
form, and later, different types get the prefixed forms. Reordering member
traversal therefore changes the generated names.
"""

from __future__ import annotations

from typing import Iterator

from src.api.model import MemberNode, Named, TypeNode, Union

from .casing import member_name, to_title_case
from .context import GenerationContext
from .errors import NamingError
from .translate import enum_literals, type_name

# Names that end in "s" without being plural.
PLURAL_EXCEPTIONS: frozenset[str] = frozenset({"properties", "httpcredentials"})

# Irregular casing and names that would clash with other generated types.
NAME_ALIASES: dict[str, str] = {
    "domcontentloaded": "DOMContentLoaded",
    "networkidle": "NetworkIdle",
    "File": "FilePayload",
}

# Candidates that are never accepted on their own.
RESERVED_CANDIDATES: frozenset[str] = frozenset({"Value"})

GENERIC_OBJECT = "object"
RESULT_SUFFIX = "Result"
PAYLOAD_SUFFIX = "Payload"


def is_plain_object(typ: TypeNode) -> bool:
    """Bare `[Object]`: no properties, templates, or union."""
    return isinstance(typ, Named) and typ.name == "Object"


def singularize(name: str) -> str:
    """Drop one trailing plural "s"."""
    if name.endswith("s") and name.lower() not in PLURAL_EXCEPTIONS:
        return name[:-1]
    return name


def candidates(chain: list[str]) -> Iterator[str]:
    """Yield candidate names from the innermost chain element outwards."""
    names = list(chain)
    if len(names) > 1 and names[-1] == names[-2]:
        names.pop()
    attempt = names.pop()
    while True:
        attempt = singularize(attempt)
        attempt = NAME_ALIASES.get(attempt, attempt)
        yield attempt
        if not names:
            return
        attempt = names.pop() + attempt


def find_name(ctx: GenerationContext, typ: TypeNode, chain: list[str]) -> str | None:
    """First candidate that is free or already holds an equal type. None when exhausted."""
    for candidate in candidates(chain):
        if candidate in RESERVED_CANDIDATES:
            continue
        existing = ctx.model_types.get(candidate)
        if existing is None or existing == typ:
            return candidate
    return None


def _claim(ctx: GenerationContext, typ: TypeNode, chain: list[str]) -> str:
    name = find_name(ctx, typ, chain)
    if name is None:
        raise NamingError("ran out of possible names for " + "/".join(chain))
    ctx.model_types.register(name, typ)
    return name


def _enum_name(typ: TypeNode) -> str | None:
    if isinstance(typ, Union) and enum_literals(typ) is not None:
        return typ.name
    return None


def synthesize_name(
    ctx: GenerationContext,
    typ: TypeNode,
    parent: str,
    member: MemberNode | None,
    inner: str,
) -> str:
    """Name for typ, found on `member` of `parent`; `inner` is the property or argument name."""
    if is_plain_object(typ):
        return GENERIC_OBJECT
    enum_name = _enum_name(typ)
    if enum_name:
        return enum_name
    if member is None:
        return type_name(typ)
    if member.kind == "event":
        return _claim(ctx, typ, [parent, to_title_case(inner) + PAYLOAD_SUFFIX])
    chain = [parent, to_title_case(member.display_name), to_title_case(inner)]
    return _claim(ctx, typ, chain)


def synthesize_result_name(
    ctx: GenerationContext, typ: TypeNode, parent: str, member: MemberNode
) -> str:
    """Name for an anonymous method result: `{Member}Result`, then `{Parent}{Member}Result`."""
    if is_plain_object(typ):
        return GENERIC_OBJECT
    enum_name = _enum_name(typ)
    if enum_name:
        return enum_name
    chain = [parent, member_name(member, omit_async=True) + RESULT_SUFFIX]
    name = _claim(ctx, typ, chain)
    if name not in ctx.documented_results:
        ctx.documented_results[name] = (
            'Result of calling <see cref="I'
            + to_title_case(parent)
            + "."
            + member_name(member)
            + '"/>.'
        )
    return name
