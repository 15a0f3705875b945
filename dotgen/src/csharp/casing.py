"""Identifier casing for generated C# names."""

from __future__ import annotations

import re

from src.api.model import MemberNode

# C# reserved words that need escaping with @
CSHARP_RESERVED = frozenset(
    {
        "abstract",
        "as",
        "base",
        "bool",
        "break",
        "byte",
        "case",
        "catch",
        "char",
        "checked",
        "class",
        "const",
        "continue",
        "decimal",
        "default",
        "delegate",
        "do",
        "double",
        "else",
        "enum",
        "event",
        "explicit",
        "extern",
        "false",
        "finally",
        "fixed",
        "float",
        "for",
        "foreach",
        "goto",
        "if",
        "implicit",
        "in",
        "int",
        "interface",
        "internal",
        "is",
        "lock",
        "long",
        "namespace",
        "new",
        "null",
        "object",
        "operator",
        "out",
        "override",
        "params",
        "private",
        "protected",
        "public",
        "readonly",
        "ref",
        "return",
        "sbyte",
        "sealed",
        "short",
        "sizeof",
        "stackalloc",
        "static",
        "string",
        "struct",
        "switch",
        "this",
        "throw",
        "true",
        "try",
        "typeof",
        "uint",
        "ulong",
        "unchecked",
        "unsafe",
        "ushort",
        "using",
        "virtual",
        "void",
        "volatile",
        "while",
    }
)

# Enum literal words whose casing can't be derived.
ENUM_WORD_ALIASES: dict[str, str] = {
    "domcontentloaded": "DOMContentLoaded",
    "networkidle": "NetworkIdle",
}

ASYNC_SUFFIX = "Async"

_HTTP_RUN = re.compile(r"HTTPS?")


def upper_first(s: str) -> str:
    """Uppercase the first character of a string."""
    return (s[0].upper() + s[1:]) if s else ""


def to_title_case(name: str) -> str:
    """PascalCase a source identifier: `dblclick` -> `DblClick`, `setHTTPCredentials` -> `SetHttpCredentials`."""
    if name == "dblclick":
        return "DblClick"
    name = _HTTP_RUN.sub(lambda m: m.group(0)[0] + m.group(0)[1:].lower(), name)
    return upper_first(name)


def member_name(member: MemberNode, omit_async: bool = False) -> str:
    """Display name of a member; async methods end in Async."""
    result = to_title_case(member.display_name)
    if (
        not omit_async
        and member.kind == "method"
        and member.is_async
        and not result.endswith(ASYNC_SUFFIX)
    ):
        return result + ASYNC_SUFFIX
    return result


def argument_name(name: str) -> str:
    """Escape C# reserved words with @ prefix."""
    if name in CSHARP_RESERVED:
        return "@" + name
    return name


def enum_member_name(literal: str) -> str:
    """PascalCase enum member for a literal: `no-preference` -> `NoPreference`."""
    words = literal.replace("-", " ").split(" ")
    return "".join(ENUM_WORD_ALIASES.get(w, upper_first(w)) for w in words if w)
