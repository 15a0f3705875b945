"""Load a JSON API description into the API model.

Document shape:

    {"classes": [
        {"name": "Page", "extends": "EventEmitter", "doc": "...",
         "members": [
            {"kind": "method", "name": "goto", "async": true,
             "type": "[null]|[Response]",
             "args": [{"name": "url", "type": "[string]", "required": true}]}
         ]}
    ]}

A `type` is either a canonical expression string or an object:

    {"expression": "\\"load\\"|\\"networkidle\\"", "name": "LoadState"}
    {"union": [...], "name": "..."}
    {"properties": [member, ...]}                 object literal
    {"name": "function", "args": [...], "returnType": ...}
    {"name": "Array" | "Map" | "Promise" ..., "templates": [...]}
    {"name": "string"}
"""

from __future__ import annotations

import json

from .model import (
    ApiDocument,
    ClassNode,
    FunctionType,
    MemberNode,
    ObjectLiteral,
    TypeNode,
    Union,
)
from .typeexpr import TypeSyntaxError, parse_type, type_for_name

MEMBER_KINDS: tuple[str, ...] = ("method", "property", "event")


class LoadError(Exception):
    """Malformed API description, located by its JSON path."""

    def __init__(self, msg: str, where: str):
        self.msg: str = msg
        self.where: str = where
        super().__init__(where + ": " + msg)


def _expect_dict(data: object, where: str) -> dict:
    if not isinstance(data, dict):
        raise LoadError("expected an object", where)
    return data


def _expect_list(data: object, where: str) -> list:
    if not isinstance(data, list):
        raise LoadError("expected a list", where)
    return data


def _expect_str(data: dict, key: str, where: str) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value:
        raise LoadError("missing or empty '" + key + "'", where)
    return value


def _load_type(data: object, where: str) -> TypeNode:
    if isinstance(data, str):
        try:
            return parse_type(data)
        except TypeSyntaxError as e:
            raise LoadError(str(e), where) from e
    d = _expect_dict(data, where)
    if "expression" in d:
        typ = _load_type(d["expression"], where + ".expression")
        if isinstance(typ, Union) and isinstance(d.get("name"), str):
            return Union(typ.variants, d["name"])
        return typ
    if "union" in d:
        items = _expect_list(d["union"], where + ".union")
        variants = tuple(
            _load_type(item, where + ".union[" + str(i) + "]")
            for i, item in enumerate(items)
        )
        name = d.get("name")
        return Union(variants, name if isinstance(name, str) else None)
    if "properties" in d:
        items = _expect_list(d["properties"], where + ".properties")
        return ObjectLiteral(
            tuple(
                _load_member(item, where + ".properties[" + str(i) + "]", "property")
                for i, item in enumerate(items)
            )
        )
    name = _expect_str(d, "name", where)
    if name == "function":
        args: tuple[TypeNode, ...] | None = None
        if "args" in d:
            items = _expect_list(d["args"], where + ".args")
            args = tuple(
                _load_type(item, where + ".args[" + str(i) + "]")
                for i, item in enumerate(items)
            )
        return_type = None
        if d.get("returnType") is not None:
            return_type = _load_type(d["returnType"], where + ".returnType")
        return FunctionType(args, return_type)
    templates = tuple(
        _load_type(item, where + ".templates[" + str(i) + "]")
        for i, item in enumerate(_expect_list(d.get("templates", []), where + ".templates"))
    )
    return type_for_name(name, templates)


def _load_member(data: object, where: str, default_kind: str) -> MemberNode:
    d = _expect_dict(data, where)
    name = _expect_str(d, "name", where)
    where = where + "(" + name + ")"
    kind = d.get("kind", default_kind)
    if kind not in MEMBER_KINDS:
        raise LoadError("unknown member kind '" + str(kind) + "'", where)
    typ = None
    if d.get("type") is not None:
        typ = _load_type(d["type"], where + ".type")
    args = tuple(
        _load_member(item, where + ".args[" + str(i) + "]", "property")
        for i, item in enumerate(_expect_list(d.get("args", []), where + ".args"))
    )
    if args and kind != "method":
        raise LoadError("only methods take arguments", where)
    alias = d.get("alias")
    return MemberNode(
        name=name,
        kind=kind,
        typ=typ,
        alias=alias if isinstance(alias, str) and alias else None,
        required=bool(d.get("required", False)),
        is_async=bool(d.get("async", False)),
        args=args,
        doc=str(d.get("doc", "")),
    )


def _load_class(data: object, where: str) -> ClassNode:
    d = _expect_dict(data, where)
    name = _expect_str(d, "name", where)
    where = where + "(" + name + ")"
    extends = d.get("extends")
    members = tuple(
        _load_member(item, where + ".members[" + str(i) + "]", "method")
        for i, item in enumerate(_expect_list(d.get("members", []), where + ".members"))
    )
    return ClassNode(
        name=name,
        extends=extends if isinstance(extends, str) and extends else None,
        members=members,
        doc=str(d.get("doc", "")),
    )


def load_document(data: object) -> ApiDocument:
    """Build an ApiDocument from already-decoded JSON data."""
    d = _expect_dict(data, "$")
    items = _expect_list(d.get("classes"), "$.classes")
    return ApiDocument(
        tuple(_load_class(item, "$.classes[" + str(i) + "]") for i, item in enumerate(items))
    )


def load_source(source: str) -> ApiDocument:
    """Decode JSON text and build an ApiDocument."""
    try:
        data = json.loads(source)
    except json.JSONDecodeError as e:
        raise LoadError("invalid JSON: " + e.msg, "line " + str(e.lineno)) from e
    return load_document(data)


def load_file(path: str) -> ApiDocument:
    with open(path, encoding="utf-8") as f:
        return load_source(f.read())
