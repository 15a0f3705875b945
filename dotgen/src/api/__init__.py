"""API model package - input tree, expression parser, JSON loader."""

from .load import LoadError, load_document, load_file, load_source
from .model import (
    ApiDocument,
    Array,
    ClassNode,
    FunctionType,
    Generic,
    Literal,
    Map,
    MemberNode,
    Named,
    ObjectLiteral,
    Primitive,
    TypeNode,
    Union,
    is_null,
)
from .typeexpr import TypeSyntaxError, parse_type
