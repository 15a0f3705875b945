"""Emission driver: classes, then synthesized model types, then enums.

Rendering a class or model translates its members, which may register more
model types and enums. Declarations are collected in memory; nothing is
written until every registry has stopped growing.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from src.api.model import ApiDocument, Array, ClassNode, ObjectLiteral, TypeNode, Union, is_null

from .casing import enum_member_name, to_title_case
from .context import GenerationContext
from .errors import ShapeError, UnknownShapeError
from .members import render_member
from .xmldoc import render_summary

MODELS_FOLDER = "models"
ENUMS_FOLDER = "enums"
EVENT_EMITTER = "IEventEmitter"
SKIPPED_CLASSES: frozenset[str] = frozenset({"TimeoutException"})

FILE_TEMPLATE = """\
// <auto-generated>
// This file was generated by dotgen. Do not edit manually.
// </auto-generated>

using System;
using System.Collections.Generic;
using System.IO;
using System.Runtime.Serialization;
using System.Text.Json.Serialization;
using System.Text.RegularExpressions;
using System.Threading.Tasks;

namespace [NAMESPACE];

[CONTENT]
"""


@dataclass
class Declaration:
    """One generated C# type, ready to be written."""

    kind: str  # "partial interface" | "partial class" | "enum"
    name: str
    body: list[str]
    summary: list[str] = field(default_factory=list)
    extends: str | None = None
    folder: str = ""
    literals: list[tuple[str, str]] = field(default_factory=list)  # enums: (member, value)

    @property
    def filename(self) -> str:
        if self.folder:
            return self.folder + "/" + self.name + ".generated.cs"
        return self.name + ".generated.cs"

    def lines(self) -> list[str]:
        out = list(self.summary)
        header = "public " + self.kind + " " + self.name
        if self.extends:
            header += " : " + self.extends
        out.append(header)
        out.append("{")
        body = list(self.body)
        while body and body[-1] == "":
            body.pop()
        for line in body:
            out.append("    " + line if line else "")
        out.append("}")
        return out

    def to_source(self, namespace: str) -> str:
        content = "\n".join(self.lines())
        return FILE_TEMPLATE.replace("[NAMESPACE]", namespace).replace("[CONTENT]", content)


@dataclass
class Generation:
    """All declarations of one run, in emission order."""

    context: GenerationContext
    classes: list[Declaration]
    models: list[Declaration]
    enums: list[Declaration]

    def declarations(self) -> list[Declaration]:
        return self.classes + self.models + self.enums


def render_class(ctx: GenerationContext, cls: ClassNode) -> Declaration | None:
    name = ctx.map_name(cls.name)
    if name in SKIPPED_CLASSES:
        return None
    body: list[str] = []
    for member in cls.members:
        render_member(ctx, member, cls.name, body)
    extends = None
    if cls.extends:
        extends = "I" + to_title_case(cls.extends)
        if extends == EVENT_EMITTER:
            extends = None
    return Declaration(
        "partial interface", name, body, summary=render_summary(cls.doc), extends=extends
    )


def render_model_type(ctx: GenerationContext, name: str, typ: TypeNode) -> Declaration:
    if isinstance(typ, Union) and len(typ.variants) == 2 and is_null(typ.variants[0]):
        typ = typ.variants[1]
    if isinstance(typ, Array):
        raise ShapeError("array at this stage is unexpected: " + name)
    if not isinstance(typ, ObjectLiteral):
        raise UnknownShapeError("not sure what to do with model " + name + ": " + typ.expression)
    body: list[str] = []
    for member in typ.properties:
        render_member(ctx, member, name, body, in_model=True)
    summary: list[str] = []
    documented = ctx.documented_results.get(name)
    if documented:
        summary = ["/// <summary>", "/// " + documented, "/// </summary>"]
    return Declaration("partial class", name, body, summary=summary, folder=MODELS_FOLDER)


def render_enum(name: str, literals: tuple[str, ...]) -> Declaration:
    body = ["Undefined = 0,"]
    pairs: list[tuple[str, str]] = []
    for literal in literals:
        member = enum_member_name(literal)
        pairs.append((member, literal))
        body.append('[EnumMember(Value = "' + literal + '")]')
        body.append(member + ",")
    return Declaration("enum", name, body, folder=ENUMS_FOLDER, literals=pairs)


def generate(document: ApiDocument, ctx: GenerationContext | None = None) -> Generation:
    """Translate every class, then drain the model and enum registries."""
    if ctx is None:
        ctx = GenerationContext.create(document.class_names())
    classes: list[Declaration] = []
    for cls in document.classes:
        decl = render_class(ctx, cls)
        if decl is not None:
            classes.append(decl)
    models: list[Declaration] = []
    done = 0
    # Models may register nested models while rendering.
    while done < len(ctx.model_types):
        name, typ = ctx.model_types.entry(done)
        models.append(render_model_type(ctx, name, typ))
        done += 1
    enums = [render_enum(name, literals) for name, literals in ctx.enums.items()]
    return Generation(ctx, classes, models, enums)
