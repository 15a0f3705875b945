"""Tests for the emission driver."""

import pytest

from src.api.model import (
    ApiDocument,
    Array,
    ClassNode,
    Literal,
    MemberNode,
    Named,
    ObjectLiteral,
    Primitive,
    Union,
)
from src.csharp.emit import generate, render_enum, render_model_type
from src.csharp.errors import ShapeError, UnknownShapeError


def prop(name: str, typ, required: bool = True) -> MemberNode:
    return MemberNode(name, "property", typ, required=required)


GEOLOCATION = ObjectLiteral((prop("latitude", Primitive("float")), prop("longitude", Primitive("float"))))
COLOR_SCHEME = Union((Primitive("null"), Literal("light"), Literal("dark"), Literal("no-preference")), "ColorScheme")
LOAD_STATE = Union((Literal("load"), Literal("domcontentloaded"), Literal("networkidle")), "LoadState")


def sample_document() -> ApiDocument:
    page = ClassNode(
        "Page",
        extends="EventEmitter",
        doc="A browser tab.",
        members=(
            MemberNode("url", "method", Primitive("string")),
            MemberNode(
                "setGeolocation",
                "method",
                is_async=True,
                args=(MemberNode("geolocation", "property", Union((Primitive("null"), GEOLOCATION))),),
            ),
            MemberNode(
                "waitForLoadState",
                "method",
                is_async=True,
                args=(MemberNode("state", "property", LOAD_STATE),),
            ),
        ),
    )
    frame = ClassNode(
        "Frame",
        members=(
            MemberNode(
                "emulate",
                "method",
                args=(
                    MemberNode(
                        "options",
                        "property",
                        ObjectLiteral(
                            (
                                prop(
                                    "screen",
                                    ObjectLiteral(
                                        (
                                            prop("scheme", COLOR_SCHEME),
                                            prop("geolocation", GEOLOCATION),
                                        )
                                    ),
                                    required=False,
                                ),
                            )
                        ),
                    ),
                ),
            ),
        ),
    )
    worker = ClassNode("Worker", extends="Frame")
    timeout = ClassNode("TimeoutError", extends="Error")
    return ApiDocument((page, frame, worker, timeout))


def test_classes_then_models_then_enums():
    generation = generate(sample_document())
    names = [d.name for d in generation.declarations()]
    assert names == [
        "IPage",
        "IFrame",
        "IWorker",
        "Geolocation",
        "Screen",
        "MixedState",
        "LoadState",
        "ColorScheme",
    ]


def test_class_declaration():
    generation = generate(sample_document())
    page = generation.classes[0]
    assert page.extends is None
    assert page.lines() == [
        "/// <summary>",
        "/// A browser tab.",
        "/// </summary>",
        "public partial interface IPage",
        "{",
        "    string Url { get; }",
        "",
        "    Task SetGeolocationAsync(Geolocation geolocation = default);",
        "",
        "    Task WaitForLoadStateAsync(LoadState state = default);",
        "}",
    ]


def test_class_extends_interface():
    generation = generate(sample_document())
    worker = generation.classes[2]
    assert worker.extends == "IFrame"
    assert worker.lines()[0] == "public partial interface IWorker : IFrame"


def test_timeout_class_is_skipped():
    generation = generate(sample_document())
    assert "TimeoutException" not in [d.name for d in generation.classes]


def test_nested_model_shares_existing_name():
    generation = generate(sample_document())
    screen = generation.models[1]
    assert screen.folder == "models"
    assert screen.lines() == [
        "public partial class Screen",
        "{",
        '    [JsonPropertyName("scheme")]',
        "    public ColorScheme Scheme { get; set; }",
        "",
        '    [JsonPropertyName("geolocation")]',
        "    public Geolocation Geolocation { get; set; }",
        "}",
    ]


def test_enum_declaration_pairs_literals():
    generation = generate(sample_document())
    color = generation.enums[-1]
    assert color.literals == [
        ("Light", "light"),
        ("Dark", "dark"),
        ("NoPreference", "no-preference"),
    ]
    assert color.lines()[2:4] == ["    Undefined = 0,", '    [EnumMember(Value = "light")]']


def test_enum_word_aliases():
    decl = render_enum("LoadState", ("load", "domcontentloaded", "networkidle"))
    assert [m for m, _ in decl.literals] == ["Load", "DOMContentLoaded", "NetworkIdle"]
    assert decl.filename == "enums/LoadState.generated.cs"


def test_model_registered_as_nullable_is_unwrapped(ctx):
    decl = render_model_type(ctx, "Geo", Union((Primitive("null"), GEOLOCATION)))
    assert "    public float Latitude { get; set; }" in decl.lines()


def test_model_array_is_rejected(ctx):
    with pytest.raises(ShapeError):
        render_model_type(ctx, "Geo", Array((GEOLOCATION,)))


def test_model_without_properties_is_unknown(ctx):
    with pytest.raises(UnknownShapeError):
        render_model_type(ctx, "Geo", Named("Geolocation"))


def test_result_models_carry_summary():
    cls = ClassNode("Page", members=(MemberNode("viewportSize", "method", GEOLOCATION),))
    generation = generate(ApiDocument((cls,)))
    model = generation.models[0]
    assert model.name == "ViewportSizeResult"
    assert model.summary == [
        "/// <summary>",
        '/// Result of calling <see cref="IPage.ViewportSize"/>.',
        "/// </summary>",
    ]


def test_to_source_uses_template():
    generation = generate(sample_document())
    source = generation.classes[2].to_source("Acme.Api")
    assert "namespace Acme.Api;" in source
    assert "// <auto-generated>" in source
    assert source.rstrip().endswith("}")


def test_registry_entries_keep_insertion_order(ctx):
    ctx.model_types.register("Geolocation", GEOLOCATION)
    ctx.model_types.register("Other", ObjectLiteral((prop("x", Primitive("int")),)))
    ctx.model_types.register("Geolocation", ObjectLiteral(()))
    assert ctx.model_types.entry(0) == ("Geolocation", GEOLOCATION)
    assert ctx.model_types.entry(1)[0] == "Other"
    assert len(ctx.model_types) == 2


def test_models_registered_while_rendering_models_are_emitted():
    inner = ObjectLiteral((prop("depth", Primitive("int")),))
    middle = ObjectLiteral((prop("inner", inner),))
    outer = ObjectLiteral((prop("middle", middle),))
    cls = ClassNode("Page", members=(MemberNode("layout", "property", outer, required=True),))
    generation = generate(ApiDocument((cls,)))
    assert [m.name for m in generation.models] == ["Layout", "Middle", "Inner"]
