"""dotgen entry point: JSON API description -> C# declarations."""

from __future__ import annotations

import os
import sys

from .api.load import LoadError, load_source
from .csharp.context import GenerationContext
from .csharp.emit import Generation, generate
from .csharp.errors import GenerationError

PHASES: list[str] = [
    "load",
    "translate",
]

DEFAULT_NAMESPACE = "Generated"

USAGE: str = """\
dotgen [OPTIONS] [INPUT] [-o OUTDIR]

Options:
  --stop-at PHASE     Stop after phase: load, translate
  --namespace NAME    C# namespace of generated files (default: Generated)
  --verbose           Report each generated declaration on stderr
  -o, --output DIR    Write one file per declaration into DIR
  --help              Show this help message
"""


def read_source(input_file: str | None) -> tuple[str, int]:
    """Read source from file or stdin. Returns (source, exit_code) where exit_code 0 means OK."""
    if input_file is not None:
        try:
            with open(input_file, "rb") as f:
                raw = f.read()
        except OSError:
            print("error: cannot open '" + input_file + "'", file=sys.stderr)
            return ("", 1)
    else:
        raw = sys.stdin.buffer.read()
    try:
        source = raw.decode("utf-8")
    except ValueError:
        print("error: invalid utf-8 in input", file=sys.stderr)
        return ("", 1)
    return (source, 0)


def write_declarations(generation: Generation, namespace: str, output_dir: str) -> int:
    """Write one .generated.cs file per declaration. Returns 0 on success, 1 on error."""
    for decl in generation.declarations():
        path = os.path.join(output_dir, decl.filename)
        try:
            os.makedirs(os.path.dirname(path), exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                f.write(decl.to_source(namespace))
        except OSError:
            print("error: cannot write '" + path + "'", file=sys.stderr)
            return 1
    return 0


def render_all(generation: Generation, namespace: str) -> str:
    """All declarations as one stream, each preceded by its file name."""
    chunks: list[str] = []
    for decl in generation.declarations():
        chunks.append("// --- " + decl.filename + "\n" + decl.to_source(namespace))
    return "\n".join(chunks)


def registry_summary(ctx: GenerationContext) -> str:
    lines: list[str] = []
    for name, typ in ctx.model_types.items():
        lines.append("model " + name + " " + typ.expression)
    for name, literals in ctx.enums.items():
        lines.append("enum " + name + ": " + ", ".join(literals))
    return "\n".join(lines)


def _print_warnings(ctx: GenerationContext) -> None:
    for warning in ctx.warnings:
        print(repr(warning), file=sys.stderr)


def run_pipeline(
    source: str, stop_at: str | None, namespace: str, verbose: bool
) -> tuple[int, Generation | None, str]:
    """Load and translate. Returns (exit_code, generation, output)."""
    try:
        document = load_source(source)
    except LoadError as e:
        print("error: [load] " + str(e), file=sys.stderr)
        return (1, None, "")
    if stop_at == "load":
        return (0, None, "\n".join(document.class_names()))
    try:
        generation = generate(document)
    except GenerationError as e:
        print("error: " + str(e), file=sys.stderr)
        return (1, None, "")
    _print_warnings(generation.context)
    if verbose:
        for decl in generation.declarations():
            print("generating " + decl.name, file=sys.stderr)
    if stop_at == "translate":
        return (0, generation, registry_summary(generation.context))
    return (0, generation, render_all(generation, namespace))


def parse_args() -> tuple[str | None, str, bool, str | None, str | None]:
    """Parse command-line arguments. Returns (stop_at, namespace, verbose, input_file, output_dir)."""
    args = sys.argv[1:]
    stop_at: str | None = None
    namespace = DEFAULT_NAMESPACE
    verbose = False
    input_file: str | None = None
    output_dir: str | None = None
    i = 0
    while i < len(args):
        arg = args[i]
        if arg == "--help" or arg == "-h":
            print(USAGE, end="")
            sys.exit(0)
        elif arg in ("--stop-at", "--namespace", "-o", "--output"):
            if i + 1 >= len(args):
                print("error: " + arg + " requires an argument", file=sys.stderr)
                sys.exit(2)
            value = args[i + 1]
            if arg == "--stop-at":
                stop_at = value
            elif arg == "--namespace":
                namespace = value
            else:
                output_dir = value
            i += 2
        elif arg == "--verbose":
            verbose = True
            i += 1
        elif arg.startswith("-"):
            print("error: unknown flag '" + arg + "'", file=sys.stderr)
            sys.exit(2)
        else:
            if input_file is not None:
                print("error: unexpected argument '" + arg + "'", file=sys.stderr)
                sys.exit(2)
            input_file = arg
            i += 1
    if stop_at is not None and stop_at not in PHASES:
        print("error: unknown phase '" + stop_at + "'", file=sys.stderr)
        sys.exit(2)
    return (stop_at, namespace, verbose, input_file, output_dir)


def main() -> int:
    """Main entry point."""
    stop_at, namespace, verbose, input_file, output_dir = parse_args()
    source, err = read_source(input_file)
    if err != 0:
        return err
    if len(source.strip()) == 0:
        print("error: no input provided", file=sys.stderr)
        return 2
    exit_code, generation, output = run_pipeline(source, stop_at, namespace, verbose)
    if exit_code != 0:
        return exit_code
    if output_dir is not None and generation is not None and stop_at is None:
        return write_declarations(generation, namespace, output_dir)
    if len(output) > 0:
        print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
