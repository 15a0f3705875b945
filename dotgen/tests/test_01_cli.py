"""CLI tests for the dotgen entry point.

Test cases live in 01_cli/*.tests files. Format:

    === test name
    args: --stop-at translate --verbose
    {"classes": [{"name": "Page"}]}
    ---
    exit: 0
    stdout-contains: enum MixedState
    stderr-contains: generating IPage
    ---

The first input line holds the CLI arguments; the rest is stdin, unless it is
a single `stdin-bytes:` line of hex-encoded raw bytes.

Assertion directives:
    exit:             exact exit code
    stderr:           exact stderr content (trailing newline ignored)
    stderr-contains:  stderr must contain substring
    stderr-empty:     stderr must be empty
    stdout-contains:  stdout must contain substring
    stdout-empty:     stdout must be empty
"""

import subprocess
import sys
from dataclasses import dataclass, field
from pathlib import Path

import pytest

CLI_DIR = Path(__file__).parent / "01_cli"
DOTGEN_DIR = Path(__file__).parent.parent

PAGE_DOCUMENT = """\
{"classes": [{"name": "Page", "members": [
  {"name": "viewportSize", "type": {"properties": [
    {"name": "width", "type": "[int]", "required": true}
  ]}},
  {"name": "waitForLoadState", "async": true, "args": [
    {"name": "state", "type": {"expression": "\\"load\\"|\\"networkidle\\"", "name": "LoadState"}}
  ]}
]}]}
"""


@dataclass
class CliCase:
    args: list[str] = field(default_factory=list)
    stdin: bytes = b""
    assertions: list[tuple[str, str | None]] = field(default_factory=list)


def _sections(path: Path) -> list[tuple[str, list[str], list[str]]]:
    """Split a .tests file into (name, input lines, expected lines)."""
    lines = path.read_text().split("\n")
    result: list[tuple[str, list[str], list[str]]] = []
    i = 0
    while i < len(lines):
        if not lines[i].startswith("=== "):
            i += 1
            continue
        name = lines[i][4:].strip()
        i += 1
        parts: list[list[str]] = [[], []]
        for part in parts:
            while i < len(lines) and lines[i] != "---":
                part.append(lines[i])
                i += 1
            i += 1
        result.append((name, parts[0], parts[1]))
    return result


def _parse_case(input_lines: list[str], expected_lines: list[str]) -> CliCase:
    case = CliCase()
    body = input_lines
    if body and body[0].startswith("args:"):
        case.args = body[0][5:].split()
        body = body[1:]
    if body and body[0].startswith("stdin-bytes:"):
        case.stdin = bytes.fromhex(body[0][len("stdin-bytes:") :].strip())
    else:
        case.stdin = "\n".join(body).encode()
    for line in expected_lines:
        line = line.strip()
        if not line:
            continue
        key, _, value = line.partition(":")
        if key.endswith("-empty"):
            case.assertions.append((key, None))
        else:
            case.assertions.append((key, value.strip()))
    return case


def discover_cli_tests() -> list[tuple[str, CliCase]]:
    results = []
    for test_file in sorted(CLI_DIR.glob("*.tests")):
        for name, input_lines, expected_lines in _sections(test_file):
            results.append((test_file.stem + "/" + name, _parse_case(input_lines, expected_lines)))
    return results


def run_cli(args: list[str], stdin: bytes = b"") -> subprocess.CompletedProcess[bytes]:
    """Run the dotgen CLI as a module."""
    cmd = [sys.executable, "-m", "src.dotgen", *args]
    return subprocess.run(cmd, input=stdin, capture_output=True, cwd=DOTGEN_DIR)


def check_assertions(result: subprocess.CompletedProcess[bytes], assertions: list[tuple]) -> None:
    stdout = result.stdout.decode(errors="replace")
    stderr = result.stderr.decode(errors="replace")
    for kind, value in assertions:
        if kind == "exit":
            assert result.returncode == int(value), (
                f"expected exit {value}, got {result.returncode}\nstderr: {stderr}"
            )
        elif kind == "stderr":
            assert stderr.rstrip("\n") == value, f"expected stderr {value!r}, got {stderr!r}"
        elif kind == "stderr-contains":
            assert value in stderr, f"expected stderr to contain {value!r}, got {stderr!r}"
        elif kind == "stderr-empty":
            assert stderr == "", f"expected empty stderr, got {stderr!r}"
        elif kind == "stdout-contains":
            assert value in stdout, f"expected stdout to contain {value!r}, got {stdout!r}"
        elif kind == "stdout-empty":
            assert stdout == "", f"expected empty stdout, got {stdout[:200]!r}"
        else:
            raise AssertionError("unknown directive " + kind)


def pytest_generate_tests(metafunc):
    if "cli_case" in metafunc.fixturenames:
        params = [pytest.param(case, id=test_id) for test_id, case in discover_cli_tests()]
        metafunc.parametrize("cli_case", params)


def test_cli(cli_case: CliCase) -> None:
    result = run_cli(cli_case.args, cli_case.stdin)
    check_assertions(result, cli_case.assertions)


def test_reads_input_file(tmp_path):
    source = tmp_path / "api.json"
    source.write_text(PAGE_DOCUMENT)
    result = run_cli(["--stop-at", "load", str(source)])
    assert result.returncode == 0
    assert result.stdout.decode() == "Page\n"


def test_output_dir_gets_one_file_per_declaration(tmp_path):
    out = tmp_path / "generated"
    result = run_cli(["--namespace", "Acme", "-o", str(out)], PAGE_DOCUMENT.encode())
    assert result.returncode == 0, result.stderr.decode()
    assert result.stdout == b""
    written = sorted(p.relative_to(out).as_posix() for p in out.rglob("*.cs"))
    assert written == [
        "IPage.generated.cs",
        "enums/LoadState.generated.cs",
        "enums/MixedState.generated.cs",
        "models/ViewportSizeResult.generated.cs",
    ]
    page = (out / "IPage.generated.cs").read_text()
    assert "namespace Acme;" in page
    assert "ViewportSizeResult ViewportSize { get; }" in page
    assert "Task WaitForLoadStateAsync(LoadState state = default);" in page


def test_output_dir_not_used_when_stopping_early(tmp_path):
    out = tmp_path / "generated"
    result = run_cli(["--stop-at", "translate", "-o", str(out)], PAGE_DOCUMENT.encode())
    assert result.returncode == 0
    assert "model ViewportSizeResult [Object]" in result.stdout.decode()
    assert not out.exists()
