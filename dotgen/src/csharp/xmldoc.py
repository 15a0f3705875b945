"""XML documentation comments for plain-text doc payloads."""

from __future__ import annotations

import textwrap
from xml.sax.saxutils import escape

COLUMN_WIDTH = 80


def render_text(text: str, width: int = COLUMN_WIDTH) -> list[str]:
    """Escape and wrap text. Paragraphs after the first become <para> blocks."""
    paragraphs = [p.strip() for p in text.split("\n\n") if p.strip()]
    lines: list[str] = []
    for i, paragraph in enumerate(paragraphs):
        wrapped = textwrap.wrap(escape(" ".join(paragraph.split())), width)
        if i == 0:
            lines.extend(wrapped)
        else:
            lines.append("<para>")
            lines.extend(wrapped)
            lines.append("</para>")
    return lines


def render_summary(text: str) -> list[str]:
    if not text.strip():
        return []
    return ["/// <summary>"] + ["/// " + line for line in render_text(text)] + ["/// </summary>"]


def render_param(name: str, lines: list[str]) -> list[str]:
    if not lines:
        return []
    if len(lines) == 1:
        return ['/// <param name="' + name + '">' + lines[0] + "</param>"]
    return (
        ['/// <param name="' + name + '">']
        + ["/// " + line for line in lines]
        + ["/// </param>"]
    )
