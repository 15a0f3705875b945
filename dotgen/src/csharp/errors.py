"""Fatal generation errors.

Every error aborts the whole run: a partially translated API surface could
reference synthesized types that were never declared.
"""

from __future__ import annotations


class GenerationError(Exception):
    """Base for all engine failures."""

    category = "generate"

    def __init__(self, msg: str):
        self.msg: str = msg
        super().__init__(msg)

    def __str__(self) -> str:
        return "[" + self.category + "] " + self.msg


class ShapeError(GenerationError):
    """Type shape the translator cannot express (multi-dimensional array, bad map)."""

    category = "shape"


class NamingError(GenerationError):
    """Name synthesis exhausted its candidates."""

    category = "naming"


class OverloadError(GenerationError):
    """Unsupported parameter arrangement while expanding overloads."""

    category = "overload"


class UnknownShapeError(GenerationError):
    """No rule covers this node."""

    category = "unknown"
