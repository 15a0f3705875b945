"""C# binding engine - type translation, name synthesis, overloads, emission."""

from .context import Diagnostic, GenerationContext
from .emit import Declaration, Generation, generate
from .errors import (
    GenerationError,
    NamingError,
    OverloadError,
    ShapeError,
    UnknownShapeError,
)
from .members import render_member
from .naming import find_name, synthesize_name
from .translate import translate_type
