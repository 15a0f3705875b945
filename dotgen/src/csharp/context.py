"""Generation context: registries and name overrides for one run.

The registries have a strict two-phase lifecycle. They are written while
classes and members are translated and read once emission starts. Entries are
never mutated or removed after insertion.
"""

from __future__ import annotations

from src.api.model import Array, Primitive, TypeNode

from .casing import to_title_case
from .errors import ShapeError

# Known source names and their C# spelling. API classes are added per run.
NAME_OVERRIDES: dict[str, str] = {
    "Error": "Exception",
    "TimeoutError": "TimeoutException",
    "EvaluationArgument": "object",
    "boolean": "bool",
    "Serializable": "T",
    "any": "object",
    "Buffer": "byte[]",
    "path": "string",
    "URL": "string",
    "RegExp": "Regex",
    "Readable": "Stream",
}

# Enums known before translation begins.
SEEDED_ENUMS: dict[str, tuple[str, ...]] = {
    "MixedState": ("On", "Off", "Mixed"),
}

# Value types that need `?` to be optional.
NULLABLE_TYPES: frozenset[str] = frozenset({"int", "bool", "decimal", "float"})


class Diagnostic:
    """A non-fatal finding, reported after the run."""

    def __init__(self, category: str, message: str):
        self.category: str = category
        self.message: str = message

    def __repr__(self) -> str:
        return "warning: [" + self.category + "] " + self.message


class ModelTypeRegistry:
    """Synthesized structural types by name, in insertion order."""

    def __init__(self) -> None:
        self._types: dict[str, TypeNode] = {}
        self._order: list[str] = []

    def __contains__(self, name: str) -> bool:
        return name in self._types

    def __len__(self) -> int:
        return len(self._types)

    def get(self, name: str) -> TypeNode | None:
        return self._types.get(name)

    def register(self, name: str, typ: TypeNode) -> bool:
        """Add name -> typ. Returns False (and keeps the old entry) if name is taken."""
        if isinstance(typ, (Primitive, Array)):
            raise ShapeError(
                "cannot register " + typ.expression + " as model type " + name
            )
        if name in self._types:
            return False
        self._types[name] = typ
        self._order.append(name)
        return True

    def entry(self, index: int) -> tuple[str, TypeNode]:
        """The index-th registered (name, type), in insertion order."""
        name = self._order[index]
        return (name, self._types[name])

    def items(self) -> list[tuple[str, TypeNode]]:
        return list(self._types.items())


class EnumRegistry:
    """Literal-union enums by name. Literals keep first-seen union order."""

    def __init__(self) -> None:
        self._enums: dict[str, tuple[str, ...]] = {}

    def __contains__(self, name: str) -> bool:
        return name in self._enums

    def __len__(self) -> int:
        return len(self._enums)

    def get(self, name: str) -> tuple[str, ...] | None:
        return self._enums.get(name)

    def register(self, name: str, literals: tuple[str, ...]) -> None:
        if name not in self._enums:
            self._enums[name] = literals

    def items(self) -> list[tuple[str, tuple[str, ...]]]:
        return list(self._enums.items())


class GenerationContext:
    """Mutable state threaded through one translation run."""

    def __init__(self, name_map: dict[str, str]) -> None:
        self.name_map: dict[str, str] = name_map
        self.model_types: ModelTypeRegistry = ModelTypeRegistry()
        self.enums: EnumRegistry = EnumRegistry()
        self.documented_results: dict[str, str] = {}
        self.warnings: list[Diagnostic] = []

    @classmethod
    def create(cls, class_names: list[str]) -> GenerationContext:
        """Fresh context: API classes become interfaces, then the fixed overrides apply."""
        name_map = {name: "I" + to_title_case(name) for name in class_names}
        name_map.update(NAME_OVERRIDES)
        ctx = cls(name_map)
        for name, literals in SEEDED_ENUMS.items():
            ctx.enums.register(name, literals)
        return ctx

    def map_name(self, name: str) -> str:
        return self.name_map.get(name, name)

    def warn(self, category: str, message: str) -> None:
        self.warnings.append(Diagnostic(category, message))
