"""Report data models.

Ontology levels:
  Level 1: Halstead token counts (operators, operands)
  Level 2: Function reports (one per scope the walker opens)
  Level 3: Module reports (aggregate + functions + dependencies)
  Level 4: Project reports (module reports + dependency matrices + averages)

Every report is created fresh per analysis call and owned by the caller.
``to_dict`` renders the JSON shape consumers of the reports expect.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Hashable, Optional

# ── Inputs ─────────────────────────────────────────────────────────


@dataclass(frozen=True)
class SourceLocation:
    """1-based line extent of a module or function."""

    start_line: int
    end_line: int


@dataclass
class Dependency:
    """A dependency declaration reported by the walker.

    ``type`` distinguishes resolvable module-relative imports ("CommonJS")
    from other kinds; ``path`` is the declared target as written.
    """

    type: str
    path: str
    line: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"type": self.type, "path": self.path}
        if self.line is not None:
            result["line"] = self.line
        return result


@dataclass
class ProjectModule:
    """One module of a project: its path and its already-parsed tree."""

    path: str
    tree: Any


# ── Level 1: Halstead ──────────────────────────────────────────────


@dataclass
class HalsteadItemState:
    """Distinct/total counts for one token class (operators or operands).

    ``identifiers`` maps each membership key to the token as recorded, in
    insertion order so reports stay deterministic.
    """

    distinct: int = 0
    total: int = 0
    identifiers: dict[Hashable, Hashable] = field(default_factory=dict)

    @property
    def names(self) -> list[Hashable]:
        """Recorded tokens, first occurrence order."""
        return list(self.identifiers.values())

    def to_dict(self) -> dict[str, Any]:
        return {
            "distinct": self.distinct,
            "total": self.total,
            "identifiers": self.names,
        }


@dataclass
class HalsteadState:
    """Operator/operand statistics and the measures derived from them."""

    operators: HalsteadItemState = field(default_factory=HalsteadItemState)
    operands: HalsteadItemState = field(default_factory=HalsteadItemState)

    # Derived by metrics.halstead.derive_halstead
    length: int = 0
    vocabulary: int = 0
    difficulty: float = 0.0
    volume: float = 0.0
    effort: float = 0.0
    bugs: float = 0.0
    time: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "operators": self.operators.to_dict(),
            "operands": self.operands.to_dict(),
            "length": self.length,
            "vocabulary": self.vocabulary,
            "difficulty": self.difficulty,
            "volume": self.volume,
            "effort": self.effort,
            "bugs": self.bugs,
            "time": self.time,
        }


# ── Level 2: Functions ─────────────────────────────────────────────


@dataclass
class Sloc:
    """Source line counts: walker-scored logical lines, optional physical extent."""

    logical: int = 0
    physical: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"logical": self.logical}
        if self.physical is not None:
            result["physical"] = self.physical
        return result


@dataclass
class FunctionReport:
    """Metrics for one scope (or for a whole module, as its aggregate)."""

    name: Optional[str] = None
    line: Optional[int] = None
    sloc: Sloc = field(default_factory=Sloc)
    cyclomatic: int = 1  # every function has at least one path
    halstead: HalsteadState = field(default_factory=HalsteadState)
    params: int = 0
    cyclomatic_density: Optional[float] = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"name": self.name}
        if self.line is not None:
            result["line"] = self.line
        result.update(
            {
                "sloc": self.sloc.to_dict(),
                "cyclomatic": self.cyclomatic,
                "halstead": self.halstead.to_dict(),
                "params": self.params,
            }
        )
        if self.cyclomatic_density is not None:
            result["cyclomaticDensity"] = self.cyclomatic_density
        return result


# ── Level 3: Modules ───────────────────────────────────────────────


@dataclass
class ModuleReport:
    """Complexity report for a single module tree."""

    aggregate: FunctionReport = field(default_factory=FunctionReport)
    functions: list[FunctionReport] = field(default_factory=list)
    dependencies: list[Any] = field(default_factory=list)
    path: Optional[str] = None

    # Derived by metrics.module.calculate_metrics
    maintainability: Optional[float] = None
    loc: Optional[float] = None
    cyclomatic: Optional[float] = None
    effort: Optional[float] = None
    params: Optional[float] = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.path is not None:
            result["path"] = self.path
        result.update(
            {
                "aggregate": self.aggregate.to_dict(),
                "functions": [f.to_dict() for f in self.functions],
                "dependencies": [_plain(d) for d in self.dependencies],
            }
        )
        for key in ("maintainability", "loc", "cyclomatic", "effort", "params"):
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        return result


# ── Level 4: Projects ──────────────────────────────────────────────


@dataclass
class ProjectReport:
    """Module reports plus project-wide structure and averages.

    When produced with ``skip_calculation`` only ``reports`` is populated.
    """

    reports: list[ModuleReport] = field(default_factory=list)

    adjacency_matrix: Optional[list[list[int]]] = None
    first_order_density: Optional[float] = None

    # Only when core size is requested
    visibility_matrix: Optional[list[list[int]]] = None
    change_cost: Optional[float] = None
    core_size: Optional[float] = None

    loc: Optional[float] = None
    cyclomatic: Optional[float] = None
    effort: Optional[float] = None
    params: Optional[float] = None
    maintainability: Optional[float] = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"reports": [r.to_dict() for r in self.reports]}
        optional = {
            "adjacencyMatrix": self.adjacency_matrix,
            "firstOrderDensity": self.first_order_density,
            "visibilityMatrix": self.visibility_matrix,
            "changeCost": self.change_cost,
            "coreSize": self.core_size,
            "loc": self.loc,
            "cyclomatic": self.cyclomatic,
            "effort": self.effort,
            "params": self.params,
            "maintainability": self.maintainability,
        }
        result.update({k: v for k, v in optional.items() if v is not None})
        return result


def _plain(dependency: Any) -> Any:
    if isinstance(dependency, Dependency):
        return dependency.to_dict()
    if isinstance(dependency, dict):
        return dict(dependency)
    return dependency
