"""Protocol classes for tree walkers and the syntax rules they supply.

The engine never looks at node kinds. A walker traverses one grammar
dialect and, for each node, hands the engine a syntax rule saying what that
node contributes. Rules may be ``SyntaxRule`` instances or plain mappings
with the same keys, so walkers can keep their syntax tables as dicts.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Protocol, Sequence, Union, runtime_checkable

from .config import AnalysisSettings

Amount = Union[int, float, Callable[[Any], Union[int, float]]]


@dataclass(frozen=True)
class HalsteadToken:
    """An operator or operand a node introduces.

    ``identifier`` is the token text or a function of the node; ``filter``
    gates whether the token applies to a specific node.
    """

    identifier: Any
    filter: Optional[Callable[[Any], bool]] = None


@dataclass(frozen=True)
class SyntaxRule:
    """What one node kind contributes to the metrics."""

    lloc: Optional[Amount] = None
    cyclomatic: Optional[Amount] = None
    operators: Sequence[Any] = ()
    operands: Sequence[Any] = ()
    dependencies: Optional[Callable[[Any, bool], Any]] = None


@dataclass(frozen=True)
class TraversalCallbacks:
    """The three operations a walker drives during one traversal."""

    process_node: Callable[[Any, Any], None]
    create_scope: Callable[[Optional[str], Any, int], None]
    pop_scope: Callable[[], None]


@runtime_checkable
class Walker(Protocol):
    """Traverses trees of one grammar dialect."""

    def walk(
        self, tree: Any, settings: AnalysisSettings, callbacks: TraversalCallbacks
    ) -> None: ...


def read_field(value: Any, name: str) -> Any:
    """Read ``name`` from a walker-supplied value, mapping or attribute style.

    Used for syntax rules, tokens, locations, trees and dependency records.
    """
    if isinstance(value, Mapping):
        return value.get(name)
    return getattr(value, name, None)
