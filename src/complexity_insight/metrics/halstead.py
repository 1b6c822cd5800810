"""Halstead operator/operand accounting.

Counts come from the tokens the walker reports per node:

    n1, n2 = distinct operators, distinct operands
    N1, N2 = total operators, total operands

    length     N = N1 + N2
    vocabulary n = n1 + n2
    difficulty D = (n1 / 2) * (N2 / n2)     (N2 / n2 taken as 1 when n2 == 0)
    volume     V = N * log2(n)
    effort     E = D * V
    bugs       B = V / 3000
    time       T = E / 18

Reference: Halstead, "Elements of Software Science" (1977).
"""

from __future__ import annotations

import math
from dataclasses import dataclass, fields
from typing import Hashable

from ..models import FunctionReport, HalsteadItemState, HalsteadState

METRICS = ("operators", "operands")

# Token text equal to an accumulator field name is keyed by ReservedKey, a
# type no walker token can be equal to.
RESERVED_KEYS = frozenset(
    [f.name for f in fields(HalsteadItemState)] + [f.name for f in fields(HalsteadState)]
)


@dataclass(frozen=True)
class ReservedKey:
    """Membership key for a token whose text is a reserved field name."""

    name: str


def disambiguate(identifier: Hashable) -> Hashable:
    """Return the key ``identifier`` is recorded under."""
    if isinstance(identifier, str) and identifier in RESERVED_KEYS:
        return ReservedKey(identifier)
    return identifier


def record(report: FunctionReport, metric: str, identifier: Hashable) -> None:
    """Record one occurrence of an operator or operand on ``report``.

    ``total`` always increments; ``distinct`` only the first time the
    identifier is seen for that metric on that report.
    """
    if metric not in METRICS:
        raise ValueError(f"Unknown Halstead metric: {metric!r}")

    item: HalsteadItemState = getattr(report.halstead, metric)
    key = disambiguate(identifier)
    if key not in item.identifiers:
        item.identifiers[key] = identifier
        item.distinct += 1
    item.total += 1


def derive_halstead(state: HalsteadState) -> HalsteadState:
    """Fill the derived Halstead measures on ``state`` in place."""
    state.length = state.operators.total + state.operands.total
    if state.length == 0:
        state.vocabulary = 0
        state.difficulty = 0.0
        state.volume = 0.0
        state.effort = 0.0
        state.bugs = 0.0
        state.time = 0.0
        return state

    operands = state.operands
    state.vocabulary = state.operators.distinct + operands.distinct
    state.difficulty = (state.operators.distinct / 2) * (
        1 if operands.distinct == 0 else operands.total / operands.distinct
    )
    # log2(1) == 0, so a one-token vocabulary has zero volume
    state.volume = state.length * math.log2(state.vocabulary)
    state.effort = state.difficulty * state.volume
    state.bugs = state.volume / 3000
    state.time = state.effort / 18
    return state
