"""
Run-length compression of a plan along its time grid.

Consecutive periods with the same set of exogenous names are merged into one
span. The result is the canonical form used by the plan display, the text
codec and the plan comparison.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from .moments import MIT, MITRange

if TYPE_CHECKING:
    from .plan import Plan


def collapsed_range(plan: Plan) -> list[tuple[MIT | MITRange, list[str]]]:
    """
    Partition the plan's grid into maximal runs of identical status.

    Returns:
        Ordered list of ``(key, names)`` pairs, where ``key`` is the moment
        itself for a run of length one and an ``MITRange`` otherwise, and
        ``names`` are the exogenous names (registry order) throughout the run.
        An empty plan gives an empty list.

    **Example:**
        ```python
        p = Plan(m, MITRange(MIT.quarterly(2020, 1), MIT.quarterly(2020, 4)))
        p.exogenize("a", MIT.quarterly(2020, 2))
        collapsed_range(p)
        # [(2019Q4:2020Q1, ['sa']), (2020Q2, ['a', 'sa']), (2020Q3:2021Q1, ['sa'])]
        ```
    """
    rng = plan.range
    matrix = plan.exogenous
    names = plan.varshks.names
    ret: list[tuple[MIT | MITRange, list[str]]] = []
    if not len(rng):
        return ret

    def emit(i1: int, i2: int) -> None:
        key = rng[i1] if i1 == i2 else MITRange(rng[i1], rng[i2])
        ret.append((key, [names[c] for c in np.flatnonzero(matrix[i1])]))

    i1 = 0
    for i in range(1, len(rng)):
        if not np.array_equal(matrix[i], matrix[i1]):
            emit(i1, i - 1)
            i1 = i
    emit(i1, len(rng) - 1)
    return ret


def span_first(key: MIT | MITRange) -> MIT:
    """First moment of a collapsed key."""
    return key.first if isinstance(key, MITRange) else key


def span_last(key: MIT | MITRange) -> MIT:
    """Last moment of a collapsed key."""
    return key.last if isinstance(key, MITRange) else key


__all__ = ["collapsed_range", "span_first", "span_last"]
