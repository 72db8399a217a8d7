"""
Side-by-side comparison of two plans.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import IO, Any

from .codec import _cpad
from .collapse import collapsed_range, span_last
from .config import CompareOptions
from .errors import FrequencyMismatchError
from .moments import MIT, MITRange
from .plan import Plan

logger = logging.getLogger(__name__)

__all__ = ["compare_plans", "comparison_spans"]


def comparison_spans(left: Plan, right: Plan) -> list[MITRange]:
    """
    Common span partition of two plans.

    The boundaries are the period before each grid and the last moment of
    every collapsed span of either plan, so that within each returned span
    both plans have a constant status.
    """
    if left.frequency is not right.frequency:
        raise FrequencyMismatchError(left.range, right.range)
    bounds = {left.firstdate - 1, right.firstdate - 1}
    for p in (left, right):
        bounds.update(span_last(k) for k, _ in collapsed_range(p))
    bar = sorted(bounds)
    return [MITRange(bar[i - 1] + 1, bar[i]) for i in range(1, len(bar))]


def _mark(plan: Plan, var: str, moment: MIT, opts: CompareOptions) -> str:
    col = plan.varshks.get(var, 0)
    row = plan.offset(moment)
    if col == 0 or not 1 <= row <= len(plan):
        return opts.missing_mark
    return opts.exog_mark if plan.exogenous[row - 1, col - 1] else opts.endo_mark


def _format_comparison(left: Plan, right: Plan, opts: CompareOptions) -> str:
    out = io.StringIO()
    out.write("\n")
    if left.frequency is not right.frequency:
        raise FrequencyMismatchError(left.range, right.range)
    if left.range == right.range:
        out.write(f"Same range: {left.range}\n")
    else:
        out.write(f"Range  left: {left.range}\n")
        out.write(f"Range right: {right.range}\n")

    left_vars = list(left.varshks.names)
    right_vars = list(right.varshks.names)
    if set(left_vars) == set(right_vars):
        out.write("Same variables.\n")
    else:
        only_left = [v for v in left_vars if v not in right.varshks]
        only_right = [v for v in right_vars if v not in left.varshks]
        common = sum(1 for v in left_vars if v in right.varshks)
        out.write(f"Variables only in left plan: [{', '.join(only_left)}]\n")
        out.write(f"Variables only in right plan: [{', '.join(only_right)}]\n")
        out.write(f"{common} common variables.\n")

    allvars = left_vars + [v for v in right_vars if v not in left.varshks]
    if opts.alphabetical:
        allvars.sort()

    width1 = max(2 + max((len(v) for v in allvars), default=0), 2 + len("NAME"))
    spans = comparison_spans(left, right)
    markw = 6 + 2 * max(len(opts.exog_mark), len(opts.endo_mark), len(opts.missing_mark))
    width2 = [max(1 + len(str(s)), markw) for s in spans]

    out.write(
        f"({opts.exog_mark}) = Exogenous, ({opts.endo_mark}) = Endogenous, "
        f"({opts.missing_mark}) = Missing:\n"
    )
    header = "NAME".rjust(width1) + opts.delim + opts.delim.join(
        _cpad(s, w) for s, w in zip(spans, width2)
    )
    out.write(header + "\n")

    for lno, var in enumerate(allvars, start=1):
        cells = []
        for s, w in zip(spans, width2):
            lmark = _mark(left, var, s.first, opts)
            rmark = _mark(right, var, s.first, opts)
            cells.append(_cpad(f"{lmark} {rmark}", w))
        out.write(var.rjust(width1) + opts.delim + opts.delim.join(cells) + "\n")
        if opts.pagelines > 0 and lno % opts.pagelines == 0:
            out.write("\n" + header + "\n\n")
    return out.getvalue()


def compare_plans(
    left: Plan,
    right: Plan,
    file: str | Path | IO[str] | None = None,
    options: CompareOptions | None = None,
    **overrides: Any,
) -> str | None:
    """
    Display a comparison of two plans, or save it in a text file.

    Variables are listed in the order of the left plan followed by those found
    only in the right plan. Each cell shows the left and the right status
    separated by a space; a plan that lacks the variable, or whose grid does
    not cover the span, shows ``missing_mark``.

    Args:
        left: First plan
        right: Second plan, with the same frequency
        file: Path or open text stream; ``None`` returns the text
        options: See ``CompareOptions``
        **overrides: ``alphabetical``, ``pagelines``, ``exog_mark``,
            ``endo_mark``, ``missing_mark`` or ``delim``

    Raises:
        FrequencyMismatchError: If the plans have different frequencies

    **Example:**
        ```python
        print(compare_plans(p1, p2, pagelines=20))
        ```
    """
    opts = (options or CompareOptions()).updated(**overrides)
    text = _format_comparison(left, right, opts)
    if file is None:
        return text
    if isinstance(file, (str, Path)):
        with open(file, "w", encoding="utf-8", newline="") as f:
            f.write(text)
        logger.debug("Wrote plan comparison to %s", file)
    else:
        file.write(text)
    return None
