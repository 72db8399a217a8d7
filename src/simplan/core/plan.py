"""
The simulation plan.

A ``Plan`` records, for every period of a simulation grid, which variables and
shocks of a model are exogenous (held at given values) and which are endogenous
(solved for). It pairs a time grid, an ordered name registry and a boolean
matrix with one row per period and one column per name.

The grid of a plan built from a model is the requested simulation range
extended by ``model.maxlag`` periods before and ``model.maxlead`` periods after,
over which initial and final conditions are imposed.

### Constructors
  * ``Plan(model, range)``

### Modify the plan
  * ``exogenize``, ``endogenize`` - make variables exogenous or endogenous
  * ``exog_endo``, ``endo_exog`` - swap exogenous and endogenous variables
  * ``autoexogenize`` - apply the model's autoexogenize mapping
  * ``setexog`` - replace the exogenous set of one period

### Query the plan
  * ``plan[t]`` / ``status_at`` - exogenous names at a moment
  * ``plan[span]`` / ``slice`` - sub-plan over a span
  * ``plansum``, ``count_exog_points``, ``count_endo_points``
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Iterable, Iterator
from dataclasses import replace
from typing import TYPE_CHECKING, Any

import numpy as np
import pandas as pd

from .config import DisplayOptions
from .errors import BoundsError, InvalidMutationError, MismatchedPlanError, UnknownNameError
from .model import ModelVariable, isexog, isshock
from .moments import MIT, Frequency, MITRange, is_span_like, to_mit, to_range
from .registry import VariableRegistry

if TYPE_CHECKING:
    from .model import Model

logger = logging.getLogger(__name__)

# Row selector meaning "the whole grid" for the point counting functions.
ALL = slice(None)


def _is_model(x: Any) -> bool:
    return hasattr(x, "maxlag") and hasattr(x, "maxlead")


def _name_of(x: Any) -> str:
    return x.name if isinstance(x, ModelVariable) else str(x)


def _as_names(names: Any) -> list[str]:
    """Normalize a single name or an iterable of names to a list of strings."""
    if isinstance(names, (str, ModelVariable)):
        return [_name_of(names)]
    return [_name_of(n) for n in names]


def _iter_spans(dates: Any) -> Iterator[MITRange]:
    """A moment, a span, or an iterable of moments and spans, as spans."""
    if isinstance(dates, (MIT, MITRange, int, range, str)):
        yield to_range(dates)
        return
    for d in dates:
        yield to_range(d)


class Plan:
    """
    A simulation plan: which variables and shocks are exogenous in each period.

    Attributes:
        range: The time grid (``MITRange``), including the initial and final
            condition periods
        varshks: Ordered registry of variable and shock names
        exogenous: Read-only boolean matrix, ``len(range)`` rows by
            ``len(varshks)`` columns

    The plan can only be changed through its mutators (``exogenize``,
    ``endogenize`` and friends); assigning to ``plan[...]`` raises
    ``InvalidMutationError``.

    **Example Usage:**
        ```python
        from simplan import MIT, MITRange, Model, Plan

        m = Model(variables=["a", "b"], shocks=["sa", "sb"], maxlag=1, maxlead=1)
        rng = MITRange(MIT.quarterly(2020, 1), MIT.quarterly(2020, 2))
        p = Plan(m, rng)
        str(p.range)                      # '2019Q4:2020Q3'
        p.exogenize("a", rng)
        p[MIT.quarterly(2020, 1)]         # ['a', 'sa', 'sb']
        ```
    """

    __slots__ = ("_range", "_varshks", "_exogenous")

    def __init__(self, model: Model, rng: Any):
        """
        Create the default plan for ``model`` over ``rng``.

        Shocks and declared-exogenous variables are exogenous in every period,
        all other variables are endogenous.

        Args:
            model: Model descriptor (``varshks``, ``maxlag``, ``maxlead``)
            rng: Simulation range: an ``MITRange``, a single ``MIT`` (length-1
                range), an ``int`` or a Python ``range`` (Unit frequency)
        """
        rng = to_range(rng).extend(model.maxlag, model.maxlead)
        varshks = list(model.varshks)
        registry = VariableRegistry(_name_of(v) for v in varshks)
        exogenous = np.zeros((len(rng), len(registry)), dtype=bool)
        for ind, var in enumerate(varshks):
            if isshock(var) or isexog(var):
                exogenous[:, ind] = True
        self._assign(rng, registry, exogenous)

    @classmethod
    def from_model(cls, model: Model, rng: Any) -> Plan:
        """Same as ``Plan(model, rng)``."""
        return cls(model, rng)

    @classmethod
    def from_parts(
        cls, rng: MITRange, varshks: VariableRegistry, exogenous: np.ndarray
    ) -> Plan:
        """Create a plan directly from its grid, registry and matrix (no copy)."""
        p = cls.__new__(cls)
        p._assign(to_range(rng), varshks, exogenous)
        return p

    def _assign(self, rng: MITRange, varshks: VariableRegistry, exogenous: np.ndarray) -> None:
        exogenous = np.asarray(exogenous, dtype=bool)
        if exogenous.shape != (len(rng), len(varshks)):
            raise ValueError(
                f"exogenous matrix shape {exogenous.shape} does not match "
                f"range {rng} and {len(varshks)} variables"
            )
        self._range = rng
        self._varshks = varshks
        self._exogenous = exogenous

    # --- read-only fields ---------------------------------------------------

    @property
    def range(self) -> MITRange:
        return self._range

    @property
    def varshks(self) -> VariableRegistry:
        return self._varshks

    @property
    def exogenous(self) -> np.ndarray:
        view = self._exogenous.view()
        view.flags.writeable = False
        return view

    @property
    def frequency(self) -> Frequency:
        return self._range.frequency

    @property
    def firstdate(self) -> MIT:
        return self._range.first

    @property
    def lastdate(self) -> MIT:
        return self._range.last

    # --- offsets and bounds -------------------------------------------------

    def offset(self, idx: Any) -> int | range:
        """
        1-based row of a moment, or the contiguous rows of a span.

        No bounds check is performed; the result may be zero, negative or
        larger than ``len(plan)``.

        Raises:
            FrequencyMismatchError: If the frequency differs from the grid's
        """
        if is_span_like(idx):
            span = to_range(idx)
            return range(self.offset(span.first), self.offset(span.last) + 1)
        return to_mit(idx) - self._range.first + 1

    def _check_bounds(self, span: MITRange) -> None:
        if not span.issubset(self._range):
            raise BoundsError(self, span)

    def _rows(self, span: MITRange) -> slice:
        """Numpy row slice of a span already checked to lie inside the grid."""
        if not span:
            return slice(0, 0)
        start = self.offset(span.first)
        return slice(start - 1, start - 1 + len(span))

    def _row(self, idx: Any) -> int:
        """0-based matrix row of a moment (or a 1-based ``int`` row), bounds checked."""
        if isinstance(idx, int) and not isinstance(idx, bool) and self.frequency is not Frequency.Unit:
            if not 1 <= idx <= len(self):
                raise BoundsError(self, idx)
            return idx - 1
        moment = to_mit(idx)
        self._check_bounds(MITRange(moment, moment))
        return self.offset(moment) - 1

    # --- sequence interface -------------------------------------------------

    def __len__(self) -> int:
        return len(self._range)

    def __iter__(self) -> Iterator[list[str]]:
        for row in self._exogenous:
            yield self._names_of_row(row)

    def _names_of_row(self, row: np.ndarray) -> list[str]:
        names = self._varshks.names
        return [names[i] for i in np.flatnonzero(row)]

    def __getitem__(self, key: Any):
        """
        Index the plan.

        - ``plan[t]`` with a moment: the exogenous names at ``t``
        - ``plan[i]`` with an ``int``: the exogenous names at row ``i`` (1-based),
          or at moment ``i`` for Unit-frequency plans
        - ``plan[span]``: the plan trimmed to ``span``
        - ``plan[span, model]``: trimmed to ``span`` extended by the model's lags/leads
        - ``plan["a", "b"]``: the plan restricted to the named columns
        """
        if isinstance(key, tuple):
            if len(key) == 2 and _is_model(key[1]):
                return self.slice(key[0], key[1])
            return self.select(key)
        if isinstance(key, str) and key.isidentifier():
            return self.select([key])
        if isinstance(key, range) and self.frequency is not Frequency.Unit:
            if key.step != 1:
                raise ValueError(f"Only contiguous ranges are supported, got {key!r}")
            if key.start < 1 or key.stop - 1 > len(self):
                raise BoundsError(self, key)
            first = self._range.first
            return self.slice(MITRange(first + (key.start - 1), first + (key.stop - 2)))
        if is_span_like(key):
            return self.slice(key)
        return self._names_of_row(self._exogenous[self._row(key)])

    def __setitem__(self, key: Any, value: Any) -> None:
        raise InvalidMutationError()

    def __delitem__(self, key: Any) -> None:
        raise InvalidMutationError()

    # --- queries ------------------------------------------------------------

    def status_at(self, moment: Any) -> list[str]:
        """
        Exogenous names at ``moment``, in registry order.

        Raises:
            BoundsError: If ``moment`` is outside the grid
        """
        moment = to_mit(moment)
        self._check_bounds(MITRange(moment, moment))
        return self._names_of_row(self._exogenous[self.offset(moment) - 1])

    def exogenous_indices(self, idx: Any) -> list[int]:
        """1-based columns of the exogenous names at a moment (or 1-based row)."""
        return [int(i) + 1 for i in np.flatnonzero(self._exogenous[self._row(idx)])]

    def to_frame(self) -> pd.DataFrame:
        """
        The exogeneity matrix as a boolean ``DataFrame``.

        The index is a ``PeriodIndex`` when the grid frequency has a pandas
        equivalent, otherwise the moments' text forms.
        """
        try:
            index = self._range.to_period_index()
        except ValueError:
            index = pd.Index([str(t) for t in self._range])
        index.name = "date"
        return pd.DataFrame(self._exogenous.copy(), index=index, columns=list(self._varshks.names))

    # --- structural operations ----------------------------------------------

    def copy(self) -> Plan:
        """Independent copy with its own matrix."""
        return Plan.from_parts(self._range, self._varshks, self._exogenous.copy())

    __copy__ = copy

    def __deepcopy__(self, memo: dict) -> Plan:
        return self.copy()

    def similar(self) -> Plan:
        """Plan with the same grid and registry and an uninitialised matrix."""
        return Plan.from_parts(self._range, self._varshks, np.empty_like(self._exogenous))

    def slice(self, span: Any, model: Model | None = None) -> Plan:
        """
        New plan trimmed to ``span``.

        When ``model`` is given, ``span`` is first extended by ``model.maxlag``
        periods before and ``model.maxlead`` periods after, so that the result
        keeps room for initial and final conditions.

        Raises:
            BoundsError: If the (extended) span leaves the grid
        """
        span = to_range(span)
        if model is not None:
            span = span.extend(model.maxlag, model.maxlead)
        self._check_bounds(span)
        return Plan.from_parts(span, self._varshks, self._exogenous[self._rows(span)].copy())

    def select(self, names: Iterable[str]) -> Plan:
        """New plan restricted to ``names`` (columns re-indexed in the given order)."""
        names = _as_names(names)
        cols = [c - 1 for c in self._varshks.columns(names)]
        return Plan.from_parts(self._range, VariableRegistry(names), self._exogenous[:, cols].copy())

    def merge_into(self, span: Any, src: Plan) -> Plan:
        """
        Copy the rows of ``src`` over ``span`` into this plan.

        The grids of the two plans may differ, but ``span`` must lie inside both.

        Raises:
            MismatchedPlanError: If the plans' variables differ in names or order
            BoundsError: If ``span`` is outside either grid
        """
        if self._varshks != src._varshks:
            raise MismatchedPlanError(
                "Both plans must have the same variables and shocks in the same order."
            )
        span = to_range(span)
        self._check_bounds(span)
        src._check_bounds(span)
        self._exogenous[self._rows(span), :] = src._exogenous[src._rows(span), :]
        return self

    # --- mutators -----------------------------------------------------------

    def set_status(self, value: bool, names: Any, dates: Any) -> Plan:
        """
        Set ``names`` exogenous (``value=True``) or endogenous on ``dates``.

        ``dates`` may be a moment, a span, or an iterable of moments and spans.
        Names are applied in order; if one is unknown an ``UnknownNameError``
        is raised and the names before it remain changed.

        Raises:
            BoundsError: If a date is outside the grid
            UnknownNameError: If a name is not in the plan
        """
        names = _as_names(names)
        for span in _iter_spans(dates):
            self._check_bounds(span)
            rows = self._rows(span)
            for name in names:
                col = self._varshks.get(name, 0)
                if col == 0:
                    raise UnknownNameError(name)
                self._exogenous[rows, col - 1] = bool(value)
        return self

    def exogenize(self, names: Any, dates: Any) -> Plan:
        """Make ``names`` exogenous on ``dates``."""
        return self.set_status(True, names, dates)

    def endogenize(self, names: Any, dates: Any) -> Plan:
        """Make ``names`` endogenous on ``dates``."""
        return self.set_status(False, names, dates)

    def exog_endo(self, exog: Any, endo: Any, dates: Any) -> Plan:
        """Make ``exog`` exogenous and then ``endo`` endogenous on ``dates``."""
        self.set_status(True, exog, dates)
        return self.set_status(False, endo, dates)

    def endo_exog(self, endo: Any, exog: Any, dates: Any) -> Plan:
        """Same as ``exog_endo`` with the arguments swapped."""
        return self.exog_endo(exog, endo, dates)

    def autoexogenize(self, model: Model, dates: Any) -> Plan:
        """
        Apply the model's autoexogenize mapping on ``dates``.

        Every variable listed in ``model.autoexogenize`` becomes endogenous and
        its paired shock becomes exogenous.
        """
        if not model.autoexogenize:
            logger.warning("autoexogenize: model has an empty autoexogenize mapping")
        auto_vars = list(model.autoexogenize.keys())
        auto_shks = list(model.autoexogenize.values())
        return self.exog_endo(auto_shks, auto_vars, dates)

    def setexog(self, tt: Any, vinds: Iterable[int]) -> Plan:
        """
        Make exactly the columns ``vinds`` (1-based) exogenous at ``tt``.

        ``tt`` is a moment, or an ``int`` 1-based row (a moment on Unit plans).
        """
        row = self._row(tt)
        cols = [int(c) - 1 for c in vinds]
        for c in cols:
            if not 0 <= c < len(self._varshks):
                raise BoundsError(self, c + 1)
        self._exogenous[row, :] = False
        self._exogenous[row, cols] = True
        return self

    # --- comparison and display ---------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Plan):
            return NotImplemented
        return (
            self._range == other._range
            and self._varshks == other._varshks
            and np.array_equal(self._exogenous, other._exogenous)
        )

    __hash__ = None  # mutable

    def summary(self) -> str:
        """One-line description, e.g. ``Plan{MIT{Quarterly}} with range 2019Q4:2020Q3``."""
        return f"Plan{{MIT{{{self.frequency.name}}}}} with range {self._range}"

    def show(self, options: DisplayOptions | None = None, **overrides: Any) -> str:
        """
        Pretty display: the summary followed by one line per collapsed span.

        With ``limit=True`` the middle spans are elided to fit ``rows`` lines and
        long name lists are cut to fit ``columns`` characters.
        """
        from .collapse import collapsed_range

        if options is None:
            size = shutil.get_terminal_size()
            options = DisplayOptions(rows=size.lines, columns=size.columns)
        if overrides:
            options = replace(options, **overrides)

        lines = [self.summary()]
        if not len(self):
            return lines[0]
        cp = collapsed_range(self)
        maxl = max(len(str(k)) for k, _ in cp)
        dcol = options.columns - maxl - 6 if options.limit else None

        def fmt(rng: Any, names: list[str]) -> str:
            head = "  " + str(rng).rjust(maxl) + " → "
            if not names:
                return head + "∅"
            if dcol is None:
                return head + ", ".join(names)
            shown, total = [], 0
            for i, n in enumerate(names):
                total += len(n) + 2
                if i == 0 or total < dcol:
                    shown.append(n)
            text = ", ".join(shown)
            return head + (text + ", …" if len(shown) < len(names) else text)

        nrow = options.rows
        if not options.limit or len(cp) <= nrow - 5:
            lines.extend(fmt(r, v) for r, v in cp)
        else:
            top = max((nrow - 5) // 2, 0)
            bot = len(cp) - nrow + 5 + top
            lines.extend(fmt(r, v) for r, v in cp[:top])
            lines.append("   ⋮")
            lines.extend(fmt(r, v) for r, v in cp[bot:])
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.show(DisplayOptions(limit=False))

    def __repr__(self) -> str:
        return f"<{self.summary()}, {len(self._varshks)} variables>"


# ---------------------------------------------------------------------------
# Function interface


def set_status(plan: Plan, value: bool, names: Any, dates: Any) -> Plan:
    return plan.set_status(value, names, dates)


def exogenize(plan: Plan, names: Any, dates: Any) -> Plan:
    """Make ``names`` exogenous on ``dates``. ``names`` is a name or an iterable of names."""
    return plan.exogenize(names, dates)


def endogenize(plan: Plan, names: Any, dates: Any) -> Plan:
    """Make ``names`` endogenous on ``dates``. ``names`` is a name or an iterable of names."""
    return plan.endogenize(names, dates)


def exog_endo(plan: Plan, exog: Any, endo: Any, dates: Any) -> Plan:
    return plan.exog_endo(exog, endo, dates)


def endo_exog(plan: Plan, endo: Any, exog: Any, dates: Any) -> Plan:
    return plan.endo_exog(endo, exog, dates)


def autoexogenize(plan: Plan, model: Model, dates: Any) -> Plan:
    return plan.autoexogenize(model, dates)


def setexog(plan: Plan, tt: Any, vinds: Iterable[int]) -> Plan:
    return plan.setexog(tt, vinds)


def merge_into(dest: Plan, span: Any, src: Plan) -> Plan:
    """Copy ``src``'s rows over ``span`` into ``dest``."""
    return dest.merge_into(span, src)


def plansum(model: Model, plan: Plan) -> int:
    """
    Total number of exogenous points in the plan.

    Periods over which initial and final conditions are imposed (the first
    ``model.maxlag`` and last ``model.maxlead`` rows) are not counted.
    """
    stop = len(plan) - model.maxlead
    return int(plan._exogenous[model.maxlag : max(stop, model.maxlag)].sum())


def _count_rows(plan: Plan, rng: Any) -> slice:
    if rng is Ellipsis or (isinstance(rng, slice) and rng == ALL) or (isinstance(rng, str) and rng == ":"):
        return ALL
    span = to_range(rng)
    plan._check_bounds(span)
    return plan._rows(span)


def count_exog_points(plan: Plan, rng: Any, names: Any) -> int:
    """
    Number of exogenous points of ``names`` over ``rng``.

    ``rng`` is a moment, a span, or ``ALL`` for the whole grid.

    Example:
        ```python
        count_exog_points(p, ALL, m.exogenous)
        ```
    """
    cols = [c - 1 for c in plan.varshks.columns(_as_names(names))]
    return int(plan._exogenous[_count_rows(plan, rng)][:, cols].sum())


def count_endo_points(plan: Plan, rng: Any, names: Any) -> int:
    """Number of endogenous points of ``names`` over ``rng`` (see ``count_exog_points``)."""
    cols = [c - 1 for c in plan.varshks.columns(_as_names(names))]
    return int((~plan._exogenous[_count_rows(plan, rng)][:, cols]).sum())


__all__ = [
    "ALL",
    "Plan",
    "set_status",
    "exogenize",
    "endogenize",
    "exog_endo",
    "endo_exog",
    "autoexogenize",
    "setexog",
    "merge_into",
    "plansum",
    "count_exog_points",
    "count_endo_points",
]
