"""
Solver dispatch: ``solve``, ``simulate`` and ``shockdecomp``.

Each function looks up the solver by name in the registry and hands the call
over. The default solver name is ``"stackedtime"``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import numpy as np
import pandas as pd

from .registry import get_solver

if TYPE_CHECKING:
    from simplan.core.model import Model
    from simplan.core.plan import Plan

logger = logging.getLogger(__name__)

DEFAULT_SOLVER = "stackedtime"


def _check_data(plan: Plan, data: Any, label: str = "data") -> np.ndarray:
    """Validate that ``data`` is a 2-D array matching the plan's grid and names."""
    arr = np.asarray(data)
    expected = (len(plan), len(plan.varshks))
    if arr.ndim != 2:
        raise ValueError(f"{label} must be a 2-D array, got {arr.ndim} dimension(s)")
    if arr.shape != expected:
        raise ValueError(
            f"{label} shape {arr.shape} does not match plan {plan.range} "
            f"with {expected[1]} variables (expected {expected})"
        )
    return arr


def _frame_to_array(plan: Plan, frame: pd.DataFrame, label: str) -> np.ndarray:
    """Extract the plan's grid and columns from a date-indexed data frame."""
    index = plan.to_frame().index
    names = list(plan.varshks.names)
    missing = [n for n in names if n not in frame.columns]
    if missing:
        raise ValueError(f"{label} is missing columns: {missing}")
    try:
        block = frame.loc[index, names]
    except KeyError as e:
        raise ValueError(f"{label} does not cover the plan range {plan.range}") from e
    return block.to_numpy(dtype=float)


def solve(model: Model, *, solver: str = DEFAULT_SOLVER, **options: Any) -> Any:
    """
    Prepare ``model`` for simulation with the named solver.

    Raises:
        UnknownSolverError: If ``solver`` is not registered
    """
    logger.debug("solve: dispatching to solver '%s'", solver)
    return get_solver(solver).solve(model, **options)


def simulate(
    model: Model,
    plan: Plan,
    data: Any,
    *extra: Any,
    solver: str = DEFAULT_SOLVER,
    **options: Any,
) -> Any:
    """
    Run a simulation with the named solver.

    Call as ``simulate(model, plan, data)`` or, to mix anticipated and
    unanticipated shocks, ``simulate(model, plan, data, plan_unant,
    data_unant)``.

    ``data`` is either a 2-D array of shape ``(len(plan), len(plan.varshks))``
    or a ``DataFrame`` indexed by date (see ``Plan.to_frame``) with one column
    per variable and shock. With a data frame, the result is a copy of it
    with the solution written over the plan's grid.

    Raises:
        ValueError: If a data array does not match its plan
        TypeError: If ``extra`` is not a (plan, data) pair
        UnknownSolverError: If ``solver`` is not registered
    """
    if len(extra) not in (0, 2):
        raise TypeError("simulate() takes either (model, plan, data) or (model, plan, data, plan_unant, data_unant)")

    frame = data if isinstance(data, pd.DataFrame) else None
    if frame is not None:
        exog = _frame_to_array(plan, frame, "data")
    else:
        exog = _check_data(plan, data)

    if extra:
        plan_unant, data_unant = extra
        if isinstance(data_unant, pd.DataFrame):
            data_unant = _frame_to_array(plan_unant, data_unant, "data_unant")
        extra = (plan_unant, _check_data(plan_unant, data_unant, "data_unant"))

    logger.debug("simulate: dispatching %s to solver '%s'", plan.summary(), solver)
    result = get_solver(solver).simulate(model, plan, exog, *extra, **options)

    if frame is None:
        return result
    out = frame.copy()
    out.loc[plan.to_frame().index, list(plan.varshks.names)] = np.asarray(result)
    return out


def shockdecomp(
    model: Model,
    plan: Plan,
    data: Any,
    *,
    solver: str = DEFAULT_SOLVER,
    control: Any = None,
    **options: Any,
) -> Any:
    """
    Compute a shock decomposition with the named solver.

    ``control`` is the reference solution the decomposition is measured
    against; ``None`` lets the solver use the steady state.

    Raises:
        ValueError: If ``data`` does not match the plan
        UnknownSolverError: If ``solver`` is not registered
    """
    if isinstance(data, pd.DataFrame):
        exog = _frame_to_array(plan, data, "data")
    else:
        exog = _check_data(plan, data)
    logger.debug("shockdecomp: dispatching %s to solver '%s'", plan.summary(), solver)
    return get_solver(solver).shockdecomp(model, plan, exog, control=control, **options)


__all__ = ["DEFAULT_SOLVER", "solve", "simulate", "shockdecomp"]
