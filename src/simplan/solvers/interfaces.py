"""
Solver interface protocol for SimPlan.
Defines the contract that every registered solver must satisfy.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

import numpy as np

if TYPE_CHECKING:
    # Only imported for type checking to avoid runtime cycles
    from simplan.core.model import Model
    from simplan.core.plan import Plan


@runtime_checkable
class ISolver(Protocol):
    """
    Contract for simulation solvers.
    Responsibilities: prepare a model for simulation and run simulations driven
    by a plan and an exogenous data array.
    """

    def solve(self, model: Model, **options: Any) -> Any:
        """Prepare solver-specific data for ``model`` (called before simulating)."""
        ...

    def simulate(self, model: Model, plan: Plan, data: np.ndarray, *extra: Any, **options: Any) -> np.ndarray:
        """
        Run a simulation.

        Args:
            model: The model to simulate
            plan: Which variables and shocks are exogenous in each period
            data: Array of shape ``(len(plan), len(plan.varshks))`` holding the
                exogenous values, initial and final conditions included
            *extra: Optionally an unanticipated plan and its data array

        Returns:
            Array with the same shape as ``data`` holding the solution.
        """
        ...

    def shockdecomp(
        self, model: Model, plan: Plan, data: np.ndarray, *, control: Any = None, **options: Any
    ) -> Any:
        """Decompose the simulation result into the contributions of each shock."""
        ...


__all__ = ["ISolver"]
