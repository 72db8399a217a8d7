"""
Solver extension point for SimPlan.

SimPlan does not ship a solver. Solver packages implement ``ISolver`` and
register an instance by name; ``solve``, ``simulate`` and ``shockdecomp``
dispatch to the solver named by their ``solver`` keyword.
"""

from .dispatch import DEFAULT_SOLVER, shockdecomp, simulate, solve
from .interfaces import ISolver
from .registry import SolverRegistry, get_solver, register_solver, unregister_solver

__all__ = [
    "DEFAULT_SOLVER",
    "ISolver",
    "SolverRegistry",
    "get_solver",
    "register_solver",
    "unregister_solver",
    "shockdecomp",
    "simulate",
    "solve",
]
