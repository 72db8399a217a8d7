"""
Solver registry for SimPlan.

Solvers are looked up by name. No solver ships with the package; a solver
package registers itself on import:

```python
from simplan.solvers import register_solver

register_solver("stackedtime", StackedTimeSolver())
```
"""

from __future__ import annotations

import logging

from simplan.core.errors import ConfigError, UnknownSolverError

from .interfaces import ISolver

logger = logging.getLogger(__name__)

SolverRegistry: dict[str, ISolver] = {}


def register_solver(name: str, solver: ISolver, *, replace: bool = False) -> None:
    """
    Register ``solver`` under ``name``.

    Args:
        name: Lookup name, e.g. ``"stackedtime"``
        solver: Object implementing ``ISolver``
        replace: Allow overwriting an existing registration

    Raises:
        ConfigError: If ``solver`` does not implement ``ISolver``, or ``name``
            is taken and ``replace`` is false
    """
    if not isinstance(name, str) or not name:
        raise ConfigError("Solver name must be a non-empty string")
    if not isinstance(solver, ISolver):
        raise ConfigError(
            f"Solver '{name}' must implement solve(), simulate() and shockdecomp()"
        )
    if name in SolverRegistry and not replace:
        raise ConfigError(f"Solver '{name}' is already registered")
    SolverRegistry[name] = solver
    logger.debug("Registered solver '%s' (%s)", name, type(solver).__name__)


def unregister_solver(name: str) -> None:
    """Remove a registration; unknown names are ignored."""
    SolverRegistry.pop(name, None)


def get_solver(name: str) -> ISolver:
    """
    Look up a registered solver.

    Raises:
        UnknownSolverError: If no solver is registered under ``name``
    """
    if name not in SolverRegistry:
        available = ", ".join(sorted(SolverRegistry)) or "none"
        raise UnknownSolverError(
            f"No solver registered under '{name}' (available: {available})"
        )
    return SolverRegistry[name]


__all__ = ["SolverRegistry", "register_solver", "unregister_solver", "get_solver"]
