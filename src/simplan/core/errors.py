"""
Error classes for SimPlan.

This module defines the exception hierarchy used throughout SimPlan. Every
failure raised by a plan operation derives from ``PlanError`` and also from the
builtin exception a Python caller would naturally catch (``IndexError`` for
out-of-range dates, ``KeyError`` for unknown names, and so on).
"""

from __future__ import annotations


class PlanError(Exception):
    """Base class for all errors raised by SimPlan."""


class BoundsError(PlanError, IndexError):
    """
    A moment or span lies outside the time grid of a plan.

    **Example Usage:**
        ```python
        from simplan.core.errors import BoundsError

        try:
            plan.exogenize("y", plan.lastdate + 1)
        except BoundsError as e:
            print(f"Out of range: {e}")
        ```
    """

    def __init__(self, plan, index):
        self.plan = plan
        self.index = index
        rng = getattr(plan, "range", None)
        super().__init__(f"attempt to access plan with range {rng} at index [{index}]")


class UnknownNameError(PlanError, KeyError):
    """A variable or shock name is not present in the plan registry."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(name)

    def __str__(self) -> str:
        return f"Unknown variable or shock name: {self.name}"


class MismatchedPlanError(PlanError, ValueError):
    """Two plans do not have the same variables and shocks in the same order."""


class FrequencyMismatchError(PlanError, ValueError):
    """Moments or ranges of different frequencies were combined."""

    def __init__(self, left, right):
        self.left = left
        self.right = right
        super().__init__(f"Mixing frequencies not allowed: {left} and {right}.")


class ParseError(PlanError, ValueError):
    """
    A plan text file could not be parsed.

    Attributes:
        line: 1-based line number where parsing failed
        text: The offending line (or fragment)
    """

    def __init__(self, message: str, line: int | None = None, text: str | None = None):
        self.line = line
        self.text = text
        self.message = message
        super().__init__(self._fmt())

    def _fmt(self) -> str:
        """Format the error message with line context."""
        where = f" on line {self.line}" if self.line is not None else ""
        got = f": {self.text!r}" if self.text is not None else ""
        return f"{self.message}{where}{got}"


class InvalidMutationError(PlanError, TypeError):
    """Direct item assignment on a plan was attempted."""

    def __init__(self):
        super().__init__(
            "Cannot assign directly. Use `exogenize` and `endogenize` to alter plan."
        )


class ConfigError(PlanError, ValueError):
    """
    Invalid configuration or options.

    **Common Causes:**
    - Empty or whitespace-containing exogenous/endogenous markers
    - Identical exogenous and endogenous markers
    - A delimiter that would be confused with a name or date
    """


class ModelError(ConfigError):
    """A model descriptor could not be loaded or is inconsistent."""


class UnknownSolverError(ConfigError):
    """No solver is registered under the requested name."""
