"""
Read-only model descriptor consumed by plans.

A plan only needs a small part of an economic model: the ordered list of
variables and shocks, which of them are shocks or declared exogenous, the
lag/lead depth of the equations and the autoexogenize mapping. Any object
exposing ``varshks``, ``maxlag``, ``maxlead`` and ``autoexogenize`` with the
same meaning can be passed wherever a ``Model`` is expected.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .errors import ModelError


@dataclass(frozen=True)
class ModelVariable:
    """
    A model variable or shock.

    Attributes:
        name: Name token used in plans
        is_shock: True for shocks (exogenous by default)
        is_exog: True for variables declared exogenous (exogenous by default)
    """

    name: str
    is_shock: bool = False
    is_exog: bool = False

    def __str__(self) -> str:
        return self.name


def isshock(var) -> bool:
    return bool(getattr(var, "is_shock", False))


def isexog(var) -> bool:
    return bool(getattr(var, "is_exog", False))


@dataclass
class Model:
    """
    Minimal model descriptor.

    Attributes:
        variables: Variables in declared order (names or ``ModelVariable``)
        shocks: Shocks in declared order (names or ``ModelVariable``)
        maxlag: Number of initial-condition periods the equations need
        maxlead: Number of final-condition periods the equations need
        autoexogenize: Mapping from variable name to the shock that is made
            exogenous in its place by ``autoexogenize``

    **Example Usage:**
        ```python
        from simplan.core.model import Model

        m = Model(variables=["a", "b"], shocks=["sa", "sb"], maxlag=1, maxlead=1,
                  autoexogenize={"a": "sa", "b": "sb"})
        [v.name for v in m.varshks]   # ['a', 'b', 'sa', 'sb']
        ```
    """

    variables: list = field(default_factory=list)
    shocks: list = field(default_factory=list)
    maxlag: int = 0
    maxlead: int = 0
    autoexogenize: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.variables = [
            v if isinstance(v, ModelVariable) else ModelVariable(str(v))
            for v in self.variables
        ]
        self.shocks = [
            s if isinstance(s, ModelVariable) else ModelVariable(str(s), is_shock=True)
            for s in self.shocks
        ]
        for var in self.variables + self.shocks:
            if not var.name.isidentifier():
                raise ModelError(f"Invalid variable name: {var.name!r}")
        for attr in ("maxlag", "maxlead"):
            value = getattr(self, attr)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ModelError(f"{attr} must be a non-negative integer, got {value!r}")
        self.autoexogenize = {str(k): str(v) for k, v in self.autoexogenize.items()}

    @property
    def varshks(self) -> list[ModelVariable]:
        """Variables followed by shocks, in declared order."""
        return [*self.variables, *self.shocks]

    @property
    def exogenous(self) -> list[str]:
        """Names of variables declared exogenous."""
        return [v.name for v in self.variables if v.is_exog]

    @property
    def shock_names(self) -> list[str]:
        return [s.name for s in self.shocks]

    @property
    def variable_names(self) -> list[str]:
        return [v.name for v in self.variables]
