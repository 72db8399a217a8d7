"""
SimPlan - Simulation Plans for Dynamic Economic Models

A simulation plan records, for every period of a simulation, which variables of
a model are exogenous (their values are given) and which are endogenous (the
solver finds them). Shocks start out exogenous, variables endogenous, and the
plan is then edited to swap the two, e.g. to impose a judgmental path on a
variable while freeing the shock that drives it.

Key Features:
- **Calendar Moments**: Yearly to weekly frequencies, plus plain unit counters
- **Plan Editing**: exogenize, endogenize and swap variables over dates or spans
- **Text Files**: Export plans to aligned text or CSV files and read them back
- **Comparison**: Side-by-side report of where two plans differ
- **Solver Registry**: Plug-in point for simulation solvers
- **Charts**: Interactive heatmaps with Plotly integration

Quick Start:
    ```python
    from simplan import MIT, MITRange, Model, Plan, export_plan

    m = Model(variables=["a", "b"], shocks=["sa", "sb"], maxlag=1, maxlead=1,
              autoexogenize={"a": "sa", "b": "sb"})
    p = Plan(m, MITRange(MIT.quarterly(2020, 1), MIT.quarterly(2020, 2)))

    # Impose a path for `a` in 2020Q1 and let its shock adjust
    p.endo_exog("sa", "a", MIT.quarterly(2020, 1))

    print(p)
    export_plan(p, "plan.csv", delim=",")
    ```
"""

# Version information
__version__ = "0.1.0"
__author__ = "SimPlan Team"
__description__ = "Simulation plans for dynamic economic models"

from .core import (
    ALL,
    MIT,
    BoundsError,
    CompareOptions,
    ConfigError,
    DisplayOptions,
    ExportOptions,
    Frequency,
    FrequencyMismatchError,
    InvalidMutationError,
    MismatchedPlanError,
    MITRange,
    Model,
    ModelError,
    ModelVariable,
    ParseError,
    Plan,
    PlanError,
    UnknownNameError,
    UnknownSolverError,
    VariableRegistry,
    autoexogenize,
    collapsed_range,
    compare_plans,
    count_endo_points,
    count_exog_points,
    dumps_plan,
    endo_exog,
    endogenize,
    exog_endo,
    exogenize,
    export_plan,
    import_plan,
    load_model,
    loads_plan,
    merge_into,
    plansum,
    setexog,
)
from .solvers import (
    DEFAULT_SOLVER,
    ISolver,
    get_solver,
    register_solver,
    shockdecomp,
    simulate,
    solve,
)

# Import chart functions (optional - requires plotly)
try:
    import plotly  # noqa: F401

    from .charts import plan_comparison_heatmap, plan_heatmap, save_chart

    CHARTS_AVAILABLE = True
except ImportError:
    CHARTS_AVAILABLE = False

# Define what gets imported with "from simplan import *"
__all__ = [
    # Calendar
    "Frequency",
    "MIT",
    "MITRange",
    # Model
    "Model",
    "ModelVariable",
    "load_model",
    # Plan
    "ALL",
    "Plan",
    "VariableRegistry",
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
    "collapsed_range",
    # Text files and comparison
    "export_plan",
    "dumps_plan",
    "import_plan",
    "loads_plan",
    "compare_plans",
    # Options
    "ExportOptions",
    "CompareOptions",
    "DisplayOptions",
    # Solvers
    "DEFAULT_SOLVER",
    "ISolver",
    "register_solver",
    "get_solver",
    "solve",
    "simulate",
    "shockdecomp",
    # Errors
    "PlanError",
    "BoundsError",
    "UnknownNameError",
    "MismatchedPlanError",
    "FrequencyMismatchError",
    "ParseError",
    "InvalidMutationError",
    "ConfigError",
    "ModelError",
    "UnknownSolverError",
    # Version info
    "__version__",
    "__author__",
    "__description__",
]

# Add chart functions to __all__ if available
if CHARTS_AVAILABLE:
    __all__.extend(["plan_heatmap", "plan_comparison_heatmap", "save_chart"])
