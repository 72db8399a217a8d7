"""
Core module for SimPlan.

This module contains the plan data structure and everything that reads, writes
and compares plans.
"""

from .codec import dumps_plan, export_plan, import_plan, loads_plan
from .collapse import collapsed_range, span_first, span_last
from .compare import compare_plans, comparison_spans
from .config import CompareOptions, DisplayOptions, ExportOptions
from .errors import (
    BoundsError,
    ConfigError,
    FrequencyMismatchError,
    InvalidMutationError,
    MismatchedPlanError,
    ModelError,
    ParseError,
    PlanError,
    UnknownNameError,
    UnknownSolverError,
)
from .model import Model, ModelVariable, isexog, isshock
from .model_loader import load_model, model_from_mapping
from .moments import MIT, Frequency, MITRange, to_mit, to_range
from .plan import (
    ALL,
    Plan,
    autoexogenize,
    count_endo_points,
    count_exog_points,
    endo_exog,
    endogenize,
    exog_endo,
    exogenize,
    merge_into,
    plansum,
    set_status,
    setexog,
)
from .registry import VariableRegistry

__all__ = [
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
    # Calendar
    "Frequency",
    "MIT",
    "MITRange",
    "to_mit",
    "to_range",
    # Model
    "Model",
    "ModelVariable",
    "isshock",
    "isexog",
    "load_model",
    "model_from_mapping",
    # Plan
    "ALL",
    "Plan",
    "VariableRegistry",
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
    # Collapse, codec, comparison
    "collapsed_range",
    "span_first",
    "span_last",
    "export_plan",
    "dumps_plan",
    "import_plan",
    "loads_plan",
    "compare_plans",
    "comparison_spans",
    # Options
    "ExportOptions",
    "CompareOptions",
    "DisplayOptions",
]
