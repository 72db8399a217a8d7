"""
Chart functions for visualizing plans.

All chart functions return (figure, tidy_dataframe_used) for consistency.
"""

from __future__ import annotations

import numpy as np
import pandas as pd

from .core.compare import comparison_spans
from .core.plan import Plan

# Plotly imports with graceful fallback
try:
    import plotly.graph_objects as go

    PLOTLY_AVAILABLE = True
except ImportError:
    PLOTLY_AVAILABLE = False


def _check_plotly() -> None:
    """Check if Plotly is available and raise helpful error if not."""
    if not PLOTLY_AVAILABLE:
        raise ImportError(
            "Plotly is required for chart functions. Install with:\n"
            "pip install plotly kaleido\n"
            "or\n"
            "pip install simplan[charts]"
        )


def _tidy(plan: Plan) -> pd.DataFrame:
    frame = plan.to_frame()
    tidy = frame.reset_index().melt(id_vars="date", var_name="name", value_name="exogenous")
    tidy["date"] = tidy["date"].astype(str)
    tidy["status"] = np.where(tidy["exogenous"], "exogenous", "endogenous")
    return tidy


def plan_heatmap(plan: Plan, title: str | None = None) -> tuple[go.Figure, pd.DataFrame]:
    """
    Plot the exogeneity matrix of a plan as a heatmap.

    One row per variable or shock, one column per period of the grid;
    exogenous cells are dark.

    **Args:**
        plan: The plan to draw
        title: Figure title (defaults to the plan summary)

    **Returns:**
        Tuple of (plotly_figure, tidy_dataframe_used) where the data frame has
        the columns ``date``, ``name``, ``exogenous`` and ``status``

    **Example:**
        ```python
        fig, data = plan_heatmap(p)
        fig.show()
        ```
    """
    _check_plotly()

    tidy = _tidy(plan)
    dates = [str(t) for t in plan.range]
    names = list(plan.varshks.names)
    z = plan.exogenous.T.astype(int)

    fig = go.Figure(
        data=go.Heatmap(
            z=z,
            x=dates,
            y=names,
            zmin=0,
            zmax=1,
            colorscale=[[0.0, "#f0f0f0"], [1.0, "#1f77b4"]],
            showscale=False,
            xgap=1,
            ygap=1,
            hovertemplate="%{y} @ %{x}: %{z}<extra></extra>",
        )
    )
    fig.update_layout(
        title=title or plan.summary(),
        xaxis_title="Date",
        yaxis_title="Variable",
        yaxis={"autorange": "reversed"},
        height=max(300, 24 * len(names) + 150),
    )

    return fig, tidy


def plan_comparison_heatmap(
    left: Plan, right: Plan, title: str | None = None
) -> tuple[go.Figure, pd.DataFrame]:
    """
    Plot where two plans disagree.

    Cells are coded ``1`` where both plans agree, ``0`` where they differ and
    ``-1`` where the variable or the period is missing from one of them. The
    columns are the spans used by ``compare_plans``.

    Returns:
        Tuple of (plotly_figure, tidy_dataframe_used) with the columns
        ``span``, ``name``, ``left``, ``right`` and ``code``
    """
    _check_plotly()

    spans = comparison_spans(left, right)
    names = list(left.varshks.names) + [v for v in right.varshks.names if v not in left.varshks]

    def status(plan: Plan, name: str, span) -> str:
        col = plan.varshks.get(name, 0)
        row = plan.offset(span.first)
        if col == 0 or not 1 <= row <= len(plan):
            return "missing"
        return "exogenous" if plan.exogenous[row - 1, col - 1] else "endogenous"

    records = []
    for name in names:
        for span in spans:
            ls, rs = status(left, name, span), status(right, name, span)
            code = -1 if "missing" in (ls, rs) else int(ls == rs)
            records.append({"span": str(span), "name": name, "left": ls, "right": rs, "code": code})
    tidy = pd.DataFrame.from_records(records, columns=["span", "name", "left", "right", "code"])

    z = tidy.pivot(index="name", columns="span", values="code").reindex(
        index=names, columns=[str(s) for s in spans]
    )
    fig = go.Figure(
        data=go.Heatmap(
            z=z.values,
            x=list(z.columns),
            y=list(z.index),
            zmin=-1,
            zmax=1,
            colorscale=[[0.0, "#bdbdbd"], [0.5, "#d62728"], [1.0, "#2ca02c"]],
            showscale=False,
            xgap=1,
            ygap=1,
        )
    )
    fig.update_layout(
        title=title or "Plan Comparison",
        xaxis_title="Span",
        yaxis_title="Variable",
        yaxis={"autorange": "reversed"},
    )

    return fig, tidy


# =============================================================================
# Utility functions
# =============================================================================


def save_chart(fig: go.Figure, filename: str, format: str = "html") -> None:
    """
    Save chart to file.

    Args:
        fig: Plotly figure
        filename: Output filename
        format: Output format ('html', 'png', 'pdf', 'svg')
    """
    _check_plotly()

    if format == "html":
        fig.write_html(filename)
    elif format in ("png", "pdf", "svg"):
        fig.write_image(filename, format=format)
    else:
        raise ValueError(f"Unsupported format: {format}")


__all__ = ["plan_heatmap", "plan_comparison_heatmap", "save_chart"]
