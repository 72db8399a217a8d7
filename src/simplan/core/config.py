"""
Formatting options for plan display, export and comparison.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from .errors import ConfigError


def _check_mark(label: str, mark: str) -> None:
    if not isinstance(mark, str) or not mark:
        raise ConfigError(f"{label} must be a non-empty string")
    if any(c.isspace() for c in mark):
        raise ConfigError(f"{label} must not contain whitespace, got {mark!r}")


def _check_delim(delim: str, *marks: str) -> None:
    if not isinstance(delim, str) or not delim:
        raise ConfigError("delim must be a non-empty string")
    if any(c.isalnum() or ("_" + c).isidentifier() or c in ":{}-" for c in delim):
        raise ConfigError(f"delim must not contain name or date characters, got {delim!r}")
    stripped = delim.strip()
    for mark in marks:
        if stripped and (stripped in mark or mark in stripped):
            raise ConfigError(f"delim {delim!r} clashes with marker {mark!r}")


@dataclass(frozen=True)
class ExportOptions:
    """
    Options for ``export_plan``.

    Attributes:
        alphabetical: List variables sorted by name instead of registry order
        exog_mark: Cell text for exogenous points
        endo_mark: Cell text for endogenous points
        delim: Delimiter after the NAME column and between span columns
            (``","`` produces a CSV file with 4 header lines before the data)
    """

    alphabetical: bool = False
    exog_mark: str = "X"
    endo_mark: str = "-"
    delim: str = " "

    def __post_init__(self) -> None:
        _check_mark("exog_mark", self.exog_mark)
        _check_mark("endo_mark", self.endo_mark)
        if self.exog_mark == self.endo_mark:
            raise ConfigError("exog_mark and endo_mark must differ")
        _check_delim(self.delim, self.exog_mark, self.endo_mark)

    def updated(self, **overrides) -> ExportOptions:
        """Return a copy with the non-None keyword overrides applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes) if changes else self


@dataclass(frozen=True)
class CompareOptions:
    """
    Options for ``compare_plans``.

    Attributes:
        alphabetical: Sort variables by name
        pagelines: Repeat the header line every ``pagelines`` rows (0 disables)
        exog_mark: Cell text for exogenous points
        endo_mark: Cell text for endogenous points
        missing_mark: Cell text when the variable or date is missing from a plan
        delim: Column delimiter
    """

    alphabetical: bool = False
    pagelines: int = 0
    exog_mark: str = "X"
    endo_mark: str = "~"
    missing_mark: str = "."
    delim: str = " "

    def __post_init__(self) -> None:
        _check_mark("exog_mark", self.exog_mark)
        _check_mark("endo_mark", self.endo_mark)
        _check_mark("missing_mark", self.missing_mark)
        if len({self.exog_mark, self.endo_mark, self.missing_mark}) != 3:
            raise ConfigError("exog_mark, endo_mark and missing_mark must all differ")
        if isinstance(self.pagelines, bool) or not isinstance(self.pagelines, int) or self.pagelines < 0:
            raise ConfigError(f"pagelines must be a non-negative integer, got {self.pagelines!r}")
        _check_delim(self.delim, self.exog_mark, self.endo_mark, self.missing_mark)

    def updated(self, **overrides) -> CompareOptions:
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes) if changes else self


@dataclass(frozen=True)
class DisplayOptions:
    """
    Options for the pretty display of a plan.

    Attributes:
        limit: Truncate output to fit ``rows`` x ``columns``
        rows: Display height in lines
        columns: Display width in characters
    """

    limit: bool = True
    rows: int = 24
    columns: int = 80


__all__ = ["ExportOptions", "CompareOptions", "DisplayOptions"]
