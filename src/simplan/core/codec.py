"""
Text export and import of plans.

A plan file has five header lines followed by one line per variable:

```
Plan{MIT{Quarterly}} with range 2019Q4:2020Q3
Range: 2019Q4:2020Q3
Variables: (a = 1, b = 2, sa = 3, sb = 4)
(X) = Exogenous, (-) = Endogenous:
  NAME  2019Q4  2020Q1:2020Q2  2020Q3
     a     -          X           -
     b     -          -           -
    sa     X          X           X
    sb     X          X           X
```

The span columns are the output of ``collapsed_range``. With ``delim=","`` the
file is a CSV table with four lines to skip before the column header.

Import reads the same layout back. The delimiters are recovered from the
column header line, so files written with any supported delimiter and markers
round-trip exactly.
"""

from __future__ import annotations

import io
import logging
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import IO, Any

import numpy as np

from .collapse import collapsed_range, span_first
from .config import ExportOptions
from .errors import ConfigError, ParseError
from .moments import Frequency, MIT, MITRange
from .plan import Plan
from .registry import VariableRegistry

logger = logging.getLogger(__name__)

__all__ = ["export_plan", "dumps_plan", "import_plan", "loads_plan"]


def _cpad(x: Any, n: int) -> str:
    """Center ``x`` in a field of width ``n`` (right-aligned when it barely fits)."""
    x = str(x)
    lx = len(x)
    if n < 2 + lx:
        return x.rjust(n)
    return x.ljust((n + lx) // 2).rjust(n)


# ---------------------------------------------------------------------------
# Export


def dumps_plan(plan: Plan, options: ExportOptions | None = None, **overrides: Any) -> str:
    """
    Render a plan in the text format.

    Args:
        plan: The plan to render
        options: Formatting options (defaults: markers ``X``/``-``, space delimiter)
        **overrides: ``alphabetical``, ``exog_mark``, ``endo_mark`` or ``delim``
            overriding ``options``
    """
    opts = (options or ExportOptions()).updated(**overrides)
    delim = opts.delim
    out = io.StringIO()
    out.write(plan.summary() + "\n")
    out.write(f"Range: {plan.range}\n")
    out.write(f"Variables: {plan.varshks}\n")

    names = plan.varshks.names
    width1 = max(2 + max((len(n) for n in names), default=0), 2 + len("NAME"))
    ranges = [k for k, _ in collapsed_range(plan)]
    markw = 1 + max(len(opts.exog_mark), len(opts.endo_mark))
    width2 = [max(1 + len(str(r)), markw) for r in ranges]
    rows = [plan.offset(span_first(r)) - 1 for r in ranges]
    tf_matr = plan.exogenous[rows, :]

    out.write(f"({opts.exog_mark}) = Exogenous, ({opts.endo_mark}) = Endogenous:\n")
    header = delim.join(str(r).rjust(w) for r, w in zip(ranges, width2))
    out.write("NAME".rjust(width1) + delim + header + "\n")

    varind = list(plan.varshks.items())
    if opts.alphabetical:
        varind.sort(key=lambda kv: kv[0])
    for var, ind in varind:
        cells = (
            _cpad(opts.exog_mark if b else opts.endo_mark, w)
            for w, b in zip(width2, tf_matr[:, ind - 1])
        )
        out.write(var.rjust(width1) + delim + delim.join(cells) + "\n")
    return out.getvalue()


def export_plan(
    plan: Plan,
    file: str | Path | IO[str] | None = None,
    options: ExportOptions | None = None,
    **overrides: Any,
) -> str | None:
    """
    Save a plan in a text file, write it to a stream, or return it as text.

    Args:
        plan: The plan to export
        file: Path or open text stream; ``None`` returns the text
        options: Formatting options, see ``ExportOptions``
        **overrides: Individual options overriding ``options``

    **Example:**
        ```python
        export_plan(plan, "plan.csv", delim=",")
        ```
    """
    text = dumps_plan(plan, options, **overrides)
    if file is None:
        return text
    if isinstance(file, (str, Path)):
        with open(file, "w", encoding="utf-8", newline="") as f:
            f.write(text)
        logger.debug("Exported %s to %s", plan.summary(), file)
    else:
        file.write(text)
    return None


# ---------------------------------------------------------------------------
# Import


class _Cursor:
    """Position within one line of input."""

    def __init__(self, text: str, lineno: int):
        self.text = text
        self.lineno = lineno
        self.pos = 0

    def fail(self, message: str) -> ParseError:
        return ParseError(message, self.lineno, self.text)

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def peek(self) -> str:
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def rest(self) -> str:
        return self.text[self.pos :]

    def skip_ws(self) -> None:
        while self.pos < len(self.text) and self.text[self.pos].isspace():
            self.pos += 1

    def take_while(self, pred: Callable[[str], bool]) -> str:
        start = self.pos
        while self.pos < len(self.text) and pred(self.text[self.pos]):
            self.pos += 1
        return self.text[start : self.pos]

    def take_char(self) -> str:
        c = self.peek()
        self.pos += len(c)
        return c

    def expect(self, literal: str, what: str) -> None:
        if not self.text.startswith(literal, self.pos):
            raise self.fail(f"expected {what}")
        self.pos += len(literal)

    def expect_end(self) -> None:
        self.skip_ws()
        if not self.at_end():
            raise self.fail(f"unexpected {self.rest()!r}")

    # --- grammar pieces -----------------------------------------------------

    def word(self) -> str:
        return self.take_while(lambda c: ("_" + c).isidentifier())

    def moment_token(self) -> str:
        return self.take_while(lambda c: c.isalnum() or c == "-")

    def moment(self) -> MIT:
        token = self.moment_token()
        try:
            return MIT.parse(token)
        except ValueError:
            raise self.fail(f"expected moment, got {token!r}") from None

    def span(self, allow_moment: bool = False) -> MITRange:
        first = self.moment()
        if self.peek() != ":":
            if allow_moment:
                return MITRange(first, first)
            raise self.fail("expected range")
        self.pos += 1
        last = self.moment()
        if last.frequency is not first.frequency:
            raise self.fail("mixed frequencies in range")
        return MITRange(first, last)

    def integer(self) -> int:
        sign = "-" if self.peek() == "-" else ""
        self.pos += len(sign)
        digits = self.take_while(str.isdigit)
        if not digits:
            raise self.fail("expected integer")
        return int(sign + digits)


def _not_date_char(c: str) -> bool:
    return not (c.isalnum() or c == "-")


def _split_cells(text: str, delim: str) -> list[str]:
    """Split a row of cells on the recovered delimiter, dropping empty cells."""
    sep = delim.strip()
    parts = text.split(sep) if sep else text.split()
    return [p.strip() for p in parts if p.strip()]


def _parse_header(cur: _Cursor) -> tuple[Frequency, MITRange]:
    # Example: "Plan{MIT{Quarterly}} with range 2000Q1:2100Q1"
    cur.expect("Plan{MIT{", "Plan{MIT{Frequency}} at the start of line 1")
    name = cur.take_while(str.isalpha)
    try:
        freq = Frequency.from_name(name)
    except ValueError:
        raise cur.fail(f"expected frequency, got {name!r}") from None
    cur.expect("}} with range ", "'}} with range '")
    rng = cur.span()
    cur.expect_end()
    if rng.frequency is not freq:
        raise cur.fail(f"range {rng} is not {freq.name}")
    return freq, rng


def _parse_range_line(cur: _Cursor) -> MITRange:
    # Example: "Range: 2000Q1:2100Q1"
    cur.expect("Range: ", "Range: at the start of line 2")
    rng = cur.span()
    cur.expect_end()
    return rng


def _parse_variables(cur: _Cursor) -> VariableRegistry:
    # Example: "Variables: (a = 1, b = 2, c = 3)"
    cur.expect("Variables: (", "Variables: at the start of line 3")
    pairs: list[tuple[str, int]] = []
    cur.skip_ws()
    if cur.peek() == ")":
        cur.pos += 1
    else:
        while True:
            cur.skip_ws()
            name = cur.word()
            if not name:
                raise cur.fail("expected variable name")
            cur.skip_ws()
            cur.expect("=", "'=' after variable name")
            cur.skip_ws()
            pairs.append((name, cur.integer()))
            cur.skip_ws()
            c = cur.take_char()
            if c == ")":
                break
            if c != ",":
                raise cur.fail("expected ',' or ')'")
    cur.expect_end()
    try:
        return VariableRegistry.from_indices(pairs)
    except ConfigError as e:
        raise cur.fail(f"invalid variables ({e})") from None


def _parse_legend(cur: _Cursor) -> tuple[str, str]:
    # Example: "(X) = Exogenous, (-) = Endogenous:"
    text = cur.text.rstrip()
    head, tail = "(", ") = Endogenous:"
    sep = ") = Exogenous, ("
    if not (text.startswith(head) and text.endswith(tail)):
        raise cur.fail("expected exogenous and endogenous markers")
    middle = text[len(head) : len(text) - len(tail)]
    k = middle.find(sep)
    exog_mark, endo_mark = middle[:k], middle[k + len(sep) :]
    if k < 0 or not exog_mark or not endo_mark:
        raise cur.fail("expected exogenous and endogenous markers")
    return exog_mark, endo_mark


def _parse_columns(cur: _Cursor, rng: MITRange) -> tuple[str, str, list[MITRange]]:
    # Example: "  NAME,  2000Q1:2010Q1, 2010Q2, 2010Q2:2020Q4"
    cur.skip_ws()
    cur.expect("NAME", "NAME at the start of line 5")
    if cur.at_end():
        return " ", " ", []
    name_delim = cur.take_while(_not_date_char)
    if not name_delim:
        raise cur.fail("expected delimiter after NAME")
    if cur.at_end():
        # empty grid
        return name_delim, name_delim, []
    start = cur.pos
    cur.span(allow_moment=True)
    range_delim = cur.take_while(_not_date_char)
    if cur.at_end():
        range_delim = name_delim
    spans = []
    for token in _split_cells(cur.text[start:], range_delim):
        sub = _Cursor(token, cur.lineno)
        span = sub.span(allow_moment=True)
        if not sub.at_end():
            raise cur.fail(f"expected range, got {token!r}")
        if span.frequency is not rng.frequency or not span.issubset(rng):
            raise cur.fail(f"range {span} is not within {rng}")
        spans.append(span)
    return name_delim, range_delim, spans


def _read_plan(lines: Iterable[str]) -> Plan:
    it = iter(lines)
    lineno = 0

    def next_line() -> _Cursor:
        nonlocal lineno
        lineno += 1
        line = next(it, None)
        if line is None:
            raise ParseError("unexpected end of file", lineno)
        return _Cursor(line.rstrip("\r\n"), lineno)

    _, rng = _parse_header(next_line())
    cur = next_line()
    if _parse_range_line(cur) != rng:
        raise cur.fail("ranges on lines 1 and 2 do not match")
    varshks = _parse_variables(next_line())
    exog_mark, endo_mark = _parse_legend(next_line())
    name_delim, range_delim, spans = _parse_columns(next_line(), rng)

    p = Plan.from_parts(rng, varshks, np.zeros((len(rng), len(varshks)), dtype=bool))
    rows = [p._rows(s) for s in spans]
    seen: set[str] = set()
    nd = name_delim.strip()
    for _ in range(len(varshks)):
        cur = next_line()
        cur.skip_ws()
        var = cur.word()
        if not var:
            raise cur.fail("failed to parse")
        if var not in varshks:
            raise cur.fail(f"unknown variable {var}")
        if var in seen:
            raise cur.fail(f"duplicate variable {var}")
        seen.add(var)
        cur.skip_ws()
        if nd and spans:
            cur.expect(nd, f"delimiter {nd!r} after variable name")
        cells = _split_cells(cur.rest(), range_delim)
        if len(cells) != len(spans):
            raise cur.fail(f"expected {len(spans)} values, got {len(cells)}")
        col = varshks[var] - 1
        for r, val in zip(rows, cells):
            if val == exog_mark:
                p._exogenous[r, col] = True
            elif val != endo_mark:
                raise cur.fail(f"unexpected {val}")
    logger.debug("Imported %s with %d variables", p.summary(), len(varshks))
    return p


def loads_plan(text: str) -> Plan:
    """Parse a plan from its text form (see ``dumps_plan``)."""
    return _read_plan(text.splitlines())


def import_plan(file: str | Path | IO[str]) -> Plan:
    """
    Read a plan from a text file or an open text stream.

    Raises:
        ParseError: If the content does not follow the plan file layout; the
            error carries the 1-based line number and the offending line
    """
    if isinstance(file, (str, Path)):
        with open(file, encoding="utf-8") as f:
            logger.debug("Importing plan from %s", file)
            return _read_plan(f)
    return _read_plan(file)
