"""
Frequencies, moments in time and contiguous spans of moments.

A moment in time (``MIT``) is a frequency-tagged integer ordinal. Moments of the
same frequency are totally ordered, their difference is an ``int`` number of
periods and adding an ``int`` moves a moment by that many periods. ``MITRange``
is an inclusive span ``first:last`` of moments of one frequency, the time grid
of every plan.

**Text forms:**
    - Yearly: ``2020Y``
    - HalfYearly: ``2020H1`` .. ``2020H2``
    - Quarterly: ``2020Q1`` .. ``2020Q4``
    - Monthly: ``2020M1`` .. ``2020M12``
    - Weekly: ``2020W1`` .. ``2020W53`` (ISO weeks)
    - Unit: ``5U`` (may be negative, ``-1U``)
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from datetime import date
from enum import Enum

import pandas as pd

from .errors import FrequencyMismatchError


class Frequency(Enum):
    """
    Calendar frequency of a moment.

    Attributes:
        tag: Letter used in the text form of a moment
        periods_per_year: Number of periods per calendar year (None when the
            frequency is not a fixed subdivision of the year)
    """

    Yearly = "Y"
    HalfYearly = "H"
    Quarterly = "Q"
    Monthly = "M"
    Weekly = "W"
    Unit = "U"

    @property
    def tag(self) -> str:
        return self.value

    @property
    def periods_per_year(self) -> int | None:
        return _PERIODS_PER_YEAR.get(self)

    @classmethod
    def from_name(cls, name: str) -> Frequency:
        """Look up a frequency by its name (e.g. ``"Quarterly"``)."""
        try:
            return cls[name]
        except KeyError:
            raise ValueError(f"Unknown frequency: {name}") from None

    @classmethod
    def from_tag(cls, tag: str) -> Frequency:
        """Look up a frequency by its text tag (e.g. ``"Q"``)."""
        return cls(tag)


_PERIODS_PER_YEAR = {
    Frequency.Yearly: 1,
    Frequency.HalfYearly: 2,
    Frequency.Quarterly: 4,
    Frequency.Monthly: 12,
}

# pandas aliases for frequencies pandas can represent as Periods
_PANDAS_FREQ = {
    Frequency.Yearly: "Y",
    Frequency.Quarterly: "Q",
    Frequency.Monthly: "M",
    Frequency.Weekly: "W-SUN",
}


@dataclass(frozen=True, slots=True)
class MIT:
    """
    A moment in time: a frequency-tagged integer ordinal.

    The ordinal is the year for yearly moments, ``year * periods_per_year +
    period - 1`` for half-yearly, quarterly and monthly moments, the number of
    weeks since Monday 0001-01-01 for weekly moments, and the integer itself
    for unit moments.

    **Example Usage:**
        ```python
        from simplan.core.moments import MIT

        t = MIT.quarterly(2020, 1)
        assert str(t + 3) == "2020Q4"
        assert (t + 3) - t == 3
        assert MIT.parse("2019Q4") == t - 1
        ```
    """

    frequency: Frequency
    value: int

    # --- constructors -------------------------------------------------------

    @classmethod
    def yearly(cls, year: int) -> MIT:
        return cls(Frequency.Yearly, int(year))

    @classmethod
    def halfyearly(cls, year: int, half: int) -> MIT:
        return cls._periodic(Frequency.HalfYearly, year, half)

    @classmethod
    def quarterly(cls, year: int, quarter: int) -> MIT:
        return cls._periodic(Frequency.Quarterly, year, quarter)

    @classmethod
    def monthly(cls, year: int, month: int) -> MIT:
        return cls._periodic(Frequency.Monthly, year, month)

    @classmethod
    def weekly(cls, year: int, week: int) -> MIT:
        """Create the moment for ISO week ``week`` of ISO year ``year``."""
        monday = date.fromisocalendar(int(year), int(week), 1)
        return cls(Frequency.Weekly, (monday.toordinal() - 1) // 7)

    @classmethod
    def unit(cls, value: int) -> MIT:
        return cls(Frequency.Unit, int(value))

    @classmethod
    def _periodic(cls, freq: Frequency, year: int, period: int) -> MIT:
        ppy = freq.periods_per_year
        if not 1 <= period <= ppy:
            raise ValueError(f"{freq.name} period must be in 1..{ppy}, got {period}")
        return cls(freq, int(year) * ppy + int(period) - 1)

    @classmethod
    def parse(cls, text: str) -> MIT:
        """
        Parse the text form of a moment.

        Raises:
            ValueError: If ``text`` is not a valid moment literal
        """
        s = text.strip()
        pos = 0
        if s[:1] == "-":
            pos = 1
        start = pos
        while pos < len(s) and s[pos].isdigit():
            pos += 1
        if pos == start or pos >= len(s):
            raise ValueError(f"expected moment, got {text!r}")
        number = int(s[:pos])
        tag = s[pos]
        rest = s[pos + 1 :]
        if rest and not rest.isdigit():
            raise ValueError(f"expected moment, got {text!r}")
        try:
            freq = Frequency.from_tag(tag)
        except ValueError:
            raise ValueError(f"expected moment, got {text!r}") from None
        if freq in (Frequency.Yearly, Frequency.Unit):
            if rest:
                raise ValueError(f"expected moment, got {text!r}")
            return cls(freq, number)
        if not rest:
            raise ValueError(f"expected moment, got {text!r}")
        if freq is Frequency.Weekly:
            return cls.weekly(number, int(rest))
        return cls._periodic(freq, number, int(rest))

    # --- calendar fields ----------------------------------------------------

    @property
    def year(self) -> int:
        if self.frequency is Frequency.Weekly:
            return self._monday().isocalendar()[0]
        if self.frequency is Frequency.Unit:
            raise ValueError("Unit moments have no year")
        return self.value // self.frequency.periods_per_year

    @property
    def period(self) -> int:
        if self.frequency is Frequency.Weekly:
            return self._monday().isocalendar()[1]
        if self.frequency is Frequency.Unit:
            return self.value
        return self.value % self.frequency.periods_per_year + 1

    def _monday(self) -> date:
        return date.fromordinal(7 * self.value + 1)

    def to_period(self) -> pd.Period:
        """
        Convert to a ``pandas.Period``.

        Raises:
            ValueError: For frequencies pandas cannot represent (HalfYearly, Unit)
        """
        alias = _PANDAS_FREQ.get(self.frequency)
        if alias is None:
            raise ValueError(f"{self.frequency.name} moments have no pandas Period")
        if self.frequency is Frequency.Weekly:
            return pd.Period(self._monday(), freq=alias)
        if self.frequency is Frequency.Yearly:
            return pd.Period(year=self.value, freq=alias)
        if self.frequency is Frequency.Quarterly:
            return pd.Period(year=self.year, quarter=self.period, freq=alias)
        return pd.Period(year=self.year, month=self.period, freq=alias)

    # --- arithmetic ---------------------------------------------------------

    def _check(self, other: MIT) -> None:
        if self.frequency is not other.frequency:
            raise FrequencyMismatchError(self, other)

    def __add__(self, n: int) -> MIT:
        if isinstance(n, bool) or not isinstance(n, int):
            return NotImplemented
        return MIT(self.frequency, self.value + n)

    __radd__ = __add__

    def __sub__(self, other):
        if isinstance(other, MIT):
            self._check(other)
            return self.value - other.value
        if isinstance(other, bool) or not isinstance(other, int):
            return NotImplemented
        return MIT(self.frequency, self.value - other)

    def __lt__(self, other: MIT) -> bool:
        if not isinstance(other, MIT):
            return NotImplemented
        self._check(other)
        return self.value < other.value

    def __le__(self, other: MIT) -> bool:
        if not isinstance(other, MIT):
            return NotImplemented
        self._check(other)
        return self.value <= other.value

    def __gt__(self, other: MIT) -> bool:
        if not isinstance(other, MIT):
            return NotImplemented
        self._check(other)
        return self.value > other.value

    def __ge__(self, other: MIT) -> bool:
        if not isinstance(other, MIT):
            return NotImplemented
        self._check(other)
        return self.value >= other.value

    def __str__(self) -> str:
        freq = self.frequency
        if freq is Frequency.Unit:
            return f"{self.value}U"
        if freq is Frequency.Yearly:
            return f"{self.value}Y"
        return f"{self.year}{freq.tag}{self.period}"

    def __repr__(self) -> str:
        return f"MIT({self})"


@dataclass(frozen=True, slots=True)
class MITRange:
    """
    Contiguous inclusive span of moments of one frequency.

    The span is empty when ``last < first``. Positional indexing is 0-based as
    for any Python sequence; plan row offsets (see ``Plan.offset``) are 1-based.

    Attributes:
        first: First moment of the span
        last: Last moment of the span (inclusive)
    """

    first: MIT
    last: MIT

    def __post_init__(self) -> None:
        if self.first.frequency is not self.last.frequency:
            raise FrequencyMismatchError(self.first, self.last)

    @classmethod
    def parse(cls, text: str) -> MITRange:
        """Parse ``first:last`` (or a single moment, as a length-1 span)."""
        head, sep, tail = text.strip().partition(":")
        first = MIT.parse(head)
        if not sep:
            return cls(first, first)
        return cls(first, MIT.parse(tail))

    @property
    def frequency(self) -> Frequency:
        return self.first.frequency

    def __len__(self) -> int:
        return max(0, self.last.value - self.first.value + 1)

    def __bool__(self) -> bool:
        return len(self) > 0

    def __iter__(self) -> Iterator[MIT]:
        for i in range(len(self)):
            yield self.first + i

    def __getitem__(self, i: int) -> MIT:
        n = len(self)
        if i < 0:
            i += n
        if not 0 <= i < n:
            raise IndexError(f"index {i} out of range for {self}")
        return self.first + i

    def __contains__(self, moment) -> bool:
        if not isinstance(moment, MIT) or moment.frequency is not self.frequency:
            return False
        return self.first.value <= moment.value <= self.last.value

    def issubset(self, other: MITRange) -> bool:
        """True when this span lies inside ``other`` (empty spans always do)."""
        if self.frequency is not other.frequency:
            raise FrequencyMismatchError(self, other)
        if not self:
            return True
        return other.first <= self.first and self.last <= other.last

    def extend(self, before: int, after: int) -> MITRange:
        """Return the span widened by ``before`` periods at the start and ``after`` at the end."""
        return MITRange(self.first - before, self.last + after)

    def to_period_index(self) -> pd.PeriodIndex:
        """Convert to a ``pandas.PeriodIndex`` (see ``MIT.to_period``)."""
        return pd.PeriodIndex([m.to_period() for m in self])

    def __str__(self) -> str:
        return f"{self.first}:{self.last}"

    def __repr__(self) -> str:
        return f"MITRange({self})"


def to_mit(x) -> MIT:
    """Coerce a moment, an ``int`` (Unit frequency) or a moment literal to ``MIT``."""
    if isinstance(x, MIT):
        return x
    if isinstance(x, bool):
        raise TypeError(f"Cannot interpret {x!r} as a moment in time")
    if isinstance(x, int):
        return MIT.unit(x)
    if isinstance(x, str):
        return MIT.parse(x)
    raise TypeError(f"Cannot interpret {x!r} as a moment in time")


def to_range(x) -> MITRange:
    """
    Coerce a span-like value to ``MITRange``.

    Accepts an ``MITRange``, a single moment (length-1 span), an ``int``, a
    Python ``range`` with step 1 (Unit frequency) or a text literal.
    """
    if isinstance(x, MITRange):
        return x
    if isinstance(x, range):
        if x.step != 1:
            raise ValueError(f"Only contiguous ranges are supported, got {x!r}")
        return MITRange(MIT.unit(x.start), MIT.unit(x.stop - 1))
    if isinstance(x, str) and ":" in x:
        return MITRange.parse(x)
    m = to_mit(x)
    return MITRange(m, m)


def is_span_like(x) -> bool:
    """True for values ``to_range`` would treat as a span rather than a single moment."""
    return isinstance(x, (MITRange, range)) or (isinstance(x, str) and ":" in x)


__all__ = ["Frequency", "MIT", "MITRange", "to_mit", "to_range", "is_span_like"]
