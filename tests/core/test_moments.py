"""
Tests for frequencies, moments and spans.
"""

import pandas as pd
import pytest

from simplan.core.errors import FrequencyMismatchError
from simplan.core.moments import MIT, Frequency, MITRange, is_span_like, to_mit, to_range


class TestMIT:
    """Construction, text forms and arithmetic of moments."""

    def test_text_forms(self):
        assert str(MIT.yearly(2020)) == "2020Y"
        assert str(MIT.halfyearly(2020, 2)) == "2020H2"
        assert str(MIT.quarterly(2020, 1)) == "2020Q1"
        assert str(MIT.monthly(2020, 12)) == "2020M12"
        assert str(MIT.weekly(2020, 1)) == "2020W1"
        assert str(MIT.unit(-1)) == "-1U"
        assert repr(MIT.quarterly(2020, 1)) == "MIT(2020Q1)"

    @pytest.mark.parametrize(
        "text", ["2020Y", "2020H1", "2019Q4", "2020M7", "2020W53", "5U", "-3U"]
    )
    def test_parse_inverts_str(self, text):
        assert str(MIT.parse(text)) == text

    @pytest.mark.parametrize("text", ["", "Q1", "2020", "2020Q5", "2020Z1", "2020Y1", "2020Qx"])
    def test_parse_rejects_invalid(self, text):
        with pytest.raises(ValueError):
            MIT.parse(text)

    def test_arithmetic(self):
        t = MIT.quarterly(2020, 1)
        assert t - 1 == MIT.quarterly(2019, 4)
        assert t + 4 == MIT.quarterly(2021, 1)
        assert (t + 7) - t == 7
        assert 2 + t == MIT.quarterly(2020, 3)

    def test_ordering(self):
        assert MIT.monthly(2020, 1) < MIT.monthly(2020, 2)
        assert MIT.monthly(2020, 12) >= MIT.monthly(2020, 12)
        assert sorted([MIT.unit(3), MIT.unit(-1), MIT.unit(0)]) == [
            MIT.unit(-1),
            MIT.unit(0),
            MIT.unit(3),
        ]

    def test_mixed_frequencies_fail(self):
        with pytest.raises(FrequencyMismatchError):
            MIT.quarterly(2020, 1) - MIT.monthly(2020, 1)
        with pytest.raises(FrequencyMismatchError):
            MIT.quarterly(2020, 1) < MIT.yearly(2020)
        assert MIT.quarterly(2020, 1) != MIT.monthly(2020, 1)

    def test_weeks_cross_iso_years(self):
        last = MIT.weekly(2020, 53)
        assert str(last + 1) == "2021W1"
        assert last.year == 2020

    def test_invalid_period(self):
        with pytest.raises(ValueError):
            MIT.quarterly(2020, 0)
        with pytest.raises(ValueError):
            MIT.monthly(2020, 13)

    def test_to_period(self):
        assert MIT.quarterly(2020, 1).to_period() == pd.Period("2020Q1", freq="Q")
        assert MIT.monthly(2021, 3).to_period() == pd.Period("2021-03", freq="M")
        with pytest.raises(ValueError):
            MIT.halfyearly(2020, 1).to_period()
        with pytest.raises(ValueError):
            MIT.unit(1).to_period()


class TestFrequency:
    def test_lookup(self):
        assert Frequency.from_name("Quarterly") is Frequency.Quarterly
        assert Frequency.from_tag("M") is Frequency.Monthly
        assert Frequency.Monthly.periods_per_year == 12
        assert Frequency.Unit.periods_per_year is None
        with pytest.raises(ValueError):
            Frequency.from_name("Daily")


class TestMITRange:
    """Spans of moments."""

    def test_length_and_iteration(self):
        rng = MITRange(MIT.quarterly(2019, 4), MIT.quarterly(2020, 3))
        assert len(rng) == 4
        assert [str(t) for t in rng] == ["2019Q4", "2020Q1", "2020Q2", "2020Q3"]
        assert rng[0] == MIT.quarterly(2019, 4)
        assert rng[-1] == MIT.quarterly(2020, 3)
        assert str(rng) == "2019Q4:2020Q3"

    def test_empty_span(self):
        rng = MITRange(MIT.quarterly(2020, 1), MIT.quarterly(2019, 4))
        assert len(rng) == 0
        assert not rng
        assert list(rng) == []
        with pytest.raises(IndexError):
            rng[0]

    def test_contains_and_subset(self):
        outer = MITRange.parse("2019Q4:2020Q3")
        inner = MITRange.parse("2020Q1:2020Q2")
        assert MIT.quarterly(2020, 1) in outer
        assert MIT.quarterly(2021, 1) not in outer
        assert MIT.monthly(2020, 1) not in outer
        assert inner.issubset(outer)
        assert not outer.issubset(inner)
        with pytest.raises(FrequencyMismatchError):
            inner.issubset(MITRange.parse("2020M1:2020M3"))

    def test_extend(self):
        rng = MITRange.parse("2020Q1:2020Q2").extend(1, 2)
        assert str(rng) == "2019Q4:2020Q4"

    def test_mixed_frequency_span_fails(self):
        with pytest.raises(FrequencyMismatchError):
            MITRange(MIT.quarterly(2020, 1), MIT.monthly(2020, 6))

    def test_parse_single_moment(self):
        rng = MITRange.parse("2020Q2")
        assert len(rng) == 1
        assert rng.first == rng.last == MIT.quarterly(2020, 2)

    def test_period_index(self):
        idx = MITRange.parse("2020Q1:2020Q4").to_period_index()
        assert isinstance(idx, pd.PeriodIndex)
        assert len(idx) == 4


class TestCoercion:
    def test_to_mit(self):
        assert to_mit(3) == MIT.unit(3)
        assert to_mit("2020Q1") == MIT.quarterly(2020, 1)
        with pytest.raises(TypeError):
            to_mit(True)
        with pytest.raises(TypeError):
            to_mit(1.5)

    def test_to_range(self):
        assert to_range(range(1, 5)) == MITRange(MIT.unit(1), MIT.unit(4))
        assert to_range("2020Q1:2020Q2") == MITRange.parse("2020Q1:2020Q2")
        assert len(to_range(MIT.yearly(2020))) == 1
        with pytest.raises(ValueError):
            to_range(range(1, 10, 2))

    def test_is_span_like(self):
        assert is_span_like(range(3))
        assert is_span_like("2020Q1:2020Q2")
        assert not is_span_like("2020Q1")
        assert not is_span_like(MIT.unit(1))
