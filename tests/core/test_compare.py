"""
Tests for the side-by-side plan comparison.
"""

import io

import pytest

from simplan import MIT, MITRange, Model, Plan, compare_plans
from simplan.core.compare import comparison_spans
from simplan.core.config import CompareOptions
from simplan.core.errors import ConfigError, FrequencyMismatchError


def _row(text, name):
    """Cells of the comparison row for ``name``, as (left, right) mark pairs."""
    for line in text.splitlines():
        tokens = line.split()
        if tokens and tokens[0] == name:
            marks = tokens[1:]
            return list(zip(marks[::2], marks[1::2]))
    raise AssertionError(f"no row for {name}")


class TestComparePlans:
    def test_identical_plans(self, plan):
        text = compare_plans(plan, plan.copy())
        lines = text.splitlines()
        assert lines[0] == ""
        assert lines[1] == "Same range: 2019Q4:2020Q3"
        assert lines[2] == "Same variables."
        assert lines[3] == "(X) = Exogenous, (~) = Endogenous, (.) = Missing:"
        assert lines[4] == "  NAME " + "2019Q4:2020Q3".rjust(14)
        assert _row(text, "a") == [("~", "~")]
        assert _row(text, "sa") == [("X", "X")]

    def test_status_change_splits_spans(self, plan, q):
        right = plan.copy().endo_exog("sa", "a", q(2020, 1))
        text = compare_plans(plan, right)
        assert [str(s) for s in comparison_spans(plan, right)] == [
            "2019Q4:2019Q4",
            "2020Q1:2020Q1",
            "2020Q2:2020Q3",
        ]
        assert _row(text, "a") == [("~", "~"), ("~", "X"), ("~", "~")]
        assert _row(text, "sa") == [("X", "X"), ("X", "~"), ("X", "X")]

    def test_disjoint_variables_render_missing(self, plan, sim_range):
        other = Plan(Model(variables=["a", "c"], shocks=["sa", "sc"], maxlag=1, maxlead=1), sim_range)
        text = compare_plans(plan, other)
        assert "Variables only in left plan: [b, sb]" in text
        assert "Variables only in right plan: [c, sc]" in text
        assert "2 common variables." in text
        assert _row(text, "b") == [("~", ".")]
        assert _row(text, "c") == [(".", "~")]
        assert _row(text, "sc") == [(".", "X")]
        names = [line.split()[0] for line in text.splitlines()[7:]]
        assert names == ["a", "b", "sa", "sb", "c", "sc"]

    def test_different_ranges(self, model, plan, q):
        other = Plan(model, MITRange(q(2020, 2), q(2020, 3)))
        text = compare_plans(plan, other)
        assert "Range  left: 2019Q4:2020Q3" in text
        assert "Range right: 2020Q1:2020Q4" in text
        assert [str(s) for s in comparison_spans(plan, other)] == [
            "2019Q4:2019Q4",
            "2020Q1:2020Q3",
            "2020Q4:2020Q4",
        ]
        assert _row(text, "sa") == [("X", "."), ("X", "X"), (".", "X")]

    def test_alphabetical(self, sim_range):
        left = Plan(Model(variables=["z", "m"]), sim_range)
        right = Plan(Model(variables=["b"]), sim_range)
        text = compare_plans(left, right, alphabetical=True)
        names = [line.split()[0] for line in text.splitlines()[7:]]
        assert names == ["b", "m", "z"]

    def test_pagination_repeats_header(self, plan):
        text = compare_plans(plan, plan, pagelines=2)
        lines = text.splitlines()
        header = lines[4]
        assert lines.count(header) == 3
        assert lines[7] == ""
        assert lines[8] == header
        assert lines[9] == ""

    def test_custom_marks_and_delimiter(self, plan):
        text = compare_plans(plan, plan, exog_mark="E", endo_mark="N", missing_mark="?", delim=",")
        lines = text.splitlines()
        assert lines[3] == "(E) = Exogenous, (N) = Endogenous, (?) = Missing:"
        assert lines[4].startswith("  NAME,")
        assert lines[5].split(",")[1].strip() == "N N"

    def test_frequency_mismatch(self, model, plan):
        monthly = Plan(model, MITRange(MIT.monthly(2020, 1), MIT.monthly(2020, 3)))
        with pytest.raises(FrequencyMismatchError):
            compare_plans(plan, monthly)

    def test_invalid_options(self, plan):
        with pytest.raises(ConfigError):
            compare_plans(plan, plan, pagelines=-1)
        with pytest.raises(ConfigError):
            compare_plans(plan, plan, missing_mark="X")
        with pytest.raises(ConfigError):
            CompareOptions(delim="~", endo_mark="~~")

    def test_write_to_file_and_stream(self, plan, tmp_path):
        path = tmp_path / "cmp.txt"
        assert compare_plans(plan, plan, path) is None
        assert path.read_text(encoding="utf-8") == compare_plans(plan, plan)
        buf = io.StringIO()
        compare_plans(plan, plan, buf, options=CompareOptions(pagelines=1))
        assert buf.getvalue() == compare_plans(plan, plan, pagelines=1)
