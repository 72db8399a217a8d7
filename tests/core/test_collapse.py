"""
Tests for the run-length collapse of a plan.
"""

from simplan import MIT, MITRange, Model, Plan, collapsed_range
from simplan.core.collapse import span_first, span_last


class TestCollapsedRange:
    def test_default_plan_is_one_span(self, plan):
        cp = collapsed_range(plan)
        assert len(cp) == 1
        key, names = cp[0]
        assert key == plan.range
        assert names == ["sa", "sb"]

    def test_single_period_keys_are_moments(self, plan, q):
        plan.endo_exog("sa", "a", q(2020, 1))
        cp = collapsed_range(plan)
        assert [str(k) for k, _ in cp] == ["2019Q4", "2020Q1", "2020Q2:2020Q3"]
        assert isinstance(cp[0][0], MIT)
        assert isinstance(cp[2][0], MITRange)
        assert [names for _, names in cp] == [["sa", "sb"], ["a", "sb"], ["sa", "sb"]]

    def test_equal_statuses_far_apart_are_not_merged(self, plan, q):
        plan.exogenize("a", [q(2019, 4), q(2020, 3)])
        cp = collapsed_range(plan)
        assert [str(k) for k, _ in cp] == ["2019Q4", "2020Q1:2020Q2", "2020Q3"]

    def test_empty_plan(self):
        m = Model(variables=["a"], shocks=["sa"])
        p = Plan(m, MITRange(MIT.quarterly(2020, 1), MIT.quarterly(2019, 4)))
        assert len(p) == 0
        assert collapsed_range(p) == []

    def test_span_helpers(self, q):
        rng = MITRange(q(2020, 1), q(2020, 3))
        assert span_first(rng) == q(2020, 1)
        assert span_last(rng) == q(2020, 3)
        assert span_first(q(2021, 1)) == span_last(q(2021, 1)) == q(2021, 1)
