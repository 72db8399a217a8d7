"""
Shared fixtures: the two-variable model and its default plan over 2020Q1:2020Q2.
"""

import pytest

from simplan import MIT, MITRange, Model, Plan


@pytest.fixture
def model():
    return Model(
        variables=["a", "b"],
        shocks=["sa", "sb"],
        maxlag=1,
        maxlead=1,
        autoexogenize={"a": "sa", "b": "sb"},
    )


@pytest.fixture
def sim_range():
    return MITRange(MIT.quarterly(2020, 1), MIT.quarterly(2020, 2))


@pytest.fixture
def plan(model, sim_range):
    return Plan(model, sim_range)


@pytest.fixture
def q():
    """Shorthand for quarterly moments: ``q(2020, 1)``."""
    return MIT.quarterly
