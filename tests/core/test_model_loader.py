from __future__ import annotations

import json
from pathlib import Path

import pytest

from simplan import MIT, Plan
from simplan.core.errors import ModelError
from simplan.core.model import Model, ModelVariable, isexog, isshock
from simplan.core.model_loader import load_model, model_from_mapping

MODEL_YAML = """\
variables: [y, pi]
shocks: [y_shk, pi_shk]
exogenous: [g]
maxlag: 2
maxlead: 1
autoexogenize:
  y: y_shk
  pi: pi_shk
"""


def _write(tmp_path: Path, name: str, text: str) -> Path:
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


def test_load_yaml(tmp_path: Path) -> None:
    m = load_model(_write(tmp_path, "model.yaml", MODEL_YAML))

    assert [v.name for v in m.varshks] == ["y", "pi", "g", "y_shk", "pi_shk"]
    assert m.maxlag == 2
    assert m.maxlead == 1
    assert m.exogenous == ["g"]
    assert m.shock_names == ["y_shk", "pi_shk"]
    assert m.autoexogenize == {"y": "y_shk", "pi": "pi_shk"}


def test_declared_exogenous_in_default_plan(tmp_path: Path) -> None:
    m = load_model(_write(tmp_path, "model.yml", MODEL_YAML))
    p = Plan(m, MIT.yearly(2020))

    assert str(p.range) == "2018Y:2021Y"
    assert p[MIT.yearly(2020)] == ["g", "y_shk", "pi_shk"]


def test_load_json_and_mapping(tmp_path: Path) -> None:
    data = {"variables": ["a"], "shocks": ["sa"], "maxlag": 1}
    m_json = load_model(_write(tmp_path, "model.json", json.dumps(data)))
    m_map = load_model(data)

    assert m_json == m_map
    assert m_map.maxlead == 0
    # the caller's mapping is not modified
    assert data == {"variables": ["a"], "shocks": ["sa"], "maxlag": 1}


def test_whitespace_separated_names() -> None:
    m = model_from_mapping({"variables": "a b c", "shocks": "sa"})
    assert m.variable_names == ["a", "b", "c"]


@pytest.mark.parametrize(
    "mapping",
    [
        {"variables": ["a", "2b"]},
        {"variables": ["a"], "shocks": [1]},
        {"variables": {"a": 1}},
        {"variables": ["a"], "maxlag": -1},
        {"variables": ["a"], "maxlead": "1"},
        {"variables": ["a"], "autoexogenize": ["a"]},
    ],
)
def test_invalid_mapping(mapping) -> None:
    with pytest.raises(ModelError):
        model_from_mapping(mapping)


def test_unsupported_format(tmp_path: Path) -> None:
    with pytest.raises(ModelError, match="Unsupported"):
        load_model(_write(tmp_path, "model.toml", "variables = []"))


def test_root_must_be_mapping(tmp_path: Path) -> None:
    with pytest.raises(ModelError, match="mapping"):
        load_model(_write(tmp_path, "model.yaml", "- a\n- b\n"))


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_model(tmp_path / "missing.yaml")


def test_model_variable_flags() -> None:
    m = Model(variables=["a", ModelVariable("x", is_exog=True)], shocks=["sa"])

    assert [isshock(v) for v in m.varshks] == [False, False, True]
    assert [isexog(v) for v in m.varshks] == [False, True, False]
    assert isshock("plain string") is False


def test_model_rejects_non_identifier_names() -> None:
    with pytest.raises(ModelError, match="Invalid variable name"):
        Model(variables=["a.b", "c"], shocks=["s"])
