"""Utilities for loading model descriptors from YAML/JSON sources."""

from __future__ import annotations

import json
from copy import deepcopy
from pathlib import Path
from typing import Any

import yaml

from .errors import ModelError
from .model import Model, ModelVariable

__all__ = ["load_model", "model_from_mapping"]


def load_model(source: str | Path | dict[str, Any], *, format: str | None = None) -> Model:
    """
    Parse a model descriptor from YAML/JSON/dict.

    Expected layout:
        ```yaml
        variables: [a, b]
        shocks: [sa, sb]
        exogenous: [x]        # optional, variables declared exogenous
        maxlag: 1
        maxlead: 1
        autoexogenize: {a: sa, b: sb}
        ```

    Raises:
        FileNotFoundError: If ``source`` is a path that does not exist
        ModelError: If the content is malformed
    """
    mapping, label = _read_source(source, format=format)
    return model_from_mapping(mapping, label=label)


def _read_source(
    source: str | Path | dict[str, Any], *, format: str | None
) -> tuple[dict[str, Any], str]:
    if isinstance(source, dict):
        return deepcopy(source), "<mapping>"

    path = Path(source)
    if not path.exists():
        raise FileNotFoundError(path)

    fmt = (format or path.suffix.lstrip(".")).lower()
    text = path.read_text(encoding="utf-8")
    if fmt in {"yaml", "yml", ""}:
        data = yaml.safe_load(text)
    elif fmt == "json":
        data = json.loads(text)
    else:
        raise ModelError(f"Unsupported model format '{fmt}' for {path}")

    if not isinstance(data, dict):
        raise ModelError(f"Model root must be a mapping (source={path})")
    return data, str(path)


def model_from_mapping(mapping: dict[str, Any], *, label: str = "<mapping>") -> Model:
    """Build a ``Model`` from an already-parsed mapping."""
    variables = _name_list(mapping.get("variables"), f"{label}::variables")
    shocks = _name_list(mapping.get("shocks"), f"{label}::shocks")
    exogenous = set(_name_list(mapping.get("exogenous"), f"{label}::exogenous"))

    unknown = exogenous - set(variables)
    if unknown:
        # declared-exogenous names that are not listed as variables are appended
        variables.extend(sorted(unknown))

    auto = mapping.get("autoexogenize") or {}
    if not isinstance(auto, dict):
        raise ModelError(f"{label}::autoexogenize must be a mapping")

    try:
        return Model(
            variables=[ModelVariable(v, is_exog=v in exogenous) for v in variables],
            shocks=shocks,
            maxlag=mapping.get("maxlag", 0),
            maxlead=mapping.get("maxlead", 0),
            autoexogenize=auto,
        )
    except ModelError as e:
        raise ModelError(f"{label}: {e}") from e


def _name_list(raw: Any, label: str) -> list[str]:
    if raw is None:
        return []
    if isinstance(raw, str):
        raw = raw.split()
    if not isinstance(raw, list):
        raise ModelError(f"{label} must be a list of names")
    names = []
    for item in raw:
        if not isinstance(item, str) or not item.isidentifier():
            raise ModelError(f"{label} contains an invalid name: {item!r}")
        names.append(item)
    return names
