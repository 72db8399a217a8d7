"""
Tests for the variable registry.
"""

import pytest

from simplan.core.errors import ConfigError, UnknownNameError
from simplan.core.registry import VariableRegistry


class TestVariableRegistry:
    def test_indices_follow_declaration_order(self):
        reg = VariableRegistry(["a", "b", "sa"])
        assert reg["a"] == 1
        assert reg["sa"] == 3
        assert reg.names == ("a", "b", "sa")
        assert list(reg) == ["a", "b", "sa"]
        assert len(reg) == 3

    def test_text_form(self):
        assert str(VariableRegistry(["a", "b"])) == "(a = 1, b = 2)"
        assert str(VariableRegistry([])) == "()"

    def test_unknown_name(self):
        reg = VariableRegistry(["a"])
        with pytest.raises(UnknownNameError, match="zz"):
            reg["zz"]
        assert reg.get("zz") == 0
        assert "zz" not in reg

    def test_duplicates_rejected(self):
        with pytest.raises(ConfigError, match="Duplicate"):
            VariableRegistry(["a", "a"])

    def test_from_indices_reorders(self):
        reg = VariableRegistry.from_indices([("b", 2), ("a", 1), ("c", 3)])
        assert reg.names == ("a", "b", "c")

    @pytest.mark.parametrize(
        "pairs",
        [[("a", 1), ("b", 3)], [("a", 0), ("b", 1)], [("a", 1), ("b", 1)]],
    )
    def test_from_indices_invalid(self, pairs):
        with pytest.raises(ConfigError, match="not valid"):
            VariableRegistry.from_indices(pairs)

    def test_equality_by_names_and_order(self):
        assert VariableRegistry(["a", "b"]) == VariableRegistry(["a", "b"])
        assert VariableRegistry(["a", "b"]) != VariableRegistry(["b", "a"])
        assert hash(VariableRegistry(["a"])) == hash(VariableRegistry(["a"]))

    @pytest.mark.parametrize("name", ["", "a.b", "1x", "a b", "x-y"])
    def test_non_identifier_names_rejected(self, name):
        """Names the plan file format cannot read back are refused up front."""
        with pytest.raises(ConfigError, match="Invalid variable name"):
            VariableRegistry(["ok", name])
