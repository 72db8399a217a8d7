"""
Ordered registry of variable and shock names.

Maps each name to its 1-based column in the exogeneity matrix of a plan.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from .errors import ConfigError, UnknownNameError


class VariableRegistry:
    """
    Insertion-ordered mapping from variable/shock name to column index.

    The registry is built once, in the model's declared order, and is never
    modified afterwards. Column indices are exactly ``1..N``.

    **Example Usage:**
        ```python
        from simplan.core.registry import VariableRegistry

        reg = VariableRegistry(["a", "b", "sa"])
        reg["sa"]        # 3
        reg.names        # ("a", "b", "sa")
        str(reg)         # "(a = 1, b = 2, sa = 3)"
        ```
    """

    __slots__ = ("_names", "_index")

    def __init__(self, names: Iterable[str]):
        """
        Build the registry.

        Args:
            names: Variable and shock names in column order

        Raises:
            ConfigError: If a name is repeated or is not a valid identifier
        """
        self._names: tuple[str, ...] = tuple(str(n) for n in names)
        self._index: dict[str, int] = {}
        for i, name in enumerate(self._names, start=1):
            if not name.isidentifier():
                raise ConfigError(f"Invalid variable name: {name!r}")
            if name in self._index:
                raise ConfigError(f"Duplicate variable name: {name}")
            self._index[name] = i

    @classmethod
    def from_indices(cls, mapping: Iterable[tuple[str, int]]) -> VariableRegistry:
        """
        Build a registry from explicit ``(name, index)`` pairs in any order.

        Raises:
            ConfigError: If the indices are not exactly ``{1..N}``
        """
        pairs = list(mapping)
        inds = [i for _, i in pairs]
        if sorted(inds) != list(range(1, len(pairs) + 1)):
            raise ConfigError("indexes of variables are not valid.")
        by_index = {i: n for n, i in pairs}
        return cls(by_index[i] for i in range(1, len(pairs) + 1))

    @property
    def names(self) -> tuple[str, ...]:
        return self._names

    def __getitem__(self, name: str) -> int:
        """Return the 1-based column of ``name``."""
        try:
            return self._index[name]
        except KeyError:
            raise UnknownNameError(name) from None

    def get(self, name: str, default: int = 0) -> int:
        return self._index.get(name, default)

    def columns(self, names: Iterable[str]) -> list[int]:
        """Resolve several names to 1-based columns, failing on the first unknown one."""
        return [self[str(n)] for n in names]

    def items(self) -> Iterator[tuple[str, int]]:
        return iter(self._index.items())

    def __contains__(self, name: object) -> bool:
        return name in self._index

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VariableRegistry):
            return NotImplemented
        return self._names == other._names

    def __hash__(self) -> int:
        return hash(self._names)

    def __str__(self) -> str:
        return "(" + ", ".join(f"{n} = {i}" for n, i in self._index.items()) + ")"

    def __repr__(self) -> str:
        return f"VariableRegistry({list(self._names)})"
