from __future__ import annotations

from typing import Any, FrozenSet, Sequence


class ProvGraphError(Exception):
    """Base class for provgraph errors."""
    pass


class LookupMiss(ProvGraphError, KeyError):
    """
    A requested vertex, edge, record or index is absent.

    Recoverable: the index layer reports misses with ``NO_VERTEX`` and only
    the strict accessors raise.
    """

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else "lookup miss"


class AmbiguousContinuation(ProvGraphError):
    """
    A dead end is reached by several converging paths, so there is no
    single path id to continue.
    """

    def __init__(self, candidates: FrozenSet[int], chain: Sequence[Any] = ()) -> None:
        self.candidates = frozenset(candidates)
        self.chain = list(chain)
        super().__init__(
            f"cannot continue chain {self.chain}: candidate path ids {sorted(self.candidates)}"
        )


class StructuralInvariantViolation(ProvGraphError):
    """The graph is in a state that correct operations never produce."""
    pass
