# wiring.py
from __future__ import annotations

from collections.abc import Sequence
from typing import List, Tuple

from utilities import circular, find_duplicates


class Wiring:
    """Substitution table shared by every component of the machine.

    Holds the forward table as given plus an inverse table derived from it.
    Duplicates are allowed here (they are reported by ``duplicates()``, not
    rejected) so that a miswired component can still be built and validated.
    """

    __slots__ = ("size", "_fwd", "_rev")

    def __init__(self, table: Sequence[int], size: int, *, owner: str = "Wiring") -> None:
        if size <= 0:
            raise ValueError(f"{owner} needs a positive character count, got {size}")
        if table is None or len(table) != size:
            got = 0 if table is None else len(table)
            raise ValueError(f"{owner} wiring has {got} entries, expected {size}")
        for pos, val in enumerate(table):
            if isinstance(val, bool) or not isinstance(val, int):
                raise ValueError(f"{owner} wiring[{pos}] is not an integer: {val!r}")
            if not 0 <= val < size:
                raise ValueError(f"{owner} wiring[{pos}] = {val} is outside 0–{size - 1}")

        self.size = size
        self._fwd: Tuple[int, ...] = tuple(table)

        # inverse table; for a miswired table the later entry wins, unreached slots stay 0
        rev = [0] * size
        for i, target in enumerate(self._fwd):
            rev[target] = i
        self._rev: Tuple[int, ...] = tuple(rev)

    # ── lookups ───────────────────────────────────────────────────
    def forward(self, index: int) -> int:
        return self._fwd[circular(index, self.size)]

    def backward(self, index: int) -> int:
        return self._rev[circular(index, self.size)]

    # ── checks ────────────────────────────────────────────────────
    def duplicates(self) -> List[Tuple[int, int]]:
        return find_duplicates(self._fwd)

    def involution_breaks(self) -> List[int]:
        """Positions ``i`` where ``table[table[i]] != i``."""
        return [i for i, t in enumerate(self._fwd) if self._fwd[t] != i]

    # ── niceties ──────────────────────────────────────────────────
    def __len__(self) -> int:
        return self.size

    def __iter__(self):
        return iter(self._fwd)

    def __getitem__(self, index: int) -> int:
        return self._fwd[index]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Wiring):
            return self._fwd == other._fwd
        if isinstance(other, (list, tuple)):
            return list(self._fwd) == list(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"<Wiring size={self.size}>"
