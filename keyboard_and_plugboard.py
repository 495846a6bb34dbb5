# keyboard_and_plugboard.py
from __future__ import annotations

from collections.abc import Sequence
from typing import List

from debug import Debug
from utilities import check_alphabet, circular
from wiring import Wiring

debug = Debug()


# ── alphabet lookups ──────────────────────────────────────────────
def symbol_to_index(symbol: str, alphabet: str, unknown: str = "X") -> int:
    """Alphabet index of *symbol*; symbols outside the alphabet map to
    the index of *unknown* instead."""
    idx = alphabet.find(symbol.upper()) if len(symbol) == 1 else -1
    if idx != -1:
        return idx
    fallback = alphabet.find(unknown.upper()) if len(unknown) == 1 else -1
    if fallback == -1:
        raise ValueError(f"Fallback symbol {unknown!r} is not in the alphabet")
    return fallback


def index_to_symbol(index: int, alphabet: str) -> str:
    return alphabet[circular(index, len(alphabet))]


# ── Keyboard ──────────────────────────────────────────────────────
class Keyboard:
    def __init__(self, alphabet: str) -> None:
        self.alphabet: str = alphabet

    # letter → integer signal
    def forward(self, letter: str, unknown: str = "X") -> int:
        signal = symbol_to_index(letter, self.alphabet, unknown)
        debug.log("keyboard", f"{letter!r}->{signal}")
        return signal

    # integer signal → letter
    def backward(self, signal: int) -> str:
        return index_to_symbol(signal, self.alphabet)


# ── Plugboard ─────────────────────────────────────────────────────
class Plugboard:
    """Steckerbrett: swaps pairs of symbols before and after the wheels.
    Every unplugged symbol maps to itself."""

    def __init__(
        self,
        pairs: Sequence[str | tuple[str, str]],
        alphabet: str,
    ) -> None:
        alphabet = check_alphabet(alphabet)
        self.alphabet: str = alphabet
        self.num_characters: int = len(alphabet)
        table: List[int] = list(range(self.num_characters))
        used: set[str] = set()

        for raw in pairs:
            # normalise to (a, b)
            if isinstance(raw, str):
                if len(raw) != 2:
                    raise ValueError(f"Pair {raw!r} must be exactly 2 symbols")
                a, b = raw.upper()
            else:
                if len(raw) != 2:
                    raise ValueError(f"Pair {raw!r} must be exactly 2 symbols")
                a, b = (s.upper() for s in raw)

            if a == b:
                raise ValueError(f"Plugboard cannot map a symbol to itself: {a}")
            if a in used or b in used:
                dup = a if a in used else b
                raise ValueError(f"Character {dup!r} already used in plugboard")
            if a not in alphabet or b not in alphabet:
                bad = a if a not in alphabet else b
                raise ValueError(f"Symbol {bad!r} not in alphabet")

            # passed validation → commit swap
            ia, ib = alphabet.index(a), alphabet.index(b)
            table[ia], table[ib] = ib, ia
            used.update((a, b))

        self.pairs: tuple[tuple[str, str], ...] = tuple(
            (alphabet[i], alphabet[t]) for i, t in enumerate(table) if i < t
        )
        self.wiring = Wiring(table, self.num_characters, owner="Plugboard")

    def encode(self, signal: int) -> int:
        out = self.wiring.forward(signal)
        debug.log("plugboard", f"{signal}->{out}")
        return out

    def validate(self) -> List[str]:
        errs = [
            f"Plugboard.wiring[{pos}] is a duplicate value {val}"
            for pos, val in self.wiring.duplicates()
        ]
        if not errs:
            errs = [
                f"Plugboard.wiring[{pos}] = {self.wiring[pos]} is not swapped back"
                for pos in self.wiring.involution_breaks()
            ]
        return errs

    # nicety for debugging
    def __repr__(self) -> str:
        swaps = [f"{a}{b}" for a, b in self.pairs]
        return f"<Plugboard {' '.join(swaps)}>"
