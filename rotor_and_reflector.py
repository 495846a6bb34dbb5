# rotor_and_reflector.py
from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import List

from debug import Debug
from utilities import circular
from wiring import Wiring

debug = Debug()


class Rotor:
    """A wheel: wiring plus a rotating position and a set of notch positions.

    Notches are alphabet indices; the rotor is *at its notch* when the
    position showing in the window is one of them. Double-notch wheels
    (VI–VIII) simply carry two.
    """

    def __init__(
        self,
        label: str,
        num_characters: int,
        wiring: Sequence[int],
        notches: Iterable[int] = (),
    ) -> None:
        if not label:
            raise ValueError("Rotor label must not be empty")
        self.label = label
        self.num_characters = num_characters
        self.wiring = Wiring(wiring, num_characters, owner=f"Rotor {label!r}")

        self.notches: frozenset[int] = frozenset()
        self.set_notches(notches)

        self.starting_position = 0
        self.position = 0
        self.ring_setting = 0

    # ── ring & notch helpers ──────────────────────────────────────
    def setup(self, start: int = 0, ring: int = 0) -> "Rotor":
        """Fix the Grundstellung (and Ringstellung, both 0-based)."""
        self.starting_position = circular(start, self.num_characters)
        self.position = self.starting_position
        self.ring_setting = circular(ring, self.num_characters)
        return self

    def set_notches(self, notches: Iterable[int]) -> "Rotor":
        marks = frozenset(notches)
        bad = sorted(n for n in marks if not 0 <= n < self.num_characters)
        if bad:
            raise ValueError(f"Rotor {self.label!r} notch {bad[0]} outside 0–{self.num_characters - 1}")
        self.notches = marks
        return self

    # ── stepping --------------------------------------------------
    @property
    def at_notch(self) -> bool:
        return self.position in self.notches

    def advance(self, steps: int = 1) -> None:
        self.position = circular(self.position + steps, self.num_characters)
        debug.log("stepping", f"Rotor {self.label} pos {self.position}, at_notch={self.at_notch}")

    def reset(self) -> None:
        self.position = self.starting_position

    # ── signal paths ---------------------------------------------
    def forward(self, sig: int) -> int:
        offset = self.position - self.ring_setting
        mapped = self.wiring.forward(sig + offset)
        return circular(mapped - offset, self.num_characters)

    def backward(self, sig: int) -> int:
        offset = self.position - self.ring_setting
        mapped = self.wiring.backward(sig + offset)
        return circular(mapped - offset, self.num_characters)

    def encode(self, index: int, reverse: bool = False) -> int:
        """Forward pass toward the reflector, or ``reverse=True`` for the
        inverse substitution on the way back."""
        out = self.backward(index) if reverse else self.forward(index)
        debug.log("rotor", f"{self.label} {'<-' if reverse else '->'} {index}->{out}")
        return out

    def validate(self) -> List[str]:
        return [
            f"Rotor.wiring[{pos}] is a duplicate value {val}"
            for pos, val in self.wiring.duplicates()
        ]

    # ── niceties --------------------------------------------------
    def __repr__(self) -> str:
        return f"<Rotor {self.label} pos={self.position} ring={self.ring_setting}>"


class Reflector:
    """Umkehrwalze (UKW). Static on most models; ``moving=True`` makes it
    advance once per key-press. It never drives another wheel."""

    def __init__(
        self,
        label: str,
        num_characters: int,
        wiring: Sequence[int],
        moving: bool = False,
    ) -> None:
        if not label:
            raise ValueError("Reflector label must not be empty")
        self.label = label
        self.num_characters = num_characters
        self.wiring = Wiring(wiring, num_characters, owner=f"Reflector {label!r}")
        self.moving = bool(moving)

        self.starting_position = 0
        self.position = 0

    def setup(self, start: int = 0) -> "Reflector":
        self.starting_position = circular(start, self.num_characters)
        self.position = self.starting_position
        return self

    def reset(self) -> None:
        self.position = self.starting_position

    def advance(self, steps: int = 1) -> None:
        if not self.moving:
            return
        self.position = circular(self.position + steps, self.num_characters)
        debug.log("stepping", f"Reflector {self.label} pos {self.position}")

    def encode(self, index: int) -> int:
        mapped = self.wiring.forward(index + self.position)
        out = circular(mapped - self.position, self.num_characters)
        debug.log("reflector", f"{self.label} {index}->{out}")
        return out

    def validate(self) -> List[str]:
        errs = [
            f"Reflector.wiring[{pos}] is a duplicate value {val}"
            for pos, val in self.wiring.duplicates()
        ]
        # only meaningful on a true permutation
        if not errs:
            errs = [
                f"Reflector.wiring[{pos}] = {self.wiring[pos]} is not reflected back"
                for pos in self.wiring.involution_breaks()
            ]
        return errs

    def __repr__(self) -> str:
        return f"<Reflector {self.label} pos={self.position}>"
