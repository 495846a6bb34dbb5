# stator.py
from __future__ import annotations

from collections.abc import Sequence
from typing import List

from debug import Debug
from wiring import Wiring

debug = Debug()


class Stator:
    """Entry wheel (ETW). Static: maps key contacts onto the rotor stack
    on the way in, and back out again after the reflector."""

    def __init__(self, label: str, num_characters: int, wiring: Sequence[int]) -> None:
        if not label:
            raise ValueError("Stator label must not be empty")
        self.label = label
        self.num_characters = num_characters
        self.wiring = Wiring(wiring, num_characters, owner=f"Stator {label!r}")

    @classmethod
    def identity(cls, num_characters: int, label: str = "ETW") -> "Stator":
        return cls(label, num_characters, list(range(num_characters)))

    def encode(self, index: int, reverse: bool = False) -> int:
        out = self.wiring.backward(index) if reverse else self.wiring.forward(index)
        debug.log("stator", f"{self.label} {'<-' if reverse else '->'} {index}->{out}")
        return out

    def validate(self) -> List[str]:
        return [
            f"Stator.wiring[{pos}] is a duplicate value {val}"
            for pos, val in self.wiring.duplicates()
        ]

    def __repr__(self) -> str:
        return f"<Stator {self.label}>"
