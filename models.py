# models.py
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Dict, Tuple

from keyboard_and_plugboard import Plugboard
from machine import Machine
from rotor_and_reflector import Reflector, Rotor
from stator import Stator
from utilities import check_alphabet, wiring_indices

# ────────────────────────────────────────────────────────────────────────
#  0. Alphabets
# ────────────────────────────────────────────────────────────────────────

AlphabetABC = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
Alphabet28 = "ABCDEFGHIJKLMNOPQRSTUVXYZÅÄÖ"     # Swedish, no W


# ────────────────────────────────────────────────────────────────────────
#  1. Preset records
# ────────────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class WheelSpec:
    label: str
    wiring: str
    notches: str = ""


@dataclass(frozen=True)
class ReflectorSpec:
    label: str
    wiring: str
    moving: bool = False


@dataclass(frozen=True)
class Model:
    label: str
    alphabet: str
    wheel_count: int
    wheels: Tuple[WheelSpec, ...]
    reflectors: Tuple[ReflectorSpec, ...]
    plugboard: bool = False
    entry: str | None = None        # None → identity ETW
    aliases: Tuple[str, ...] = field(default=())

    def wheel(self, label: str) -> WheelSpec:
        for spec in self.wheels:
            if spec.label == label.upper():
                return spec
        names = ", ".join(s.label for s in self.wheels)
        raise ValueError(f"Model {self.label!r} has no wheel {label!r}. Expected one of: {names}")

    def reflector(self, label: str) -> ReflectorSpec:
        for spec in self.reflectors:
            if spec.label == label.upper():
                return spec
        names = ", ".join(s.label for s in self.reflectors)
        raise ValueError(f"Model {self.label!r} has no reflector {label!r}. Expected one of: {names}")


# ────────────────────────────────────────────────────────────────────────
#  2. Wheel database
# ────────────────────────────────────────────────────────────────────────

# Kriegsmarine M3; wheels and reflectors shared with the Enigma I
M3 = Model(
    label="M3 (Kriegsmarine)",
    alphabet=AlphabetABC,
    wheel_count=3,
    wheels=(
        WheelSpec("I",    "EKMFLGDQVZNTOWYHXUSPAIBRCJ", "Q"),
        WheelSpec("II",   "AJDKSIRUXBLHWTMCQGZNPYFVOE", "E"),
        WheelSpec("III",  "BDFHJLCPRTXVZNYEIWGAKMUSQO", "V"),
        WheelSpec("IV",   "ESOVPZJAYQUIRHXLNFTGKDCMWB", "J"),
        WheelSpec("V",    "VZBRGITYUPSDNHLXAWMJQOFECK", "Z"),
        WheelSpec("VI",   "JPGVOUMFYQBENHZRDKASXLICTW", "ZM"),
        WheelSpec("VII",  "NZJHGRCXMYSWBOUFAIVLPEKQDT", "ZM"),
        WheelSpec("VIII", "FKQHTLXOCBJSPDZRAMEWNIUYGV", "ZM"),
    ),
    reflectors=(
        ReflectorSpec("UKW-B", "YRUHQSLDPXNGOKMIEBFZCWVJAT"),
        ReflectorSpec("UKW-C", "FVPJIAOYEDRZXWGCTKUQSBNMHL"),
    ),
    plugboard=True,
    aliases=("M3",),
)

# rare Swedish Model B (A-133)
A133 = Model(
    label="B (A-133)",
    alphabet=Alphabet28,
    wheel_count=3,
    wheels=(
        WheelSpec("I",   "PSBGÖXQJDHOÄUCFRTEZVÅINLYMKA", "G"),
        WheelSpec("II",  "CHNSYÖADMOTRZXBÄIGÅEKQUPFLVJ", "G"),
        WheelSpec("III", "ÅVQIAÄXRJBÖZSPCFYUNTHDOMEKGL", "G"),
    ),
    reflectors=(
        ReflectorSpec("UKW", "LDGBÄNCPSKJAVFZHXUIÅRMQÖOTEY"),
    ),
    aliases=("A133", "B"),
)

MODELS: Dict[str, Model] = {}
for _model in (M3, A133):
    for _alias in _model.aliases:
        MODELS[_alias] = _model


def get_model(name: str) -> Model:
    try:
        return MODELS[name.upper()]
    except KeyError:
        raise ValueError(f"Unknown model {name!r}. Expected one of {sorted(MODELS)}") from None


# ────────────────────────────────────────────────────────────────────────
#  3. Building a machine
# ────────────────────────────────────────────────────────────────────────


def build_machine(
    model: Model,
    wheels: Sequence[str],
    reflector: str,
    positions: str | None = None,
    rings: Sequence[int] | None = None,
    plugs: Sequence[str] = (),
    reflector_position: str | None = None,
) -> Machine:
    """Assemble a fresh Machine from a preset.

    *wheels*, *positions* and *rings* are given left-to-right, as an
    operator reads them; rings are 1-based. Nothing from *model* is shared
    with the returned machine.
    """
    alpha = check_alphabet(model.alphabet)
    size = len(alpha)

    if len(wheels) != model.wheel_count:
        raise ValueError(f"Model {model.label!r} takes {model.wheel_count} wheels, got {len(wheels)}")
    if plugs and not model.plugboard:
        raise ValueError(f"Model {model.label!r} has no plugboard")

    rotors = []
    for label in reversed(wheels):        # wheel 0 is the right-most
        spec = model.wheel(label)
        rotors.append(Rotor(
            spec.label,
            size,
            wiring_indices(spec.wiring, alpha),
            wiring_indices(spec.notches, alpha),
        ))

    refl_spec = model.reflector(reflector)
    refl = Reflector(refl_spec.label, size, wiring_indices(refl_spec.wiring, alpha), refl_spec.moving)

    if model.entry is None:
        etw = Stator.identity(size)
    else:
        etw = Stator("ETW", size, wiring_indices(model.entry, alpha))

    board = Plugboard(plugs, alpha) if model.plugboard else None

    machine = Machine(model.label, alpha, etw, rotors, refl, board)
    if rings is not None:
        machine.set_rings(rings)
    machine.set_key(positions if positions is not None else alpha[0] * len(rotors))
    if reflector_position:
        idx = alpha.find(reflector_position.upper())
        if idx == -1:
            raise ValueError(f"Reflector position {reflector_position!r} not in alphabet")
        refl.setup(idx)
    return machine


__all__ = [
    "AlphabetABC",
    "Alphabet28",
    "WheelSpec",
    "ReflectorSpec",
    "Model",
    "M3",
    "A133",
    "MODELS",
    "get_model",
    "build_machine",
]
