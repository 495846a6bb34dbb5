# machine.py  ─────────────────────────────────────────────────────────
from __future__ import annotations

from collections.abc import Sequence
from typing import List

from debug import Debug
from keyboard_and_plugboard import Keyboard, Plugboard
from rotor_and_reflector import Reflector, Rotor
from stator import Stator
from trace_log import Trace, TraceStep
from utilities import check_alphabet

debug = Debug()


class Machine:
    """A complete rotor machine: entry wheel, wheels, reflector and an
    optional plugboard.

    ``wheels[0]`` is the right-most wheel, the first to encode and the one
    that steps on every key-press. Key and ring helpers take their settings
    left-to-right, the way they read in the machine's window.

    A Machine carries mutable wheel positions; share one instance between
    threads only behind a lock.
    """

    def __init__(
        self,
        label: str,
        alphabet: str,
        entry_wheel: Stator,
        wheels: Sequence[Rotor] | None = None,
        reflector: Reflector | None = None,
        plugboard: Plugboard | None = None,
    ) -> None:
        if not label:
            raise ValueError("Machine label must not be empty")
        self.label = label
        self.alphabet = check_alphabet(alphabet)
        self.num_characters = len(self.alphabet)

        if not isinstance(entry_wheel, Stator):
            raise TypeError(f"Machine {label!r}: entry wheel must be a Stator, got {entry_wheel!r}")
        self.entry_wheel = entry_wheel

        self.wheels: List[Rotor] = list(wheels or [])
        for ind, whl in enumerate(self.wheels):
            if not isinstance(whl, Rotor):
                raise TypeError(f"Machine {label!r}: wheel[{ind}] must be a Rotor, got {whl!r}")

        if reflector is not None and not isinstance(reflector, Reflector):
            raise TypeError(f"Machine {label!r}: reflector must be a Reflector, got {reflector!r}")
        self.reflector = reflector

        if plugboard is not None and not isinstance(plugboard, Plugboard):
            raise TypeError(f"Machine {label!r}: plugboard must be a Plugboard, got {plugboard!r}")
        self.plugboard = plugboard

        self.keyboard = Keyboard(self.alphabet)
        self.tracing = True

    # ── key & ring helpers ──────────────────────────────────────

    def set_rings(self, rings: Sequence[int]) -> None:
        """Apply ring-stellung offsets (1-based, left-to-right)."""
        if len(rings) != len(self.wheels):
            raise ValueError(f"Expected {len(self.wheels)} ring settings, got {len(rings)}")
        for rotor, ring in zip(reversed(self.wheels), rings):
            rotor.setup(rotor.starting_position, ring - 1)

    def set_key(self, key: str) -> None:
        """Turn the wheels to the window letters in *key* (left-to-right)
        and make that the starting position."""
        if len(key) != len(self.wheels):
            raise ValueError(f"Expected {len(self.wheels)} key letters, got {key!r}")
        for rotor, letter in zip(reversed(self.wheels), key.upper()):
            idx = self.alphabet.find(letter)
            if idx == -1:
                raise ValueError(f"Key letter {letter!r} not in alphabet")
            rotor.setup(idx, rotor.ring_setting)

    @property
    def window(self) -> str:
        """Letters currently showing, left-to-right."""
        return "".join(self.keyboard.backward(whl.position) for whl in reversed(self.wheels))

    def reset(self) -> None:
        """Put every wheel (and the reflector) back to its starting position."""
        for whl in self.wheels:
            whl.reset()
        if self.reflector is not None:
            self.reflector.reset()

    # ── stepping logic  ─────────────────────────────────────────

    def _step_rotors(self, trace: Trace) -> None:
        """Advance wheels for one key-press.

        Wheel 0 always steps; wheel i steps when wheel i-1 sat on a notch
        *before* anything moved. No middle-wheel double step.
        """
        notched = [whl.at_notch for whl in self.wheels]

        for ind, whl in enumerate(self.wheels):
            moved = ind == 0 or notched[ind - 1]
            if moved:
                whl.advance()
            if self.tracing:
                trace.steps.append(TraceStep("Wheel Advance", msg=self._advance_msg(ind, moved)))

        debug.log("stepping", f"Window {self.window}")

    def _advance_msg(self, ind: int, moved: bool) -> str:
        whl = self.wheels[ind]
        showing = self.keyboard.backward(whl.position)
        if ind == 0:
            return f"First wheel {whl.label!r} now showing {showing!r}"
        if moved:
            prev = self.wheels[ind - 1].label
            return f"Wheel {ind} {whl.label!r} because of notch on {ind - 1} {prev!r}, now showing {showing!r}"
        return f"Wheel {ind} {whl.label!r} did not advance, showing {showing!r}"

    def _record(self, trace: Trace, op: str, component: str, before: int, after: int) -> None:
        if not self.tracing:
            return
        kb = self.keyboard
        trace.steps.append(
            TraceStep(op, component, before, kb.backward(before), after, kb.backward(after))
        )

    # ── encipher one symbol  ────────────────────────────────────

    def process_character(self, char: str, unknown: str = "X") -> tuple[str, Trace]:
        """Encode one symbol, stepping the wheels first.

        Keyboard -> Plugboard? -> Stator -> Wheel[0]..Wheel[N] -> Reflector
        -> Wheel[N]..Wheel[0] -> Stator -> Plugboard? -> Lamp

        Symbols outside the alphabet are typed as *unknown*.
        """
        if self.reflector is None:
            raise RuntimeError(f"Machine {self.label!r} does not have a reflector installed")
        if len(char) != 1:
            raise ValueError(f"Machine {self.label!r} expects exactly one symbol, got {char!r}")

        trace = Trace(input_raw=char)
        letter = char.upper()
        signal = self.keyboard.forward(letter, unknown)
        trace.input_char = self.keyboard.backward(signal)
        trace.input_index = signal

        if self.plugboard is not None:
            out = self.plugboard.encode(signal)
            self._record(trace, "Encode", "Plugboard", signal, out)
            signal = out

        out = self.entry_wheel.encode(signal)
        self._record(trace, "Encode", "Stator", signal, out)
        signal = out

        self._step_rotors(trace)

        for ind, whl in enumerate(self.wheels):
            out = whl.encode(signal)
            self._record(trace, "Encode", f"Wheel {ind}", signal, out)
            signal = out

        if self.reflector.moving:
            self.reflector.advance()
            if self.tracing:
                trace.steps.append(TraceStep(
                    "Reflector Advance",
                    msg=f"Advancing reflector {self.reflector.label!r} to {self.reflector.position}",
                ))

        out = self.reflector.encode(signal)
        self._record(trace, "Encode", "Reflector", signal, out)
        signal = out

        for ind in reversed(range(len(self.wheels))):
            out = self.wheels[ind].encode(signal, reverse=True)
            self._record(trace, "Encode Reverse", f"Wheel {ind}", signal, out)
            signal = out

        out = self.entry_wheel.encode(signal, reverse=True)
        self._record(trace, "Encode Reverse", "Stator", signal, out)
        signal = out

        if self.plugboard is not None:
            out = self.plugboard.encode(signal)
            self._record(trace, "Encode Reverse", "Plugboard", signal, out)
            signal = out

        out_ch = self.keyboard.backward(signal)
        trace.output_index = signal
        trace.output_char = out_ch
        debug.log("encipher", f"{letter!r}->{out_ch!r} window={self.window}")
        return out_ch, trace

    def process_message(self, msg: str, unknown: str = "X") -> tuple[str, List[Trace]]:
        """Encode (or decode, it is the same thing) *msg* symbol by symbol.
        No grouping or filtering is done here."""
        if not msg:
            return msg, []

        out: List[str] = []
        traces: List[Trace] = []
        for ch in msg:
            sym, trace = self.process_character(ch, unknown)
            out.append(sym)
            traces.append(trace)
        return "".join(out), traces

    # ── validation  ─────────────────────────────────────────────

    def validate(self) -> List[str]:
        """Every problem found with the assembly; empty means valid."""
        errs: List[str] = []
        name = self.label

        if self.entry_wheel.num_characters != self.num_characters:
            errs.append(f"Machine {name!r} has an invalid entry wheel (ETW), the number of characters does not match")
        errs.extend(self.entry_wheel.validate())

        for ind, whl in enumerate(self.wheels):
            if whl.num_characters != self.num_characters:
                errs.append(f"Machine {name!r} has an invalid wheel[{ind}], the number of characters does not match")
            errs.extend(f"Machine {name!r} has an invalid wheel[{ind}]: {err}" for err in whl.validate())

        if self.reflector is None:
            errs.append(f"Machine {name!r} does not have a reflector installed")
        else:
            if self.reflector.num_characters != self.num_characters:
                errs.append(f"Machine {name!r} has an invalid reflector (UKW), the number of characters does not match")
            errs.extend(self.reflector.validate())

        if self.plugboard is not None:
            if self.plugboard.num_characters != self.num_characters:
                errs.append(f"Machine {name!r} has an invalid plugboard, the number of characters does not match")
            errs.extend(self.plugboard.validate())

        return errs

    def __repr__(self) -> str:
        return f"<Machine {self.label} window={self.window}>"
