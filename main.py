# main.py
from __future__ import annotations

import argparse
import json
import sys
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import List, Sequence

from debug import COMPONENTS, Debug
from machine import Machine
from models import MODELS, build_machine, get_model
from trace_log import format_trace
from utilities import group_blocks, preprocess_message

# ────────────────────────────────────────────────────────────────────────
#  0. Configuration & logging
# ────────────────────────────────────────────────────────────────────────


debug = Debug()


@dataclass(slots=True)
class Config:
    """Machine settings for one session. Wheel-ordered fields read
    left-to-right, the way they appear in the window."""

    model: str = "M3"
    rotors: List[str] = field(default_factory=lambda: ["I", "II", "III"])
    reflector: str = "UKW-B"
    positions: str | None = None        # None → first letter on every wheel
    ring_set: List[int] | None = None   # 1-based
    plugs: List[str] = field(default_factory=list)
    reflector_position: str | None = None
    unknown: str = "X"
    block: int = 5                      # display block size


def load_config(path: str | Path) -> Config:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    required = {"model", "rotors", "reflector"}
    missing = required - data.keys()
    if missing:
        raise ValueError(f"Missing keys in config: {', '.join(sorted(missing))}")
    known = {f.name for f in fields(Config)}
    extra = data.keys() - known
    if extra:
        raise ValueError(f"Unknown keys in config: {', '.join(sorted(extra))}")
    return Config(**data)


def machine_from_config(cfg: Config) -> Machine:
    """Build a fresh Machine from *cfg*."""
    return build_machine(
        get_model(cfg.model),
        cfg.rotors,
        cfg.reflector,
        positions=cfg.positions,
        rings=cfg.ring_set,
        plugs=cfg.plugs,
        reflector_position=cfg.reflector_position,
    )


# ────────────────────────────────────────────────────────────────────────
#  1. CLI helpers
# ────────────────────────────────────────────────────────────────────────


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Encrypt or decrypt with a rotor machine")
    p.add_argument("-m", "--message", metavar="TEXT", help="Text to process. If omitted, an interactive REPL starts.")
    p.add_argument("--config", metavar="FILE", help="Load machine settings from JSON.")
    p.add_argument("--model", help="Model preset (default M3)")
    p.add_argument("--wheels", nargs="+", metavar="LABEL", help="Wheel labels, left to right (e.g. I II III)")
    p.add_argument("--reflector", help="Reflector label (e.g. UKW-B)")
    p.add_argument("--positions", metavar="KEY", help="Starting window letters, left to right (e.g. AAA)")
    p.add_argument("--rings", nargs="+", type=int, metavar="N", help="Ring settings 1..N, left to right")
    p.add_argument("--plugs", nargs="*", metavar="PAIR", help="Plugboard pairs (e.g. AB CD)")
    p.add_argument("--reflector-position", dest="reflector_position", metavar="LETTER", help="Reflector start letter")
    p.add_argument("--unknown", metavar="SYMBOL", help="Stand-in for symbols outside the alphabet (default X)")
    p.add_argument("--strip", action="store_true", help="Drop symbols outside the alphabet instead of substituting them.")
    p.add_argument("--trace", action="store_true", help="Print every substitution step.")
    p.add_argument("--debug", nargs="+", choices=COMPONENTS, metavar="COMPONENT", help=f"Log components: {', '.join(COMPONENTS)}")
    p.add_argument("--validate", action="store_true", help="Only check the machine assembly and exit.")
    p.add_argument("--list-models", dest="list_models", action="store_true", help="Show available models and exit.")
    return p.parse_args(argv)


def config_from_args(args: argparse.Namespace) -> Config:
    """Start from --config (or defaults) and let flags override."""
    cfg = load_config(args.config) if args.config else Config()
    if args.model:
        cfg.model = args.model
    if args.wheels:
        cfg.rotors = list(args.wheels)
    if args.reflector:
        cfg.reflector = args.reflector
    if args.positions:
        cfg.positions = args.positions
    if args.rings:
        cfg.ring_set = list(args.rings)
    if args.plugs is not None:
        cfg.plugs = list(args.plugs)
    if args.reflector_position:
        cfg.reflector_position = args.reflector_position
    if args.unknown:
        cfg.unknown = args.unknown
    return cfg


def list_models() -> str:
    lines = []
    for name, model in sorted(MODELS.items()):
        wheels = " ".join(w.label for w in model.wheels)
        refls = " ".join(r.label for r in model.reflectors)
        plug = "plugboard" if model.plugboard else "no plugboard"
        lines.append(f"{name:<5} {model.label}: {len(model.alphabet)} symbols, wheels {wheels}; reflectors {refls}; {plug}")
    return "\n".join(lines)


def run_message(machine: Machine, cfg: Config, text: str, *, strip: bool = False, trace: bool = False) -> str:
    """Reset, process *text* and return the grouped output."""
    if strip:
        text = preprocess_message(text, machine.alphabet)
    machine.reset()
    machine.tracing = trace
    out, traces = machine.process_message(text, cfg.unknown)
    if trace:
        for t in traces:
            print(format_trace(t))
    return group_blocks(out, cfg.block)


# ────────────────────────────────────────────────────────────────────────
#  2. Main entry point
# ────────────────────────────────────────────────────────────────────────


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)

    if args.list_models:
        print(list_models())
        return 0

    if args.debug:
        debug.enable(*args.debug)

    try:
        cfg = config_from_args(args)
        machine = machine_from_config(cfg)
    except (OSError, ValueError, TypeError) as exc:
        raise SystemExit(f"❌  {exc}") from exc

    problems = machine.validate()
    if args.validate:
        for p in problems:
            print(p)
        print("✅  Machine is valid" if not problems else f"❌  {len(problems)} problem(s)")
        return 1 if problems else 0
    for p in problems:
        print(f"⚠  {p}", file=sys.stderr)

    # one‑shot mode ------------------------------------------------------
    if args.message is not None:
        print(run_message(machine, cfg, args.message, strip=args.strip, trace=args.trace))
        return 0

    # interactive REPL ---------------------------------------------------
    print(f"\nLoaded {machine.label} with alphabet length {machine.num_characters}, window {machine.window}.")
    print("Type blank line to quit.\n")
    while True:
        txt = input("Message > ")
        if not txt.strip():
            break
        print(run_message(machine, cfg, txt, strip=args.strip, trace=args.trace))
    return 0


if __name__ == "__main__":
    sys.exit(main())
