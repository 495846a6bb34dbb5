# trace_log.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass(slots=True)
class TraceStep:
    """One sub-step of a key-press: a substitution or an advance."""

    op: str
    component: str | None = None
    input: int | None = None
    input_char: str | None = None
    output: int | None = None
    output_char: str | None = None
    msg: str | None = None


@dataclass(slots=True)
class Trace:
    """Everything that happened to one symbol on its way through the machine."""

    input_raw: str
    input_char: str | None = None
    input_index: int | None = None
    output_index: int | None = None
    output_char: str | None = None
    steps: List[TraceStep] = field(default_factory=list)


def format_trace(trace: Trace) -> str:
    lines = [f"{trace.input_raw!r} -> {trace.output_char!r}"]
    for step in trace.steps:
        if step.msg is not None:
            lines.append(f"  {step.op:<15} {step.msg}")
        else:
            lines.append(
                f"  {step.op:<15} {step.component:<10} "
                f"{step.input_char}({step.input}) -> {step.output_char}({step.output})"
            )
    return "\n".join(lines)
