# utilities.py
from __future__ import annotations

from typing import Hashable, List, Sequence, Tuple

# ────────────────────────────────────────────────────────────────────────
#  0. Index helpers
# ────────────────────────────────────────────────────────────────────────


def circular(index: int, size: int) -> int:
    """Wrap *index* into ``[0, size)``; negative indices wrap from the end."""
    if size <= 0:
        raise ValueError(f"Cannot wrap into a range of size {size}")
    return index % size


def find_duplicates(values: Sequence[Hashable]) -> List[Tuple[int, Hashable]]:
    """Return ``(position, value)`` for every repeat after a value's first
    occurrence. ``[3, 1, 3, 3]`` gives ``[(2, 3), (3, 3)]``."""
    seen: set = set()
    dups: List[Tuple[int, Hashable]] = []
    for pos, val in enumerate(values):
        if val in seen:
            dups.append((pos, val))
        else:
            seen.add(val)
    return dups


# ────────────────────────────────────────────────────────────────────────
#  1. Alphabet helpers
# ────────────────────────────────────────────────────────────────────────


def check_alphabet(alphabet: str) -> str:
    """Upper-case *alphabet* and make sure it is usable as an index space."""
    if not alphabet:
        raise ValueError("Alphabet must contain at least one symbol")
    alpha = alphabet.upper()
    dups = find_duplicates(alpha)
    if dups:
        pos, sym = dups[0]
        raise ValueError(f"Alphabet repeats symbol {sym!r} at position {pos}")
    return alpha


def wiring_indices(wiring: str, alphabet: str) -> List[int]:
    """Turn a wiring string like ``"EKMF…"`` into a list of alphabet indices."""
    out: List[int] = []
    for ch in wiring.upper():
        idx = alphabet.find(ch)
        if idx == -1:
            raise ValueError(f"Wiring symbol {ch!r} not in alphabet")
        out.append(idx)
    return out


# ────────────────────────────────────────────────────────────────────────
#  2. Text preprocessing
# ────────────────────────────────────────────────────────────────────────


def preprocess_message(msg: str, alpha: str) -> str:
    """Upper‑case and drop non‑alphabet chars."""
    return "".join(ch for ch in msg.upper() if ch in alpha)


def group_blocks(text: str, block: int) -> str:
    """Split *text* into space separated groups of *block* symbols."""
    if block <= 0:
        return text
    return " ".join(text[i : i + block] for i in range(0, len(text), block))


__all__ = [
    "circular",
    "find_duplicates",
    "check_alphabet",
    "wiring_indices",
    "preprocess_message",
    "group_blocks",
]
