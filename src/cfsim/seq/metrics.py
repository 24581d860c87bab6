"""Composition metrics for nucleotide sequences."""
from __future__ import annotations

from typing import Dict

import numpy as np

from .alphabet import resolve_to_sequence

_CANONICAL = "ACGT"


def base_counts(sequence: str) -> Dict[str, int]:
    seq = resolve_to_sequence(sequence)
    codes = np.frombuffer(seq.encode("ascii"), dtype=np.uint8)
    return {base: int(np.count_nonzero(codes == ord(base))) for base in _CANONICAL}


def gc_content(sequence: str) -> float:
    """Fraction of G/C over the full sequence length."""

    seq = resolve_to_sequence(sequence)
    counts = base_counts(seq)
    return (counts["G"] + counts["C"]) / len(seq)


def base_balance(sequence: str) -> float:
    """
    Scaled geometric mean of A/C/G/T frequencies.

    1.0 for perfectly balanced composition, 0.0 when any base is absent.
    """

    seq = resolve_to_sequence(sequence)
    freqs = np.array([base_counts(seq)[base] for base in _CANONICAL], dtype=float) / len(seq)
    if np.any(freqs == 0):
        return 0.0
    return float(4.0 * np.prod(freqs) ** 0.25)


def max_repeat(sequence: str) -> int:
    """Length of the longest homopolymer run."""

    seq = resolve_to_sequence(sequence)
    codes = np.frombuffer(seq.encode("ascii"), dtype=np.uint8)
    # run boundaries are where consecutive bases differ
    boundaries = np.flatnonzero(np.diff(codes) != 0)
    edges = np.concatenate(([-1], boundaries, [len(codes) - 1]))
    return int(np.max(np.diff(edges)))


def summarize(sequence: str) -> Dict[str, object]:
    seq = resolve_to_sequence(sequence)
    return {
        "length": len(seq),
        "counts": base_counts(seq),
        "gc_content": gc_content(seq),
        "base_balance": base_balance(seq),
        "max_repeat": max_repeat(seq),
    }


__all__ = ["base_counts", "gc_content", "base_balance", "max_repeat", "summarize"]
