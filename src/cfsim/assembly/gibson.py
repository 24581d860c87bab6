"""Homology-overlap (Gibson, SOEing, yeast) assembly."""
from __future__ import annotations

import logging
from typing import List, Sequence, Tuple

from cfsim.errors import AmbiguousAssemblyError, NonClosingAssemblyError

LOGGER = logging.getLogger(__name__)

HOMOLOGY_LENGTH = 20


def _join_round(fragments: Sequence[str]) -> List[str]:
    """Extend every fragment whose 3' window occurs in another fragment."""

    candidates: List[str] = []
    for i, first in enumerate(fragments):
        window = first[-HOMOLOGY_LENGTH:]
        for j, second in enumerate(fragments):
            if i == j:
                continue
            index = second.find(window)
            if index == -1:
                continue
            candidates.append(first + second[index + len(window) :])
    return candidates


def _close_loop(sequence: str) -> str:
    window = sequence[-HOMOLOGY_LENGTH:]
    index = sequence.find(window)
    if index + HOMOLOGY_LENGTH >= len(sequence):
        raise NonClosingAssemblyError("Product has no terminal homology to circularize.")
    return sequence[index + HOMOLOGY_LENGTH :]


def join_fragments(sequences: Sequence[str]) -> Tuple[str, bool]:
    """
    Join canonical ``sequences`` through shared HOMOLOGY_LENGTH-nt windows.

    A round where every fragment finds a partner means the set closes on
    itself: the last candidate is dropped and the product is marked
    circular. A single input is always treated as self-circularizing.
    Returns the product and whether it closed into a circle.
    """

    if not sequences:
        raise NonClosingAssemblyError("Invalid input: expected non-empty list of DNA sequences")

    working = list(sequences)
    is_circular = len(sequences) == 1
    rounds = 0
    while len(working) > 1:
        candidates = _join_round(working)
        rounds += 1
        LOGGER.debug("gibson round=%d fragments=%d candidates=%d", rounds, len(working), len(candidates))
        if len(candidates) == len(working):
            working = candidates[:-1]
            is_circular = True
        elif len(candidates) < len(working):
            working = candidates
        else:
            raise AmbiguousAssemblyError("Products do not assemble correctly, multiple assembly junctions present")

    if len(working) != 1:
        raise NonClosingAssemblyError("Gibson assembly did not resolve to a single product")

    product = working[0]
    if is_circular:
        return _close_loop(product), True
    return product, False


def gibson(sequences: Sequence[str], *, require_circular: bool = True) -> str:
    """
    Gibson-assemble ``sequences``; linear products raise NonClosingAssemblyError
    unless ``require_circular`` is False.
    """

    product, is_circular = join_fragments(sequences)
    if not is_circular and require_circular:
        raise NonClosingAssemblyError(
            "Products do not assemble into a circular product. "
            "If you are expecting a linear product, pass require_circular=False"
        )
    return product


__all__ = ["HOMOLOGY_LENGTH", "gibson", "join_fragments"]
