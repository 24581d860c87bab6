"""Golden Gate (single Type IIS enzyme) assembly."""
from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from typing import Dict, List, Sequence

from cfsim.enzymes.registry import RestrictionEnzyme
from cfsim.errors import AmbiguousAssemblyError, AssemblySiteError, NonClosingAssemblyError, PalindromicEndError
from cfsim.seq.alphabet import is_palindromic

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class GoldenGatePart:
    """A part after digestion: 5' sticky end, duplex body, 3' sticky end."""

    sticky5: str
    body: str
    sticky3: str


def excise_part(sequence: str, enzyme: RestrictionEnzyme) -> GoldenGatePart:
    """Cut ``sequence`` at its single forward and single reverse site."""

    site = enzyme.recognition_sequence
    site_rc = enzyme.recognition_sequence_rc
    forward_count = sequence.count(site)
    reverse_count = sequence.count(site_rc)
    if forward_count == 0:
        raise AssemblySiteError(f"Enzyme site {site} not found in sequence {sequence}")
    if reverse_count == 0:
        raise AssemblySiteError(f"Reverse enzyme site {site_rc} not found in sequence {sequence}")
    if forward_count > 1:
        raise AssemblySiteError(f"More than one forward enzyme site {site} found in sequence {sequence}")
    if reverse_count > 1:
        raise AssemblySiteError(f"More than one reverse enzyme site {site_rc} found in sequence {sequence}")

    forward_index = sequence.find(site)
    reverse_index = sequence.find(site_rc)
    if reverse_index < forward_index:
        raise AssemblySiteError(f"Reverse enzyme site found before forward enzyme site in sequence {sequence}")

    low, high = sorted((enzyme.cut5, enzyme.cut3))
    site_end = forward_index + len(site)
    return GoldenGatePart(
        sticky5=sequence[site_end + low : site_end + high],
        body=sequence[site_end + high : reverse_index - high],
        sticky3=sequence[reverse_index - high : reverse_index - low],
    )


def _check_ends(parts: Sequence[GoldenGatePart]) -> None:
    for part in parts:
        if is_palindromic(part.sticky5) or is_palindromic(part.sticky3):
            raise PalindromicEndError(f"Palindromic sticky ends found in fragment {part.body}")
    if len(parts) > 1:
        count5 = Counter(part.sticky5 for part in parts)
        count3 = Counter(part.sticky3 for part in parts)
        shared = sorted(end for end in set(count5) | set(count3) if count5[end] > 1 or count3[end] > 1)
        if shared:
            raise AmbiguousAssemblyError(
                f"Some fragments have the same sticky ends ({', '.join(shared)}), which can lead to incorrect assemblies"
            )


def order_parts(parts: Sequence[GoldenGatePart]) -> List[GoldenGatePart]:
    """
    Arrange parts into a closed chain, 3' end to next 5' end.

    The chain starts at the part whose 5' sticky end sorts lowest; the
    lexicographic order is only a deterministic starting point.
    """

    by_sticky5: Dict[str, GoldenGatePart] = {part.sticky5: part for part in parts}
    current = min(parts, key=lambda part: part.sticky5)
    chain = [current]
    while len(chain) < len(parts):
        following = by_sticky5.get(current.sticky3)
        if following is None:
            raise NonClosingAssemblyError(f"No fragment has a 5' sticky end matching {current.sticky3} after {current.body}")
        if following is chain[0]:
            raise NonClosingAssemblyError(
                f"Fragments close into a ring of {len(chain)} before using all {len(parts)} fragments"
            )
        chain.append(following)
        current = following
    if chain[-1].sticky3 != chain[0].sticky5:
        raise NonClosingAssemblyError(
            f"Sticky ends do not match between first and last fragments {chain[0].body} and {chain[-1].body}"
        )
    return chain


def golden_gate(sequences: Sequence[str], enzyme: RestrictionEnzyme) -> str:
    """
    Simulate a one-pot Golden Gate reaction of canonical ``sequences``.

    Returns the circular product written from the first part's 5' sticky end.
    """

    if not sequences:
        raise NonClosingAssemblyError("Golden Gate assembly needs at least one fragment.")
    parts = [excise_part(seq, enzyme) for seq in sequences]
    _check_ends(parts)
    chain = order_parts(parts)
    LOGGER.debug("golden_gate enzyme=%s order=%s", enzyme.name, [part.sticky5 for part in chain])
    return "".join(part.sticky5 + part.body for part in chain)


__all__ = ["GoldenGatePart", "excise_part", "order_parts", "golden_gate"]
