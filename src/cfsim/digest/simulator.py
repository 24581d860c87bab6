"""Restriction digestion to completion."""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterable, List, Union

from cfsim.enzymes.registry import EnzymeRegistry, RestrictionEnzyme, resolve_registry
from cfsim.errors import InvalidFragmentIndexError
from cfsim.seq.model import Polynucleotide
from cfsim.seq.resolve import MoleculeInput, resolve_to_polynucleotide

from .cutter import cut_at, find_cut_site

LOGGER = logging.getLogger(__name__)

EnzymeList = Union[str, Iterable[str]]

_ENZYME_SPLIT_RE = re.compile(r"[^A-Za-z0-9]+")


@dataclass(frozen=True)
class _Fragment:
    molecule: Polynucleotide
    # start of the duplex in the coordinates of the digested molecule
    offset: int


def parse_enzyme_list(enzymes: EnzymeList) -> List[str]:
    """Split ``"EcoRI,BamHI"``-style strings (any non-alphanumeric separator)."""

    if isinstance(enzymes, str):
        tokens: Iterable[str] = _ENZYME_SPLIT_RE.split(enzymes)
    else:
        tokens = enzymes
    return [name.strip() for name in tokens if name and name.strip()]


def _resolve_enzymes(enzymes: EnzymeList, registry: EnzymeRegistry) -> List[RestrictionEnzyme]:
    return [registry[name] for name in parse_enzyme_list(enzymes)]


def _cut_first(fragment: _Fragment, enzymes: List[RestrictionEnzyme], length: int) -> List[_Fragment] | None:
    for enzyme in enzymes:
        site = find_cut_site(fragment.molecule, enzyme)
        if site is None:
            continue
        children = cut_at(fragment.molecule, site)
        LOGGER.debug("digest cut enzyme=%s offset=%d span=(%d,%d)", enzyme.name, fragment.offset, site.start, site.end)
        if fragment.molecule.is_circular:
            return [_Fragment(children[0], site.end % length)]
        left, right = children
        return [_Fragment(left, fragment.offset), _Fragment(right, fragment.offset + site.end)]
    return None


def digest_fragments(
    molecule: MoleculeInput,
    enzymes: EnzymeList,
    *,
    registry: EnzymeRegistry | None = None,
) -> List[Polynucleotide]:
    """
    Digest to completion and return every fragment, numbered left to right.

    For a circular input, fragment 0 is the one covering the original origin.
    """

    reg = resolve_registry(registry)
    enzyme_list = _resolve_enzymes(enzymes, reg)
    poly = resolve_to_polynucleotide(molecule)
    length = len(poly.sequence)

    fragments = [_Fragment(poly, 0)]
    cut_made = True
    while cut_made:
        cut_made = False
        for position, fragment in enumerate(fragments):
            children = _cut_first(fragment, enzyme_list, length)
            if children is not None:
                fragments[position : position + 1] = children
                cut_made = True
                break

    if poly.is_circular:
        ordered = sorted(fragments, key=lambda frag: frag.offset % length)
    else:
        ordered = sorted(fragments, key=lambda frag: frag.offset)
    if poly.is_circular and ordered[0].offset % length != 0:
        # the last fragment wraps around and therefore covers the origin
        ordered.insert(0, ordered.pop())
    LOGGER.debug("digest complete enzymes=%s fragments=%d", [enz.name for enz in enzyme_list], len(ordered))
    return [frag.molecule for frag in ordered]


def digest(
    molecule: MoleculeInput,
    enzymes: EnzymeList,
    fragselect: int,
    *,
    registry: EnzymeRegistry | None = None,
) -> Polynucleotide:
    """Digest ``molecule`` to completion and return fragment ``fragselect``."""

    fragments = digest_fragments(molecule, enzymes, registry=registry)
    if isinstance(fragselect, bool) or not isinstance(fragselect, int) or not 0 <= fragselect < len(fragments):
        raise InvalidFragmentIndexError(
            f"Invalid fragselect {fragselect!r}; digest produced {len(fragments)} fragment(s)."
        )
    return fragments[fragselect]


__all__ = ["digest", "digest_fragments", "parse_enzyme_list", "EnzymeList"]
